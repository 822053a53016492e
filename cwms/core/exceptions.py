# cwms/core/exceptions.py

"""
재고 조회 계층에서 사용하는 예외 클래스들을 정의하는 모듈입니다.

- `ExecutionError`: 쿼리 실행기 실패 (연결, 문법, 제약 조건, 시간 초과).
- `MappingError`: 결과 행의 모양이 레코드와 맞지 않음 (컬럼 수/타입, 필수 필드 누락).
- `DecodeError`: NullString 역직렬화 실패.

QueryService와 매퍼는 이 예외들을 삼키지 않고 그대로 호출자에게 전달합니다.
"""


class CwmsError(Exception):
    """CWMS 조회 계층 예외의 기본 클래스입니다."""


class ExecutionError(CwmsError):
    """쿼리 실행기가 문장을 실행하거나 행을 읽는 중 실패했습니다."""

    def __init__(self, message: str, *, statement: str | None = None):
        super().__init__(message)
        self.statement = statement


class MappingError(CwmsError):
    """결과 행을 레코드로 변환할 수 없습니다."""

    def __init__(self, message: str, *, row_index: int | None = None):
        super().__init__(message)
        self.row_index = row_index


class DecodeError(CwmsError, ValueError):
    """NullString에 디코딩할 수 없는 입력이 주어졌습니다."""
