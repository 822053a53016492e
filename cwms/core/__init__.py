# cwms/core/__init__.py

"""
애플리케이션 전반에서 사용하는 핵심 구성 요소 패키지입니다.

- `config.py`: 설정 및 환경 변수 관리 (Pydantic Settings).
- `database.py`: 비동기 엔진, 세션 관리, 쿼리 실행기 (SQLModel/SQLAlchemy).
- `dependencies.py`: FastAPI 의존성 주입 함수들.
- `exceptions.py`: 조회 계층의 예외 계층.
- `nullable.py`: NULL 가능 문자열 래퍼.
- `responses.py`: JSON/XML/CSV 응답 생성.
"""

__title__ = "CWMS Core"
__description__ = "Core components for the CWMS inventory API."
__version__ = "0.1.0"
__all__ = []
