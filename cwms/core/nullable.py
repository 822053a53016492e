# cwms/core/nullable.py

"""
데이터베이스의 NULL 가능 문자열 컬럼을 감싸는 NullString 타입을 정의하는 모듈입니다.

NullString은 '값 있음(present)'과 '값 없음(absent)' 두 상태를 가집니다.
값 없음은 JSON, CSV, XML 어느 형식에서도 빈 문자열로 출력됩니다.
즉, 전송 형식에서는 NULL과 빈 문자열을 구분할 수 없습니다 (기존 클라이언트 호환).
"""

import json
from typing import Any, Optional

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from cwms.core.exceptions import DecodeError


class NullString:
    """NULL 가능 문자열 래퍼. `valid`가 False이면 값 없음 상태입니다."""

    __slots__ = ("string", "valid")

    def __init__(self, string: str = "", valid: bool = False):
        self.string = string
        self.valid = valid

    @classmethod
    def present(cls, value: str) -> "NullString":
        return cls(value, True)

    @classmethod
    def absent(cls) -> "NullString":
        return cls()

    @classmethod
    def from_db(cls, value: Optional[str]) -> "NullString":
        """DB 드라이버가 돌려준 값(None 포함)으로 NullString을 만듭니다."""
        if value is None:
            return cls.absent()
        return cls.present(value)

    @property
    def value(self) -> Optional[str]:
        return self.string if self.valid else None

    # --- 직렬화 ---
    def to_json(self) -> str:
        """값이 있으면 JSON 인코딩된 문자열을, 없으면 JSON 빈 문자열 '""'을 반환합니다 (null 토큰 아님)."""
        if not self.valid:
            return '""'
        return json.dumps(self.string, ensure_ascii=False)

    def to_csv(self) -> bytes:
        """값이 있으면 원본 값을, 없으면 빈 바이트열을 반환합니다."""
        if not self.valid:
            return b""
        return self.string.encode("utf-8")

    def to_text(self) -> str:
        return self.string if self.valid else ""

    # --- 역직렬화 ---
    def load_json(self, data: bytes | str) -> None:
        """
        JSON 문자열 값을 디코딩하여 자신의 상태를 갱신합니다.
        디코딩에 실패하면 값 없음 상태가 되고 DecodeError를 발생시킵니다.
        JSON null은 오류 없이 빈 문자열 값으로 디코딩됩니다.
        """
        try:
            decoded = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as exc:
            self.string, self.valid = "", False
            raise DecodeError(f"cannot decode {data!r} as a JSON string: {exc}") from exc

        if decoded is None:
            decoded = ""
        if not isinstance(decoded, str):
            self.string, self.valid = "", False
            raise DecodeError(f"cannot decode JSON {type(decoded).__name__} into a string")

        self.string, self.valid = decoded, True

    @classmethod
    def from_json(cls, data: bytes | str) -> "NullString":
        ns = cls()
        ns.load_json(data)
        return ns

    # --- Pydantic 연동 ---
    @classmethod
    def _coerce(cls, value: Any) -> "NullString":
        if isinstance(value, NullString):
            return value
        if value is None:
            return cls.absent()
        if isinstance(value, str):
            return cls.present(value)
        raise ValueError(f"expected a string or null, got {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda ns: ns.to_text() if isinstance(ns, NullString) else (ns or ""),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"type": "string", "description": "Empty string when the column is NULL"}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NullString):
            return NotImplemented
        return (self.valid, self.string) == (other.valid, other.string)

    def __hash__(self) -> int:
        return hash((self.valid, self.string))

    def __repr__(self) -> str:
        if not self.valid:
            return "NullString(absent)"
        return f"NullString({self.string!r})"
