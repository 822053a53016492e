# cwms/core/config.py

import os
import re
from typing import List, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# 프로젝트의 루트 디렉토리 경로를 계산합니다.
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# 뷰 이름은 SQL 문에 직접 들어가는 유일한 텍스트이므로 식별자 형식만 허용합니다.
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


class Settings(BaseSettings):
    """
    애플리케이션의 모든 설정을 정의하는 Pydantic BaseSettings 모델입니다.
    환경 변수 및 .env 파일에서 값을 자동으로 로드합니다.
    """

    # --- Pydantic Settings 설정 ---
    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, '.env'),  # 프로젝트 루트의 .env 파일
        env_file_encoding='utf-8',
        extra='ignore',                           # 모델에 없는 변수는 무시
        case_sensitive=True
    )

    # --- 애플리케이션 기본 설정 ---
    APP_NAME: str = "CWMS Inventory API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Read-only warehouse inventory API (aisle detail, aisle statistics, discrepancies)"
    APP_ENV: str = Field("development", description="Application environment (e.g., development, production, testing)")
    DEBUG_MODE: bool = Field(False, description="Enable SQL echo and verbose logging")
    LOG_LEVEL: str = Field("INFO", description="Root logging level")

    # --- API 설정 ---
    API_PREFIX: str = Field("", description="Common prefix for the inventory routes (e.g., /api)")
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")

    # --- 데이터베이스 설정 ---
    DATABASE_URL: SecretStr = Field(..., description="SQLAlchemy async database URL (postgresql+asyncpg, sqlite+aiosqlite)")
    INVENTORY_VIEW: str = Field("v_inventory", description="View holding one row per slot scan")
    AISLE_STATS_VIEW: str = Field("v_aisleStats", description="View holding per-aisle aggregate counts")
    QUERY_TIMEOUT_SECONDS: Optional[float] = Field(None, gt=0, description="Abort a query after this many seconds")

    # --- 오류 처리 정책 ---
    # False: 조회 실패를 로그로만 남기고 빈 결과를 200으로 응답합니다 (기존 동작).
    # True: 조회 실패를 HTTP 오류 상태 코드로 응답합니다.
    PROPAGATE_QUERY_ERRORS: bool = Field(False, description="Translate query failures into HTTP error responses")

    @field_validator("INVENTORY_VIEW", "AISLE_STATS_VIEW")
    @classmethod
    def _check_identifier(cls, value: str) -> str:
        if not _IDENTIFIER_RE.match(value):
            raise ValueError(f"'{value}' is not a plain SQL identifier")
        return value

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.get_secret_value().startswith("sqlite")


settings = Settings()
