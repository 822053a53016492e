# cwms/core/database.py

"""
애플리케이션의 데이터베이스 연결, 세션 관리, 쿼리 실행을 담당하는 모듈입니다.

- SQLModel/SQLAlchemy 비동기 엔진을 설정합니다.
- 요청마다 사용할 비동기 세션 제너레이터를 제공합니다.
- 재고 조회 계층이 사용하는 쿼리 실행기(QueryExecutor)를 세션 위에 구현합니다.
  실행기는 열린 커서에서 행을 읽고, 어떤 경로로 끝나든 커서를 닫습니다.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncContextManager, AsyncGenerator, AsyncIterator, Mapping, Optional, Protocol

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncResult, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from cwms.core.config import settings
from cwms.core.exceptions import ExecutionError

logger = logging.getLogger(__name__)


def _engine_options() -> dict:
    options: dict = {
        "echo": settings.DEBUG_MODE,  # 디버그 모드일 때만 SQL 쿼리 출력
        "future": True,
    }
    if not settings.is_sqlite:
        options.update(
            pool_recycle=3600,  # 1시간마다 연결 재활용
            pool_size=10,       # 최소 10개의 연결 유지
            max_overflow=20,    # 최대 20개의 추가 연결 허용 (총 30개)
        )
    return options


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL.get_secret_value(),  # SecretStr 값에 접근
    **_engine_options(),
)

# 비동기 세션을 생성하는 '세션 공장'을 정의합니다.
AsyncSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# =============================================================================
# 비동기 데이터베이스 세션 의존성 주입
# =============================================================================
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 의존성 주입을 위한 비동기 데이터베이스 세션 제너레이터입니다.
    요청마다 새로운 세션을 생성하고, 요청 처리 후 세션을 자동으로 닫습니다.
    """
    async with AsyncSessionLocal() as session:
        yield session


@asynccontextmanager
async def get_async_session_context() -> AsyncGenerator[AsyncSession, None]:
    """
    스크립트 등 FastAPI 밖의 비동기 컨텍스트에서 사용할 독립적인 세션을 제공합니다.
    조회 전용이므로 커밋하지 않습니다.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


# =============================================================================
# 쿼리 실행기
# =============================================================================
class QueryExecutor(Protocol):
    """
    바인딩 파라미터가 있는 조회 문장을 실행하는 기능입니다.

    `execute()`는 비동기 컨텍스트 관리자를 반환하며, 진입 시 결과 행을 순서대로
    내보내는 비동기 이터레이터를 제공합니다. 컨텍스트를 벗어나면 커서가 해제됩니다.
    """

    def execute(
        self, statement: str, params: Optional[Mapping[str, Any]] = None
    ) -> AsyncContextManager[AsyncIterator[Any]]:
        ...


async def _iterate_rows(result: AsyncResult, statement: str) -> AsyncIterator[Any]:
    try:
        async for row in result:
            yield row
    except SQLAlchemyError as exc:
        raise ExecutionError(f"failed while reading rows: {exc}", statement=statement) from exc


class SessionQueryExecutor:
    """AsyncSession 위에서 동작하는 QueryExecutor 구현입니다."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def execute(
        self, statement: str, params: Optional[Mapping[str, Any]] = None
    ) -> AsyncIterator[AsyncIterator[Any]]:
        bound = dict(params or {})
        logger.debug("쿼리 실행: %s (파라미터: %s)", statement, sorted(bound))
        try:
            result = await self.session.stream(text(statement), bound)
        except SQLAlchemyError as exc:
            raise ExecutionError(f"query execution failed: {exc}", statement=statement) from exc

        try:
            yield _iterate_rows(result, statement)
        finally:
            # 매핑 실패로 중간에 빠져나가도 커서는 반드시 닫습니다.
            await result.close()
