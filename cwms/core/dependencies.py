# cwms/core/dependencies.py

"""
FastAPI 애플리케이션의 의존성 주입(Dependency Injection)을 정의하는 모듈입니다.

- 데이터베이스 세션 관리 (get_db_session).
- 세션 위의 쿼리 실행기 (get_query_executor).
- 재고 조회 서비스 (get_query_service).

테스트에서는 `app.dependency_overrides`로 실행기나 세션을 바꿔 끼웁니다.
"""

from typing import AsyncGenerator

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from cwms.core.config import settings
from cwms.core.database import QueryExecutor, SessionQueryExecutor
from cwms.core.database import get_session as get_main_app_session
from cwms.domains.wms.services import InventoryQueryService


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 의존성 주입을 위한 비동기 데이터베이스 세션 제너레이터입니다.
    cwms.core.database.get_session을 래핑하여 사용합니다.
    """
    async for session in get_main_app_session():
        yield session


def get_query_executor(session: AsyncSession = Depends(get_db_session)) -> QueryExecutor:
    return SessionQueryExecutor(session)


def get_query_service(executor: QueryExecutor = Depends(get_query_executor)) -> InventoryQueryService:
    # 설정은 요청 시점에 읽습니다 (테스트의 monkeypatch 반영).
    return InventoryQueryService(executor, timeout=settings.QUERY_TIMEOUT_SECONDS)
