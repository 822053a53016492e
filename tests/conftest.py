# tests/conftest.py

import sys
import os
from datetime import datetime
from typing import AsyncGenerator

# 설정 모듈이 임포트되기 전에 테스트용 데이터베이스 URL을 지정합니다.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_ENV", "testing")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession

# --- 경로 설정 ---
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from cwms.main import app as main_app  # noqa: E402
from cwms.core import dependencies as deps  # noqa: E402
from cwms.core.database import get_session  # noqa: E402
from tests.fakes import AISLE_STATS_ROWS, INVENTORY_ROWS, FakeQueryExecutor  # noqa: E402


# --- 가짜 실행기 픽스처 ---
@pytest.fixture(scope="function")
def fake_executor() -> FakeQueryExecutor:
    """행을 비워 둔 가짜 실행기. 테스트에서 `rows` 또는 `error`를 지정합니다."""
    return FakeQueryExecutor()


@pytest_asyncio.fixture(scope="function")
async def client(fake_executor: FakeQueryExecutor) -> AsyncGenerator[AsyncClient, None]:
    """
    가짜 실행기를 주입한 AsyncClient를 반환합니다.
    """
    original_overrides = main_app.dependency_overrides.copy()
    try:
        main_app.dependency_overrides[deps.get_query_executor] = lambda: fake_executor

        async with AsyncClient(transport=ASGITransport(app=main_app), base_url="http://test") as async_client:
            yield async_client
    finally:
        # 클라이언트 픽스처가 끝나면 오버라이드를 반드시 복원해야 합니다.
        main_app.dependency_overrides.clear()
        main_app.dependency_overrides.update(original_overrides)


# --- SQLite 데이터베이스 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def sqlite_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    v_inventory, v_aisleStats를 테이블로 흉내 낸 인메모리 SQLite 엔진입니다.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,   # 모든 연결이 같은 인메모리 데이터베이스를 보도록 함
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.execute(text("""
            CREATE TABLE v_inventory (
                inventoryId INTEGER PRIMARY KEY,
                startTime TIMESTAMP NOT NULL,
                stopTime TIMESTAMP NOT NULL,
                sku TEXT,
                aisle TEXT NOT NULL,
                block TEXT NOT NULL,
                slot TEXT NOT NULL,
                shelf TEXT NOT NULL,
                displayName TEXT NOT NULL,
                discrepancy TEXT,
                imageUrl TEXT
            )
        """))
        await conn.execute(text("""
            CREATE TABLE v_aisleStats (
                aisle TEXT PRIMARY KEY,
                numberException INTEGER NOT NULL,
                numberEmpty INTEGER NOT NULL,
                numberOccupied INTEGER NOT NULL,
                numberUnscanned INTEGER NOT NULL,
                lastScanned TEXT NOT NULL
            )
        """))
        # 정렬 확인을 위해 일부러 순서를 섞어서 넣습니다.
        for row in reversed(INVENTORY_ROWS):
            await conn.execute(
                text(
                    "INSERT INTO v_inventory VALUES "
                    "(:id, :start, :stop, :sku, :aisle, :block, :slot, :shelf, :name, :discrepancy, :image)"
                ),
                dict(zip(
                    ["id", "start", "stop", "sku", "aisle", "block", "slot", "shelf", "name", "discrepancy", "image"],
                    row,
                )),
            )
        for stats in AISLE_STATS_ROWS:
            await conn.execute(
                text(
                    "INSERT INTO v_aisleStats VALUES "
                    "(:aisle, :numberException, :numberEmpty, :numberOccupied, :numberUnscanned, :lastScanned)"
                ),
                stats,
            )

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(sqlite_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """테스트용 SQLite 데이터베이스에 연결된 비동기 세션을 제공합니다."""
    async with AsyncSession(sqlite_engine, expire_on_commit=False) as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def sqlite_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    실제 SessionQueryExecutor가 테스트용 SQLite 세션을 사용하도록 주입한 AsyncClient입니다.
    """

    def override_get_session():
        yield db_session

    original_overrides = main_app.dependency_overrides.copy()
    try:
        main_app.dependency_overrides[get_session] = override_get_session
        main_app.dependency_overrides[deps.get_db_session] = override_get_session

        async with AsyncClient(transport=ASGITransport(app=main_app), base_url="http://test") as async_client:
            yield async_client
    finally:
        main_app.dependency_overrides.clear()
        main_app.dependency_overrides.update(original_overrides)


@pytest.fixture
def first_scan_time() -> datetime:
    return datetime(2024, 1, 1, 8, 0, 0)
