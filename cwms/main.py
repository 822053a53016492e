# cwms/main.py

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import FastAPI, Depends, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

# 핵심 설정 및 데이터베이스 모듈 임포트
from cwms.core.config import settings
from cwms.core.database import engine, get_session

from cwms.domains.wms.routers import router as wms_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# -- 애플리케이션 수명 주기 이벤트 핸들러 --
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI 애플리케이션의 수명 주기를 처리합니다.
    재고 뷰는 외부에서 관리되므로 시작 시 스키마를 만들지 않습니다.
    """
    logger.info("%s 시작 (환경: %s, 재고 뷰: %s, 통계 뷰: %s)",
                settings.APP_NAME, settings.APP_ENV, settings.INVENTORY_VIEW, settings.AISLE_STATS_VIEW)
    if not settings.PROPAGATE_QUERY_ERRORS:
        logger.warning("조회 오류는 로그로만 기록되고 클라이언트에는 빈 결과로 응답합니다 (PROPAGATE_QUERY_ERRORS=False).")

    yield  # 애플리케이션 실행

    logger.info("%s 종료 중...", settings.APP_NAME)
    # 데이터베이스 연결 풀 종료
    await engine.dispose()
    logger.info("데이터베이스 연결 풀 종료 완료.")


# -- FastAPI 애플리케이션 인스턴스 생성 --
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",       # Swagger UI
    redoc_url="/redoc",     # ReDoc
    lifespan=lifespan
)

# -- CORS 미들웨어 설정 --
# 프로덕션에서는 CORS_ORIGINS를 실제 프론트엔드 도메인으로 제한해야 합니다.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],  # 읽기 전용 API
    allow_headers=["*"],
)

# -- 도메인 라우터 포함 --
app.include_router(wms_router, prefix=settings.API_PREFIX)


# -- 루트 엔드포인트 --
@app.get("/", summary="API Root", response_description="Welcome message and documentation link.")
async def read_root():
    """
    CWMS API의 루트 엔드포인트입니다.
    API의 시작점을 알리고 문서 링크를 제공합니다.
    """
    return {"message": "Welcome to CWMS Inventory API. Visit /docs for interactive API documentation."}


# -- 헬스 체크 엔드포인트 --
@app.get("/health-check", summary="Health Check", response_description="Status of the application and database connection.")
async def health_check(session: AsyncSession = Depends(get_session)):
    """
    데이터베이스 연결을 테스트하여 서비스의 정상 작동 여부를 확인합니다.
    """
    try:
        result = await session.exec(select(1))
        if result.first():
            return {"status": "ok", "database_connection": "successful"}
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database health check failed: No result from test query"
        )
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database connection error during health check: {e}"
        )
