# cwms/domains/wms/routers.py

import logging
from typing import Awaitable, List, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from cwms.core import dependencies as deps
from cwms.core.config import settings
from cwms.core.exceptions import CwmsError, ExecutionError
from cwms.core.responses import OutputFormat, ResponseShape, emit_response
from .filters import DISCREPANCY_ALL, AisleFilter
from .services import InventoryQueryService

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Inventory (재고 조회)"],
    responses={404: {"description": "Not found"}},
)

AISLES_BASE = "aisles"
DISCREPANCIES_BASE = "discrepancies"

T = TypeVar("T")


def extract_segment(path: str, base: str) -> str:
    """
    요청 경로의 마지막 세그먼트를 필터 값으로 추출합니다.
    마지막 세그먼트가 비어 있거나 라우트 자신의 이름이면 필터가 없는 것으로 봅니다.
    """
    last = path.split("/")[-1]
    if last == base:
        return ""
    return last


async def _fetch_or_empty(query: Awaitable[List[T]], what: str) -> List[T]:
    """
    조회 실패 처리. 오류는 항상 서버 로그에 남깁니다. 기본 동작은 빈 결과를
    돌려주는 것이고 (클라이언트는 200과 빈 결과를 받습니다), PROPAGATE_QUERY_ERRORS가
    켜져 있으면 HTTP 오류 상태 코드로 응답합니다. SQL 문장과 파라미터 값은
    응답 본문에 넣지 않습니다.
    """
    try:
        return await query
    except CwmsError as exc:
        logger.error("%s 조회 실패: %s", what, exc, exc_info=True)
        if not settings.PROPAGATE_QUERY_ERRORS:
            return []
        if isinstance(exc, ExecutionError):
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Inventory query failed",
            ) from exc
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Inventory data could not be read",
        ) from exc


# =============================================================================
# 1. 통로 (통계 / 통로별 재고)
# =============================================================================
@router.get("/aisles", summary="Aisle statistics, or inventory of one aisle")
@router.get("/aisles/{segment:path}", include_in_schema=False)
async def read_aisles(
    request: Request,
    output_format: OutputFormat = Query(OutputFormat.JSON, alias="format"),
    service: InventoryQueryService = Depends(deps.get_query_service),
):
    """
    경로에 통로 ID가 없으면 통로별 통계를 통로 ID를 키로 하는 매핑으로 반환합니다.
    통로 ID가 있으면 해당 통로의 재고를 목록으로 반환합니다.
    """
    aisle = extract_segment(request.url.path, AISLES_BASE)

    if not aisle:
        stats = await _fetch_or_empty(service.list_aisle_stats(), "통로 통계")
        return emit_response(stats, ResponseShape.KEYED, output_format, root_tag="aisles", item_tag="aisle")

    records = await _fetch_or_empty(service.list_inventory(AisleFilter(aisle=aisle)), f"통로 '{aisle}' 재고")
    return emit_response(records, ResponseShape.FLAT, output_format, root_tag="inventoryList", item_tag="inventory")


# =============================================================================
# 2. 불일치
# =============================================================================
@router.get("/discrepancies", summary="Inventory with discrepancies")
@router.get("/discrepancies/{segment:path}", include_in_schema=False)
async def read_discrepancies(
    request: Request,
    output_format: OutputFormat = Query(OutputFormat.JSON, alias="format"),
    service: InventoryQueryService = Depends(deps.get_query_service),
):
    """
    경로에 값이 없으면 불일치 메모가 있는 모든 재고를, 값이 있으면 그 메모와
    정확히 일치하는 재고를 목록으로 반환합니다.
    """
    discrepancy = extract_segment(request.url.path, DISCREPANCIES_BASE) or DISCREPANCY_ALL
    records = await _fetch_or_empty(
        service.list_inventory(AisleFilter(discrepancy=discrepancy)), f"불일치 '{discrepancy}' 재고"
    )
    return emit_response(records, ResponseShape.FLAT, output_format, root_tag="inventoryList", item_tag="inventory")


# =============================================================================
# 3. 통로 ID 목록
# =============================================================================
@router.get("/aisle-names", summary="Distinct aisle ids")
async def read_aisle_names(
    output_format: OutputFormat = Query(OutputFormat.JSON, alias="format"),
    service: InventoryQueryService = Depends(deps.get_query_service),
):
    """재고 뷰에 있는 통로 ID를 오름차순 목록으로 반환합니다."""
    aisles = await _fetch_or_empty(service.list_distinct_aisles(), "통로 ID 목록")
    return emit_response(aisles, ResponseShape.FLAT, output_format, root_tag="aisles", item_tag="aisle")
