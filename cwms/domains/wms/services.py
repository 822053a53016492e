# cwms/domains/wms/services.py

import asyncio
import logging
from typing import Any, Callable, List, Optional, TypeVar

from cwms.core.database import QueryExecutor
from cwms.core.exceptions import ExecutionError
from . import filters, mappers
from .schemas import AisleStats, InventoryRecord

logger = logging.getLogger(__name__)

RecordType = TypeVar("RecordType")


class InventoryQueryService:
    """
    필터 컴파일, 쿼리 실행, 행 매핑을 묶어 세 가지 조회 기능을 제공합니다.

    실행기 오류와 매핑 오류는 그대로 호출자에게 전달됩니다.
    한 행이라도 실패하면 전체 조회가 중단되고 부분 결과는 반환하지 않습니다.
    """

    def __init__(self, executor: QueryExecutor, *, timeout: Optional[float] = None):
        self.executor = executor
        self.timeout = timeout

    async def _fetch(
        self,
        query: filters.CompiledQuery,
        mapper: Callable[[Any, Optional[int]], RecordType],
    ) -> List[RecordType]:
        records: List[RecordType] = []
        try:
            async with asyncio.timeout(self.timeout):
                async with self.executor.execute(query.sql, query.params) as rows:
                    row_index = 0
                    async for row in rows:
                        records.append(mapper(row, row_index))
                        row_index += 1
        except TimeoutError as exc:
            raise ExecutionError(
                f"query did not finish within {self.timeout} seconds", statement=query.sql
            ) from exc

        logger.debug("조회 완료: %d건 (%s)", len(records), query.statement)
        return records

    async def list_inventory(self, aisle_filter: filters.AisleFilter) -> List[InventoryRecord]:
        """필터에 맞는 재고 레코드를 통로, 블록, 슬롯 순으로 반환합니다."""
        return await self._fetch(aisle_filter.compile(), mappers.map_inventory_row)

    async def list_distinct_aisles(self) -> List[str]:
        """재고 뷰에 있는 모든 통로 ID를 오름차순으로 반환합니다."""
        return await self._fetch(filters.distinct_aisles_query(), mappers.map_aisle_row)

    async def list_aisle_stats(self) -> List[AisleStats]:
        """통로별 슬롯 상태 집계를 반환합니다."""
        return await self._fetch(filters.aisle_stats_query(), mappers.map_aisle_stats_row)
