# tests/fakes.py

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Mapping, Optional, Sequence


class FakeQueryExecutor:
    """
    미리 정해 둔 행을 돌려주는 QueryExecutor입니다.
    실행된 문장과 파라미터, 커서가 닫힌 횟수, 실제로 읽힌 행 수를 기록합니다.
    """

    def __init__(self, rows: Optional[Sequence[Any]] = None, *, error: Optional[Exception] = None):
        self.rows: List[Any] = list(rows or [])
        self.error = error
        self.calls: List[tuple] = []
        self.closed = 0
        self.rows_read = 0

    @asynccontextmanager
    async def execute(self, statement: str, params: Optional[Mapping[str, Any]] = None):
        self.calls.append((statement, dict(params or {})))
        if self.error is not None:
            raise self.error
        try:
            yield self._iterate()
        finally:
            self.closed += 1

    async def _iterate(self) -> AsyncIterator[Any]:
        for row in self.rows:
            self.rows_read += 1
            yield row

    @property
    def last_statement(self) -> str:
        return self.calls[-1][0]

    @property
    def last_params(self) -> dict:
        return self.calls[-1][1]


# --- 테스트용 데이터 ---
def inventory_row(
    id: int,
    aisle: str,
    block: str,
    slot: str,
    *,
    sku: Optional[str] = None,
    discrepancy: Optional[str] = "",
    image: Optional[str] = None,
    shelf: str = "1",
    start: str = "2024-01-01 08:00:00",
    stop: str = "2024-01-01 08:05:00",
) -> tuple:
    """v_inventory 조회 순서(inventoryId ... imageUrl)에 맞춘 행 튜플을 만듭니다."""
    return (
        id, start, stop, sku, aisle, block, slot, shelf,
        f"{aisle}-{block}-{slot}", discrepancy, image,
    )


# 통로, 블록, 슬롯 순으로 정렬된 상태입니다.
INVENTORY_ROWS = [
    inventory_row(1, "A1", "01", "01", sku="SKU-100", image="http://img/100.png"),
    inventory_row(2, "A1", "01", "02", sku=None, discrepancy=None),
    inventory_row(3, "A1", "02", "01", sku="SKU-300", discrepancy="wrong sku"),
    inventory_row(4, "B2", "01", "01", sku="SKU-400", discrepancy="missing label"),
    inventory_row(5, "B2", "01", "02", sku="SKU-500"),
]

AISLE_STATS_ROWS = [
    {"aisle": "A1", "numberException": 1, "numberEmpty": 1, "numberOccupied": 1,
     "numberUnscanned": 0, "lastScanned": "2024-01-01T08:05:00Z"},
    {"aisle": "B2", "numberException": 1, "numberEmpty": 0, "numberOccupied": 1,
     "numberUnscanned": 3, "lastScanned": "2024-01-02T09:00:00Z"},
]
