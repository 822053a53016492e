# cwms/domains/wms/filters.py

"""
사용자 필터(통로, 불일치)를 파라미터 바인딩 조회 문장으로 변환하는 모듈입니다.

사용자 입력은 절대 SQL 텍스트에 끼워 넣지 않고 항상 바인딩 파라미터(:aisle,
:discrepancy)로 전달합니다. SQL 텍스트에 들어가는 것은 설정에서 검증된 뷰 이름뿐입니다.
"""

from typing import Dict, NamedTuple, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from cwms.core.config import settings
from .mappers import AISLE_STATS_BINDINGS, INVENTORY_BINDINGS

# 불일치 필터의 특수 값: 불일치 메모가 비어 있지 않은 모든 행
DISCREPANCY_ALL = "all"

# 정렬은 사용자가 바꿀 수 없습니다.
ORDER_CLAUSE = "ORDER BY aisle, block, slot"


class CompiledQuery(NamedTuple):
    """컴파일된 조회 문장. `statement`에는 정렬 절이 포함되지 않습니다."""

    statement: str
    order_clause: str
    params: Dict[str, str]
    predicates: Tuple[str, ...] = ()

    @property
    def sql(self) -> str:
        return " ".join(part for part in (self.statement, self.order_clause) if part)


def _select_inventory(view: str) -> str:
    columns = ", ".join(column for column, _ in INVENTORY_BINDINGS)
    return f"SELECT {columns} FROM {view}"


class AisleFilter(BaseModel):
    """
    재고 조회 필터입니다. 생성 후에는 변경할 수 없습니다.

    - aisle: 통로 정확히 일치 (빈 문자열이면 제한 없음)
    - discrepancy: 빈 문자열이면 제한 없음, "all"이면 불일치가 있는 모든 행,
      그 밖의 값이면 정확히 일치
    두 조건이 모두 있으면 AND로 결합합니다.
    """

    model_config = ConfigDict(frozen=True)

    aisle: str = Field("", description="통로 필터 (정확히 일치)")
    discrepancy: str = Field("", description="불일치 필터 ('all' 또는 정확히 일치할 값)")

    def compile(self, view: Optional[str] = None) -> CompiledQuery:
        """필터를 (문장, 정렬 절, 바인딩 파라미터)로 컴파일합니다."""
        predicates = []
        params: Dict[str, str] = {}

        if self.aisle:
            predicates.append("aisle = :aisle")
            params["aisle"] = self.aisle

        if self.discrepancy == DISCREPANCY_ALL:
            predicates.append("discrepancy != ''")
        elif self.discrepancy:
            predicates.append("discrepancy = :discrepancy")
            params["discrepancy"] = self.discrepancy

        statement = _select_inventory(view or settings.INVENTORY_VIEW)
        if predicates:
            statement = f"{statement} WHERE {' AND '.join(predicates)}"

        return CompiledQuery(statement, ORDER_CLAUSE, params, tuple(predicates))


def distinct_aisles_query(view: Optional[str] = None) -> CompiledQuery:
    """모든 통로 ID를 오름차순으로 조회하는 고정 문장입니다."""
    statement = f"SELECT DISTINCT aisle FROM {view or settings.INVENTORY_VIEW}"
    return CompiledQuery(statement, "ORDER BY aisle", {})


def aisle_stats_query(view: Optional[str] = None) -> CompiledQuery:
    """통로별 통계 뷰를 조회하는 고정 문장입니다. 행 순서는 뷰가 정합니다."""
    columns = ", ".join(column for column, _ in AISLE_STATS_BINDINGS)
    statement = f"SELECT DISTINCT {columns} FROM {view or settings.AISLE_STATS_VIEW}"
    return CompiledQuery(statement, "", {})
