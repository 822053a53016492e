# cwms/domains/wms/mappers.py

"""
조회 결과 행을 타입이 있는 레코드로 변환하는 모듈입니다.

리플렉션 대신 레코드 모양마다 명시적인 바인딩 표를 둡니다.
- 재고 행: 컬럼 순서(위치)대로 바인딩합니다. 표의 순서가 곧 SELECT 목록의 순서입니다.
- 통로 통계 행: 컬럼 이름으로 바인딩합니다. PostgreSQL은 따옴표 없는 식별자를
  소문자로 접기 때문에 이름 비교는 대소문자를 구분하지 않습니다.
"""

from collections.abc import Mapping
from typing import Any, Optional, Tuple

from pydantic import ValidationError

from cwms.core.exceptions import MappingError
from cwms.core.nullable import NullString
from .schemas import AisleStats, InventoryRecord

# (뷰 컬럼명, 레코드 필드명)
INVENTORY_BINDINGS: Tuple[Tuple[str, str], ...] = (
    ("inventoryId", "id"),
    ("startTime", "start_time"),
    ("stopTime", "stop_time"),
    ("sku", "sku"),
    ("aisle", "aisle"),
    ("block", "block"),
    ("slot", "slot"),
    ("shelf", "shelf"),
    ("displayName", "display_name"),
    ("discrepancy", "discrepancy"),
    ("imageUrl", "image"),
)

AISLE_STATS_BINDINGS: Tuple[Tuple[str, str], ...] = (
    ("aisle", "id"),
    ("numberException", "number_exception"),
    ("numberEmpty", "number_empty"),
    ("numberOccupied", "number_occupied"),
    ("numberUnscanned", "number_unscanned"),
    ("lastScanned", "last_scanned"),
)

_NULLABLE_FIELDS = frozenset({"sku", "discrepancy", "image"})


def _describe(row_index: Optional[int]) -> str:
    return "row" if row_index is None else f"row {row_index}"


def map_inventory_row(row: Any, row_index: Optional[int] = None) -> InventoryRecord:
    """위치 기반 바인딩 표로 재고 행 하나를 InventoryRecord로 변환합니다."""
    try:
        values = tuple(row)
    except TypeError as exc:
        raise MappingError(f"{_describe(row_index)} is not a sequence", row_index=row_index) from exc

    if len(values) != len(INVENTORY_BINDINGS):
        raise MappingError(
            f"{_describe(row_index)} has {len(values)} columns, expected {len(INVENTORY_BINDINGS)}",
            row_index=row_index,
        )

    data = {}
    for (column, field), value in zip(INVENTORY_BINDINGS, values):
        if field in _NULLABLE_FIELDS:
            if value is not None and not isinstance(value, str):
                raise MappingError(
                    f"{_describe(row_index)}: column '{column}' must be text or NULL, got {type(value).__name__}",
                    row_index=row_index,
                )
            value = NullString.from_db(value)
        data[field] = value

    try:
        return InventoryRecord.model_validate(data)
    except ValidationError as exc:
        raise MappingError(f"{_describe(row_index)} has incompatible values: {exc}", row_index=row_index) from exc


def map_aisle_stats_row(row: Any, row_index: Optional[int] = None) -> AisleStats:
    """이름 기반 바인딩 표로 통계 행 하나를 AisleStats로 변환합니다."""
    mapping = getattr(row, "_mapping", row)
    if not isinstance(mapping, Mapping):
        raise MappingError(f"{_describe(row_index)} has no column names", row_index=row_index)

    columns = {str(name).lower(): value for name, value in mapping.items()}
    data = {}
    for column, field in AISLE_STATS_BINDINGS:
        key = column.lower()
        if key not in columns:
            raise MappingError(
                f"{_describe(row_index)} is missing required column '{column}'", row_index=row_index
            )
        data[field] = columns[key]

    try:
        return AisleStats.model_validate(data)
    except ValidationError as exc:
        raise MappingError(f"{_describe(row_index)} has incompatible values: {exc}", row_index=row_index) from exc


def map_aisle_row(row: Any, row_index: Optional[int] = None) -> str:
    """단일 컬럼(aisle) 행을 통로 ID 문자열로 변환합니다."""
    try:
        values = tuple(row)
    except TypeError as exc:
        raise MappingError(f"{_describe(row_index)} is not a sequence", row_index=row_index) from exc
    if len(values) != 1:
        raise MappingError(
            f"{_describe(row_index)} has {len(values)} columns, expected 1", row_index=row_index
        )
    aisle = values[0]
    if aisle is None:
        raise MappingError(f"{_describe(row_index)} has a NULL aisle", row_index=row_index)
    return str(aisle)
