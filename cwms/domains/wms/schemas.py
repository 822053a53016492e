# cwms/domains/wms/schemas.py

"""
'wms' 도메인 (재고 뷰)의 응답 레코드를 정의하는 Pydantic 모델 모듈입니다.

- JSON 필드 이름은 `serialization_alias`로 고정합니다 (기존 클라이언트와의 계약).
- XML/CSV 출력에 사용할 태그는 클래스 변수 `XML_TAGS`, `CSV_COLUMNS`로 선언합니다.
  XML 태그 문법: '@name'은 속성, 'a>b'는 중첩 요소, ',omitempty'는 빈 값이면 생략.
"""

from datetime import date, datetime
from typing import Any, ClassVar, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cwms.core.nullable import NullString
from cwms.core.responses import format_timestamp


# =============================================================================
# 1. v_inventory 레코드
# =============================================================================
class InventoryRecord(BaseModel):
    """슬롯 하나에 대한 스캔(또는 빈 슬롯) 관측 레코드입니다."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: int = Field(..., serialization_alias="id", description="재고 레코드 고유 ID")
    start_time: datetime = Field(..., serialization_alias="startTime", description="스캔 시작 시각")
    stop_time: datetime = Field(..., serialization_alias="stopTime", description="스캔 종료 시각")
    sku: NullString = Field(default_factory=NullString.absent, serialization_alias="sku", description="SKU (빈 슬롯이면 없음)")
    discrepancy: NullString = Field(default_factory=NullString.absent, serialization_alias="discrepancy", description="불일치 메모 (빈 문자열이면 불일치 없음)")
    aisle: str = Field(..., serialization_alias="aisle", description="통로")
    block: str = Field(..., serialization_alias="block", description="블록")
    slot: str = Field(..., serialization_alias="slot", description="슬롯")
    shelf: str = Field(..., serialization_alias="shelf", description="선반")
    display_name: str = Field(..., serialization_alias="displayname", description="표시 이름")
    image: NullString = Field(default_factory=NullString.absent, serialization_alias="image", description="이미지 URL")

    XML_ELEMENT: ClassVar[str] = "inventory"
    XML_TAGS: ClassVar[Dict[str, str]] = {
        "id": "@id",
        "start_time": "time>start",
        "stop_time": "time>stop",
        "sku": "item>SKU",
        "discrepancy": "item>Discrepancy,omitempty",
        "aisle": "position>Aisle",
        "block": "position>Block",
        "slot": "position>Slot",
        "shelf": "position>Shelf",
        "display_name": "position>DisplayName",
        "image": "position>Image",
    }
    CSV_COLUMNS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("sku", "sku"),
        ("aisle", "aisle"),
        ("block", "block"),
        ("slot", "slot"),
        ("display_name", "display_name"),
        ("image", "image_url"),
    )


# =============================================================================
# 2. v_aisleStats 레코드
# =============================================================================
class AisleStats(BaseModel):
    """통로별 슬롯 상태 집계입니다. 네 개의 카운트 합은 상위 뷰가 보장합니다."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str = Field(..., serialization_alias="id", description="통로 ID")
    number_occupied: int = Field(..., ge=0, serialization_alias="numberOccupied")
    number_empty: int = Field(..., ge=0, serialization_alias="numberEmpty")
    number_exception: int = Field(..., ge=0, serialization_alias="numberException")
    number_unscanned: int = Field(..., ge=0, serialization_alias="numberUnscanned")
    last_scanned: str = Field(..., serialization_alias="lastScanned", description="마지막 스캔 시각 (문자열)")

    XML_ELEMENT: ClassVar[str] = "aisle"

    @field_validator("last_scanned", mode="before")
    @classmethod
    def _format_last_scanned(cls, value: Any) -> Any:
        # 드라이버에 따라 timestamp 컬럼이 datetime으로 올 수 있습니다.
        if isinstance(value, datetime):
            return format_timestamp(value)
        if isinstance(value, date):
            return value.isoformat()
        return value
