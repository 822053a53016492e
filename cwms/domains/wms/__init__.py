# cwms/domains/wms/__init__.py

"""
FastAPI 애플리케이션의 'wms' (Warehouse inventory) 도메인 패키지입니다.

스캔 장비가 채운 재고 뷰를 읽기 전용으로 조회합니다. 쓰기 경로는 없습니다.

주요 서브모듈:
- `schemas.py`: 응답 레코드 (InventoryRecord, AisleStats)와 XML/CSV 태그.
- `mappers.py`: 결과 행 → 레코드 바인딩 표.
- `filters.py`: 필터 → 파라미터 바인딩 조회 문장.
- `services.py`: 컴파일, 실행, 매핑을 묶는 조회 서비스.
- `routers.py`: /aisles, /discrepancies, /aisle-names API 엔드포인트.
"""

# from . import schemas, mappers, filters, services, routers  # noqa: F401

__title__ = "CWMS Inventory Domain"
__description__ = "Read-only aisle, inventory and discrepancy queries over the scan views."
__version__ = "0.1.0"
__all__ = []
