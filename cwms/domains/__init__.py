# cwms/domains/__init__.py

"""
CWMS의 비즈니스 도메인 패키지입니다.

- `wms/`: 재고 뷰(v_inventory, v_aisleStats) 조회 도메인.
"""

__all__ = []
