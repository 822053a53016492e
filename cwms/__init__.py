# cwms/__init__.py

"""
CWMS(Cycle-count Warehouse Management System) 재고 조회 API의 메인 패키지입니다.

이 패키지는 스캔 장비가 기록한 창고 재고 뷰(v_inventory, v_aisleStats)를
읽기 전용 HTTP API로 노출합니다.
FastAPI 애플리케이션의 진입점 (main.py)과
공통 설정, 데이터베이스 연결, 응답 직렬화를 담는 core 서브패키지,
그리고 재고 조회 도메인을 담는 domains 서브패키지로 구성됩니다.
"""

APP_NAME = "CWMS Inventory API"
APP_VERSION = "0.1.0"

__version__ = APP_VERSION
__title__ = APP_NAME
__description__ = "Read-only warehouse inventory API over the cycle-count scan views."
__license__ = "MIT"
__all__ = []
