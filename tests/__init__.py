# tests/__init__.py

"""
CWMS 재고 조회 API의 테스트 스위트 패키지입니다.

- `conftest.py`: 가짜 쿼리 실행기, 테스트용 SQLite 데이터베이스, 비동기 클라이언트 픽스처.
- `fakes.py`: 테스트에서 사용하는 가짜 QueryExecutor 구현.
- `domains/`: 'wms' 도메인(필터, 매퍼, 서비스, API) 테스트.
"""

__title__ = "CWMS API Tests"
__version__ = "0.1.0"
__all__ = []
