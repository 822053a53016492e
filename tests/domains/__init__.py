# tests/domains/__init__.py

"""
도메인별 테스트 스위트 패키지입니다.

- `test_wms_filters.py`: 필터 → 조회 문장 컴파일.
- `test_wms_mappers.py`: 결과 행 → 레코드 매핑.
- `test_wms_services.py`: 조회 서비스 (가짜 실행기).
- `test_wms_n.py`: /aisles, /discrepancies API (가짜 실행기).
- `test_wms_sqlite_n.py`: 실제 SQL 경로 (SQLite 데이터베이스).
"""

__all__ = []
