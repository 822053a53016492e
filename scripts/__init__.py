# scripts/__init__.py

"""
운영용 명령행 스크립트 모음입니다.
"""
