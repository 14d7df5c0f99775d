"""
Templates layer: 외부 툴 템플릿 목록 파싱.

주의: 폴더 구분
- src/templates/ → 코드 (listing.py)
- 실제 템플릿은 외부 툴이 관리 (new --list / --install)
"""

from .listing import Column, compute_columns, compute_installed_delta, parse_template_list

__all__ = [
    "Column",
    "compute_columns",
    "compute_installed_delta",
    "parse_template_list",
]
