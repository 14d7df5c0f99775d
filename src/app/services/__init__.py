"""
Application Services.

역할:
- scaffold: 외부 툴 호출 → 목록/도움말/설치/프로젝트 아카이브
"""

from .scaffold import ScaffoldService, build_new_arguments, parse_options

__all__ = [
    "ScaffoldService",
    "build_new_arguments",
    "parse_options",
]
