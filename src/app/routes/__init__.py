"""
FastAPI Routes.

API 라우트 (JSON + 아카이브 다운로드)
"""

from . import templates

__all__ = ["templates"]
