"""
ZIP archiver: zipfile 기반 (기본 내장 archiver).
"""

import zipfile
from io import BytesIO
from pathlib import Path

from .base import Archiver, iter_archive_entries


class ZipArchiver(Archiver):
    """ZIP (deflate) 아카이브."""

    name = "zip"
    mime_type = "application/zip"
    file_extension = ".zip"

    def to_bytes(self, directory: Path) -> bytes:
        buffer = BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
            for entry in iter_archive_entries(directory):
                # 디렉터리 → "name/" 엔트리, 파일 → 파일 단위 스트리밍
                zf.write(entry.path, arcname=entry.arcname)
        return buffer.getvalue()
