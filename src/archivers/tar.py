"""
TAR.GZ archiver: tarfile + gzip 기반.

default.yaml의 archivers.enabled에 "tgz"가 있으면 시작 시 등록.
"""

import gzip
import tarfile
from io import BytesIO
from pathlib import Path

from .base import Archiver, iter_archive_entries


class TarGzArchiver(Archiver):
    """gzip 압축 tar 아카이브."""

    name = "tgz"
    mime_type = "application/gzip"
    file_extension = ".tgz"

    def to_bytes(self, directory: Path) -> bytes:
        buffer = BytesIO()
        # gzip 헤더 mtime 고정 → 같은 트리면 같은 바이트
        with gzip.GzipFile(fileobj=buffer, mode="wb", mtime=0) as gz:
            with tarfile.open(fileobj=gz, mode="w") as tar:
                for entry in iter_archive_entries(directory):
                    # recursive=False: 빈 디렉터리 엔트리만, 하위는 이미 순회됨
                    tar.add(entry.path, arcname=entry.arcname, recursive=False)
        return buffer.getvalue()
