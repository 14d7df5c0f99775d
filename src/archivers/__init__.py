"""
Archiver layer: 디렉터리 트리 → 다운로드용 아카이브 바이트.

역할:
- Archiver: name / mime_type / file_extension / to_bytes
- ZipArchiver (기본 내장), TarGzArchiver (설정으로 등록)
- ArchiverRegistry: 포맷 이름 → Archiver
"""

from .base import ArchiveEntry, Archiver, iter_archive_entries
from .registry import ArchiverRegistry
from .tar import TarGzArchiver
from .zip import ZipArchiver

# 설정(archivers.enabled)에서 이름으로 찾을 수 있는 내장 archiver
BUILTIN_ARCHIVERS: dict[str, type[Archiver]] = {
    ZipArchiver.name: ZipArchiver,
    TarGzArchiver.name: TarGzArchiver,
}

__all__ = [
    "ArchiveEntry",
    "Archiver",
    "ArchiverRegistry",
    "BUILTIN_ARCHIVERS",
    "TarGzArchiver",
    "ZipArchiver",
    "iter_archive_entries",
]
