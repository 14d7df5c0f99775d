"""
Archiver registry: 패키징 포맷 이름 → Archiver.

규칙:
- 이름 중복 등록 → DUPLICATE_REGISTRATION (덮어쓰기 금지, fail-fast)
- lookup은 예외 없이 None 반환 → 호출자가 404 생성
- initialize(): 전체 초기화 후 기본 zip archiver 재등록 (멱등)
- 변경은 threading.Lock, 조회는 불변 스냅샷 (copy-on-write)
"""

import logging
import threading
from collections.abc import Mapping
from types import MappingProxyType

from src.domain.errors import ErrorCodes, ToolServiceError

from .base import Archiver
from .zip import ZipArchiver

logger = logging.getLogger(__name__)


class ArchiverRegistry:
    """
    In-memory archiver 레지스트리.

    Usage:
        registry = ArchiverRegistry()        # zip 기본 등록
        registry.register(TarGzArchiver())
        archiver = registry.lookup("zip")
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._archivers: Mapping[str, Archiver] = MappingProxyType({})
        self.initialize()

    def initialize(self) -> None:
        """모든 항목 제거 후 기본 zip archiver 등록."""
        logger.info("Initializing archiver registry")
        default = ZipArchiver()
        with self._lock:
            self._archivers = MappingProxyType({default.name: default})
        logger.info(f"Registering archiver: {default.name} -> {type(default).__name__}")

    def register(self, archiver: Archiver) -> None:
        """
        Archiver 등록.

        Args:
            archiver: 등록할 archiver (archiver.name이 키)

        Raises:
            ToolServiceError: DUPLICATE_REGISTRATION
        """
        with self._lock:
            if archiver.name in self._archivers:
                raise ToolServiceError(
                    ErrorCodes.DUPLICATE_REGISTRATION,
                    name=archiver.name,
                    existing=type(self._archivers[archiver.name]).__name__,
                )
            updated = dict(self._archivers)
            updated[archiver.name] = archiver
            self._archivers = MappingProxyType(updated)

        logger.info(f"Registering archiver: {archiver.name} -> {type(archiver).__name__}")

    def lookup(self, name: str) -> Archiver | None:
        """이름으로 archiver 조회. 없으면 None."""
        return self._archivers.get(name)

    def names(self) -> list[str]:
        """등록된 포맷 이름 목록 (정렬)."""
        return sorted(self._archivers)

    def __contains__(self, name: object) -> bool:
        return name in self._archivers

    def __len__(self) -> int:
        return len(self._archivers)
