"""
Archiver 추상 인터페이스.

역할: 디렉터리 트리 → 이름/MIME 타입이 있는 단일 바이트 버퍼

공통 규칙 (모든 구현체):
- 정렬된 순서로 순회 (결정론적 출력)
- 일반 파일: 디렉터리 기준 상대 경로로 기록
- 빈 디렉터리: 디렉터리 엔트리로 기록
- symlink: 건너뜀 (workspace 밖을 가리킬 수 있음)
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ArchiveEntry:
    """아카이브에 들어갈 항목 하나."""
    path: Path
    arcname: str  # POSIX 구분자, 디렉터리 기준 상대 경로
    is_dir: bool


def iter_archive_entries(directory: Path) -> Iterator[ArchiveEntry]:
    """
    디렉터리 트리를 정렬된 순서로 순회.

    Args:
        directory: 루트 디렉터리

    Yields:
        ArchiveEntry (일반 파일 + 빈 디렉터리)
    """
    root = Path(directory)

    def walk(current: Path) -> Iterator[ArchiveEntry]:
        children = sorted(current.iterdir(), key=lambda p: p.name)
        for child in children:
            if child.is_symlink():
                continue
            arcname = child.relative_to(root).as_posix()
            if child.is_dir():
                # symlink만 있는 디렉터리도 빈 디렉터리로 취급
                nested = list(walk(child))
                if nested:
                    yield from nested
                else:
                    yield ArchiveEntry(child, arcname, is_dir=True)
            elif child.is_file():
                yield ArchiveEntry(child, arcname, is_dir=False)

    yield from walk(root)


class Archiver(ABC):
    """
    Archiver 추상 인터페이스.

    구현체는 name(레지스트리 키), mime_type, file_extension을 클래스 속성으로 선언.
    """

    name: str
    mime_type: str
    file_extension: str

    @abstractmethod
    def to_bytes(self, directory: Path) -> bytes:
        """
        디렉터리 트리를 아카이브 바이트로 변환.

        Args:
            directory: 아카이브할 디렉터리

        Returns:
            아카이브 전체 바이트
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
