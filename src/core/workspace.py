"""
Scoped workspace: 요청 단위 임시 작업 디렉터리.

규칙:
- acquire: 시스템 temp 루트 아래 전역 고유 이름의 빈 디렉터리 생성
- release: 재귀 삭제, acquire당 정확히 1회 (중복 호출 무시)
- 정상/조기 반환/예외 모두 release 보장 → 컨텍스트 매니저
- 삭제 실패는 warning 로그만 (실제 결과를 가리지 않음)
- workspace 이름 = 로그 correlation id
"""

import logging
import shutil
import tempfile
from pathlib import Path
from types import TracebackType

from src.core.ids import generate_workspace_id

logger = logging.getLogger(__name__)


class ScopedWorkspace:
    """
    임시 작업 디렉터리.

    사용법:
        with ScopedWorkspace() as ws:
            # ws.path 에서 작업

    또는:
        ws = ScopedWorkspace.acquire()
        try:
            ...
        finally:
            ws.release()
    """

    def __init__(self, root: Path | None = None) -> None:
        """
        Args:
            root: 상위 디렉터리 (None이면 tempfile.gettempdir())
        """
        self.root = Path(root) if root is not None else Path(tempfile.gettempdir())
        self.name = generate_workspace_id()
        self.path = self.root / self.name
        self._acquired = False
        self._released = False

    @classmethod
    def acquire(cls, root: Path | None = None) -> "ScopedWorkspace":
        """새 workspace 생성 후 반환."""
        workspace = cls(root)
        workspace._create()
        return workspace

    def _create(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        # exist_ok=False: 이름 충돌 시 다른 요청의 디렉터리를 공유하지 않도록
        self.path.mkdir()
        self._acquired = True
        logger.debug(f"{self.name}: workspace created at {self.path}")

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """
        workspace 삭제.

        두 번째 호출부터는 아무것도 하지 않음.
        삭제 실패 시 warning 로그 남기고 계속 진행.
        """
        if self._released or not self._acquired:
            return
        self._released = True

        try:
            shutil.rmtree(self.path)
            logger.debug(f"{self.name}: workspace removed")
        except OSError as e:
            logger.warning(f"{self.name}: failed to remove workspace {self.path}: {e}")

    def is_empty(self) -> bool:
        """workspace에 파일/디렉터리가 하나도 없는지."""
        return not any(self.path.iterdir())

    def __enter__(self) -> "ScopedWorkspace":
        if not self._acquired:
            self._create()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"ScopedWorkspace(path={str(self.path)!r}, released={self._released})"
