"""
Core layer: 외부 툴 실행 + 임시 작업 디렉터리.

역할:
- ScopedWorkspace: 요청 단위 임시 디렉터리, 삭제 보장
- ProcessRunner: subprocess 실행, 결과 → ProcessOutcome
- ids: workspace 이름, 아카이브 파일명
"""

from .ids import generate_workspace_id, sanitize_archive_name
from .process import ProcessRunner
from .workspace import ScopedWorkspace

__all__ = [
    # ids
    "generate_workspace_id",
    "sanitize_archive_name",
    # process
    "ProcessRunner",
    # workspace
    "ScopedWorkspace",
]
