"""
Pytest fixtures for the scaffold service tests.

외부 툴은 tests/fixtures/fake_dotnet.py 로 대체:
- 실제 subprocess 실행 경로를 그대로 사용
- tool.command = [python, fake_dotnet.py]
"""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest
import yaml

from src.archivers import ArchiverRegistry
from src.core.process import ProcessRunner

FAKE_TOOL = Path(__file__).parent / "fixtures" / "fake_dotnet.py"

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """default.yaml 경로."""
    return project_root / "default.yaml"


@pytest.fixture
def default_config(default_config_path: Path) -> dict:
    """기본 설정 로드."""
    with open(default_config_path, encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """자동 생성 workspace 상위 디렉터리 (삭제 검증용)."""
    root = tmp_path / "workspaces"
    root.mkdir()
    return root


# =============================================================================
# External Tool Fixtures
# =============================================================================

@pytest.fixture
def fake_tool_command() -> list[str]:
    """fake dotnet 실행 명령."""
    return [sys.executable, str(FAKE_TOOL)]


@pytest.fixture
def tool_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """설치 상태 파일 (fake 툴이 환경 변수로 읽음)."""
    state = tmp_path / "installed.txt"
    monkeypatch.setenv("FAKE_DOTNET_STATE", str(state))
    yield state


@pytest.fixture
def runner(fake_tool_command: list[str], workspace_root: Path, tool_state: Path) -> ProcessRunner:
    """fake 툴을 실행하는 ProcessRunner."""
    return ProcessRunner(
        fake_tool_command,
        timeout=30,
        max_concurrency=4,
        workspace_root=workspace_root,
    )


@pytest.fixture
def registry() -> ArchiverRegistry:
    """기본 ArchiverRegistry (zip만)."""
    return ArchiverRegistry()


# =============================================================================
# Config Fixtures
# =============================================================================

@pytest.fixture
def test_config(fake_tool_command: list[str], workspace_root: Path) -> dict:
    """테스트용 설정."""
    return {
        "tool": {
            "command": fake_tool_command,
            "timeout_seconds": 30,
            "max_concurrency": 4,
        },
        "workspace": {"root": str(workspace_root)},
        "generate": {
            "default_output": "Sample",
            "default_packaging": "zip",
        },
        "archivers": {"enabled": ["zip", "tgz"]},
        "logging": {"level": "DEBUG"},
    }


@pytest.fixture
def test_config_path(
    tmp_path: Path, test_config: dict, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """테스트 설정 파일 (SCAFFOLD_CONFIG로 지정)."""
    path = tmp_path / "test.yaml"
    path.write_text(yaml.safe_dump(test_config), encoding="utf-8")
    monkeypatch.setenv("SCAFFOLD_CONFIG", str(path))
    return path
