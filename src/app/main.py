"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn src.app.main:app --reload
- 프로덕션: uv run uvicorn src.app.main:app

설정:
- 프로젝트 루트 default.yaml (SCAFFOLD_CONFIG 환경 변수로 경로 변경)
"""

import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import yaml
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.archivers import BUILTIN_ARCHIVERS, ArchiverRegistry, ZipArchiver
from src.core.process import ProcessRunner
from src.domain.constants import (
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_TOOL_COMMAND,
    DEFAULT_TOOL_TIMEOUT_SECONDS,
)
from src.domain.errors import ErrorCodes, ToolServiceError

# Routes
from src.app.routes import templates

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SCAFFOLD_CONFIG"

# =============================================================================
# Configuration
# =============================================================================


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        # 환경 변수 없으면 프로젝트 루트의 default.yaml
        config_path = (
            Path(env_path)
            if env_path
            else Path(__file__).parent.parent.parent / "default.yaml"
        )

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


def configure_logging(config: dict) -> None:
    """logging.level 기반 기본 로깅 설정."""
    level_name = str((config.get("logging", {}) or {}).get("level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_process_runner(config: dict) -> ProcessRunner:
    """tool.* / workspace.root 설정으로 ProcessRunner 생성."""
    tool_config = config.get("tool", {}) or {}
    command = tool_config.get("command", list(DEFAULT_TOOL_COMMAND))
    if isinstance(command, str):
        command = [command]

    workspace_root = (config.get("workspace", {}) or {}).get("root")

    return ProcessRunner(
        command=command,
        timeout=tool_config.get("timeout_seconds", DEFAULT_TOOL_TIMEOUT_SECONDS),
        max_concurrency=tool_config.get("max_concurrency", DEFAULT_MAX_CONCURRENCY),
        workspace_root=Path(workspace_root) if workspace_root else None,
    )


def build_archiver_registry(config: dict) -> ArchiverRegistry:
    """
    ArchiverRegistry 생성.

    zip은 항상 기본 등록, archivers.enabled의 나머지 내장 archiver 추가 등록.

    Raises:
        ToolServiceError: DUPLICATE_REGISTRATION (설정에 같은 이름 중복)
    """
    registry = ArchiverRegistry()
    enabled = (config.get("archivers", {}) or {}).get("enabled", [])

    for name in enabled:
        if name == ZipArchiver.name:
            continue  # 기본 내장
        archiver_cls = BUILTIN_ARCHIVERS.get(name)
        if archiver_cls is None:
            logger.warning(f"Unknown archiver in config, skipped: {name}")
            continue
        registry.register(archiver_cls())

    return registry


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: 설정 로드, 로깅, archiver 레지스트리, process runner
    종료 시: 리소스 정리 (workspace는 요청 단위로 이미 삭제됨)
    """
    # Startup
    app.state.config = load_config()
    configure_logging(app.state.config)
    app.state.archiver_registry = build_archiver_registry(app.state.config)
    app.state.process_runner = build_process_runner(app.state.config)
    logger.info(
        f"Scaffold service ready: tool={' '.join(app.state.process_runner.command)}, "
        f"packaging={app.state.archiver_registry.names()}"
    )

    yield

    # Shutdown


# =============================================================================
# App Instance
# =============================================================================

app = FastAPI(
    title="Template Scaffold Service",
    description="외부 코드 생성 CLI 템플릿 → 프로젝트 아카이브 다운로드",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(ToolServiceError)
async def tool_service_error_handler(request: Request, exc: ToolServiceError) -> JSONResponse:
    """무결성 에러 (FORMAT_CHANGED 등): 크게 로그 후 502/500."""
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    status_code = 502 if exc.code == ErrorCodes.FORMAT_CHANGED else 500
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# =============================================================================
# Routes
# =============================================================================

app.include_router(templates.router, prefix="/templates", tags=["Templates"])


# =============================================================================
# Root Endpoints
# =============================================================================


@app.get("/")
async def root(request: Request) -> dict[str, Any]:
    """서비스 정보."""
    return {
        "message": "Template Scaffold Service",
        "endpoints": {
            "templates": "/templates",
            "generate": "/templates/{template}?options=...",
            "help": "/templates/{template}/help",
            "install": "POST /templates?nuGetId=...",
        },
        "packaging": request.app.state.archiver_registry.names(),
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok"}


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
