"""
Templates Routes: 외부 툴 템플릿 스캐폴딩.

- GET  /templates                    → {short_name: {name, languages, tags}}
- GET  /templates/{template}         → 프로젝트 아카이브 (options, packaging)
- GET  /templates/{template}/help    → 템플릿 도움말 텍스트
- POST /templates?nuGetId=...        → 설치로 새로 생긴 템플릿

에러 매핑 (ServiceResult.error_code → HTTP):
- SUBPROCESS_FAILED / EMPTY_OUTPUT / UNKNOWN_PACKAGING_FORMAT → 404 (툴 메시지 그대로)
- SUBPROCESS_UNAVAILABLE → 503
- MISSING_INPUT → 400
"""

from pathlib import Path
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from src.app.services.scaffold import ScaffoldService
from src.domain.constants import DEFAULT_OUTPUT_NAME, DEFAULT_PACKAGING
from src.domain.errors import ErrorCodes
from src.domain.schemas import ServiceResult, TemplateInfo

router = APIRouter()

ERROR_STATUS: dict[str, int] = {
    ErrorCodes.SUBPROCESS_FAILED: 404,
    ErrorCodes.EMPTY_OUTPUT: 404,
    ErrorCodes.UNKNOWN_PACKAGING_FORMAT: 404,
    ErrorCodes.SUBPROCESS_UNAVAILABLE: 503,
    ErrorCodes.MISSING_INPUT: 400,
}


def get_scaffold_service(request: Request) -> ScaffoldService:
    """app.state의 runner/registry/config로 서비스 구성."""
    state = request.app.state
    generate_config: dict[str, Any] = state.config.get("generate", {}) or {}
    workspace_root = (state.config.get("workspace", {}) or {}).get("root")

    return ScaffoldService(
        runner=state.process_runner,
        registry=state.archiver_registry,
        default_output=generate_config.get("default_output", DEFAULT_OUTPUT_NAME),
        default_packaging=generate_config.get("default_packaging", DEFAULT_PACKAGING),
        workspace_root=Path(workspace_root) if workspace_root else None,
    )


def error_response(result: ServiceResult) -> PlainTextResponse:
    """실패한 ServiceResult → 평문 에러 응답."""
    status_code = ERROR_STATUS.get(result.error_code or "", 500)
    return PlainTextResponse(content=result.message, status_code=status_code)


def _templates_json(templates: dict[str, TemplateInfo]) -> dict[str, dict[str, str]]:
    return {key: info.to_dict() for key, info in templates.items()}


# =============================================================================
# API Routes
# =============================================================================

@router.get("")
async def list_templates(request: Request) -> Response:
    """설치된 템플릿 목록."""
    result = await get_scaffold_service(request).list_templates()
    if not result.ok:
        return error_response(result)
    return JSONResponse(content=_templates_json(result.value or {}))


@router.post("")
async def install_templates(request: Request, nuGetId: str | None = None) -> Response:  # noqa: N803
    """
    템플릿 팩 설치.

    Returns:
        설치 후 새로 사용 가능해진 템플릿 (설치 후 - 설치 전)
    """
    result = await get_scaffold_service(request).install_templates(nuGetId)
    if not result.ok:
        return error_response(result)
    return JSONResponse(content=_templates_json(result.value or {}))


@router.get("/{template}")
async def get_template_project(
    request: Request,
    template: str,
    options: str | None = None,
    packaging: str | None = None,
) -> Response:
    """
    템플릿으로 프로젝트 생성 후 아카이브 다운로드.

    Args:
        template: 템플릿 short name
        options: 쉼표 구분 (key=value 또는 flag), 각각 --{opt}로 전달
        packaging: 패키징 포맷 (기본: zip)
    """
    result = await get_scaffold_service(request).generate(template, options, packaging)
    if not result.ok or result.value is None:
        return error_response(result)

    archive = result.value
    return Response(
        content=archive.content,
        media_type=archive.mime_type,
        headers={
            "Content-Disposition": f'attachment; filename="{archive.filename}"',
        },
    )


@router.get("/{template}/help")
async def get_template_help(request: Request, template: str) -> Response:
    """템플릿 도움말 (툴 출력 그대로)."""
    result = await get_scaffold_service(request).template_help(template)
    if not result.ok:
        return error_response(result)
    return PlainTextResponse(content=result.value or "")
