"""
Scaffold Service: 외부 툴 호출 → 템플릿 목록/도움말/설치/프로젝트 생성.

규칙:
- 요청 단위 실패는 ServiceResult(error_code, message)로 반환 (예외 아님)
- 툴의 stderr 메시지가 최종 → 재시도 없음
- 생성 workspace는 아카이브 바이트 추출 후 반드시 삭제
- 목록 출력 포맷 불일치(FORMAT_CHANGED)만 예외로 전파
"""

import asyncio
import logging
from pathlib import Path

from src.archivers import ArchiverRegistry
from src.core.ids import sanitize_archive_name
from src.core.process import ProcessRunner
from src.core.workspace import ScopedWorkspace
from src.domain.constants import (
    DEFAULT_OUTPUT_NAME,
    DEFAULT_PACKAGING,
    OUTPUT_OPTION_PREFIX,
    TOOL_HELP_FLAG,
    TOOL_INSTALL_FLAG,
    TOOL_LIST_FLAG,
    TOOL_NEW,
    TOOL_OUTPUT_FLAG,
)
from src.domain.errors import ErrorCodes, ToolServiceError
from src.domain.schemas import (
    GeneratedArchive,
    OutcomeKind,
    ProcessOutcome,
    ServiceResult,
    TemplateInfo,
)
from src.templates.listing import compute_installed_delta, parse_template_list

logger = logging.getLogger(__name__)


def parse_options(options: str | None) -> list[str]:
    """
    쉼표 구분 옵션 문자열 → 옵션 목록.

    "output=Foo, framework=net6.0,,force" → ["output=Foo", "framework=net6.0", "force"]
    """
    if not options:
        return []
    return [opt.strip() for opt in options.split(",") if opt.strip()]


def build_new_arguments(
    template: str,
    options: list[str],
    default_output: str = DEFAULT_OUTPUT_NAME,
) -> tuple[list[str], str]:
    """
    `new <template>` 인자 벡터 생성.

    - output= 옵션이 있으면 그 값을 출력 이름으로 사용
    - 없으면 --output <default_output> 추가
    - 모든 옵션은 --{opt} 로 전달

    Returns:
        (인자 목록, 출력 이름)
    """
    arguments = [TOOL_NEW, template]

    output = next(
        (opt.split("=", 1)[1] for opt in options if opt.startswith(OUTPUT_OPTION_PREFIX)),
        None,
    )
    if output is None:
        output = default_output
        arguments.extend([TOOL_OUTPUT_FLAG, output])

    arguments.extend(f"--{opt}" for opt in options)
    return arguments, output


def _outcome_failure(outcome: ProcessOutcome) -> ServiceResult:
    """실패한 ProcessOutcome → ServiceResult."""
    if outcome.kind == OutcomeKind.UNAVAILABLE:
        return ServiceResult.failure(ErrorCodes.SUBPROCESS_UNAVAILABLE, outcome.message)
    return ServiceResult.failure(ErrorCodes.SUBPROCESS_FAILED, outcome.message)


class ScaffoldService:
    """
    템플릿 스캐폴딩 서비스.

    Usage:
        service = ScaffoldService(runner, registry)
        result = await service.generate("console", "output=Foo")
        if result.ok:
            archive = result.value
    """

    def __init__(
        self,
        runner: ProcessRunner,
        registry: ArchiverRegistry,
        default_output: str = DEFAULT_OUTPUT_NAME,
        default_packaging: str = DEFAULT_PACKAGING,
        workspace_root: Path | None = None,
    ) -> None:
        self.runner = runner
        self.registry = registry
        self.default_output = default_output
        self.default_packaging = default_packaging
        self.workspace_root = workspace_root

    # =========================================================================
    # Listing
    # =========================================================================

    async def list_templates(self) -> ServiceResult[dict[str, TemplateInfo]]:
        """
        설치된 템플릿 목록.

        Raises:
            ToolServiceError: FORMAT_CHANGED (목록 출력 형식 불일치)
        """
        outcome = await self.runner.run([TOOL_NEW, TOOL_LIST_FLAG])
        if not outcome.ok:
            return _outcome_failure(outcome)
        try:
            templates = parse_template_list(outcome.stdout)
        except ToolServiceError as e:
            raise e.with_correlation_id(outcome.correlation_id) from e
        return ServiceResult.success(templates)

    async def template_help(self, template: str) -> ServiceResult[str]:
        """템플릿 도움말 텍스트."""
        outcome = await self.runner.run([TOOL_NEW, template, TOOL_HELP_FLAG])
        if not outcome.ok:
            return _outcome_failure(outcome)
        return ServiceResult.success(outcome.stdout)

    async def install_templates(
        self, package_id: str | None
    ) -> ServiceResult[dict[str, TemplateInfo]]:
        """
        템플릿 팩 설치 후 새로 생긴 템플릿 반환.

        설치 전/후 목록 차이 (short name 기준).
        """
        if package_id is None or not package_id.strip():
            return ServiceResult.failure(ErrorCodes.MISSING_INPUT, "missing NuGet ID")

        before = await self.list_templates()
        if not before.ok:
            return before

        outcome = await self.runner.run([TOOL_NEW, TOOL_INSTALL_FLAG, package_id.strip()])
        if not outcome.ok:
            return _outcome_failure(outcome)

        after = await self.list_templates()
        if not after.ok:
            return after

        delta = compute_installed_delta(before.value or {}, after.value or {})
        logger.info(f"Installed {package_id}: {sorted(delta)}")
        return ServiceResult.success(delta)

    # =========================================================================
    # Generate
    # =========================================================================

    async def generate(
        self,
        template: str,
        options: str | None = None,
        packaging: str | None = None,
    ) -> ServiceResult[GeneratedArchive]:
        """
        템플릿으로 프로젝트 생성 후 아카이브.

        1. archiver 조회 (없으면 툴 실행 없이 404)
        2. workspace에서 `new <template> ...` 실행
        3. 생성 파일 없으면 EMPTY_OUTPUT
        4. workspace → 아카이브 바이트 (workspace는 scope 종료 시 삭제)

        Args:
            template: 템플릿 short name
            options: 쉼표 구분 옵션 (예: "output=Foo,framework=net6.0")
            packaging: 패키징 포맷 이름 (None이면 기본값)

        Returns:
            ServiceResult[GeneratedArchive]
        """
        packaging = packaging or self.default_packaging
        archiver = self.registry.lookup(packaging)
        if archiver is None:
            return ServiceResult.failure(
                ErrorCodes.UNKNOWN_PACKAGING_FORMAT,
                f"Packaging '{packaging}' not found.",
            )

        arguments, output = build_new_arguments(
            template, parse_options(options), self.default_output
        )

        with ScopedWorkspace(self.workspace_root) as workspace:
            outcome = await self.runner.run(arguments, workspace.path)
            if not outcome.ok:
                return _outcome_failure(outcome)

            if workspace.is_empty():
                return ServiceResult.failure(
                    ErrorCodes.EMPTY_OUTPUT,
                    f"template {template} does not exist",
                )

            content = await asyncio.to_thread(archiver.to_bytes, workspace.path)

        archive = GeneratedArchive(
            content=content,
            mime_type=archiver.mime_type,
            filename=f"{sanitize_archive_name(output, self.default_output)}{archiver.file_extension}",
        )
        logger.info(f"{workspace.name}: packaged {template} -> {archive.to_dict()}")
        return ServiceResult.success(archive)
