"""
Process runner: 외부 툴(기본 `dotnet`) 호출.

규칙:
- stdin 없음, stdout/stderr 동시 수집 (communicate → 파이프 데드락 방지)
- exit 0 → SUCCESS(stdout), non-zero → FAILURE(stderr)
- 실행 불가(실행 파일 없음, 권한 없음) → UNAVAILABLE
- timeout → 프로세스 kill 후 UNAVAILABLE
- 요청 취소(CancelledError) → 프로세스 kill 후 취소 전파 (고아 프로세스 방지)
- 동시 실행 수 상한: asyncio.Semaphore
- working_directory 미지정 시 ScopedWorkspace 생성 후 반환 전에 삭제
"""

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from src.core.workspace import ScopedWorkspace
from src.domain.constants import (
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_TOOL_COMMAND,
    DEFAULT_TOOL_TIMEOUT_SECONDS,
)
from src.domain.schemas import OutcomeKind, ProcessOutcome

logger = logging.getLogger(__name__)


class ProcessRunner:
    """
    외부 툴 실행기.

    Usage:
        runner = ProcessRunner(["dotnet"], timeout=120, max_concurrency=4)
        outcome = await runner.run(["new", "--list"])
    """

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_TOOL_COMMAND,
        timeout: float | None = DEFAULT_TOOL_TIMEOUT_SECONDS,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        workspace_root: Path | None = None,
    ) -> None:
        """
        Args:
            command: 실행 파일 + 고정 prefix 인자 (예: ["dotnet"])
            timeout: 초 단위 제한 (None이면 무제한)
            max_concurrency: 동시에 살아있는 subprocess 최대 수
            workspace_root: 자동 생성 workspace의 상위 디렉터리
        """
        if not command:
            raise ValueError("command must not be empty")
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")

        self.command = tuple(command)
        self.timeout = timeout
        self.max_concurrency = max_concurrency
        self.workspace_root = workspace_root
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._in_flight = 0

    @property
    def in_flight(self) -> int:
        """현재 실행 중인 subprocess 수."""
        return self._in_flight

    async def run(
        self,
        arguments: Sequence[str],
        working_directory: Path | None = None,
    ) -> ProcessOutcome:
        """
        외부 툴 실행.

        Args:
            arguments: 툴 인자 (예: ["new", "console", "--output", "Foo"])
            working_directory: 작업 디렉터리 (None이면 임시 workspace 자동 생성/삭제)

        Returns:
            ProcessOutcome

        Raises:
            asyncio.CancelledError: 호출자가 취소한 경우 (프로세스는 종료됨)
        """
        if working_directory is None:
            with ScopedWorkspace(self.workspace_root) as workspace:
                return await self._run_in(list(arguments), workspace.path)

        return await self._run_in(list(arguments), Path(working_directory))

    async def _run_in(self, arguments: list[str], cwd: Path) -> ProcessOutcome:
        guid = cwd.name or "unknown"
        argv = [*self.command, *arguments]
        command_line = " ".join(argv)

        async with self._semaphore:
            logger.info(f"{guid}: {command_line}")

            try:
                process = await asyncio.create_subprocess_exec(
                    *argv,
                    cwd=str(cwd),
                    stdin=asyncio.subprocess.DEVNULL,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except OSError as e:
                logger.error(f"{guid}: failed to start {self.command[0]}: {e}")
                return ProcessOutcome(
                    kind=OutcomeKind.UNAVAILABLE,
                    stderr=f"{self.command[0]} could not be started: {e}",
                    correlation_id=guid,
                )

            self._in_flight += 1
            try:
                stdout_bytes, stderr_bytes = await asyncio.wait_for(
                    process.communicate(), timeout=self.timeout
                )
            except TimeoutError:
                await _terminate(process)
                logger.error(f"{guid}: {command_line} timed out after {self.timeout}s")
                return ProcessOutcome(
                    kind=OutcomeKind.UNAVAILABLE,
                    stderr=f"{self.command[0]} timed out after {self.timeout} seconds",
                    correlation_id=guid,
                )
            except asyncio.CancelledError:
                await _terminate(process)
                logger.warning(f"{guid}: cancelled, killed pid {process.pid}")
                raise
            finally:
                self._in_flight -= 1

        stdout = _decode(stdout_bytes)
        stderr = _decode(stderr_bytes)
        exit_code = process.returncode

        if exit_code == 0:
            logger.info(f"{guid}>\n{stdout}")
            return ProcessOutcome(
                kind=OutcomeKind.SUCCESS,
                stdout=stdout,
                stderr=stderr,
                exit_code=exit_code,
                correlation_id=guid,
            )

        logger.info(f"{guid}: {stderr}")
        return ProcessOutcome(
            kind=OutcomeKind.FAILURE,
            stdout=stdout,
            stderr=stderr,
            exit_code=exit_code,
            correlation_id=guid,
        )


async def _terminate(process: asyncio.subprocess.Process) -> None:
    """프로세스 kill + reap. 이미 종료된 경우 무시."""
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    # 취소 중에도 reap이 끝나도록 shield
    await asyncio.shield(process.wait())


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")
