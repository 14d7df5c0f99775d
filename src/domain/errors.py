"""
Error definitions for the scaffold service.

규칙:
- 요청 단위 실패(툴 실패, 빈 출력, 패키징 미지원)는 값(ProcessOutcome/ServiceResult)으로 전달
- 무결성 에러(중복 등록, 출력 포맷 변경)만 ToolServiceError로 즉시 중단
- 조용한 실패 금지 → 코드 + 컨텍스트로 명시
"""

from typing import Any


class ToolServiceError(Exception):
    """
    서비스 무결성 위반 시 발생하는 에러.

    즉시 중단이 필요한 경우에만 사용:
    - archiver 이름 중복 등록
    - 외부 툴의 목록 출력 포맷 변경 (heading/divider 불일치)

    correlation_id: 문제의 출력을 만든 외부 툴 호출의 workspace 이름.
    로그의 "{correlation_id}: <command>" 줄과 대조용.

    Usage:
        raise ToolServiceError("FORMAT_CHANGED", reason="divider not found")
    """

    def __init__(self, code: str, correlation_id: str | None = None, **context: Any) -> None:
        self.code = code
        self.correlation_id = correlation_id
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        message = f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"
        if self.correlation_id:
            return f"{self.correlation_id}: {message}"
        return message

    def with_correlation_id(self, correlation_id: str) -> "ToolServiceError":
        """같은 코드/컨텍스트에 외부 툴 호출 id를 붙인 새 에러."""
        return ToolServiceError(self.code, correlation_id=correlation_id, **self.context)

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        data: dict[str, Any] = {"code": self.code}
        if self.correlation_id:
            data["correlation_id"] = self.correlation_id
        data.update(self.context)
        return data


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수. HTTP 매핑은 routes/templates.py의 ERROR_STATUS 참조."""

    # === Subprocess ===
    SUBPROCESS_UNAVAILABLE = "SUBPROCESS_UNAVAILABLE"  # 실행 불가/timeout → 503
    SUBPROCESS_FAILED = "SUBPROCESS_FAILED"  # non-zero exit → 404

    # === Generate ===
    EMPTY_OUTPUT = "EMPTY_OUTPUT"  # 템플릿이 파일을 만들지 않음 → 404
    UNKNOWN_PACKAGING_FORMAT = "UNKNOWN_PACKAGING_FORMAT"  # archiver 없음 → 404

    # === Integrity ===
    FORMAT_CHANGED = "FORMAT_CHANGED"  # 목록 출력 heading 스키마 불일치
    DUPLICATE_REGISTRATION = "DUPLICATE_REGISTRATION"  # archiver 이름 충돌

    # === Input ===
    MISSING_INPUT = "MISSING_INPUT"  # 필수 파라미터 누락 → 400
