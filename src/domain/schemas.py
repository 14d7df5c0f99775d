"""
Data schemas for the scaffold service.

규칙:
- TemplateInfo: 목록 파서만 생성, 생성 후 불변
- ProcessOutcome: 외부 툴 호출 결과 (SUCCESS / FAILURE / UNAVAILABLE)
- ServiceResult: 서비스 → 라우트 경계까지 값으로 전달되는 결과
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


# =============================================================================
# Template Listing
# =============================================================================

@dataclass(frozen=True)
class TemplateInfo:
    """템플릿 메타데이터 (목록 출력 한 행). short name은 외부 키."""
    name: str
    languages: str
    tags: str

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "languages": self.languages,
            "tags": self.tags,
        }


# =============================================================================
# Process Outcome
# =============================================================================

class OutcomeKind(str, Enum):
    """외부 툴 호출 결과 종류."""
    SUCCESS = "success"  # exit 0, stdout 유효
    FAILURE = "failure"  # non-zero exit, stderr 유효 (사용자 입력 문제)
    UNAVAILABLE = "unavailable"  # 실행 불가/timeout (서비스 문제)


@dataclass(frozen=True)
class ProcessOutcome:
    """
    외부 툴 1회 호출 결과.

    correlation_id는 workspace 이름 (로그 상관관계용).
    """
    kind: OutcomeKind
    stdout: str = ""
    stderr: str = ""
    exit_code: int | None = None
    correlation_id: str = ""

    @property
    def ok(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS

    @property
    def message(self) -> str:
        """사용자에게 보여줄 텍스트 (성공: stdout, 실패: stderr)."""
        return self.stdout if self.ok else self.stderr


# =============================================================================
# Service Result
# =============================================================================

@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    서비스 호출 결과.

    성공 시 value, 실패 시 error_code + message.
    예외 대신 값으로 라우트까지 전달 → 라우트에서 HTTP 상태 매핑.
    """
    value: T | None = None
    error_code: str | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error_code is None

    @classmethod
    def success(cls, value: T) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error_code: str, message: str) -> "ServiceResult[T]":
        return cls(error_code=error_code, message=message)


@dataclass(frozen=True)
class GeneratedArchive:
    """생성된 프로젝트 아카이브."""
    content: bytes
    mime_type: str
    filename: str

    def to_dict(self) -> dict[str, Any]:
        """로그용 (본문 제외)."""
        return {
            "mime_type": self.mime_type,
            "filename": self.filename,
            "size": len(self.content),
        }
