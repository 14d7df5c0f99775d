"""Domain layer: errors, constants and schemas."""

from .errors import ErrorCodes, ToolServiceError
from .schemas import (
    GeneratedArchive,
    OutcomeKind,
    ProcessOutcome,
    ServiceResult,
    TemplateInfo,
)

__all__ = [
    "ErrorCodes",
    "ToolServiceError",
    "GeneratedArchive",
    "OutcomeKind",
    "ProcessOutcome",
    "ServiceResult",
    "TemplateInfo",
]
