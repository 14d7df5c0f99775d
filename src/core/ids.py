"""
ID 생성: workspace 이름, 아카이브 파일명

규칙:
- workspace 이름은 전역 고유 (UUID v4)
- workspace 이름 = 로그 correlation id
"""

import uuid
from datetime import UTC, datetime


def generate_workspace_id() -> str:
    """
    Workspace ID 생성.

    고유성 보장: UUID v4
    포맷: WS-{timestamp}-{uuid}

    Returns:
        workspace_id 문자열 (디렉터리 이름으로 사용 가능)
    """
    now = datetime.now(UTC)
    timestamp = now.strftime("%Y%m%d%H%M%S")
    unique = uuid.uuid4().hex

    return f"WS-{timestamp}-{unique}"


def sanitize_archive_name(value: str, fallback: str = "Sample") -> str:
    """
    Content-Disposition 헤더에 넣을 수 있도록 파일명 정리.

    - ASCII 알파벳/숫자/./_/- 유지
    - 그 외 문자(공백, 따옴표, 경로 구분자, 비ASCII) → 밑줄
    - 앞쪽 점 제거 (숨김 파일 방지)
    - 최대 100자

    Args:
        value: 사용자가 지정한 output 이름
        fallback: 정리 후 비어 있으면 사용할 이름

    Returns:
        안전한 파일명 (확장자 제외)
    """
    sanitized = ""
    for c in value:
        if c.isascii() and (c.isalnum() or c in "._-"):
            sanitized += c
        else:
            sanitized += "_"

    sanitized = sanitized.lstrip(".")

    return sanitized[:100] if sanitized else fallback
