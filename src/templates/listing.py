"""
템플릿 목록 파서: `new --list` 출력 → TemplateInfo.

출력 형식 (고정 폭 컬럼, 구분자 2칸 공백):

    Template Name        Short Name  Language    Tags
    -------------------  ----------  ----------  --------------
    Console Application  console     [C#],F#,VB  Common/Console

규칙:
- 첫 번째 '-' 로 시작하는 줄 = divider, 바로 윗줄 = heading
- heading 컬럼 4개 미만 → FORMAT_CHANGED (다른 버전의 출력 형식)
- 컬럼 시작 위치 = heading 제목 위치, 끝 = 다음 제목 시작 - 구분자 2칸 (마지막 컬럼은 줄 끝까지)
- divider 구간 수 = heading 제목 수, k번째 제목은 k번째 '-' 구간 안에서 시작 → 아니면 FORMAT_CHANGED
- 데이터 셀 안의 공백 1칸은 허용 (공백 split 금지)
- 짧은 줄 → 잘린/빈 셀 (에러 아님)
- short name 컬럼 값 = 키
"""

import logging
import re
from dataclasses import dataclass

from src.domain.constants import (
    LISTING_COLUMN_SEPARATOR,
    LISTING_COLUMNS,
    LISTING_DIVIDER_MARKER,
)
from src.domain.errors import ErrorCodes, ToolServiceError
from src.domain.schemas import TemplateInfo

logger = logging.getLogger(__name__)

# heading 제목: 공백 1칸으로만 이어진 단어들 (공백 2칸 이상 = 컬럼 구분)
_HEADING_TITLE = re.compile(r"\S+(?: \S+)*")
_DIVIDER_SEGMENT = re.compile(re.escape(LISTING_DIVIDER_MARKER) + "+")


@dataclass(frozen=True)
class Column:
    """고정 폭 컬럼 경계. width가 None이면 줄 끝까지."""
    title: str
    start: int
    width: int | None = None

    @property
    def end(self) -> int | None:
        if self.width is None:
            return None
        return self.start + self.width

    def slice(self, line: str) -> str:
        return line[self.start:self.end].strip()


def _find_divider(lines: list[str]) -> int:
    for idx, line in enumerate(lines):
        if line.startswith(LISTING_DIVIDER_MARKER):
            return idx
    raise ToolServiceError(
        ErrorCodes.FORMAT_CHANGED,
        reason="divider row not found",
    )


def compute_columns(heading: str, divider: str) -> list[Column]:
    """
    heading 행에서 컬럼 경계 계산, divider 행으로 정렬 검증.

    Args:
        heading: 컬럼 제목 행
        divider: '-' 구간 행

    Returns:
        Column 목록 (Name, ShortName, Language, Tags 순)

    Raises:
        ToolServiceError: FORMAT_CHANGED
    """
    titles = list(_HEADING_TITLE.finditer(heading.rstrip()))
    if len(titles) < len(LISTING_COLUMNS):
        raise ToolServiceError(
            ErrorCodes.FORMAT_CHANGED,
            reason="unexpected heading columns",
            expected=list(LISTING_COLUMNS),
            found=[t.group() for t in titles],
        )

    divider = divider.rstrip()
    segments = [m.start() for m in _DIVIDER_SEGMENT.finditer(divider)]
    if set(divider) - {LISTING_DIVIDER_MARKER, " "} or len(segments) != len(titles):
        raise ToolServiceError(
            ErrorCodes.FORMAT_CHANGED,
            reason="unexpected divider row",
            divider=divider,
        )

    columns: list[Column] = []
    for idx, title in enumerate(titles):
        next_segment = segments[idx + 1] if idx + 1 < len(segments) else None
        if title.start() < segments[idx] or (
            next_segment is not None and title.start() >= next_segment
        ):
            raise ToolServiceError(
                ErrorCodes.FORMAT_CHANGED,
                reason="heading not aligned with divider",
                title=title.group(),
                offset=title.start(),
            )

        width = None
        if idx + 1 < len(titles):
            width = titles[idx + 1].start() - len(LISTING_COLUMN_SEPARATOR) - title.start()
        columns.append(Column(title=title.group(), start=title.start(), width=width))
    return columns


def parse_template_list(listing: str) -> dict[str, TemplateInfo]:
    """
    `new --list` 출력 파싱.

    Args:
        listing: 외부 툴 stdout 전체

    Returns:
        {short_name: TemplateInfo}

    Raises:
        ToolServiceError: FORMAT_CHANGED
    """
    lines = [line.rstrip("\r") for line in listing.split("\n") if line.strip()]

    divider_idx = _find_divider(lines)
    if divider_idx == 0:
        raise ToolServiceError(
            ErrorCodes.FORMAT_CHANGED,
            reason="heading row not found above divider",
        )

    name_col, short_name_col, language_col, tags_col = compute_columns(
        lines[divider_idx - 1], lines[divider_idx]
    )[:4]

    templates: dict[str, TemplateInfo] = {}
    for line in lines[divider_idx + 1:]:
        short_name = short_name_col.slice(line)
        if not short_name:
            continue
        if short_name in templates:
            logger.warning(f"Duplicate template short name in listing: {short_name}")
            continue
        templates[short_name] = TemplateInfo(
            name=name_col.slice(line),
            languages=language_col.slice(line),
            tags=tags_col.slice(line),
        )
    return templates


def compute_installed_delta(
    before: dict[str, TemplateInfo],
    after: dict[str, TemplateInfo],
) -> dict[str, TemplateInfo]:
    """
    설치로 새로 생긴 템플릿 (after - before, short name 기준).

    Args:
        before: 설치 전 목록
        after: 설치 후 목록

    Returns:
        새로 생긴 템플릿만
    """
    return {key: info for key, info in after.items() if key not in before}
