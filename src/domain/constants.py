"""
Domain Constants: 서비스 전역 상수.

외부 툴 인자, 기본값, 목록 출력 스키마 등.
설정(default.yaml)으로 덮어쓸 수 있는 값은 DEFAULT_ 접두사.
"""

# =============================================================================
# External Tool (외부 툴 호출 규약)
# =============================================================================
# 인자 벡터:
# - new <template> [--flag ...]
# - new <template> --help
# - new --install <packageId>
# - new --list

DEFAULT_TOOL_COMMAND = ("dotnet",)
TOOL_NEW = "new"
TOOL_LIST_FLAG = "--list"
TOOL_INSTALL_FLAG = "--install"
TOOL_HELP_FLAG = "--help"
TOOL_OUTPUT_FLAG = "--output"

DEFAULT_TOOL_TIMEOUT_SECONDS = 120.0
DEFAULT_MAX_CONCURRENCY = 4

# =============================================================================
# Generate (프로젝트 생성)
# =============================================================================

OUTPUT_OPTION_PREFIX = "output="
DEFAULT_OUTPUT_NAME = "Sample"
DEFAULT_PACKAGING = "zip"

# =============================================================================
# Template Listing (목록 출력 스키마)
# =============================================================================
# 예:
# Template Name        Short Name  Language    Tags
# -------------------  ----------  ----------  --------------
# Console Application  console     [C#],F#,VB  Common/Console

LISTING_COLUMNS = ("Name", "ShortName", "Language", "Tags")
LISTING_DIVIDER_MARKER = "-"
LISTING_COLUMN_SEPARATOR = "  "
