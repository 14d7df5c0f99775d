"""
test_ids.py - ID 생성 테스트

DoD:
- workspace_id 고유성: 매 호출 시 다른 값
- workspace_id 포맷 검증
- 아카이브 파일명 정리
"""

import re

from src.core.ids import generate_workspace_id, sanitize_archive_name

# =============================================================================
# generate_workspace_id 테스트
# =============================================================================


class TestGenerateWorkspaceId:
    """generate_workspace_id 함수 테스트."""

    def test_unique_per_call(self):
        """매 호출 다른 값."""
        ids = {generate_workspace_id() for _ in range(100)}

        assert len(ids) == 100

    def test_format(self):
        """WS-{timestamp}-{uuid hex}."""
        workspace_id = generate_workspace_id()

        assert re.fullmatch(r"WS-\d{14}-[0-9a-f]{32}", workspace_id)


# =============================================================================
# sanitize_archive_name 테스트
# =============================================================================


class TestSanitizeArchiveName:
    """sanitize_archive_name 함수 테스트."""

    def test_plain_name_unchanged(self):
        """일반 이름은 그대로."""
        assert sanitize_archive_name("Foo") == "Foo"
        assert sanitize_archive_name("My.App-v2_final") == "My.App-v2_final"

    def test_unsafe_characters_replaced(self):
        """따옴표/공백/경로 구분자 → 밑줄."""
        assert sanitize_archive_name('a"b c/d\\e') == "a_b_c_d_e"

    def test_non_ascii_replaced(self):
        """비ASCII → 밑줄."""
        assert sanitize_archive_name("앱") == "_"

    def test_leading_dots_removed(self):
        """숨김 파일/상위 경로 방지."""
        assert sanitize_archive_name("..secret") == "secret"

    def test_empty_uses_fallback(self):
        """정리 후 비어있으면 fallback."""
        assert sanitize_archive_name("", fallback="Sample") == "Sample"
        assert sanitize_archive_name("...", fallback="Sample") == "Sample"

    def test_max_length(self):
        """최대 100자."""
        assert len(sanitize_archive_name("a" * 300)) == 100
