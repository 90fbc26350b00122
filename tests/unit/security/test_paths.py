"""Tests for folder and file name sanitizing."""

from pathlib import Path

import pytest

from cpm.errors import SecurityValidationError
from cpm.security.paths import is_path_within_directory, sanitize_file_name, sanitize_folder_name


class TestSanitizeFolderName:
    """Tests for sanitize_folder_name."""

    def test_scoped_name_keeps_last_segment(self) -> None:
        assert sanitize_folder_name("@cpm/typescript-rules") == "typescript-rules"

    def test_bare_name_unchanged(self) -> None:
        assert sanitize_folder_name("typescript-rules") == "typescript-rules"

    def test_leading_at_stripped(self) -> None:
        assert sanitize_folder_name("@tool") == "tool"

    def test_traversal_removed(self) -> None:
        result = sanitize_folder_name("@evil/..rules..")

        assert ".." not in result
        assert result == "rules"

    def test_encoded_traversal_decoded_then_reduced(self) -> None:
        result = sanitize_folder_name("%2e%2e%2fetc")

        assert result == "etc"

    def test_unsafe_characters_removed(self) -> None:
        assert sanitize_folder_name('we<i>rd:"na|me?*') == "weirdname"

    @pytest.mark.parametrize("name", ["", "..", "@scope/..", ".hidden", "a\0b"])
    def test_rejects_names_with_nothing_safe_left(self, name: str) -> None:
        with pytest.raises(SecurityValidationError):
            sanitize_folder_name(name)


class TestSanitizeFileName:
    """Tests for sanitize_file_name."""

    def test_plain_markdown(self) -> None:
        assert sanitize_file_name("README.md") == "README.md"

    def test_directory_components_dropped(self) -> None:
        assert sanitize_file_name("docs/guide.md") == "guide.md"

    def test_unsafe_characters_replaced(self) -> None:
        assert sanitize_file_name("a:b.md") == "a_b.md"

    @pytest.mark.parametrize(
        ("name", "message"),
        [
            ("", "cannot be empty"),
            (".secret.md", "Hidden files"),
            ("notes.txt", "Only .md files"),
            ("a..b.md", "Path traversal"),
        ],
    )
    def test_rejected(self, name: str, message: str) -> None:
        with pytest.raises(SecurityValidationError, match=message):
            sanitize_file_name(name)


def test_is_path_within_directory(tmp_path: Path) -> None:
    base = tmp_path / "base"
    base.mkdir()

    assert is_path_within_directory(base, base)
    assert is_path_within_directory(base / "a" / "b", base)
    assert not is_path_within_directory(base / ".." / "other", base)
    assert not is_path_within_directory(tmp_path / "base-sibling", base)
