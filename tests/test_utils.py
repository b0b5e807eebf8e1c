"""Tests for text helpers."""

from canscript.utils import split_lr


class TestSplitLR:
    """Tests for split_lr()."""

    def test_splits_on_separator(self):
        assert split_lr("var:name", ":") == ("var", "name")

    def test_empty_left_side(self):
        assert split_lr(":name", ":") == ("", "name")

    def test_multi_char_separator(self):
        assert split_lr("a===b", "===") == ("a", "b")

    def test_empty_right_side(self):
        assert split_lr("var---", "---") == ("var", "")

    def test_separator_not_found(self):
        """Missing separator leaves the whole text on the right."""
        assert split_lr("var:name", "??") == ("", "var:name")

    def test_whitespace_is_kept(self):
        assert split_lr("str : text", ":") == ("str ", " text")

    def test_splits_on_first_occurrence_only(self):
        assert split_lr("a=b=c", "=") == ("a", "b=c")
