"""Tests for the line-based size scanner."""

import pytest

from codebase_metrics.scanning.lexical import is_comment_line, is_logical_line, scan_lines


class TestScanLines:
    def test_empty_text_is_one_blank_line(self):
        size = scan_lines("")
        assert size.total_lines == 1
        assert size.blank_lines == 1
        assert size.source_lines == 0
        assert size.comment_lines == 0
        assert size.logical_lines == 0

    def test_line_categories(self):
        source = "a\n\n// c\n/* x */\n * y\n{\n}\n};\nfoo();"
        size = scan_lines(source)
        assert size.total_lines == 9
        assert size.blank_lines == 1
        assert size.source_lines == 8
        assert size.comment_lines == 3
        # a and foo(); only: braces and comment starters are excluded
        assert size.logical_lines == 2

    def test_trailing_newline_adds_blank_line(self):
        size = scan_lines("a\n")
        assert size.total_lines == 2
        assert size.blank_lines == 1

    def test_leading_byte_order_mark(self):
        size = scan_lines("\ufeff// header\nconst x = 1;\n")
        assert size.comment_lines == 1
        assert size.logical_lines == 1
        assert size.total_lines == 3

    def test_crlf_line_endings(self):
        size = scan_lines("x\r\n  \r\ny")
        assert size.total_lines == 3
        assert size.source_lines == 2
        assert size.blank_lines == 1

    def test_comment_and_logical_overlap(self):
        """A code line ending in */ counts as both comment and logical."""
        size = scan_lines("call(); /* note */")
        assert size.comment_lines == 1
        assert size.logical_lines == 1
        assert size.source_lines == 1

    def test_string_with_comment_marker_is_misclassified(self):
        """Line-granular heuristic: template text starting with // is a comment line."""
        size = scan_lines("const s = `\n// inside a string\n`;")
        assert size.comment_lines == 1

    @pytest.mark.parametrize(
        "source",
        ["", "\n\n\n", "a\nb", "  // x\n\n{\n", "\t\n x \r\n", "/*\n *\n */\n"],
    )
    def test_blank_lines_is_total_minus_source(self, source):
        size = scan_lines(source)
        assert size.total_lines - size.source_lines == size.blank_lines


class TestLinePredicates:
    @pytest.mark.parametrize("line", ["// a", "/* a", "* a", "a */", "*/"])
    def test_comment_lines(self, line):
        assert is_comment_line(line)

    @pytest.mark.parametrize("line", ["{", "}", "};", "", "// x", "* x"])
    def test_not_logical(self, line):
        assert not is_logical_line(line)

    @pytest.mark.parametrize("line", ["x();", "} else {", "{}", "return;"])
    def test_logical(self, line):
        assert is_logical_line(line)
