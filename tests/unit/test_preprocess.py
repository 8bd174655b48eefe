"""Unit tests for markdown preprocessing rewrites."""

import pytest

from wxmark.preprocess import (
    normalize_bold,
    normalize_bullets,
    preprocess_markdown,
    split_fenced,
    substitute_color_spans,
)


@pytest.mark.unit
class TestSplitFenced:
    """Test splitting source into prose and fenced code."""

    def test_segments_concatenate_to_input(self):
        """Test segments always join back to the original source."""
        source = "intro\n```python\nx = 1\n```\noutro\n"
        segments = split_fenced(source)
        assert "".join(text for _, text in segments) == source
        assert [is_code for is_code, _ in segments] == [False, True, False]

    def test_closing_fence_must_match(self):
        """Test a tilde line does not close a backtick fence."""
        source = "```\n~~~\n```\n"
        assert split_fenced(source) == [(True, source)]

    def test_longer_closing_fence(self):
        """Test a closing fence may be longer than the opening one."""
        assert split_fenced("```\ncode\n`````\n") == [(True, "```\ncode\n`````\n")]

    def test_unclosed_fence_runs_to_end(self):
        """Test an unclosed fence swallows the rest of the document."""
        segments = split_fenced("text\n```\n- item\n")
        assert segments[-1] == (True, "```\n- item\n")


@pytest.mark.unit
class TestNormalizeBold:
    """Test bold rewriting."""

    def test_plain_bold(self):
        """Test **text** becomes a strong element."""
        assert normalize_bold("a **b** c") == "a <strong>b</strong> c"

    def test_styled_bold(self):
        """Test the strong element carries the resolved style."""
        assert normalize_bold("**b**", "font-weight: bold") == '<strong style="font-weight: bold">b</strong>'

    def test_bold_next_to_cjk_punctuation(self):
        """Test bold adjacent to full-width punctuation is rewritten."""
        assert normalize_bold("中文**加粗**。") == "中文<strong>加粗</strong>。"

    def test_code_span_untouched(self):
        """Test bold markers inside code spans are preserved."""
        assert normalize_bold("use `**kwargs` here") == "use `**kwargs` here"

    def test_html_attribute_untouched(self):
        """Test bold markers inside an HTML tag are preserved."""
        source = '<span title="**a**">x</span>'
        assert normalize_bold(source) == source

    def test_existing_strong_untouched(self):
        """Test existing strong tags are left as they are."""
        assert normalize_bold("<strong>x</strong>") == "<strong>x</strong>"

    def test_bold_opener_does_not_pair_with_code_span_markers(self):
        """Test a bold opener does not close on markers inside a later code span."""
        assert normalize_bold("**a `**` b**") == "**a `**` b**"

    def test_bold_around_code_span_left_to_tokenizer(self):
        """Test bold wrapping a code span is not rewritten up front."""
        assert normalize_bold("**a `x` b**") == "**a `x` b**"

    def test_bold_does_not_span_lines(self):
        """Test markers on different lines are not paired."""
        assert normalize_bold("**a\nb**") == "**a\nb**"


@pytest.mark.unit
class TestNormalizeBullets:
    """Test bullet rewriting."""

    def test_dash_bullets(self):
        """Test dash bullets become bullet characters, keeping indentation."""
        assert normalize_bullets("- a\n  - b") == "• a\n  • b"

    def test_thematic_break_untouched(self):
        """Test a dash rule is not a bullet."""
        assert normalize_bullets("---") == "---"

    def test_dash_without_space_untouched(self):
        """Test a dash glued to a word is not a bullet."""
        assert normalize_bullets("-no") == "-no"


@pytest.mark.unit
class TestColorSpans:
    """Test color span expansion."""

    def test_hex_color(self):
        """Test a hex color span becomes an important colored span."""
        assert substitute_color_spans("{color:#ff0000}red{/color}") == (
            '<span style="color: #ff0000 !important">red</span>'
        )

    def test_named_color_untouched(self):
        """Test only hex colors are recognized."""
        assert substitute_color_spans("{color:red}x{/color}") == "{color:red}x{/color}"

    def test_multiple_spans(self):
        """Test several spans on one line are expanded independently."""
        result = substitute_color_spans("{color:#111}a{/color} {color:#222}b{/color}")
        assert result == (
            '<span style="color: #111 !important">a</span> <span style="color: #222 !important">b</span>'
        )

    def test_code_span_untouched(self):
        """Test color syntax inside a code span is kept literally."""
        source = "write `{color:#f00}x{/color}` for red"
        assert substitute_color_spans(source) == source

    def test_span_containing_code_span(self):
        """Test a closing marker inside a code span does not end the color span."""
        assert substitute_color_spans("{color:#f00}a `{/color}` b{/color}") == (
            '<span style="color: #f00 !important">a `{/color}` b</span>'
        )

    def test_span_across_lines(self):
        """Test a color span may cover several lines."""
        assert substitute_color_spans("{color:#abc}one\ntwo{/color}") == (
            '<span style="color: #abc !important">one\ntwo</span>'
        )


@pytest.mark.unit
class TestPreprocessMarkdown:
    """Test the combined preprocessing pass."""

    def test_fenced_code_untouched(self):
        """Test rewrites never apply inside fenced code."""
        source = "```\n- a\n**b**\n```\n- c"
        assert preprocess_markdown(source) == "```\n- a\n**b**\n```\n• c"

    def test_all_rewrites(self):
        """Test bold, bullets and color spans together."""
        source = "- **x** {color:#abc}y{/color}"
        assert preprocess_markdown(source, strong_css="font-weight: bold") == (
            '• <strong style="font-weight: bold">x</strong> <span style="color: #abc !important">y</span>'
        )

    def test_rewrites_can_be_disabled(self):
        """Test every rewrite can be switched off."""
        source = "- **x** {color:#abc}y{/color}"
        assert preprocess_markdown(source, bold=False, bullets=False, color_spans=False) == source
