"""Unit tests for the syntax highlighter and the math engine."""

import pytest

from wxmark.exceptions import MathRenderError
from wxmark.utils.highlight import highlight_code, list_themes, theme_colors
from wxmark.utils.mathml import render_latex


@pytest.mark.unit
class TestHighlightCode:
    """Test Pygments-backed highlighting."""

    def test_known_language(self):
        """Test known languages are highlighted with inline styles."""
        html = highlight_code("x = 1", "python")
        assert "<span" in html
        assert 'style="' in html
        assert "class=" not in html

    def test_no_language(self):
        """Test code without a language is only escaped."""
        assert highlight_code("x < 1", None) == "x &lt; 1"

    def test_unknown_language(self):
        """Test an unknown language degrades to escaped code."""
        assert highlight_code("a & b", "not-a-language") == "a &amp; b"

    def test_unknown_theme(self):
        """Test an unknown theme degrades to escaped code."""
        assert highlight_code("x < 1", "python", "no-such-theme") == "x &lt; 1"

    def test_no_trailing_newline(self):
        """Test highlighted markup does not end in a newline."""
        assert not highlight_code("x = 1\n", "python").endswith("\n")


@pytest.mark.unit
class TestThemeColors:
    """Test theme color extraction."""

    def test_monokai(self):
        """Test the monokai background is reported."""
        assert theme_colors("monokai")["background"] == "#272822"

    def test_unknown_theme(self):
        """Test unknown themes give no colors."""
        assert theme_colors("no-such-theme") == {}

    def test_list_themes(self):
        """Test the installed themes are listed in order."""
        themes = list_themes()
        assert "default" in themes
        assert themes == sorted(themes)


@pytest.mark.unit
class TestRenderLatex:
    """Test the latex2mathml math engine."""

    def test_inline(self):
        """Test inline formulas become MathML."""
        assert render_latex("x^2", False).startswith("<math")

    def test_display(self):
        """Test display formulas are marked as block math."""
        assert 'display="block"' in render_latex("x^2", True)

    def test_empty_formula(self):
        """Test an empty formula is rejected."""
        with pytest.raises(MathRenderError):
            render_latex("   ", True)

    def test_converter_failure_is_wrapped(self, monkeypatch):
        """Test converter errors are reported as MathRenderError."""

        def broken(*args, **kwargs):
            raise ValueError("bad input")

        monkeypatch.setattr("latex2mathml.converter.convert", broken)
        with pytest.raises(MathRenderError) as exc_info:
            render_latex("x", False)
        assert isinstance(exc_info.value.original_error, ValueError)
        assert exc_info.value.formula == "x"
