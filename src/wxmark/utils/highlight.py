#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wxmark/utils/highlight.py
"""Syntax highlighting for fenced code blocks.

Code is highlighted with Pygments using inline ``style`` attributes, since
the rendered fragment may not depend on an external stylesheet. Unknown
languages and unknown themes degrade to escaped, unhighlighted text.

"""

from __future__ import annotations

import logging

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.styles import get_all_styles, get_style_by_name
from pygments.token import Token
from pygments.util import ClassNotFound

from wxmark.constants import DEFAULT_CODE_THEME, StyleValue
from wxmark.exceptions import HighlightError
from wxmark.utils.html_utils import escape_html

logger = logging.getLogger(__name__)


def highlight_code(code: str, language: str | None, theme: str | None = None) -> str:
    """Highlight *code* as *language* with the named Pygments *theme*.

    Parameters
    ----------
    code : str
        Source code to highlight
    language : str or None
        Language tag taken from the fence info string
    theme : str or None
        Pygments style name; ``None`` selects the built-in default theme

    Returns
    -------
    str
        HTML markup for the inside of a ``<code>`` element. Falls back to
        escaped plain text when the language or theme is unknown.

    Raises
    ------
    HighlightError
        If Pygments fails while highlighting

    """
    if not language:
        return escape_html(code)

    theme_name = theme or DEFAULT_CODE_THEME
    try:
        lexer = get_lexer_by_name(language)
        formatter = HtmlFormatter(style=theme_name, noclasses=True, nowrap=True)
    except ClassNotFound:
        logger.debug("No highlighter for language=%r theme=%r, rendering plain code", language, theme_name)
        return escape_html(code)

    try:
        return highlight(code, lexer, formatter).rstrip("\n")
    except Exception as e:
        raise HighlightError(
            f"Pygments failed to highlight {language} code: {e}", language=language, original_error=e
        ) from e


def theme_colors(theme: str | None = None) -> dict[str, StyleValue]:
    """Return the background and text colors of a Pygments theme.

    Used as the lowest layer of the code block's ``<pre>`` style. Unknown
    themes yield an empty mapping.
    """
    try:
        style = get_style_by_name(theme or DEFAULT_CODE_THEME)
    except ClassNotFound:
        logger.warning("Unknown code theme %r, code blocks will not be highlighted", theme)
        return {}

    colors: dict[str, StyleValue] = {}
    if style.background_color:
        colors["background"] = style.background_color
    text_color = style.style_for_token(Token.Text).get("color")
    if text_color:
        colors["color"] = f"#{text_color}"
    return colors


def list_themes() -> list[str]:
    """Return the names of all installed Pygments themes, sorted."""
    return sorted(get_all_styles())


__all__ = ["highlight_code", "theme_colors", "list_themes"]
