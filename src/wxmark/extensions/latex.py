#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wxmark/extensions/latex.py
"""LaTeX math extensions.

Block math is a ``$$`` line, the formula lines, and a closing ``$$`` line.
Inline math is either ``$formula$`` or the display form ``$$`formula`$$``.
The formula source is opaque to the markdown grammar.

Typesetting failures leave the matched source text in place.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from wxmark.constants import MATH_BLOCK_DEFAULT_STYLE
from wxmark.exceptions import MathRenderError
from wxmark.extensions.base import MarkdownExtension, Token
from wxmark.utils.html_utils import escape_html, style_attribute

if TYPE_CHECKING:
    from wxmark.renderer import StyledHtmlRenderer

logger = logging.getLogger(__name__)

LATEX_BLOCK_PATTERN = r"^ {0,3}\$\$[ \t]*\n(?P<latex_block_text>[\s\S]*?)\n {0,3}\$\$[ \t]*$"
INLINE_LATEX_PATTERN = r"\$\$`(?P<latex_display_text>[^`]+)`\$\$|\$(?P<latex_inline_text>[^$\n]+?)\$"


def parse_latex_block(block: Any, m: Any, state: Any) -> int:
    state.append_token(
        {
            "type": "latex_block",
            "raw": m.group(0),
            "attrs": {"formula": m.group("latex_block_text").strip()},
        }
    )
    return m.end() + 1


def parse_inline_latex(inline: Any, m: Any, state: Any) -> int:
    display_text = m.group("latex_display_text")
    formula = display_text if display_text is not None else m.group("latex_inline_text")
    state.append_token(
        {
            "type": "inline_latex",
            "raw": m.group(0),
            "attrs": {"formula": formula.strip(), "display": display_text is not None},
        }
    )
    return m.end()


def render_latex_block(renderer: StyledHtmlRenderer, token: Token) -> str:
    """Render a math block in display mode.

    If typesetting fails, the block's source (delimiters included) is emitted
    HTML-escaped, so ``a<b`` shows as text rather than as markup.
    """
    try:
        markup = renderer.math_renderer(token["attrs"]["formula"], True)
    except MathRenderError as e:
        logger.warning("LaTeX block left as source: %s", e)
        return escape_html(token["raw"])
    css = renderer.block_css("latex", forced=MATH_BLOCK_DEFAULT_STYLE)
    return f"<div{style_attribute(css)}>{markup}</div>"


def render_inline_latex(renderer: StyledHtmlRenderer, token: Token) -> str:
    attrs = token["attrs"]
    try:
        return renderer.math_renderer(attrs["formula"], attrs["display"])
    except MathRenderError as e:
        logger.warning("Inline LaTeX left as source: %s", e)
        return escape_html(token["raw"])


LATEX_BLOCK = MarkdownExtension(
    name="latex_block",
    level="block",
    pattern=LATEX_BLOCK_PATTERN,
    probe_pattern=r"^[> \t]*\$\$[ \t]*$",
    parse=parse_latex_block,
    render=render_latex_block,
    before="fenced_code",
)

INLINE_LATEX = MarkdownExtension(
    name="inline_latex",
    level="inline",
    pattern=INLINE_LATEX_PATTERN,
    probe_pattern=r"\$",
    parse=parse_inline_latex,
    render=render_inline_latex,
    before="codespan",
)
