#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wxmark/extensions/footnote.py
"""Footnote reference extension.

``[^id]`` renders as a superscript anchor to ``#fn-<id>``. Footnote
definitions are not collected; the target is expected to be provided by
the surrounding document.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from wxmark.extensions.base import MarkdownExtension, Token
from wxmark.utils.html_utils import escape_html, style_attribute

if TYPE_CHECKING:
    from wxmark.renderer import StyledHtmlRenderer

FOOTNOTE_REF_PATTERN = r"\[\^(?P<footnote_key>[^\]\s]+)\]"


def parse_footnote_ref(inline: Any, m: Any, state: Any) -> int:
    state.append_token({"type": "footnote_ref", "raw": m.group(0), "attrs": {"key": m.group("footnote_key")}})
    return m.end()


def render_footnote_ref(renderer: StyledHtmlRenderer, token: Token) -> str:
    key = escape_html(token["attrs"]["key"])
    css = renderer.inline_css("footnote")
    return f'<sup{style_attribute(css)}><a href="#fn-{key}">[{key}]</a></sup>'


FOOTNOTE_REF = MarkdownExtension(
    name="footnote_ref",
    level="inline",
    pattern=FOOTNOTE_REF_PATTERN,
    probe_pattern=r"\[\^",
    parse=parse_footnote_ref,
    render=render_footnote_ref,
    before="link",
)
