#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wxmark/extensions/mermaid.py
"""Mermaid diagram block extension.

A fenced block is a diagram when its info string is exactly ``mermaid``,
or when it has no info string and its first non-blank line starts with a
diagram keyword (``pie``, ``graph``, ``sequenceDiagram``, ``gantt``,
``classDiagram``, ``flowchart``). Such blocks are tried before the
generic fenced code rule.

The renderer only emits a ``<div class="mermaid">`` placeholder holding
the normalized diagram source; turning it into SVG is left to
:mod:`wxmark.diagrams`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from wxmark.constants import (
    DIAGRAM_BLOCK_DEFAULT_STYLE,
    DIAGRAM_CSS_CLASS,
    DIAGRAM_EMPTY_MESSAGE,
    DIAGRAM_ERROR_CSS_CLASS,
    DIAGRAM_KEYWORDS,
)
from wxmark.extensions.base import MarkdownExtension, Token
from wxmark.utils.html_utils import escape_html, style_attribute

if TYPE_CHECKING:
    from wxmark.renderer import StyledHtmlRenderer

logger = logging.getLogger(__name__)

_KEYWORD_ALTERNATION = "|".join(DIAGRAM_KEYWORDS)

MERMAID_BLOCK_PATTERN = (
    r"^ {0,3}(?P<mermaid_fence>`{3,}|~{3,})[ \t]*"
    r"(?:(?P<mermaid_tagged>mermaid)[ \t]*\n|\n(?=\s*(?:" + _KEYWORD_ALTERNATION + r")\s))"
    r"(?P<mermaid_text>[\s\S]*?)"
    r"^ {0,3}(?P=mermaid_fence)[ \t]*$"
)

_INDENT = "    "


def normalize_diagram(source: str) -> str | None:
    """Canonicalize diagram source for the diagram engine.

    Lines are trimmed and blank lines dropped. Pie charts get the
    ``showData`` flag, a ``title`` line and quoted ``"label": value``
    entries. For other diagrams the keyword line is canonicalized
    (``sequence...`` becomes ``sequenceDiagram``, ``flowchart LR`` becomes
    ``graph LR``). Body lines are indented by four spaces.

    Parameters
    ----------
    source : str
        Raw text between the fences

    Returns
    -------
    str or None
        The normalized source, or None if the block has no content

    """
    lines = [line.strip() for line in source.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        return None

    header, body = lines[0], lines[1:]
    if header.lower().startswith("pie"):
        return "\n".join([*_pie_header(header), *(_pie_line(line) for line in body)])
    return "\n".join([_keyword_line(header), *(_INDENT + line for line in body)])


def _pie_header(header: str) -> list[str]:
    rest = header[3:].strip()
    if rest.lower().startswith("showdata"):
        rest = rest[len("showdata") :].strip()
    lines = ["pie showData"]
    if rest:
        lines.append(_pie_line(rest))
    return lines


def _pie_line(line: str) -> str:
    if line.lower().startswith("title"):
        return f"{_INDENT}title {line[5:].strip()}"
    if ":" in line:
        key, _, value = line.partition(":")
        key, value = key.strip(), value.strip()
        if not (key.startswith('"') and key.endswith('"') and len(key) > 1):
            key = f'"{key}"'
        return f"{_INDENT}{key}: {value}"
    return _INDENT + line


def _keyword_line(line: str) -> str:
    lowered = line.lower()
    if "sequence" in lowered:
        return "sequenceDiagram"
    if "flow" in lowered or "graph" in lowered:
        if lowered.startswith("graph"):
            return line
        parts = line.split()
        return f"graph {parts[1] if len(parts) > 1 else 'TD'}"
    return line


def parse_mermaid_block(block: Any, m: Any, state: Any) -> int:
    state.append_token(
        {
            "type": "mermaid_block",
            "raw": m.group(0),
            "attrs": {"source": m.group("mermaid_text"), "tagged": m.group("mermaid_tagged") is not None},
        }
    )
    return m.end() + 1


def render_mermaid_block(renderer: StyledHtmlRenderer, token: Token) -> str:
    """Emit the diagram placeholder, or an error block for an empty diagram."""
    source = normalize_diagram(token["attrs"]["source"])
    if source is None:
        logger.warning("Empty diagram block")
        return f'<pre class="{DIAGRAM_ERROR_CSS_CLASS}">{DIAGRAM_EMPTY_MESSAGE}</pre>'

    css = renderer.block_css("mermaid", forced=DIAGRAM_BLOCK_DEFAULT_STYLE)
    return f'<div{style_attribute(css)} class="{DIAGRAM_CSS_CLASS}">{escape_html(source)}</div>'


MERMAID_BLOCK = MarkdownExtension(
    name="mermaid_block",
    level="block",
    pattern=MERMAID_BLOCK_PATTERN,
    probe_pattern=r"`{3,}|~{3,}",
    parse=parse_mermaid_block,
    render=render_mermaid_block,
    before="fenced_code",
)
