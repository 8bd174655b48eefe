#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wxmark/preprocess.py
"""Text substitutions applied to markdown before tokenization.

Three rewrites run, in this order, on every part of the document outside
fenced code blocks:

1. Bold normalization: ``**text**`` becomes a styled ``<strong>`` element.
   Emphasis delimiters next to CJK punctuation are not recognized by
   CommonMark flanking rules, so bold is resolved up front. Code spans and
   existing HTML tags are left alone.
2. Bullet normalization: a line starting with ``-`` followed by whitespace
   becomes a ``•`` text line.
3. Color spans: ``{color:#hex}text{/color}`` becomes a span whose color is
   marked ``!important`` so it wins against the global text color. Code
   spans are left alone.

"""

from __future__ import annotations

import re

from wxmark.constants import BULLET_REPLACEMENT
from wxmark.utils.html_utils import style_attribute

_FENCE_OPEN = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})")
_CODE_SPAN = r"(?P<code>`+)[^\n]*?(?P=code)"
# Bold bodies stop at backticks; bold that wraps a code span is left to the tokenizer.
_BOLD = re.compile(_CODE_SPAN + r"|</?[A-Za-z][^>]*>|\*\*(?P<bold>[^*`\n]+)\*\*")
_BULLET = re.compile(r"^([ \t]*)-[ \t]+", re.MULTILINE)
_COLOR_SPAN = re.compile(
    _CODE_SPAN + r"|\{color:(?P<color>#[0-9a-fA-F]{3,8})\}"
    r"(?P<text>(?:(?P<inner>`+)[^\n]*?(?P=inner)|[^`])*?)\{/color\}"
)


def split_fenced(markdown: str) -> list[tuple[bool, str]]:
    """Split *markdown* into alternating prose and fenced-code segments.

    Returns
    -------
    list of tuple
        ``(is_code, text)`` pairs that concatenate back to the input. A
        fence that is never closed extends to the end of the document.

    """
    segments: list[tuple[bool, str]] = []
    buffer: list[str] = []
    fence: str | None = None

    for line in markdown.splitlines(keepends=True):
        if fence is None:
            match = _FENCE_OPEN.match(line)
            if match:
                if buffer:
                    segments.append((False, "".join(buffer)))
                buffer = [line]
                fence = match.group("fence")
            else:
                buffer.append(line)
            continue

        buffer.append(line)
        stripped = line.strip()
        if stripped.startswith(fence) and set(stripped) == {fence[0]}:
            segments.append((True, "".join(buffer)))
            buffer = []
            fence = None

    if buffer:
        segments.append((fence is not None, "".join(buffer)))
    return segments


def normalize_bold(text: str, strong_css: str = "") -> str:
    """Rewrite ``**text**`` into ``<strong>`` outside code spans and HTML tags."""
    opening = f"<strong{style_attribute(strong_css)}>"

    def replace(match: re.Match[str]) -> str:
        if match.group("bold") is None:
            return match.group(0)
        return f"{opening}{match.group('bold')}</strong>"

    return _BOLD.sub(replace, text)


def normalize_bullets(text: str) -> str:
    return _BULLET.sub(lambda m: m.group(1) + BULLET_REPLACEMENT, text)


def substitute_color_spans(text: str) -> str:
    """Expand ``{color:#hex}...{/color}`` outside code spans.

    A span may contain code spans; a ``{/color}`` inside one does not close it.
    """

    def replace(match: re.Match[str]) -> str:
        if match.group("color") is None:
            return match.group(0)
        return f'<span style="color: {match.group("color")} !important">{match.group("text")}</span>'

    return _COLOR_SPAN.sub(replace, text)


def preprocess_markdown(
    markdown: str,
    *,
    strong_css: str = "",
    bold: bool = True,
    bullets: bool = True,
    color_spans: bool = True,
) -> str:
    """Apply the enabled rewrites to everything outside fenced code.

    Parameters
    ----------
    markdown : str
        Raw markdown source
    strong_css : str, default ""
        Resolved style for the ``<strong>`` elements produced by bold
        normalization
    bold, bullets, color_spans : bool, default True
        Enable the individual rewrites

    Returns
    -------
    str
        The rewritten source

    """
    parts = []
    for is_code, segment in split_fenced(markdown):
        if not is_code:
            if bold:
                segment = normalize_bold(segment, strong_css)
            if bullets:
                segment = normalize_bullets(segment)
            if color_spans:
                segment = substitute_color_spans(segment)
        parts.append(segment)
    return "".join(parts)


__all__ = [
    "normalize_bold",
    "normalize_bullets",
    "preprocess_markdown",
    "split_fenced",
    "substitute_color_spans",
]
