#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wxmark/extensions/__init__.py
"""Markdown syntax extensions.

``DEFAULT_EXTENSIONS`` fixes the precedence used by the pipeline. Block
extensions are tried before the generic fenced code rule, diagram blocks
ahead of math blocks; inline math is tried before code spans and footnote
references before links.
"""

from wxmark.extensions.base import MarkdownExtension, Token
from wxmark.extensions.footnote import FOOTNOTE_REF
from wxmark.extensions.latex import INLINE_LATEX, LATEX_BLOCK
from wxmark.extensions.mermaid import MERMAID_BLOCK, normalize_diagram

DEFAULT_EXTENSIONS: tuple[MarkdownExtension, ...] = (MERMAID_BLOCK, LATEX_BLOCK, FOOTNOTE_REF, INLINE_LATEX)

__all__ = [
    "DEFAULT_EXTENSIONS",
    "FOOTNOTE_REF",
    "INLINE_LATEX",
    "LATEX_BLOCK",
    "MERMAID_BLOCK",
    "MarkdownExtension",
    "Token",
    "normalize_diagram",
]
