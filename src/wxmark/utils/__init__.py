#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wxmark/utils/__init__.py
"""Utility modules for the wxmark package.

This package contains the HTML helpers, dependency checks and the thin
wrappers around the third-party collaborators (syntax highlighter and math
engine) used by the renderer.
"""

from wxmark.utils.html_utils import escape_html, optional_attribute, style_attribute

__all__ = [
    "escape_html",
    "optional_attribute",
    "style_attribute",
]
