#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for wxmark.

This module centralizes the hardcoded values used across the rendering
pipeline so that they are discoverable in one place.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Element Kinds - style-map keys understood by the renderer
3. Rendering Defaults - preprocessing switches and forced element styles
4. Extensions - diagram keywords and probe patterns
5. Diagram Engine - mermaid configuration
6. Dependency Specifications - for the requires_dependencies decorator
"""

from __future__ import annotations

from typing import Any, Literal, Mapping, Union

# =============================================================================
# Type Definitions
# =============================================================================

StyleValue = Union[str, int, float]
StyleOptions = Mapping[str, StyleValue]
ExtensionLevel = Literal["block", "inline"]

# =============================================================================
# Element Kinds
# =============================================================================

BLOCK_KINDS: frozenset[str] = frozenset(
    {
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "p",
        "blockquote",
        "ul",
        "ol",
        "image",
        "code_pre",
        "latex",
        "mermaid",
        "hr",
        "table",
    }
)

INLINE_KINDS: frozenset[str] = frozenset({"strong", "em", "link", "codespan", "del", "listitem", "footnote"})

# Kinds whose resolved style picks up ``base.color`` when they set no color
COLOR_CASCADE_KINDS: frozenset[str] = frozenset(
    {"h1", "h2", "h3", "h4", "h5", "h6", "p", "blockquote", "ul", "ol", "strong", "em", "link", "listitem", "del"}
)

# Base style fields in serialization order: (field name, css property)
BASE_STYLE_ORDER: tuple[tuple[str, str], ...] = (
    ("line_height", "line-height"),
    ("font_size", "font-size"),
    ("text_align", "text-align"),
    ("theme_color", "--theme-color"),
    ("color", "color"),
    ("background", "background"),
    ("padding", "padding"),
    ("font_family", "font-family"),
    ("margin", "margin"),
    ("word_break", "word-break"),
    ("white_space", "white-space"),
)

# =============================================================================
# Rendering Defaults
# =============================================================================

DEFAULT_CODE_THEME = "default"
DEFAULT_HARD_WRAP = True
DEFAULT_NORMALIZE_BOLD = True
DEFAULT_NORMALIZE_BULLETS = True
DEFAULT_COLOR_SPANS = True

BULLET_REPLACEMENT = "• "
ROOT_CONTAINER_TAG = "section"

MATH_BLOCK_DEFAULT_STYLE: dict[str, StyleValue] = {
    "display": "block",
    "margin": "1em 0",
    "textAlign": "center",
}

DIAGRAM_BLOCK_DEFAULT_STYLE: dict[str, StyleValue] = {
    "display": "block",
    "margin": "1em 0",
    "textAlign": "center",
    "background": "transparent",
}

# =============================================================================
# Extensions
# =============================================================================

DIAGRAM_KEYWORDS: tuple[str, ...] = ("pie", "graph", "sequenceDiagram", "gantt", "classDiagram", "flowchart")

DIAGRAM_CSS_CLASS = "mermaid"
DIAGRAM_ERROR_CSS_CLASS = "mermaid-error"
DIAGRAM_SOURCE_ATTRIBUTE = "data-mermaid-source"
DIAGRAM_EMPTY_MESSAGE = "Empty diagram content"
DIAGRAM_FAILED_MESSAGE = "Diagram rendering failed"

# =============================================================================
# Diagram Engine
# =============================================================================

DEFAULT_MERMAID_EXECUTABLE = "mmdc"
DEFAULT_MERMAID_TIMEOUT_SECONDS = 30.0

MERMAID_CONFIG: dict[str, Any] = {
    "theme": "default",
    "themeVariables": {
        "primaryColor": "#4f46e5",
        "primaryBorderColor": "#4f46e5",
        "primaryTextColor": "#000000",
        "lineColor": "#666666",
        "textColor": "#333333",
        "fontSize": "14px",
        "fontFamily": '-apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, '
        '"Microsoft YaHei", sans-serif',
    },
    "flowchart": {
        "htmlLabels": True,
        "curve": "basis",
        "padding": 15,
        "nodeSpacing": 50,
        "rankSpacing": 50,
        "useMaxWidth": False,
    },
    "sequence": {
        "useMaxWidth": False,
        "boxMargin": 10,
        "mirrorActors": False,
        "bottomMarginAdj": 2,
    },
    "pie": {
        "textPosition": 0.75,
        "useMaxWidth": True,
    },
    "startOnLoad": False,
    "securityLevel": "loose",
}

# =============================================================================
# Dependency Specifications for @requires_dependencies decorator
# =============================================================================
# Each spec is a list of tuples: (pip_package, import_name, version_constraint)

DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]
DEPS_DIAGRAMS = [("beautifulsoup4", "bs4", ">=4.14.2")]
