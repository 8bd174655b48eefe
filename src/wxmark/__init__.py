"""wxmark - markdown to inline-styled HTML for article publishing.

wxmark renders markdown into an HTML fragment in which every element
carries its own ``style`` attribute, so the fragment can be pasted into
editors that strip stylesheets. Styles come from a layered configuration:
document-level base settings, per block-element styles and per
inline-element styles, with the global text color cascading to text
elements that set no color of their own.

Beyond CommonMark the renderer understands LaTeX math (``$...$``,
``$$`...`$$`` and ``$$`` blocks, typeset as MathML), mermaid diagrams
(fenced blocks tagged ``mermaid`` or starting with a diagram keyword),
footnote references (``[^id]``), ``{color:#hex}...{/color}`` spans, GFM
tables, strikethrough and task lists.

Examples
--------
Render with explicit options:

    >>> from wxmark import RendererOptions, render_markdown
    >>> options = RendererOptions(
    ...     base={"color": "#333333", "lineHeight": 1.75},
    ...     block={"p": {"fontSize": 15}},
    ... )
    >>> html = render_markdown("Hello **world**", options)

Render with a built-in template:

    >>> html = render_markdown("# Title", template="smartisan")

Render diagrams after the HTML is produced:

    >>> import asyncio
    >>> from wxmark.diagrams import DiagramSession, MermaidCliEngine, render_diagrams_in_html
    >>> session = DiagramSession(MermaidCliEngine())
    >>> html = asyncio.run(render_diagrams_in_html(html, session))

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "wxmark requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.3.0"

from wxmark.exceptions import (
    ConfigurationError,
    DependencyError,
    DiagramRenderError,
    InvalidOptionsError,
    MathRenderError,
    RenderingError,
    TemplateNotFoundError,
    ValidationError,
    WxMarkError,
)
from wxmark.extensions import DEFAULT_EXTENSIONS, MarkdownExtension
from wxmark.options import BaseStyleOptions, RendererOptions, merge_options
from wxmark.pipeline import MarkdownPipeline, render_markdown
from wxmark.renderer import StyledHtmlRenderer
from wxmark.styles import resolve_base_style, resolve_style
from wxmark.templates import Template, get_template, list_templates

__all__ = [
    "__version__",
    "BaseStyleOptions",
    "ConfigurationError",
    "DEFAULT_EXTENSIONS",
    "DependencyError",
    "DiagramRenderError",
    "InvalidOptionsError",
    "MarkdownExtension",
    "MarkdownPipeline",
    "MathRenderError",
    "RendererOptions",
    "RenderingError",
    "StyledHtmlRenderer",
    "Template",
    "TemplateNotFoundError",
    "ValidationError",
    "WxMarkError",
    "get_template",
    "list_templates",
    "merge_options",
    "render_markdown",
    "resolve_base_style",
    "resolve_style",
]
