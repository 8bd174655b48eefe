#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wxmark/pipeline.py
"""Markdown to styled HTML pipeline.

The pipeline runs four stages:

1. Preprocess the source (bold, bullet and color-span rewrites).
2. Tokenize with mistune, the standard plugins and the extensions whose
   probe matches the source.
3. Render the tokens with :class:`~wxmark.renderer.StyledHtmlRenderer`.
4. Wrap the HTML in a ``<section>`` carrying the base style, unless the
   base style is empty.

Extensions are installed in the order given, ahead of the standard rule
each one names, so precedence is fixed by the extension list rather than
by the order in which rules happen to be registered.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Sequence

from wxmark.constants import DEPS_MARKDOWN, ROOT_CONTAINER_TAG
from wxmark.exceptions import InvalidOptionsError, TemplateNotFoundError
from wxmark.extensions import DEFAULT_EXTENSIONS, MarkdownExtension, Token
from wxmark.options import RendererOptions
from wxmark.preprocess import preprocess_markdown
from wxmark.renderer import Highlighter, StyledHtmlRenderer
from wxmark.styles import resolve_base_style
from wxmark.utils.decorators import requires_dependencies
from wxmark.utils.highlight import highlight_code
from wxmark.utils.html_utils import style_attribute
from wxmark.utils.mathml import MathRenderer, render_latex

if TYPE_CHECKING:
    import mistune

logger = logging.getLogger(__name__)

MISTUNE_PLUGINS = ["strikethrough", "table", "task_lists"]


class MarkdownPipeline:
    """Render markdown to an HTML fragment styled by RendererOptions.

    A pipeline is bound to one immutable options value. Rendering never
    modifies the options, so a pipeline can be reused for any number of
    documents (for example on every keystroke of a live preview).

    Parameters
    ----------
    options : RendererOptions or None, default None
        Style configuration
    extensions : sequence of MarkdownExtension, default DEFAULT_EXTENSIONS
        Syntax extensions, most specific first
    math_renderer : callable, default render_latex
        Math engine used by the LaTeX extensions
    highlighter : callable, default highlight_code
        Syntax highlighter used for fenced code

    Examples
    --------
        >>> pipeline = MarkdownPipeline(RendererOptions(base={"color": "#333"}))
        >>> pipeline.render("Hello")
        '<section style="color: #333 !important"><p style="color: #333">Hello</p></section>'

    """

    def __init__(
        self,
        options: RendererOptions | None = None,
        *,
        extensions: Sequence[MarkdownExtension] = DEFAULT_EXTENSIONS,
        math_renderer: MathRenderer = render_latex,
        highlighter: Highlighter = highlight_code,
    ):
        """Initialize the pipeline and its renderer."""
        if options is not None and not isinstance(options, RendererOptions):
            raise InvalidOptionsError("MarkdownPipeline", RendererOptions, type(options))
        self.options: RendererOptions = options or RendererOptions()
        self.extensions: tuple[MarkdownExtension, ...] = tuple(extensions)
        self.renderer = StyledHtmlRenderer(
            self.options, extensions=self.extensions, math_renderer=math_renderer, highlighter=highlighter
        )
        self._parsers: dict[tuple[str, ...], mistune.Markdown] = {}

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def render(self, markdown: str) -> str:
        """Render markdown source to an HTML fragment.

        Parameters
        ----------
        markdown : str
            Markdown source text

        Returns
        -------
        str
            HTML fragment using only inline styles

        """
        source = self.preprocess(markdown)
        tokens = self.tokenize(source)
        content = self.renderer.render(tokens)

        base_css = resolve_base_style(self.options.base)
        if not base_css:
            return content
        return f"<{ROOT_CONTAINER_TAG}{style_attribute(base_css)}>{content}</{ROOT_CONTAINER_TAG}>"

    def preprocess(self, markdown: str) -> str:
        return preprocess_markdown(
            markdown,
            strong_css=self.renderer.strong_css(),
            bold=self.options.normalize_bold,
            bullets=self.options.normalize_bullets,
            color_spans=self.options.color_spans,
        )

    def tokenize(self, source: str) -> list[Token]:
        """Tokenize preprocessed source into mistune AST tokens.

        Only extensions whose probe matches the source are installed, so a
        document without math or diagrams is parsed by the plain grammar.
        """
        active = tuple(extension for extension in self.extensions if extension.probe(source))
        tokens, _state = self._parser_for(active).parse(source)
        return tokens

    def _parser_for(self, active: tuple[MarkdownExtension, ...]) -> mistune.Markdown:
        key = tuple(extension.name for extension in active)
        parser = self._parsers.get(key)
        if parser is None:
            import mistune

            parser = mistune.create_markdown(renderer=None, hard_wrap=self.options.hard_wrap, plugins=MISTUNE_PLUGINS)
            for extension in active:
                extension.install(parser)
            logger.debug("Built markdown parser with extensions: %s", ", ".join(key) or "(none)")
            self._parsers[key] = parser
        return parser


def render_markdown(
    markdown: str,
    options: RendererOptions | None = None,
    *,
    template: str | None = None,
    **kwargs: Any,
) -> str:
    """Render markdown to styled HTML, optionally through a named template.

    Parameters
    ----------
    markdown : str
        Markdown source text
    options : RendererOptions or None, default None
        Options layered over the template's options
    template : str or None, default None
        Template identifier. An unknown identifier is logged and the
        document is rendered without a template.
    **kwargs
        Passed to :class:`MarkdownPipeline` (``extensions``,
        ``math_renderer``, ``highlighter``)

    Returns
    -------
    str
        HTML fragment

    """
    from wxmark.templates import get_template

    selected = None
    if template is not None:
        try:
            selected = get_template(template)
        except TemplateNotFoundError as e:
            logger.warning("%s; rendering without a template", e)

    if selected is None:
        return MarkdownPipeline(options, **kwargs).render(markdown)

    resolved = selected.resolve_options(options)
    return selected.apply(MarkdownPipeline(resolved, **kwargs).render(markdown))


__all__ = ["MISTUNE_PLUGINS", "MarkdownPipeline", "render_markdown"]
