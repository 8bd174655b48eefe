#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wxmark/renderer.py
"""Styled HTML rendering from mistune AST tokens.

This module provides the StyledHtmlRenderer class, which turns the token
stream produced by the markdown tokenizer into an HTML fragment whose
elements carry inline ``style`` attributes resolved from
:class:`~wxmark.options.RendererOptions`.

Rendering is driven by a dispatch table built once per renderer instance:
a read-only mapping from token type to handler. Extension tokens are
dispatched through the same table. Every handler returns a string; a
failure inside one handler is contained to that element, which degrades
to its escaped source text (or its rendered children).

Styles are resolved per element from the options scopes, and elements
that carry visible text fall back to ``base.color`` when their own style
sets no color. The fallback is applied to a copy, so the options are
never modified.

"""

from __future__ import annotations

import html
import logging
from functools import partial
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Sequence

from wxmark.constants import COLOR_CASCADE_KINDS, StyleOptions
from wxmark.exceptions import InvalidOptionsError
from wxmark.extensions import DEFAULT_EXTENSIONS, MarkdownExtension, Token
from wxmark.options import RendererOptions
from wxmark.styles import cascade_color, layer_styles, resolve_style
from wxmark.utils.highlight import highlight_code, theme_colors
from wxmark.utils.html_utils import escape_html, optional_attribute, style_attribute
from wxmark.utils.mathml import MathRenderer, render_latex

logger = logging.getLogger(__name__)

Highlighter = Callable[[str, "str | None", "str | None"], str]

_STRONG_DEFAULT_STYLE: Mapping[str, str] = MappingProxyType({"fontWeight": "bold"})
_TASK_CHECKBOX = '<input type="checkbox"{checked} disabled="" /> '
_FLOW_INLINE_TYPES = frozenset({"paragraph", "block_text"})


class StyledHtmlRenderer:
    """Render mistune AST tokens to an HTML fragment with inline styles.

    Parameters
    ----------
    options : RendererOptions or None, default None
        Style configuration; treated as read-only
    extensions : sequence of MarkdownExtension
        Extensions whose token types this renderer must handle
    math_renderer : callable, default render_latex
        ``(formula, display) -> markup``; raises MathRenderError on failure
    highlighter : callable, default highlight_code
        ``(code, language, theme) -> markup`` for fenced code

    Examples
    --------
    Render tokens from a mistune AST parser:

        >>> import mistune
        >>> tokens, _state = mistune.create_markdown(renderer=None).parse("# Title")
        >>> StyledHtmlRenderer(RendererOptions(block={"h1": {"fontSize": 24}})).render(tokens)
        '<h1 style="font-size: 24px">Title</h1>'

    """

    def __init__(
        self,
        options: RendererOptions | None = None,
        *,
        extensions: Sequence[MarkdownExtension] = DEFAULT_EXTENSIONS,
        math_renderer: MathRenderer = render_latex,
        highlighter: Highlighter = highlight_code,
    ):
        """Initialize the renderer and build its dispatch table."""
        if options is not None and not isinstance(options, RendererOptions):
            raise InvalidOptionsError("StyledHtmlRenderer", RendererOptions, type(options))
        self.options: RendererOptions = options or RendererOptions()
        self.math_renderer = math_renderer
        self.highlighter = highlighter
        self._code_theme_colors: dict[str, Any] | None = None

        handlers: dict[str, Callable[[Token], str]] = {
            "heading": self.render_heading,
            "paragraph": self.render_paragraph,
            "block_text": self.render_block_text,
            "block_quote": self.render_block_quote,
            "block_code": self.render_block_code,
            "list": self.render_list,
            "list_item": self.render_list_item,
            "task_list_item": self.render_list_item,
            "thematic_break": self.render_thematic_break,
            "blank_line": self.render_nothing,
            "block_html": self.render_raw_html,
            "table": self.render_table,
            "table_head": self.render_table_head,
            "table_body": self.render_table_body,
            "table_row": self.render_table_row,
            "table_cell": self.render_table_cell,
            "text": self.render_text,
            "codespan": self.render_codespan,
            "emphasis": self.render_emphasis,
            "strong": self.render_strong,
            "strikethrough": self.render_strikethrough,
            "link": self.render_link,
            "image": self.render_image,
            "linebreak": self.render_linebreak,
            "softbreak": self.render_softbreak,
            "inline_html": self.render_raw_html,
        }
        for extension in extensions:
            handlers[extension.name] = partial(extension.render, self)
        self._handlers: Mapping[str, Callable[[Token], str]] = MappingProxyType(handlers)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def render(self, tokens: Iterable[Token]) -> str:
        """Render a token stream to HTML.

        Parameters
        ----------
        tokens : iterable of dict
            Tokens in document order, as produced by mistune's AST renderer

        Returns
        -------
        str
            Concatenated HTML for all tokens. No separators are inserted
            between elements, since the document may be displayed with
            ``white-space: pre-wrap``.

        """
        return "".join(self.render_token(token) for token in tokens)

    def render_token(self, token: Token) -> str:
        """Render a single token, containing any failure to this element."""
        token_type = token.get("type", "")
        handler = self._handlers.get(token_type)
        if handler is None:
            logger.debug("No handler for token type %r, rendering its content", token_type)
            return self._fallback(token)
        try:
            return handler(token)
        except Exception as e:
            logger.warning("Failed to render %s element: %s", token_type, e)
            return self._fallback(token)

    def render_children(self, token: Token) -> str:
        return self.render(token.get("children", ()))

    def _fallback(self, token: Token) -> str:
        if "children" in token:
            try:
                return self.render_children(token)
            except Exception as e:
                logger.debug("Fallback rendering of children failed: %s", e)
        return escape_html(str(token.get("raw", "")))

    # ------------------------------------------------------------------
    # Style resolution
    # ------------------------------------------------------------------

    def block_css(
        self, kind: str, defaults: StyleOptions | None = None, forced: StyleOptions | None = None
    ) -> str:
        """Resolve the CSS for a block element kind.

        Parameters
        ----------
        kind : str
            Block style key (``h1``, ``p``, ``code_pre``, ...)
        defaults : mapping, optional
            Properties the configured style may override
        forced : mapping, optional
            Properties that override the configured style

        Returns
        -------
        str
            CSS declaration string, possibly empty

        """
        return self._element_css(kind, self.options.block_style(kind), defaults, forced)

    def inline_css(
        self, kind: str, defaults: StyleOptions | None = None, forced: StyleOptions | None = None
    ) -> str:
        """Resolve the CSS for an inline element kind; see :meth:`block_css`."""
        return self._element_css(kind, self.options.inline_style(kind), defaults, forced)

    def strong_css(self) -> str:
        """Resolve the CSS for ``<strong>``, which is bold unless configured otherwise."""
        return self.inline_css("strong", defaults=_STRONG_DEFAULT_STYLE)

    def _element_css(
        self,
        kind: str,
        configured: StyleOptions,
        defaults: StyleOptions | None,
        forced: StyleOptions | None,
    ) -> str:
        style: StyleOptions = layer_styles(defaults, configured, forced)
        if kind in COLOR_CASCADE_KINDS:
            style = cascade_color(style, self.options.base.color)
        return resolve_style(style)

    def _code_pre_css(self) -> str:
        if self._code_theme_colors is None:
            self._code_theme_colors = theme_colors(self.options.code_theme)
        return self.block_css("code_pre", defaults=self._code_theme_colors)

    # ------------------------------------------------------------------
    # Block elements
    # ------------------------------------------------------------------

    def render_heading(self, token: Token) -> str:
        """Render a heading with the ``h1`` .. ``h6`` style for its level.

        Parameters
        ----------
        token : dict
            ``heading`` token; ``attrs.level`` is the heading depth

        """
        level = min(6, max(1, int(token["attrs"]["level"])))
        content = self.render_children(token)
        return f"<h{level}{style_attribute(self.block_css(f'h{level}'))}>{content}</h{level}>"

    def render_paragraph(self, token: Token) -> str:
        return f"<p{style_attribute(self.block_css('p'))}>{self.render_children(token)}</p>"

    def render_block_text(self, token: Token) -> str:
        return self.render_children(token)

    def render_block_quote(self, token: Token) -> str:
        """Render a block quote.

        Paragraphs inside the quote are rendered as inline content separated
        by line breaks, so the quote carries the only block style. Other
        block content (lists, code, nested quotes) renders normally.
        """
        content = self._render_flow(token.get("children", ()))
        return f"<blockquote{style_attribute(self.block_css('blockquote'))}>{content}</blockquote>"

    def render_block_code(self, token: Token) -> str:
        """Render a fenced or indented code block.

        Parameters
        ----------
        token : dict
            ``block_code`` token; the first word of ``attrs.info`` is the
            language tag

        Notes
        -----
        Highlighting uses the configured code theme. The theme's background
        and text colors are the lowest layer of the ``<pre>`` style, under
        the configured ``code_pre`` style. When the highlighter fails the
        code is emitted escaped and unhighlighted.

        """
        info = (token.get("attrs") or {}).get("info") or ""
        language = info.split()[0] if info.strip() else None
        code = token.get("raw", "")
        if code.endswith("\n"):
            code = code[:-1]

        try:
            highlighted = self.highlighter(code, language, self.options.code_theme)
        except Exception as e:
            logger.warning("Highlighting failed for language %r: %s", language, e)
            highlighted = escape_html(code)

        class_attr = optional_attribute("class", f"language-{language}" if language else None)
        return f"<pre{style_attribute(self._code_pre_css())}><code{class_attr}>{highlighted}</code></pre>"

    def render_list(self, token: Token) -> str:
        """Render an ordered or unordered list.

        Ordered lists that do not start at 1 carry a ``start`` attribute.
        The list container uses the ``ol``/``ul`` block style; items are
        styled independently with the ``listitem`` inline style.
        """
        attrs = token.get("attrs") or {}
        tag = "ol" if attrs.get("ordered") else "ul"
        start = attrs.get("start", 1)
        start_attr = f' start="{start}"' if tag == "ol" and start not in (None, 1) else ""
        items = self.render_children(token)
        return f"<{tag}{start_attr}{style_attribute(self.block_css(tag))}>{items}</{tag}>"

    def render_list_item(self, token: Token) -> str:
        """Render a list item, with a disabled checkbox for task items.

        Parameters
        ----------
        token : dict
            ``list_item`` or ``task_list_item`` token; task items carry
            ``attrs.checked``

        """
        prefix = ""
        if token.get("type") == "task_list_item":
            checked = ' checked=""' if (token.get("attrs") or {}).get("checked") else ""
            prefix = _TASK_CHECKBOX.format(checked=checked)
        content = self._render_flow(token.get("children", ()))
        return f"<li{style_attribute(self.inline_css('listitem'))}>{prefix}{content}</li>"

    def render_thematic_break(self, token: Token) -> str:
        return f"<hr{style_attribute(self.block_css('hr'))}>"

    def render_table(self, token: Token) -> str:
        return f"<table{style_attribute(self.block_css('table'))}>{self.render_children(token)}</table>"

    def render_table_head(self, token: Token) -> str:
        return f"<thead><tr>{self.render_children(token)}</tr></thead>"

    def render_table_body(self, token: Token) -> str:
        return f"<tbody>{self.render_children(token)}</tbody>"

    def render_table_row(self, token: Token) -> str:
        return f"<tr>{self.render_children(token)}</tr>"

    def render_table_cell(self, token: Token) -> str:
        attrs = token.get("attrs") or {}
        tag = "th" if attrs.get("head") else "td"
        align = attrs.get("align")
        style = style_attribute(f"text-align: {align}") if align else ""
        return f"<{tag}{style}>{self.render_children(token)}</{tag}>"

    def render_raw_html(self, token: Token) -> str:
        return token.get("raw", "")

    def render_nothing(self, token: Token) -> str:
        return ""

    def _render_flow(self, children: Iterable[Token]) -> str:
        parts = []
        for child in children:
            child_type = child.get("type")
            if child_type == "blank_line":
                continue
            if child_type in _FLOW_INLINE_TYPES:
                if parts and parts[-1][0]:
                    parts.append((False, "<br>"))
                parts.append((True, self.render_children(child)))
            else:
                parts.append((False, self.render_token(child)))
        return "".join(html_part for _, html_part in parts)

    # ------------------------------------------------------------------
    # Inline elements
    # ------------------------------------------------------------------

    def render_text(self, token: Token) -> str:
        return _safe_text(token.get("raw", ""))

    def render_codespan(self, token: Token) -> str:
        css = self.inline_css("codespan")
        return f"<code{style_attribute(css)}>{_safe_text(token.get('raw', ''))}</code>"

    def render_emphasis(self, token: Token) -> str:
        return f"<em{style_attribute(self.inline_css('em'))}>{self.render_children(token)}</em>"

    def render_strong(self, token: Token) -> str:
        return f"<strong{style_attribute(self.strong_css())}>{self.render_children(token)}</strong>"

    def render_strikethrough(self, token: Token) -> str:
        return f"<del{style_attribute(self.inline_css('del'))}>{self.render_children(token)}</del>"

    def render_link(self, token: Token) -> str:
        """Render a link with the ``link`` inline style.

        Parameters
        ----------
        token : dict
            ``link`` token with ``attrs.url`` and optional ``attrs.title``

        """
        attrs = token.get("attrs") or {}
        href = _safe_text(attrs.get("url", ""))
        title_attr = optional_attribute("title", html.unescape(attrs.get("title") or ""))
        css = self.inline_css("link")
        return f'<a href="{href}"{title_attr}{style_attribute(css)}>{self.render_children(token)}</a>'

    def render_image(self, token: Token) -> str:
        """Render an image. Images never pick up the global text color."""
        attrs = token.get("attrs") or {}
        src = _safe_text(attrs.get("url", ""))
        title_attr = optional_attribute("title", html.unescape(attrs.get("title") or ""))
        alt = escape_html(_plain_text(token.get("children", ())))
        css = self.block_css("image")
        return f'<img src="{src}"{title_attr} alt="{alt}"{style_attribute(css)}>'

    def render_linebreak(self, token: Token) -> str:
        return "<br>"

    def render_softbreak(self, token: Token) -> str:
        return "\n"


def _safe_text(text: str) -> str:
    # mistune leaves some entities encoded in raw text; decode before escaping once
    return escape_html(html.unescape(text))


def _plain_text(tokens: Iterable[Token]) -> str:
    """Flatten inline tokens to their text content."""
    parts = []
    for token in tokens:
        if "children" in token:
            parts.append(_plain_text(token["children"]))
        elif token.get("type") in ("text", "codespan"):
            parts.append(html.unescape(token.get("raw", "")))
    return "".join(parts)


__all__ = ["Highlighter", "StyledHtmlRenderer"]
