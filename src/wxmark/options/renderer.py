#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the styled HTML renderer.

Options are layered in three scopes:

- ``base``: document-level settings serialized onto the root container
  (line height, font, alignment, global text color, background, spacing).
- ``block``: per block-element style maps keyed by element kind
  (``h1`` .. ``h6``, ``p``, ``blockquote``, ``ul``, ``ol``, ``image``,
  ``code_pre``, ``latex``, ``mermaid``, ``hr``, ``table``).
- ``inline``: per inline-element style maps keyed by element kind
  (``strong``, ``em``, ``link``, ``codespan``, ``del``, ``listitem``,
  ``footnote``).

All option objects are frozen. Style maps handed in by the caller are
copied into read-only views on construction, so rendering can never change
a caller's configuration.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any, Mapping

from wxmark.constants import (
    BLOCK_KINDS,
    DEFAULT_COLOR_SPANS,
    DEFAULT_HARD_WRAP,
    DEFAULT_NORMALIZE_BOLD,
    DEFAULT_NORMALIZE_BULLETS,
    INLINE_KINDS,
    StyleOptions,
    StyleValue,
)
from wxmark.exceptions import ValidationError
from wxmark.options.base import CloneFrozenMixin

logger = logging.getLogger(__name__)

_EMPTY_STYLE: Mapping[str, StyleValue] = MappingProxyType({})
_CAMEL_BOUNDARY = re.compile(r"([A-Z])")


def _snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub(r"_\1", key).lower().replace("-", "_")


def _freeze_style_map(
    styles: Mapping[str, StyleOptions | None] | None, known_kinds: frozenset[str], scope: str
) -> Mapping[str, Mapping[str, StyleValue]]:
    if styles is None:
        styles = {}
    if not isinstance(styles, Mapping):
        raise ValidationError(
            f"{scope} styles must be a mapping of element kind to style, got {type(styles).__name__}",
            parameter_name=scope,
            parameter_value=styles,
        )

    frozen: dict[str, Mapping[str, StyleValue]] = {}
    for kind, style in styles.items():
        if kind not in known_kinds:
            logger.warning("Unknown %s element kind %r; its style will not be applied", scope, kind)
        frozen[kind] = MappingProxyType(dict(style or {}))
    return MappingProxyType(frozen)


def _merge_style_maps(
    lower: Mapping[str, StyleOptions], upper: Mapping[str, StyleOptions]
) -> dict[str, dict[str, StyleValue]]:
    merged = {kind: dict(style) for kind, style in lower.items()}
    for kind, style in upper.items():
        merged.setdefault(kind, {}).update(style)
    return merged


@dataclass(frozen=True)
class BaseStyleOptions(CloneFrozenMixin):
    """Document-level style settings applied to the root container.

    Numeric values are emitted as pixel lengths, except ``line_height``.
    ``color`` is the global text color: it is emitted with ``!important``
    and also cascades to text-bearing elements that set no color.
    """

    line_height: StyleValue | None = field(default=None, metadata={"help": "Base line height (unitless)"})
    font_size: StyleValue | None = field(default=None, metadata={"help": "Base font size"})
    text_align: str | None = field(default=None, metadata={"help": "Base text alignment"})
    theme_color: str | None = field(
        default=None, metadata={"help": "Theme color, exposed as the --theme-color custom property"}
    )
    color: str | None = field(default=None, metadata={"help": "Global text color"})
    background: str | None = field(default=None, metadata={"help": "Document background (color or gradient)"})
    padding: StyleValue | None = field(default=None, metadata={"help": "Root container padding"})
    font_family: str | None = field(default=None, metadata={"help": "Base font family"})
    margin: StyleValue | None = field(default=None, metadata={"help": "Root container margin"})
    word_break: str | None = field(default=None, metadata={"help": "CSS word-break value"})
    white_space: str | None = field(default=None, metadata={"help": "CSS white-space value"})

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> BaseStyleOptions:
        """Build base options from a mapping with camelCase or snake_case keys.

        Keys that do not name a base field are ignored.
        """
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _snake_case(key)
            if name in known:
                values[name] = value
            else:
                logger.debug("Ignoring unsupported base style key %r", key)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Return the fields that are set, keyed by field name."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass(frozen=True)
class RendererOptions(CloneFrozenMixin):
    """Configuration options for rendering markdown to styled HTML.

    Parameters
    ----------
    base : BaseStyleOptions
        Document-level style settings
    block : mapping
        Block element kind to style map
    inline : mapping
        Inline element kind to style map
    code_theme : str or None
        Pygments style used for fenced code; None selects the default theme
    hard_wrap : bool
        Render single newlines inside paragraphs as ``<br>``
    normalize_bold : bool
        Rewrite ``**text**`` into ``<strong>`` before parsing, so bold works
        next to CJK punctuation
    normalize_bullets : bool
        Rewrite ``-`` bullet lines into ``•`` text lines before parsing
    color_spans : bool
        Expand ``{color:#hex}text{/color}`` into colored spans

    Examples
    --------
        >>> options = RendererOptions(
        ...     base=BaseStyleOptions(color="#333333", line_height=1.75),
        ...     block={"p": {"fontSize": 15, "margin": "1em 0"}},
        ...     inline={"strong": {"color": "#16a34a"}},
        ... )
        >>> options.create_updated(code_theme="monokai").code_theme
        'monokai'

    """

    base: BaseStyleOptions = field(
        default_factory=BaseStyleOptions, metadata={"help": "Document-level style settings"}
    )
    block: Mapping[str, StyleOptions] = field(
        default_factory=dict, metadata={"help": "Block element kind to style map"}
    )
    inline: Mapping[str, StyleOptions] = field(
        default_factory=dict, metadata={"help": "Inline element kind to style map"}
    )
    code_theme: str | None = field(default=None, metadata={"help": "Pygments theme for fenced code blocks"})
    hard_wrap: bool = field(default=DEFAULT_HARD_WRAP, metadata={"help": "Render single newlines as <br>"})
    normalize_bold: bool = field(
        default=DEFAULT_NORMALIZE_BOLD, metadata={"help": "Rewrite **text** into <strong> before parsing"}
    )
    normalize_bullets: bool = field(
        default=DEFAULT_NORMALIZE_BULLETS, metadata={"help": "Rewrite '-' bullet lines into '•' lines"}
    )
    color_spans: bool = field(
        default=DEFAULT_COLOR_SPANS, metadata={"help": "Expand {color:#hex}text{/color} spans"}
    )

    def __post_init__(self) -> None:
        """Normalize the base options and freeze the style maps.

        Raises
        ------
        ValidationError
            If ``base`` is neither BaseStyleOptions nor a mapping, or a
            style scope is not a mapping.

        """
        if isinstance(self.base, Mapping):
            object.__setattr__(self, "base", BaseStyleOptions.from_dict(self.base))
        elif not isinstance(self.base, BaseStyleOptions):
            raise ValidationError(
                f"base must be BaseStyleOptions or a mapping, got {type(self.base).__name__}",
                parameter_name="base",
                parameter_value=self.base,
            )
        object.__setattr__(self, "block", _freeze_style_map(self.block, BLOCK_KINDS, "block"))
        object.__setattr__(self, "inline", _freeze_style_map(self.inline, INLINE_KINDS, "inline"))

    def block_style(self, kind: str) -> Mapping[str, StyleValue]:
        """Return the configured style for a block element kind (possibly empty)."""
        return self.block.get(kind) or _EMPTY_STYLE

    def inline_style(self, kind: str) -> Mapping[str, StyleValue]:
        """Return the configured style for an inline element kind (possibly empty)."""
        return self.inline.get(kind) or _EMPTY_STYLE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> RendererOptions:
        """Build options from a plain mapping, e.g. a loaded configuration file.

        Top-level keys may be camelCase (``codeTheme``) or snake_case
        (``code_theme``). Unknown top-level keys are logged and ignored.
        """
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _snake_case(key)
            if name in known:
                values[name] = value
            else:
                logger.warning("Ignoring unknown renderer option %r", key)
        if "base" in values:
            values["base"] = BaseStyleOptions.from_dict(values["base"])
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Return a plain-dict copy of these options."""
        return {
            "base": self.base.to_dict(),
            "block": {kind: dict(style) for kind, style in self.block.items()},
            "inline": {kind: dict(style) for kind, style in self.inline.items()},
            "code_theme": self.code_theme,
            "hard_wrap": self.hard_wrap,
            "normalize_bold": self.normalize_bold,
            "normalize_bullets": self.normalize_bullets,
            "color_spans": self.color_spans,
        }


def merge_options(lower: RendererOptions, upper: RendererOptions) -> RendererOptions:
    """Layer *upper* over *lower* and return the combined options.

    Base fields set in *upper* replace those of *lower*; per-kind style
    maps are merged property by property with *upper* winning. The switches
    (``hard_wrap`` and the preprocessing flags) come from *upper*, and
    ``code_theme`` from *upper* when it sets one.
    """
    return replace(
        upper,
        base=replace(lower.base, **upper.base.to_dict()),
        block=_merge_style_maps(lower.block, upper.block),
        inline=_merge_style_maps(lower.inline, upper.inline),
        code_theme=upper.code_theme or lower.code_theme,
    )
