#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wxmark/styles.py
"""Style resolution: turning style mappings into inline CSS.

Two serializers live here. :func:`resolve_style` handles any per-element
style mapping, in insertion order, with key-case conversion and unit
normalization. :func:`resolve_base_style` serializes the document-level
base options in a fixed order, marking the global text color
``!important`` so it wins against element styles applied further down the
tree.

Both functions are pure; they never modify their inputs.

"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Mapping

from wxmark.constants import BASE_STYLE_ORDER, StyleOptions, StyleValue

if TYPE_CHECKING:
    from wxmark.options import BaseStyleOptions

_UPPERCASE = re.compile(r"([A-Z])")
_UNITLESS_MARKER = "line-height"
_MEDIA_QUERY_PREFIX = "@media"


def css_property_name(key: str) -> str:
    """Convert a style key to its CSS property name.

    ``fontSize`` becomes ``font-size``, ``WebkitBackgroundClip`` becomes
    ``-webkit-background-clip`` and ``font_size`` becomes ``font-size``.
    Custom properties (``--theme-color``) pass through unchanged.
    """
    if key.startswith("--"):
        return key
    return _UPPERCASE.sub(r"-\1", key).lower().replace("_", "-")


def css_value(property_name: str, value: StyleValue) -> str:
    """Serialize a style value, appending ``px`` to bare numbers.

    Line-height values are unitless and are never given a unit.
    """
    if _is_number(value) and _UNITLESS_MARKER not in property_name:
        return f"{value}px"
    return str(value)


def resolve_style(style: StyleOptions | None) -> str:
    """Serialize a style mapping into a CSS declaration string.

    Parameters
    ----------
    style : mapping or None
        Property name to value. Keys may be camelCase, snake_case or CSS
        names; ``None`` values are skipped, as are media-query keys, which
        inline styles cannot express.

    Returns
    -------
    str
        ``property: value`` pairs joined by ``;`` in input order, or an
        empty string when nothing survives filtering.

    Examples
    --------
        >>> resolve_style({"fontSize": 15, "lineHeight": 1.75})
        'font-size: 15px;line-height: 1.75'

    """
    if not style:
        return ""

    declarations = []
    for key, value in style.items():
        if value is None or key.startswith(_MEDIA_QUERY_PREFIX):
            continue
        name = css_property_name(key)
        declarations.append(f"{name}: {css_value(name, value)}")
    return ";".join(declarations)


def resolve_base_style(base: BaseStyleOptions | None) -> str:
    """Serialize document-level base options for the root container.

    Only fields that are set are emitted, in the fixed order
    line-height, font-size, text-align, theme color (as the
    ``--theme-color`` custom property), color (``!important``),
    background, padding, font-family, margin, word-break, white-space.
    """
    if base is None:
        return ""

    declarations = []
    for field_name, property_name in BASE_STYLE_ORDER:
        value = getattr(base, field_name)
        if value is None or value == "":
            continue
        rendered = css_value(property_name, value)
        if field_name == "color":
            rendered += " !important"
        declarations.append(f"{property_name}: {rendered}")
    return ";".join(declarations)


def has_property(style: Mapping[str, Any], property_name: str) -> bool:
    """Return True if *style* sets *property_name* under any key spelling."""
    return any(value not in (None, "") and css_property_name(key) == property_name for key, value in style.items())


def cascade_color(style: StyleOptions | None, base_color: StyleValue | None) -> dict[str, StyleValue]:
    """Return a copy of *style* that falls back to the global text color.

    When *base_color* is set and the element style defines no color, the
    copy gets ``color: base_color``. Only ``color`` is cascaded. The input
    mapping is never modified.
    """
    resolved = dict(style or {})
    if base_color and not has_property(resolved, "color"):
        resolved["color"] = base_color
    return resolved


def layer_styles(*layers: StyleOptions | None) -> dict[str, StyleValue]:
    """Merge style mappings left to right into a new dict; later layers win.

    Keys are normalized to CSS property names so that ``textAlign`` in one
    layer and ``text-align`` in another collapse to a single declaration.
    """
    merged: dict[str, StyleValue] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            if value is None:
                continue
            merged[css_property_name(key)] = value
    return merged


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


__all__ = [
    "cascade_color",
    "css_property_name",
    "css_value",
    "has_property",
    "layer_styles",
    "resolve_base_style",
    "resolve_style",
]
