"""HTML-related utility helpers."""

from __future__ import annotations

from html import escape as _html_escape


def escape_html(text: str, *, enabled: bool = True) -> str:
    """Escape HTML special characters when enabled."""
    if not enabled:
        return text
    return _html_escape(text)


def style_attribute(css: str) -> str:
    """Return a ``style`` attribute for *css*, or an empty string when *css* is empty."""
    if not css:
        return ""
    return f' style="{escape_html(css)}"'


def optional_attribute(name: str, value: str | None) -> str:
    """Return ``name="value"`` with a leading space when *value* is set."""
    if not value:
        return ""
    return f' {name}="{escape_html(value)}"'


__all__ = ["escape_html", "style_attribute", "optional_attribute"]
