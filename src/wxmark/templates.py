#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Named style templates for wxmark.

A template bundles a RendererOptions value with an optional transform
applied to the rendered HTML (for example wrapping it in a styled
container). Templates are immutable configuration data selected by
identifier; caller options are layered over the template's options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from wxmark.exceptions import TemplateNotFoundError
from wxmark.options import RendererOptions, merge_options

HtmlTransform = Callable[[str], str]

_GRADIENT_TEXT = {
    "background": "linear-gradient(45deg, #4299e1, #667eea)",
    "WebkitBackgroundClip": "text",
    "WebkitTextFillColor": "transparent",
    "fontWeight": "bold",
}

_ROUNDED_IMAGE = {
    "display": "block",
    "width": "100%",
    "maxWidth": "100%",
    "margin": "1.5em auto",
    "borderRadius": "8px",
}

_SYSTEM_FONTS = '-apple-system, BlinkMacSystemFont, "PingFang SC", "Hiragino Sans GB", "Microsoft YaHei", sans-serif'
_MONOSPACE_FONTS = 'Menlo, Monaco, Consolas, "Courier New", monospace'

_GREEN_OPTIONS: Dict[str, Any] = {
    "base": {
        "themeColor": "#16a34a",
        "textAlign": "left",
        "lineHeight": "1.75",
        "padding": "1rem 1.5rem",
        "margin": "0 auto",
        "wordBreak": "break-word",
        "whiteSpace": "pre-wrap",
        "fontSize": "15px",
        "color": "#333",
    },
    "block": {
        "h1": {
            "display": "table",
            "padding": "0 1.2em",
            "borderBottom": "2px solid #16a34a",
            "margin": "2.5em auto 1.2em",
            "fontSize": "1.4em",
            "fontWeight": "bold",
            "textAlign": "center",
        },
        "h2": {
            "display": "table",
            "padding": "0 1.5em",
            "borderBottom": "2px solid #16a34a",
            "margin": "2.5em auto 1.2em",
            "fontSize": "1.4em",
            "fontWeight": "bold",
            "textAlign": "center",
        },
        "h3": {
            "paddingLeft": "8px",
            "borderLeft": "3px solid var(--theme-color)",
            "margin": "2em 8px 0.75em 0",
            "fontSize": "1.1em",
            "fontWeight": "bold",
            "lineHeight": 1.2,
        },
        "p": {
            "fontSize": "15px",
            "margin": "1.8em 8px",
            "letterSpacing": "0.12em",
            "color": "#2c3e50",
            "textAlign": "justify",
            "lineHeight": 1.8,
        },
    },
    "inline": {
        "strong": {"color": "#16a34a", "fontWeight": "bold"},
        "em": {"fontStyle": "italic", "color": "#666"},
        "link": {"color": "#3b82f6", "textDecoration": "underline"},
    },
}


def _gradient_options(h1: tuple[str, str], h2: tuple[str, str], h3: tuple[str, str]) -> Dict[str, Any]:
    """Blue gradient-heading template with the given (font size, margin) per heading level."""
    return {
        "base": {"themeColor": "#4299e1", "textAlign": "left", "lineHeight": "1.8", "fontSize": "15px"},
        "block": {
            "image": dict(_ROUNDED_IMAGE),
            "h1": {**_GRADIENT_TEXT, "fontSize": h1[0], "margin": h1[1]},
            "h2": {**_GRADIENT_TEXT, "fontSize": h2[0], "margin": h2[1]},
            "h3": {**_GRADIENT_TEXT, "fontSize": h3[0], "margin": h3[1]},
            "p": {"fontSize": "15px", "color": "#4a5568", "margin": "20px 0", "lineHeight": 1.75},
            "blockquote": {
                "fontSize": "15px",
                "color": "#718096",
                "borderLeft": "4px solid #4299e1",
                "padding": "1em",
                "margin": "24px 0",
                "background": "rgba(66, 153, 225, 0.1)",
            },
        },
        "inline": {
            "strong": {"color": "#4299e1", "fontWeight": "bold"},
            "em": {"color": "#4a5568", "fontStyle": "italic"},
            "link": {"color": "#4299e1", "textDecoration": "underline"},
        },
    }


def _smartisan_container(html: str) -> str:
    return (
        '<section id="nice" style="margin: 0; padding: 10px 20px; background-color: rgb(251, 247, 238); '
        "width: auto; font-family: PingFangSC-regular, sans-serif; font-size: 16px; color: rgb(0, 0, 0); "
        "line-height: 1.5em; word-spacing: 0; letter-spacing: 0; word-break: break-word; "
        f'overflow-wrap: break-word; text-align: left;">{html}</section>'
    )


# Template definitions
TEMPLATES: Dict[str, Dict[str, Any]] = {
    "default": {
        "name": "Default",
        "description": "Clean, simple default style with green accents",
        "options": _GREEN_OPTIONS,
    },
    "elegant": {
        "name": "Elegant",
        "description": "Suited to literary and arts articles",
        "options": _GREEN_OPTIONS,
    },
    "xiaogang": {
        "name": "Xiaogang",
        "description": "Compact gradient headings for a personal account",
        "options": _gradient_options(("17px", "24px 0 16px"), ("16px", "20px 0 12px"), ("15px", "18px 0 10px")),
    },
    "creative": {
        "name": "Tech",
        "description": "Large gradient headings for technology articles",
        "options": _gradient_options(("26px", "32px 0 16px"), ("22px", "24px 0 12px"), ("18px", "20px 0 10px")),
    },
    "smartisan": {
        "name": "Smartisan Notes",
        "description": "Warm paper-like note style",
        "options": {
            "base": {
                "themeColor": "rgb(99, 87, 83)",
                "fontFamily": _SYSTEM_FONTS,
                "textAlign": "left",
                "lineHeight": "1.75",
                "padding": "1.2rem",
                "margin": "0 auto",
                "wordBreak": "break-word",
                "whiteSpace": "pre-wrap",
                "fontSize": "16px",
                "color": "rgb(99, 87, 83)",
            },
            "block": {
                "h1": {
                    "fontSize": "24px",
                    "fontWeight": "bold",
                    "color": "#333333",
                    "margin": "1.5em 0 1em",
                    "padding": "0.5em 0",
                    "textAlign": "center",
                },
                "h2": {
                    "fontSize": "20px",
                    "fontWeight": "bold",
                    "color": "#333333",
                    "margin": "1.5em 0 1em",
                    "padding": "0.3em 0",
                    "textAlign": "left",
                },
                "h3": {
                    "fontSize": "18px",
                    "fontWeight": "bold",
                    "color": "#333333",
                    "margin": "1.2em 0 0.8em",
                    "paddingLeft": "0.8em",
                },
                "p": {
                    "margin": "1.2em 0",
                    "lineHeight": "1.8",
                    "color": "#333333",
                    "fontSize": "16px",
                    "textAlign": "justify",
                    "letterSpacing": "0.05em",
                },
                "blockquote": {
                    "margin": "1.2em 0",
                    "padding": "1em 1.2em",
                    "borderLeft": "4px solid rgba(0, 0, 0, 0.4)",
                    "background": "#F8F9FA",
                    "borderRadius": "0 4px 4px 0",
                    "color": "#666666",
                },
                "ul": {"margin": "1em 0", "paddingLeft": "1.5em", "listStyle": "disc", "color": "#333333"},
                "ol": {"margin": "1em 0", "paddingLeft": "1.5em", "listStyle": "decimal", "color": "#333333"},
                "code_pre": {
                    "margin": "1.2em 0",
                    "padding": "1em",
                    "background": "#F8F9FA",
                    "borderRadius": "4px",
                    "fontSize": "14px",
                    "fontFamily": _MONOSPACE_FONTS,
                    "overflowX": "auto",
                },
                "image": {"margin": "1.2em auto", "display": "block", "borderRadius": "4px"},
            },
            "inline": {
                "strong": {"color": "#FF6E42", "fontWeight": "bold"},
                "em": {"fontStyle": "italic", "color": "#666666"},
                "link": {"color": "#FF6E42", "textDecoration": "none", "borderBottom": "1px solid #FF6E42"},
                "codespan": {
                    "background": "#F8F9FA",
                    "padding": "0.2em 0.4em",
                    "borderRadius": "3px",
                    "fontSize": "0.9em",
                    "color": "#FF6E42",
                    "fontFamily": _MONOSPACE_FONTS,
                },
                "listitem": {"margin": "0.5em 0", "lineHeight": "1.8"},
            },
        },
        "transform": _smartisan_container,
    },
    "simple-global": {
        "name": "Global Color",
        "description": "Minimal template whose text follows the global color",
        "options": {
            "base": {
                "themeColor": "#333333",
                "fontFamily": _SYSTEM_FONTS,
                "textAlign": "left",
                "lineHeight": "1.75",
                "padding": "1.2rem",
                "margin": "0 auto",
                "wordBreak": "break-word",
                "whiteSpace": "pre-wrap",
                "fontSize": "16px",
                "color": "#333333",
            },
            "block": {
                "h1": {
                    "fontSize": "24px",
                    "fontWeight": "bold",
                    "margin": "1.5em 0 1em",
                    "padding": "0.5em 0",
                    "textAlign": "center",
                },
                "h2": {
                    "fontSize": "20px",
                    "fontWeight": "bold",
                    "margin": "1.5em 0 1em",
                    "padding": "0.3em 0",
                    "textAlign": "left",
                },
                "h3": {"fontSize": "18px", "fontWeight": "bold", "margin": "1.2em 0 0.8em", "paddingLeft": "0.8em"},
                "p": {
                    "margin": "1.2em 0",
                    "lineHeight": "1.8",
                    "fontSize": "16px",
                    "textAlign": "justify",
                    "letterSpacing": "0.05em",
                },
                "blockquote": {
                    "margin": "1.2em 0",
                    "padding": "1em 1.2em",
                    "borderLeft": "4px solid rgba(0, 0, 0, 0.1)",
                    "background": "rgba(0, 0, 0, 0.05)",
                    "borderRadius": "0 4px 4px 0",
                },
                "ul": {"margin": "1em 0", "paddingLeft": "1.5em", "listStyle": "disc"},
                "ol": {"margin": "1em 0", "paddingLeft": "1.5em", "listStyle": "decimal"},
                "code_pre": {
                    "fontSize": "14px",
                    "padding": "1em",
                    "borderRadius": "5px",
                    "background": "rgba(0, 0, 0, 0.05)",
                },
            },
            "inline": {
                "strong": {"fontWeight": "bold"},
                "em": {"fontStyle": "italic"},
                "link": {"textDecoration": "underline"},
                "codespan": {
                    "fontFamily": "monospace",
                    "padding": "2px 4px",
                    "background": "rgba(0, 0, 0, 0.05)",
                    "borderRadius": "3px",
                },
                "del": {"textDecoration": "line-through"},
            },
        },
    },
}


@dataclass(frozen=True)
class Template:
    """A named bundle of renderer options and an optional HTML transform.

    Parameters
    ----------
    id : str
        Identifier used to select the template
    name : str
        Display name
    description : str
        One-line description
    options : RendererOptions
        Options the template supplies
    transform : callable or None
        Applied to the rendered HTML fragment

    """

    id: str
    name: str
    description: str
    options: RendererOptions
    transform: Optional[HtmlTransform] = field(default=None, repr=False)

    def resolve_options(self, overrides: RendererOptions | None = None) -> RendererOptions:
        """Return the template options with *overrides* layered on top."""
        if overrides is None:
            return self.options
        return merge_options(self.options, overrides)

    def apply(self, html: str) -> str:
        return self.transform(html) if self.transform else html


def get_template(template_id: str) -> Template:
    """Get a template by identifier.

    Parameters
    ----------
    template_id : str
        Template identifier

    Returns
    -------
    Template
        The template

    Raises
    ------
    TemplateNotFoundError
        If the identifier is not in the catalogue

    """
    if template_id not in TEMPLATES:
        raise TemplateNotFoundError(template_id, available=tuple(TEMPLATES))

    definition = TEMPLATES[template_id]
    return Template(
        id=template_id,
        name=definition["name"],
        description=definition["description"],
        options=RendererOptions.from_dict(definition["options"]),
        transform=definition.get("transform"),
    )


def get_template_names() -> list[str]:
    return list(TEMPLATES)


def list_templates() -> list[tuple[str, str]]:
    """List all templates as (identifier, description) pairs."""
    return [(template_id, definition["description"]) for template_id, definition in TEMPLATES.items()]


__all__ = ["TEMPLATES", "Template", "get_template", "get_template_names", "list_templates"]
