#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for wxmark.

Re-exports the option dataclasses so callers can write
``from wxmark.options import RendererOptions``.
"""

from wxmark.options.base import CloneFrozenMixin
from wxmark.options.renderer import BaseStyleOptions, RendererOptions, merge_options

__all__ = [
    "BaseStyleOptions",
    "CloneFrozenMixin",
    "RendererOptions",
    "merge_options",
]
