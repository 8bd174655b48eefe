#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wxmark/utils/mathml.py
"""LaTeX typesetting through latex2mathml.

The renderer treats the math engine as an opaque collaborator with the
signature ``(formula, display) -> markup``. This module supplies the
default engine; any failure is reported as :class:`MathRenderError` so the
caller can fall back to the raw source.
"""

from __future__ import annotations

import logging
from typing import Callable

import latex2mathml.converter

from wxmark.exceptions import MathRenderError

logger = logging.getLogger(__name__)

MathRenderer = Callable[[str, bool], str]


def render_latex(formula: str, display: bool) -> str:
    """Typeset *formula* as MathML.

    Parameters
    ----------
    formula : str
        LaTeX source without delimiters
    display : bool
        True for display (block) mode, False for inline mode

    Returns
    -------
    str
        A ``<math>`` element

    Raises
    ------
    MathRenderError
        If the formula is empty or latex2mathml rejects it

    """
    source = formula.strip()
    if not source:
        raise MathRenderError(formula)
    try:
        return latex2mathml.converter.convert(source, display="block" if display else "inline")
    except Exception as e:
        raise MathRenderError(formula, original_error=e) from e


__all__ = ["MathRenderer", "render_latex"]
