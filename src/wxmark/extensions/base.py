#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wxmark/extensions/base.py
"""Descriptor type for markdown syntax extensions.

An extension bundles the three capabilities the pipeline needs for one
piece of non-standard syntax:

- ``probe``: a cheap check of whether the syntax can occur in a document
  at all. Extensions whose probe fails are not installed for that parse.
- ``parse``: a mistune rule (pattern plus parse function) that consumes
  the matching span and appends a token carrying the matched raw text and
  the extracted payload.
- ``render``: turns that token into HTML, given the active renderer.

Each extension names the standard rule it must be tried ahead of
(``before``). Extensions are installed in the order they are listed, so
for two extensions sharing a ``before`` rule the first listed is probed
first.

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

from wxmark.constants import ExtensionLevel

if TYPE_CHECKING:
    import mistune

    from wxmark.renderer import StyledHtmlRenderer

Token = dict[str, Any]
ParseFunction = Callable[[Any, "re.Match[str]", Any], Optional[int]]
RenderFunction = Callable[["StyledHtmlRenderer", Token], str]


@dataclass(frozen=True)
class MarkdownExtension:
    """A block or inline syntax extension for the markdown tokenizer.

    Parameters
    ----------
    name : str
        Rule name, also used as the type of the tokens it produces
    level : {"block", "inline"}
        Which mistune parser the rule is registered with
    pattern : str
        Regular expression for the rule. Named groups must be unique
        across all rules of the same parser.
    probe_pattern : str
        Cheap regular expression (multiline) that must match somewhere in
        the source for the extension to be installed
    parse : callable
        ``parse(parser, match, state) -> end position``; appends a token
    render : callable
        ``render(renderer, token) -> html``
    before : str
        Standard rule this extension is tried ahead of

    """

    name: str
    level: ExtensionLevel
    pattern: str
    probe_pattern: str
    parse: ParseFunction = field(repr=False)
    render: RenderFunction = field(repr=False)
    before: str

    def probe(self, source: str) -> bool:
        """Return True if this extension's syntax may occur in *source*."""
        return re.search(self.probe_pattern, source, re.MULTILINE) is not None

    def install(self, md: mistune.Markdown) -> None:
        """Register the rule with a mistune ``Markdown`` instance.

        Block rules are also added to the rule sets used inside block
        quotes and list items, so the syntax is recognized when nested.
        """
        if self.level == "block":
            md.block.register(self.name, self.pattern, self.parse, before=self.before)
            for rules in (md.block.block_quote_rules, md.block.list_rules):
                if self.name not in rules:
                    md.block.insert_rule(rules, self.name, before=self.before)
        else:
            md.inline.register(self.name, self.pattern, self.parse, before=self.before)
