"""Unit tests for the markdown syntax extensions."""

import re

import pytest

from wxmark.extensions import (
    DEFAULT_EXTENSIONS,
    FOOTNOTE_REF,
    INLINE_LATEX,
    LATEX_BLOCK,
    MERMAID_BLOCK,
    normalize_diagram,
)
from wxmark.extensions.latex import INLINE_LATEX_PATTERN, LATEX_BLOCK_PATTERN
from wxmark.extensions.mermaid import MERMAID_BLOCK_PATTERN


@pytest.mark.unit
class TestNormalizeDiagram:
    """Test diagram source canonicalization."""

    def test_pie_gets_show_data_and_quoted_keys(self):
        """Test pie charts get showData and quoted labels."""
        source = 'pie\ntitle Pets\nDogs: 386\n"Cats": 85\n'
        assert normalize_diagram(source) == 'pie showData\n    title Pets\n    "Dogs": 386\n    "Cats": 85'

    def test_pie_title_on_header_line(self):
        """Test a title on the pie line moves to its own line."""
        assert normalize_diagram("pie title Pets\nA: 1") == 'pie showData\n    title Pets\n    "A": 1'

    def test_pie_show_data_not_duplicated(self):
        """Test an existing showData flag is not repeated."""
        assert normalize_diagram("pie showData\nA: 1") == 'pie showData\n    "A": 1'

    def test_sequence_keyword(self):
        """Test sequence diagrams get the canonical keyword."""
        assert normalize_diagram("sequence\nA->>B: hi") == "sequenceDiagram\n    A->>B: hi"

    def test_flowchart_becomes_graph(self):
        """Test flowchart headers become graph headers, keeping the direction."""
        assert normalize_diagram("flowchart LR\nA-->B") == "graph LR\n    A-->B"

    def test_graph_header_kept(self):
        """Test a graph header is kept as written."""
        assert normalize_diagram("graph TD\n  A-->B\n\n  B-->C") == "graph TD\n    A-->B\n    B-->C"

    def test_other_diagrams_indent_body(self):
        """Test other diagram types keep their header and indent the body."""
        assert normalize_diagram("gantt\ntitle Plan") == "gantt\n    title Plan"

    def test_empty_diagram(self):
        """Test blank diagram content normalizes to None."""
        assert normalize_diagram("  \n\n") is None


@pytest.mark.unit
class TestPatterns:
    """Test the extension grammars in isolation."""

    def test_tagged_mermaid_fence(self):
        """Test a fence tagged mermaid is a diagram."""
        m = re.compile(MERMAID_BLOCK_PATTERN, re.M).match("```mermaid\ngraph TD\nA-->B\n```")
        assert m is not None
        assert m.group("mermaid_text") == "graph TD\nA-->B\n"
        assert m.group("mermaid_tagged") == "mermaid"

    def test_bare_fence_with_keyword(self):
        """Test an untagged fence starting with a diagram keyword is a diagram."""
        m = re.compile(MERMAID_BLOCK_PATTERN, re.M).match("```\npie\nA: 1\n```")
        assert m is not None
        assert m.group("mermaid_tagged") is None

    @pytest.mark.parametrize("source", ["```python\nx = 1\n```", "```\nprint(1)\n```", "```\npiece\n```"])
    def test_regular_code_fences(self, source):
        """Test ordinary fences are not diagrams."""
        assert re.compile(MERMAID_BLOCK_PATTERN, re.M).match(source) is None

    def test_latex_block(self):
        """Test $$ fences capture the formula."""
        m = re.compile(LATEX_BLOCK_PATTERN, re.M).match("$$\n1+1=2\n$$")
        assert m.group("latex_block_text") == "1+1=2"

    def test_inline_latex(self):
        """Test single-dollar inline math."""
        m = re.search(INLINE_LATEX_PATTERN, "area $\\pi r^2$ here")
        assert m.group("latex_inline_text") == "\\pi r^2"

    def test_display_latex_in_backticks(self):
        """Test $$`...`$$ is display math."""
        m = re.search(INLINE_LATEX_PATTERN, "$$`E=mc^2`$$")
        assert m.group("latex_display_text") == "E=mc^2"
        assert m.group("latex_inline_text") is None


@pytest.mark.unit
class TestProbes:
    """Test the cheap source probes that decide which extensions install."""

    def test_mermaid_probe(self):
        """Test fences trigger the diagram extension."""
        assert MERMAID_BLOCK.probe("text\n```mermaid\n")
        assert not MERMAID_BLOCK.probe("no fences here")

    def test_latex_block_probe(self):
        """Test a $$ line triggers the block math extension."""
        assert LATEX_BLOCK.probe("a\n$$\nx\n$$")
        assert not LATEX_BLOCK.probe("costs $5")

    def test_inline_latex_probe(self):
        """Test a dollar sign triggers inline math."""
        assert INLINE_LATEX.probe("a $x$")
        assert not INLINE_LATEX.probe("plain")

    def test_footnote_probe(self):
        """Test a footnote marker triggers the footnote extension."""
        assert FOOTNOTE_REF.probe("see[^1]")
        assert not FOOTNOTE_REF.probe("[link](url)")

    def test_default_order_most_specific_first(self):
        """Test diagrams outrank math blocks, and footnotes come before inline math."""
        assert [extension.name for extension in DEFAULT_EXTENSIONS] == [
            "mermaid_block",
            "latex_block",
            "footnote_ref",
            "inline_latex",
        ]
