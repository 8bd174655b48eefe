"""Unit tests for renderer options."""

import logging

import pytest

from wxmark.exceptions import ValidationError
from wxmark.options import BaseStyleOptions, RendererOptions, merge_options


@pytest.mark.unit
class TestBaseStyleOptions:
    """Test BaseStyleOptions construction."""

    def test_from_dict_accepts_camel_case(self):
        """Test camelCase keys map onto snake_case fields."""
        base = BaseStyleOptions.from_dict({"themeColor": "#16a34a", "lineHeight": 1.75, "wordBreak": "break-all"})
        assert base.theme_color == "#16a34a"
        assert base.line_height == 1.75
        assert base.word_break == "break-all"

    def test_from_dict_ignores_unknown_keys(self):
        """Test keys that are not base fields are dropped."""
        assert BaseStyleOptions.from_dict({"maxWidth": "100%"}) == BaseStyleOptions()

    def test_to_dict_only_set_fields(self):
        """Test to_dict omits unset fields."""
        assert BaseStyleOptions(color="#333").to_dict() == {"color": "#333"}


@pytest.mark.unit
class TestRendererOptions:
    """Test RendererOptions construction and immutability."""

    def test_defaults(self):
        """Test default switches."""
        options = RendererOptions()
        assert options.hard_wrap is True
        assert options.normalize_bold is True
        assert options.normalize_bullets is True
        assert options.color_spans is True
        assert options.code_theme is None
        assert options.block_style("p") == {}

    def test_base_mapping_is_converted(self):
        """Test a plain mapping for base becomes BaseStyleOptions."""
        options = RendererOptions(base={"color": "#333", "lineHeight": 1.75})
        assert options.base == BaseStyleOptions(color="#333", line_height=1.75)

    def test_invalid_base_type(self):
        """Test a base that is neither options nor a mapping is rejected."""
        with pytest.raises(ValidationError):
            RendererOptions(base="#333")

    def test_invalid_block_type(self):
        """Test a style scope that is not a mapping is rejected."""
        with pytest.raises(ValidationError):
            RendererOptions(block=["p"])

    def test_caller_styles_are_copied(self):
        """Test later changes to the caller's dict do not leak into options."""
        block = {"p": {"fontSize": 15}}
        options = RendererOptions(block=block)
        block["p"]["fontSize"] = 99
        block["h1"] = {"color": "red"}
        assert options.block_style("p")["fontSize"] == 15
        assert options.block_style("h1") == {}

    def test_style_maps_are_read_only(self):
        """Test style maps cannot be modified through the options."""
        options = RendererOptions(block={"p": {"fontSize": 15}})
        with pytest.raises(TypeError):
            options.block["p"]["fontSize"] = 16
        with pytest.raises(TypeError):
            options.block["h1"] = {}

    def test_unknown_kind_is_logged(self, caplog):
        """Test an unknown element kind produces a warning."""
        with caplog.at_level(logging.WARNING, logger="wxmark.options.renderer"):
            RendererOptions(block={"sidebar": {"color": "red"}})
        assert "sidebar" in caplog.text

    def test_create_updated(self):
        """Test create_updated returns a modified copy."""
        options = RendererOptions(block={"p": {"fontSize": 15}})
        updated = options.create_updated(code_theme="monokai")
        assert updated.code_theme == "monokai"
        assert options.code_theme is None
        assert updated.block_style("p") == {"fontSize": 15}

    def test_from_dict(self, caplog):
        """Test building options from an editor-shaped mapping."""
        with caplog.at_level(logging.WARNING, logger="wxmark.options.renderer"):
            options = RendererOptions.from_dict(
                {
                    "codeTheme": "monokai",
                    "hardWrap": False,
                    "base": {"themeColor": "#fff"},
                    "block": {"p": {"fontSize": 15}},
                    "bogus": 1,
                }
            )
        assert options.code_theme == "monokai"
        assert options.hard_wrap is False
        assert options.base.theme_color == "#fff"
        assert options.block_style("p") == {"fontSize": 15}
        assert "bogus" in caplog.text

    def test_from_dict_empty(self):
        """Test an empty mapping gives default options."""
        assert RendererOptions.from_dict({}).to_dict() == RendererOptions().to_dict()

    def test_to_dict(self):
        """Test to_dict returns plain dicts."""
        data = RendererOptions(base={"color": "#333"}, inline={"strong": {"color": "red"}}).to_dict()
        assert data["base"] == {"color": "#333"}
        assert data["inline"] == {"strong": {"color": "red"}}
        assert type(data["inline"]["strong"]) is dict


@pytest.mark.unit
class TestMergeOptions:
    """Test layering one options value over another."""

    def test_base_fields_layer(self):
        """Test set base fields of the upper layer replace the lower ones."""
        lower = RendererOptions(base={"color": "#111", "lineHeight": 1.5})
        upper = RendererOptions(base={"color": "#222"})
        merged = merge_options(lower, upper)
        assert merged.base.color == "#222"
        assert merged.base.line_height == 1.5

    def test_style_maps_merge_per_property(self):
        """Test per-kind styles merge property by property."""
        lower = RendererOptions(block={"p": {"fontSize": 15, "color": "#111"}, "h1": {"fontSize": 24}})
        upper = RendererOptions(block={"p": {"color": "#222"}})
        merged = merge_options(lower, upper)
        assert dict(merged.block_style("p")) == {"fontSize": 15, "color": "#222"}
        assert dict(merged.block_style("h1")) == {"fontSize": 24}

    def test_code_theme_fallback(self):
        """Test the lower code theme survives when the upper sets none."""
        merged = merge_options(RendererOptions(code_theme="monokai"), RendererOptions())
        assert merged.code_theme == "monokai"

    def test_inputs_unchanged(self):
        """Test merging leaves both inputs unchanged."""
        lower = RendererOptions(block={"p": {"fontSize": 15}})
        upper = RendererOptions(block={"p": {"fontSize": 16}})
        merge_options(lower, upper)
        assert lower.block_style("p")["fontSize"] == 15
        assert upper.block_style("p")["fontSize"] == 16
