"""Unit tests for style resolution in wxmark.styles."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from wxmark.options import BaseStyleOptions
from wxmark.styles import (
    cascade_color,
    css_property_name,
    css_value,
    has_property,
    layer_styles,
    resolve_base_style,
    resolve_style,
)

style_keys = st.from_regex(r"[a-z][a-zA-Z]{0,12}", fullmatch=True)
style_values = st.one_of(
    st.integers(min_value=-1000, max_value=1000),
    st.floats(allow_nan=False, allow_infinity=False, width=32),
    st.text(alphabet="abcdefghijklmnopqrstuvwxyz#0123456789 ()%.", max_size=20),
)


@pytest.mark.unit
class TestCssPropertyName:
    """Test conversion of style keys to CSS property names."""

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("fontSize", "font-size"),
            ("color", "color"),
            ("WebkitBackgroundClip", "-webkit-background-clip"),
            ("font_size", "font-size"),
            ("border-left", "border-left"),
            ("--theme-color", "--theme-color"),
        ],
    )
    def test_key_conversion(self, key, expected):
        """Test camelCase, snake_case and CSS keys all map to CSS names."""
        assert css_property_name(key) == expected


@pytest.mark.unit
class TestResolveStyle:
    """Test per-element style serialization."""

    def test_numeric_values_get_px(self):
        """Test bare numbers are emitted as pixel lengths."""
        assert resolve_style({"fontSize": 15}) == "font-size: 15px"

    def test_line_height_is_unitless(self):
        """Test line-height numbers never get a unit."""
        assert resolve_style({"lineHeight": 1.75}) == "line-height: 1.75"

    def test_declarations_keep_input_order(self):
        """Test declarations are joined with ';' in input order."""
        assert resolve_style({"fontSize": 15, "lineHeight": 1.75}) == "font-size: 15px;line-height: 1.75"

    def test_string_values_pass_through(self):
        """Test string values are emitted unchanged."""
        assert resolve_style({"margin": "1em 0", "fontSize": "1.4em"}) == "margin: 1em 0;font-size: 1.4em"

    def test_none_values_are_skipped(self):
        """Test None-valued properties are omitted."""
        assert resolve_style({"color": None, "margin": 0}) == "margin: 0px"

    def test_media_query_keys_are_dropped(self):
        """Test media-query keys cannot be expressed inline and are dropped."""
        style = {"fontSize": 15, "@media (max-width: 600px)": {"fontSize": 12}}
        assert resolve_style(style) == "font-size: 15px"

    def test_empty_style(self):
        """Test empty and missing styles resolve to an empty string."""
        assert resolve_style({}) == ""
        assert resolve_style(None) == ""

    def test_booleans_are_not_numbers(self):
        """Test booleans are not treated as pixel lengths."""
        assert css_value("opacity", True) == "True"

    def test_input_not_modified(self):
        """Test resolve_style leaves its input unchanged."""
        style = {"fontSize": 15}
        resolve_style(style)
        assert style == {"fontSize": 15}

    @given(st.dictionaries(style_keys, style_values, max_size=8))
    def test_resolution_is_deterministic(self, style):
        """Test equal style mappings always resolve to the same string."""
        assert resolve_style(style) == resolve_style(dict(style))

    @given(st.dictionaries(style_keys, style_values, min_size=1, max_size=8))
    def test_numeric_units(self, style):
        """Test every numeric declaration carries px unless it is a line height."""
        declarations = resolve_style(style).split(";")
        assert len(declarations) == len(style)
        for (key, value), declaration in zip(style.items(), declarations):
            name = css_property_name(key)
            assert declaration.startswith(f"{name}: ")
            if isinstance(value, (int, float)) and "line-height" not in name:
                assert declaration.endswith("px")


@pytest.mark.unit
class TestResolveBaseStyle:
    """Test document-level base style serialization."""

    def test_fixed_order_and_important_color(self):
        """Test base fields serialize in fixed order with an !important color."""
        base = BaseStyleOptions(color="#333", theme_color="#16a34a", font_size=15, line_height="1.75")
        assert resolve_base_style(base) == (
            "line-height: 1.75;font-size: 15px;--theme-color: #16a34a;color: #333 !important"
        )

    def test_all_fields(self):
        """Test the full base field order."""
        base = BaseStyleOptions(
            line_height=1.5,
            font_size="16px",
            text_align="left",
            theme_color="#000",
            color="#111",
            background="#fff",
            padding="1rem",
            font_family="serif",
            margin="0 auto",
            word_break="break-word",
            white_space="pre-wrap",
        )
        names = [declaration.split(":")[0] for declaration in resolve_base_style(base).split(";")]
        assert names == [
            "line-height",
            "font-size",
            "text-align",
            "--theme-color",
            "color",
            "background",
            "padding",
            "font-family",
            "margin",
            "word-break",
            "white-space",
        ]

    def test_empty_base(self):
        """Test an unset base yields an empty string."""
        assert resolve_base_style(BaseStyleOptions()) == ""
        assert resolve_base_style(None) == ""


@pytest.mark.unit
class TestCascadeColor:
    """Test the global text color fallback."""

    def test_adds_color_when_missing(self):
        """Test an element without color picks up the base color."""
        assert cascade_color({"fontSize": 15}, "#112233") == {"fontSize": 15, "color": "#112233"}

    def test_element_color_wins(self):
        """Test an element color is never replaced."""
        assert cascade_color({"color": "#ffffff"}, "#112233") == {"color": "#ffffff"}

    def test_empty_color_counts_as_unset(self):
        """Test an empty color value falls back to the base color."""
        assert cascade_color({"color": ""}, "#112233")["color"] == "#112233"

    def test_no_base_color(self):
        """Test nothing is added when no base color is set."""
        assert cascade_color({"fontSize": 15}, None) == {"fontSize": 15}
        assert cascade_color(None, None) == {}

    def test_input_is_not_modified(self):
        """Test cascading works on a copy."""
        style = {"fontSize": 15}
        result = cascade_color(style, "#112233")
        assert style == {"fontSize": 15}
        assert result is not style

    def test_has_property_any_spelling(self):
        """Test property detection across key spellings."""
        assert has_property({"textAlign": "left"}, "text-align")
        assert has_property({"text_align": "left"}, "text-align")
        assert not has_property({"textAlign": None}, "text-align")


@pytest.mark.unit
class TestLayerStyles:
    """Test style layering."""

    def test_later_layers_win(self):
        """Test later layers override earlier ones under any key spelling."""
        assert layer_styles({"textAlign": "left"}, {"text-align": "center"}) == {"text-align": "center"}

    def test_none_layers_and_values_skipped(self):
        """Test missing layers and None values are ignored."""
        assert layer_styles(None, {"color": None, "margin": 0}, None) == {"margin": 0}
