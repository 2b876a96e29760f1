"""
Tests for the filter base class: registry, serialization and the compact DSL.
"""

import json

import pytest

from rasterlab import PixelFormat, Raster, from_grid
from rasterlab.config import DEFAULT_CUSTOM_VALUE
from rasterlab.filters import (
    FILTER_ALIASES,
    FILTER_REGISTRY,
    Contrast,
    Equalize,
    Filter,
    FilterContext,
    GaussianBlur,
    Grayscale,
    Invert,
    Pad,
    PaddingMode,
    Sharpen,
    SobelEdges,
    Threshold,
    resolve_filter_class,
)


class TestRegistry:
    @pytest.mark.parametrize("cls", [Contrast, Threshold, Invert, Grayscale, GaussianBlur,
                                     Sharpen, SobelEdges, Equalize, Pad])
    def test_registered(self, cls):
        assert FILTER_REGISTRY[cls.__name__] is cls
        assert FILTER_REGISTRY[cls.__name__.lower()] is cls

    def test_aliases(self):
        assert FILTER_ALIASES["blur"] is GaussianBlur
        assert FILTER_ALIASES["edges"] is SobelEdges
        assert FILTER_ALIASES["wrap_pad"] == (Pad, {"mode": "wrap"})

    def test_accepted_formats(self):
        assert Contrast.accepts_format(PixelFormat.GRAY)
        assert not Contrast.accepts_format(PixelFormat.RGBA)
        assert Invert.accepts_format(PixelFormat.RGBA)
        assert Invert.get_accepted_formats() is None

    def test_resolve(self):
        assert resolve_filter_class("reflect_pad") == (Pad, {"mode": "reflect"})
        assert resolve_filter_class("SHARPEN") == (Sharpen, {})
        assert resolve_filter_class("teleport") == (None, {})

    def test_resolve_returns_fresh_presets(self):
        _, presets = resolve_filter_class("wrap_pad")
        presets["mode"] = "zero"
        assert FILTER_ALIASES["wrap_pad"] == (Pad, {"mode": "wrap"})


class TestSerialization:
    def test_to_dict(self):
        assert Pad(padding_size=4, mode=PaddingMode.WRAP).to_dict() == {
            "padding_size": 4,
            "mode": "wrap",
            "custom_value": DEFAULT_CUSTOM_VALUE,
            "type": "Pad",
        }

    def test_tuple_becomes_list(self):
        data = Pad(mode="custom", custom_value=(1, 2, 3)).to_dict()
        assert data["custom_value"] == [1, 2, 3]

    def test_from_dict(self):
        restored = Filter.from_dict({"type": "Pad", "padding_size": 4, "mode": "wrap"})
        assert restored == Pad(padding_size=4, mode=PaddingMode.WRAP)

    def test_from_dict_list_color(self):
        restored = Filter.from_dict(Pad(mode="custom", custom_value=(1, 2, 3)).to_dict())
        assert restored.custom_value == (1, 2, 3)

    def test_json_round_trip(self):
        original = Threshold(cutoff=90, inclusive=False)
        text = original.to_json()
        assert json.loads(text)["type"] == "Threshold"
        assert Filter.from_json(text) == original

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            Filter.from_dict({"type": "Teleport"})


class TestParsing:
    def test_positional_primary(self):
        assert Filter.parse("contrast 2.0") == Contrast(factor=2.0)

    def test_keyword(self):
        assert Filter.parse("threshold cutoff=100") == Threshold(cutoff=100)

    def test_alias(self):
        assert Filter.parse("blur 3") == GaussianBlur(radius=3)

    def test_parameterized_alias(self):
        assert Filter.parse("wrap_pad 3") == Pad(padding_size=3, mode=PaddingMode.WRAP)

    def test_alias_defaults_can_be_overridden(self):
        assert Filter.parse("wrap_pad 1 mode=reflect").mode is PaddingMode.REFLECT

    def test_tuple_and_hex_values(self):
        assert Filter.parse("custom_pad 2 custom_value=255,0,0").custom_value == (255, 0, 0)
        assert Filter.parse("custom_pad 2 custom_value=0x808080").custom_value == 0x808080

    def test_quoted_value(self):
        assert Filter.parse("pad 1 mode='symmetric'").mode is PaddingMode.SYMMETRIC
        assert Filter.parse('pad 1 mode="wrap"').mode is PaddingMode.WRAP

    def test_bool_value(self):
        assert Filter.parse("threshold 50 inclusive=false") == Threshold(cutoff=50, inclusive=False)

    def test_case_insensitive(self):
        assert Filter.parse("SobelEdges") == SobelEdges()

    def test_unknown_filter(self):
        with pytest.raises(ValueError):
            Filter.parse("teleport 3")

    def test_too_many_positionals(self):
        with pytest.raises(ValueError):
            Filter.parse("sharpen 1")

    def test_empty(self):
        with pytest.raises(ValueError):
            Filter.parse("   ")

    def test_to_string(self):
        assert Contrast().to_string() == "contrast"
        assert Pad(padding_size=4, mode="wrap").to_string() == "pad padding_size=4 mode=wrap"
        assert Threshold(inclusive=False).to_string() == "threshold inclusive=false"

    @pytest.mark.parametrize("filter_obj", [
        Contrast(factor=0.5),
        GaussianBlur(radius=4),
        Pad(padding_size=2, mode=PaddingMode.SYMMETRIC),
        Pad(padding_size=1, mode=PaddingMode.CUSTOM, custom_value=(9, 8, 7)),
    ])
    def test_string_round_trip(self, filter_obj):
        assert Filter.parse(filter_obj.to_string()) == filter_obj


class TestExecution:
    def test_implicit_conversion(self):
        rgba = from_grid(Raster.from_rows([[10, 200]]))
        result = Contrast(factor=1.0)(rgba)
        assert result.pixel_format == PixelFormat.GRAY
        assert result.to_list() == [[10, 200]]

    def test_conversion_disabled(self, rgba_raster):
        class StrictSharpen(Sharpen):
            _implicit_conversion = False

        with pytest.raises(ValueError):
            StrictSharpen()(rgba_raster)

    def test_context(self):
        context = FilterContext()
        context["key"] = 1
        copied = context.copy()
        copied["key"] = 2
        assert context.get("key") == 1
        assert "missing" not in context
        assert context.get("missing", 5) == 5

