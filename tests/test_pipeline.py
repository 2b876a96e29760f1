"""
Tests for FilterPipeline.
"""

import pytest

from rasterlab import from_grid
from rasterlab.filters import (
    Contrast,
    Equalize,
    APPLIED_STEPS_KEY,
    Filter,
    FilterContext,
    FilterPipeline,
    GaussianBlur,
    Invert,
    Pad,
    PaddingMode,
    Threshold,
    adjust_contrast,
    reflect_padding,
    threshold,
)


class TestPipeline:
    def test_parse(self):
        pipeline = FilterPipeline.parse("contrast 2 | threshold 100")
        assert len(pipeline) == 2
        assert pipeline[0] == Contrast(factor=2)
        assert pipeline[1] == Threshold(cutoff=100)

    def test_parse_semicolons(self):
        pipeline = FilterPipeline.parse("blur 2; sharpen; pad 4 mode=reflect")
        assert [f.type for f in pipeline] == ["GaussianBlur", "Sharpen", "Pad"]
        assert pipeline[2].mode is PaddingMode.REFLECT

    def test_parse_empty(self):
        assert len(FilterPipeline.parse("")) == 0

    def test_apply_in_order(self, random_grid):
        pipeline = FilterPipeline.parse("contrast 2 | threshold 100")
        expected = threshold(adjust_contrast(random_grid, 2), 100)
        assert pipeline(random_grid) == expected

    def test_output_feeds_next_step(self, small_grid):
        pipeline = FilterPipeline([Pad(padding_size=1, mode=PaddingMode.REFLECT)] * 2)
        assert pipeline(small_grid) == reflect_padding(reflect_padding(small_grid, 1), 1)

    def test_empty_pipeline_copies(self, small_grid):
        result = FilterPipeline()(small_grid)
        assert result == small_grid
        assert result is not small_grid

    def test_rgba_input(self, small_grid):
        pipeline = FilterPipeline([Invert(), Invert(), Contrast(factor=1.0)])
        assert pipeline(from_grid(small_grid)) == small_grid

    def test_chaining(self):
        pipeline = FilterPipeline().append(Invert()).extend([GaussianBlur(2), Equalize()])
        assert len(pipeline) == 3

    def test_context_shared(self, small_grid):
        context = FilterContext()
        FilterPipeline([Invert(), Equalize()])(small_grid, context)
        assert context["histogram"].sum() == 4

    def test_context_records_applied_steps(self, small_grid):
        context = FilterContext()
        FilterPipeline.parse("contrast 2 | wrap_pad 1")(small_grid, context)
        assert context[APPLIED_STEPS_KEY] == ["contrast factor=2", "pad padding_size=1 mode=wrap"]

    def test_to_string(self):
        pipeline = FilterPipeline.parse("contrast 2 | threshold 100")
        assert pipeline.to_string() == "contrast factor=2|threshold cutoff=100"
        assert FilterPipeline.parse(pipeline.to_string()) == pipeline

    def test_dict_round_trip(self):
        pipeline = FilterPipeline([Contrast(factor=3.0), Pad(padding_size=2, mode="wrap")])
        data = pipeline.to_dict()
        assert data["type"] == "FilterPipeline"
        assert [f["type"] for f in data["filters"]] == ["Contrast", "Pad"]
        assert Filter.from_dict(data) == pipeline
        assert Filter.from_json(pipeline.to_json()) == pipeline

    def test_unknown_step(self):
        with pytest.raises(ValueError):
            FilterPipeline.parse("contrast 2 | teleport")
