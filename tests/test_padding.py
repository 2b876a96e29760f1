"""
Tests for the boundary extension policies.
"""

import numpy as np
import pytest

from rasterlab import Raster, from_grid
from rasterlab.config import DEFAULT_CUSTOM_VALUE
from rasterlab.filters import (
    Pad,
    PaddingMode,
    custom_fill_value,
    custom_padding,
    edge_padding,
    pack_rgb,
    pad,
    reflect_padding,
    replicate_padding,
    symmetric_padding,
    unpack_rgb,
    wrap_padding,
    zero_padding,
)
from rasterlab.filters.padding import source_indices

ALL_MODES = list(PaddingMode)


class TestZeroPadding:
    def test_two_by_two(self, small_grid):
        result = zero_padding(small_grid, 1)
        assert result.to_list() == [
            [0, 0, 0, 0],
            [0, 5, 6, 0],
            [0, 7, 8, 0],
            [0, 0, 0, 0],
        ]

    def test_default_size(self, small_grid):
        assert zero_padding(small_grid).size == (22, 22)


class TestSourceIndices:
    def test_replicate(self):
        assert source_indices(3, 2, PaddingMode.REPLICATE).tolist() == [0, 0, 0, 1, 2, 2, 2]

    def test_reflect_excludes_edge(self):
        assert source_indices(3, 2, PaddingMode.REFLECT).tolist() == [1, 0, 0, 1, 2, 2, 1]

    def test_symmetric_includes_edge(self):
        assert source_indices(3, 2, PaddingMode.SYMMETRIC).tolist() == [2, 1, 0, 1, 2, 1, 0]

    def test_wrap(self):
        assert source_indices(3, 2, PaddingMode.WRAP).tolist() == [1, 2, 0, 1, 2, 0, 1]

    def test_wrap_wider_than_axis(self):
        assert source_indices(2, 3, PaddingMode.WRAP).tolist() == [1, 0, 1, 0, 1, 0, 1, 0]

    def test_reflect_wider_than_axis_clamps(self):
        assert source_indices(2, 3, PaddingMode.REFLECT).tolist() == [1, 1, 0, 0, 1, 1, 0, 0]

    def test_constant_modes_have_no_mapping(self):
        with pytest.raises(ValueError):
            source_indices(3, 1, PaddingMode.ZERO)


class TestPolicies:
    def test_replicate(self):
        grid = Raster.from_rows([[1, 2], [3, 4]])
        assert replicate_padding(grid, 1).to_list() == [
            [1, 1, 2, 2],
            [1, 1, 2, 2],
            [3, 3, 4, 4],
            [3, 3, 4, 4],
        ]
        assert edge_padding(grid, 1) == replicate_padding(grid, 1)

    def test_reflect_row(self):
        grid = Raster.from_rows([[1, 2, 3]])
        assert reflect_padding(grid, 1).to_list()[1] == [1, 1, 2, 3, 3]

    def test_symmetric_row(self):
        grid = Raster.from_rows([[1, 2, 3]])
        assert symmetric_padding(grid, 1).to_list()[1] == [2, 1, 2, 3, 2]

    def test_wrap_continuity(self, gradient_grid):
        result = wrap_padding(gradient_grid, 1)
        for y in range(gradient_grid.height):
            assert result.get_pixel(0, y + 1) == gradient_grid.get_pixel(gradient_grid.width - 1, y)
            assert result.get_pixel(result.width - 1, y + 1) == gradient_grid.get_pixel(0, y)

    def test_custom_default_is_mid_gray(self, small_grid):
        result = custom_padding(small_grid, 2).pixels
        assert result[0, 0] == 128
        assert result[-1, -1] == 128
        assert result[2, 2] == 5

    def test_custom_packed_and_triple_agree(self, small_grid):
        packed = custom_padding(small_grid, 1, pack_rgb(255, 0, 0))
        triple = custom_padding(small_grid, 1, (255, 0, 0))
        assert packed == triple
        assert packed.get_pixel(0, 0) == 76

    def test_mode_by_name(self, small_grid):
        assert pad(small_grid, 1, "wrap") == wrap_padding(small_grid, 1)


@pytest.mark.parametrize("mode", ALL_MODES)
class TestAllPolicies:
    @pytest.mark.parametrize("size", [0, 1, 3, 9])
    def test_interior_fidelity(self, gradient_grid, mode, size):
        result = pad(gradient_grid, size, mode)
        assert result.size == (gradient_grid.width + 2 * size, gradient_grid.height + 2 * size)
        interior = result.pixels[size:size + gradient_grid.height, size:size + gradient_grid.width]
        np.testing.assert_array_equal(interior, gradient_grid.pixels)

    def test_zero_size_is_identity_copy(self, small_grid, mode):
        result = pad(small_grid, 0, mode)
        assert result == small_grid
        assert result is not small_grid

    @pytest.mark.parametrize("size", [-1, 1.5, True, "3"])
    def test_invalid_size(self, small_grid, mode, size):
        with pytest.raises(ValueError):
            pad(small_grid, size, mode)


class TestColors:
    def test_pack_unpack(self):
        assert pack_rgb(16, 32, 48) == 0x102030
        assert unpack_rgb(0x102030) == (16, 32, 48)
        assert unpack_rgb(DEFAULT_CUSTOM_VALUE) == (128, 128, 128)

    @pytest.mark.parametrize("value", [(1, 2), (0, 0, 256), (1.0, 2, 3), True])
    def test_invalid_colors(self, value):
        with pytest.raises(ValueError):
            unpack_rgb(value)

    def test_fill_value(self):
        assert custom_fill_value(DEFAULT_CUSTOM_VALUE) == 128
        assert custom_fill_value((255, 255, 255)) == 255
        assert custom_fill_value(0) == 0


class TestPadFilter:
    def test_defaults(self, small_grid):
        assert Pad()(small_grid) == zero_padding(small_grid, 10)

    def test_mode_string_coerced(self):
        assert Pad(padding_size=2, mode="reflect").mode is PaddingMode.REFLECT

    def test_rgba_input(self, small_grid):
        result = Pad(padding_size=1, mode=PaddingMode.WRAP)(from_grid(small_grid))
        assert result == wrap_padding(small_grid, 1)
