# RasterLab Filters - Boundary Extension
"""
Padding filters which enlarge a grid by ``padding_size`` pixels on every side.

Each policy maps every destination coordinate to a source coordinate (or a
constant) independently per axis:

- zero: border is 0
- replicate: nearest edge sample, ``clamp(x - p, 0, w - 1)``
- reflect: mirror, ``-s - 1`` below 0 and ``2w - s - 1`` past the end
- symmetric: mirror, ``-s`` below 0 and ``2w - s - 2`` past the end
- wrap: circular, ``(x - p) mod w``
- custom: border filled with a constant color

Reflect and symmetric apply a single mirror step followed by a clamp, so
padding wider than the grid repeats the outermost mirrored sample.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Sequence, Union

import numpy as np

from rasterlab.config import DEFAULT_CUSTOM_VALUE, DEFAULT_PADDING_SIZE
from rasterlab.pixel_format import PixelFormat
from rasterlab.raster import Raster, luma, quantize, require_grid

from .base import Filter, FilterContext, register_filter, register_alias

CustomColorTypes = Union[int, Sequence[int]]
"A packed ``(r << 16) | (g << 8) | b`` integer or an (r, g, b) triple"


class PaddingMode(Enum):
    """Out-of-bounds policy of a padding operation."""

    ZERO = 'zero'
    REPLICATE = 'replicate'
    REFLECT = 'reflect'
    SYMMETRIC = 'symmetric'
    WRAP = 'wrap'
    CUSTOM = 'custom'


def pack_rgb(r: int, g: int, b: int) -> int:
    """Pack a color into ``(r << 16) | (g << 8) | b``."""
    return ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def unpack_rgb(value: CustomColorTypes) -> tuple[int, int, int]:
    """Split a packed color into (r, g, b); triples are validated and passed through."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid custom color: {value!r}")
    if isinstance(value, (int, np.integer)):
        value = int(value)
        return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
    rgb = tuple(value)
    if len(rgb) != 3 or not all(
        isinstance(c, (int, np.integer)) and not isinstance(c, bool) and 0 <= c <= 255 for c in rgb
    ):
        raise ValueError(f"Custom color must be three integers in [0, 255], got {value!r}")
    return int(rgb[0]), int(rgb[1]), int(rgb[2])


def custom_fill_value(custom_value: CustomColorTypes) -> int:
    """The gray level a custom color becomes on the single channel grid."""
    rgb = np.array(unpack_rgb(custom_value), dtype=np.float64)
    return int(quantize(luma(rgb)))


def _check_padding_size(padding_size: int) -> None:
    if isinstance(padding_size, bool) or not isinstance(padding_size, (int, np.integer)):
        raise ValueError(f"Padding size must be an integer, got {padding_size!r}")
    if padding_size < 0:
        raise ValueError(f"Padding size must not be negative, got {padding_size}")


def source_indices(length: int, padding_size: int, mode: PaddingMode) -> np.ndarray:
    """Source coordinate for every destination coordinate along one axis.

    Only defined for the coordinate-mapping policies (replicate, reflect,
    symmetric, wrap).

    :param length: Size of the source axis
    :param padding_size: Border width p
    :param mode: The padding policy
    :returns: int array of length ``length + 2 * p``
    """
    src = np.arange(length + 2 * padding_size) - padding_size
    if mode is PaddingMode.REPLICATE:
        pass
    elif mode is PaddingMode.REFLECT:
        src = np.where(src < 0, -src - 1, np.where(src >= length, 2 * length - src - 1, src))
    elif mode is PaddingMode.SYMMETRIC:
        src = np.where(src < 0, -src, np.where(src >= length, 2 * length - src - 2, src))
    elif mode is PaddingMode.WRAP:
        return src % length
    else:
        raise ValueError(f"{mode.value} padding does not map source coordinates")
    return np.clip(src, 0, length - 1)


def pad(
    grid: Raster,
    padding_size: int = DEFAULT_PADDING_SIZE,
    mode: PaddingMode | str = PaddingMode.ZERO,
    custom_value: CustomColorTypes = DEFAULT_CUSTOM_VALUE,
) -> Raster:
    """Enlarge a grid to ``(w + 2p) x (h + 2p)``.

    The interior ``[p, p + w) x [p, p + h)`` always equals the input.
    ``padding_size == 0`` returns an identity copy.

    :param grid: The gray raster to pad
    :param padding_size: Border width in pixels
    :param mode: The out-of-bounds policy
    :param custom_value: Border color for PaddingMode.CUSTOM
    :returns: The padded raster
    """
    pixels = require_grid(grid, "pad")
    mode = PaddingMode(mode)
    _check_padding_size(padding_size)
    p = int(padding_size)
    h, w = pixels.shape

    if mode in (PaddingMode.ZERO, PaddingMode.CUSTOM):
        fill = custom_fill_value(custom_value) if mode is PaddingMode.CUSTOM else 0
        result = np.full((h + 2 * p, w + 2 * p), fill, dtype=np.uint8)
        result[p:p + h, p:p + w] = pixels
    else:
        ys = source_indices(h, p, mode)
        xs = source_indices(w, p, mode)
        result = pixels[np.ix_(ys, xs)]

    return Raster(result, PixelFormat.GRAY, copy=False)


def zero_padding(grid: Raster, padding_size: int = DEFAULT_PADDING_SIZE) -> Raster:
    return pad(grid, padding_size, PaddingMode.ZERO)


def replicate_padding(grid: Raster, padding_size: int = DEFAULT_PADDING_SIZE) -> Raster:
    return pad(grid, padding_size, PaddingMode.REPLICATE)


def reflect_padding(grid: Raster, padding_size: int = DEFAULT_PADDING_SIZE) -> Raster:
    return pad(grid, padding_size, PaddingMode.REFLECT)


def symmetric_padding(grid: Raster, padding_size: int = DEFAULT_PADDING_SIZE) -> Raster:
    return pad(grid, padding_size, PaddingMode.SYMMETRIC)


def wrap_padding(grid: Raster, padding_size: int = DEFAULT_PADDING_SIZE) -> Raster:
    return pad(grid, padding_size, PaddingMode.WRAP)


def custom_padding(
    grid: Raster,
    padding_size: int = DEFAULT_PADDING_SIZE,
    custom_value: CustomColorTypes = DEFAULT_CUSTOM_VALUE,
) -> Raster:
    return pad(grid, padding_size, PaddingMode.CUSTOM, custom_value)


edge_padding = replicate_padding


@register_filter
@dataclass
class Pad(Filter):
    """Extend the canvas by synthesizing border samples.

    Parameters:
        padding_size: Border width in pixels on each side
        mode: zero, replicate, reflect, symmetric, wrap or custom
        custom_value: Border color for custom mode, packed int or r,g,b

    Example:
        'pad 4' or 'pad 4 mode=wrap' or 'custom_pad 2 custom_value=255,0,0'
    """

    _primary_param: ClassVar[str] = 'padding_size'

    padding_size: int = DEFAULT_PADDING_SIZE
    mode: PaddingMode = PaddingMode.ZERO
    custom_value: int | tuple[int, int, int] = DEFAULT_CUSTOM_VALUE

    def __post_init__(self):
        self.mode = PaddingMode(self.mode)
        if isinstance(self.custom_value, list):
            self.custom_value = tuple(self.custom_value)

    def apply(self, raster: Raster, context: FilterContext | None = None) -> Raster:
        return pad(raster, self.padding_size, self.mode, self.custom_value)


register_alias('zero_pad', Pad, mode='zero')
register_alias('replicate_pad', Pad, mode='replicate')
register_alias('edge_pad', Pad, mode='replicate')
register_alias('reflect_pad', Pad, mode='reflect')
register_alias('symmetric_pad', Pad, mode='symmetric')
register_alias('wrap_pad', Pad, mode='wrap')
register_alias('custom_pad', Pad, mode='custom')


__all__ = [
    'CustomColorTypes',
    'PaddingMode',
    'pack_rgb',
    'unpack_rgb',
    'custom_fill_value',
    'source_indices',
    'pad',
    'zero_padding',
    'replicate_padding',
    'edge_padding',
    'reflect_padding',
    'symmetric_padding',
    'wrap_padding',
    'custom_padding',
    'Pad',
]
