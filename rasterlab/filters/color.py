# RasterLab Filters - Point Transforms
"""
Point transforms: Contrast, Threshold, Invert, Grayscale.

Every output sample depends only on the input sample at the same position.
All functions return a full-size, newly allocated raster.

Usage:
    from rasterlab.filters.color import adjust_contrast, threshold, invert

    result = adjust_contrast(grid, factor=2.0)
    result = threshold(grid, cutoff=128)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from rasterlab.config import DEFAULT_CONTRAST_FACTOR, DEFAULT_THRESHOLD, MAX_VALUE
from rasterlab.pixel_format import PixelFormat
from rasterlab.raster import Raster, luma, quantize, require_grid

from .base import Filter, FilterContext, register_filter, register_alias


# ============================================================================
# Functional API
# ============================================================================

def adjust_contrast(grid: Raster, factor: float = DEFAULT_CONTRAST_FACTOR) -> Raster:
    """Stretch samples away from (or towards) mid-gray.

    ``out = clamp(round((in - 128) * factor + 128))``. Any factor is legal:
    0 flattens the image to 128, negative factors invert it around 128.
    """
    pixels = require_grid(grid, "adjust_contrast").astype(np.float64)
    return Raster(quantize((pixels - 128) * factor + 128), PixelFormat.GRAY, copy=False)


def threshold(grid: Raster, cutoff: float = DEFAULT_THRESHOLD, inclusive: bool = True) -> Raster:
    """Binarize a grid.

    Samples ``>= cutoff`` become 255, all others 0. With ``inclusive=False``
    the comparison is strict (``> cutoff``), which is how the RGBA display
    path of the playground thresholds.
    """
    pixels = require_grid(grid, "threshold")
    mask = pixels >= cutoff if inclusive else pixels > cutoff
    return Raster(np.where(mask, MAX_VALUE, 0).astype(np.uint8), PixelFormat.GRAY, copy=False)


def invert(grid: Raster) -> Raster:
    """``out = 255 - in``. RGBA rasters invert R, G and B and keep alpha."""
    pixels = grid.get_pixels()
    if grid.pixel_format is PixelFormat.GRAY:
        pixels = MAX_VALUE - pixels
    else:
        pixels[..., :3] = MAX_VALUE - pixels[..., :3]
    return Raster(pixels, grid.pixel_format, copy=False)


def grayscale(raster: Raster) -> Raster:
    """Color space conversion to gray.

    A gray grid is already gray and is returned as a copy. An RGBA raster
    gets its rounded luma written to R, G and B while alpha is kept.
    """
    if raster.pixel_format is PixelFormat.GRAY:
        return raster.copy()
    pixels = raster.get_pixels()
    gray = quantize(luma(pixels))
    for channel in range(3):
        pixels[..., channel] = gray
    return Raster(pixels, PixelFormat.RGBA, copy=False)


# ============================================================================
# Filters
# ============================================================================

@register_filter
@dataclass
class Contrast(Filter):
    """Adjust contrast around mid-gray.

    Parameters:
        factor: 0.0 = flat gray, 1.0 = original, 2.0 = high contrast, < 0 inverts

    Example:
        'contrast 2.0'
    """

    _primary_param: ClassVar[str] = 'factor'

    factor: float = DEFAULT_CONTRAST_FACTOR

    def apply(self, raster: Raster, context: FilterContext | None = None) -> Raster:
        return adjust_contrast(raster, self.factor)


@register_filter
@dataclass
class Threshold(Filter):
    """Binary threshold.

    Parameters:
        cutoff: Samples at or above this value become white
        inclusive: Use >= (True) or > (False) for the comparison

    Example:
        'threshold 100'
    """

    _primary_param: ClassVar[str] = 'cutoff'

    cutoff: float = DEFAULT_THRESHOLD
    inclusive: bool = True

    def apply(self, raster: Raster, context: FilterContext | None = None) -> Raster:
        return threshold(raster, self.cutoff, self.inclusive)


@register_filter
@dataclass
class Invert(Filter):
    """Invert all samples (negative image).

    Example:
        'invert'
    """

    _accepted_formats: ClassVar[list[PixelFormat] | None] = None

    def apply(self, raster: Raster, context: FilterContext | None = None) -> Raster:
        return invert(raster)


@register_filter
@dataclass
class Grayscale(Filter):
    """Convert to grayscale using the 0.299/0.587/0.114 luma weights.

    Example:
        'grayscale'
    """

    _accepted_formats: ClassVar[list[PixelFormat] | None] = None

    def apply(self, raster: Raster, context: FilterContext | None = None) -> Raster:
        return grayscale(raster)


register_alias('gray', Grayscale)
register_alias('negative', Invert)
register_alias('binarize', Threshold)


__all__ = [
    'adjust_contrast',
    'threshold',
    'invert',
    'grayscale',
    'Contrast',
    'Threshold',
    'Invert',
    'Grayscale',
]
