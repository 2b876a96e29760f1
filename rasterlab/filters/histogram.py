# RasterLab Filters - Histogram Operations
"""
Global histogram equalization.

This is the only transform with a data-dependent global pass: a 256-bin
histogram over the whole grid is turned into a lookup table, then every
sample is remapped through it.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from rasterlab.config import HISTOGRAM_BINS, MAX_VALUE
from rasterlab.pixel_format import PixelFormat
from rasterlab.raster import Raster, quantize, require_grid

from .base import Filter, FilterContext, register_filter, register_alias


def compute_histogram(grid: Raster) -> np.ndarray:
    """Count the samples of each intensity.

    :param grid: A gray raster.
    :returns: int64 array with 256 bins.
    """
    pixels = require_grid(grid, "compute_histogram")
    return np.bincount(pixels.ravel(), minlength=HISTOGRAM_BINS).astype(np.int64)


def cumulative_distribution(histogram: np.ndarray) -> np.ndarray:
    """Running sum of a histogram, ``cdf[i] = sum(histogram[0..i])``."""
    return np.cumsum(np.asarray(histogram, dtype=np.int64))


def equalization_lut(histogram: np.ndarray) -> np.ndarray:
    """Build the remapping table for histogram equalization.

    ``lut[i] = round((cdf[i] - cdf_min) / (total - cdf_min) * 255)`` where
    ``cdf_min`` is the cumulative count at the lowest populated intensity.
    A flat image (``total == cdf_min``) maps every bin to 0. Bins below the
    lowest populated intensity would be negative and are clamped to 0.

    :param histogram: 256-bin histogram.
    :returns: uint8 lookup table with 256 entries.
    """
    cdf = cumulative_distribution(histogram)
    total = int(cdf[-1])
    populated = cdf[cdf > 0]
    cdf_min = int(populated[0]) if populated.size else 0

    if total == cdf_min:
        return np.zeros(HISTOGRAM_BINS, dtype=np.uint8)

    return quantize((cdf - cdf_min) / (total - cdf_min) * MAX_VALUE)


def equalize_histogram(grid: Raster) -> Raster:
    """Spread the intensities of a grid over the full 0..255 range.

    A uniform grid has no spread to redistribute and yields all zeros.
    """
    pixels = require_grid(grid, "equalize_histogram")
    lut = equalization_lut(compute_histogram(grid))
    return Raster(lut[pixels], PixelFormat.GRAY, copy=False)


@register_filter
@dataclass
class Equalize(Filter):
    """Histogram equalization.

    Improves global contrast by remapping intensities through the
    normalized cumulative distribution of the input. The input histogram
    is stored in the context under 'histogram' when a context is given.

    Example:
        'equalize'
    """

    def apply(self, raster: Raster, context: FilterContext | None = None) -> Raster:
        if context is not None:
            context['histogram'] = compute_histogram(raster)
        return equalize_histogram(raster)


register_alias('histogram', Equalize)
register_alias('histeq', Equalize)


__all__ = [
    'compute_histogram',
    'cumulative_distribution',
    'equalization_lut',
    'equalize_histogram',
    'Equalize',
]
