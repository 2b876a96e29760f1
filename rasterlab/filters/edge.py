# RasterLab Filters - Edge Detection
"""
Sobel edge detection on the gray grid.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from rasterlab.pixel_format import PixelFormat
from rasterlab.raster import Raster, quantize, require_grid

from .base import Filter, FilterContext, register_filter, register_alias
from .convolution import convolve_interior, has_interior

SOBEL_X: tuple[tuple[int, ...], ...] = (
    (-1, 0, 1),
    (-2, 0, 2),
    (-1, 0, 1),
)

SOBEL_Y: tuple[tuple[int, ...], ...] = (
    (-1, -2, -1),
    (0, 0, 0),
    (1, 2, 1),
)


def sobel_gradients(grid: Raster) -> tuple[np.ndarray, np.ndarray]:
    """Horizontal and vertical Sobel responses of all interior pixels.

    Returns two float64 arrays of shape ``(H - 2, W - 2)``.
    """
    samples = require_grid(grid, "sobel_gradients").astype(np.float64)
    return convolve_interior(samples, SOBEL_X), convolve_interior(samples, SOBEL_Y)


def sobel_edge_detection(grid: Raster) -> Raster:
    """Gradient magnitude ``sqrt(gx^2 + gy^2)``, rounded and clamped.

    The outermost 1px ring has no complete neighborhood and is copied from
    the input unchanged.
    """
    result = require_grid(grid, "sobel_edge_detection").copy()
    if has_interior(grid):
        gx, gy = sobel_gradients(grid)
        result[1:-1, 1:-1] = quantize(np.sqrt(gx * gx + gy * gy))
    return Raster(result, PixelFormat.GRAY, copy=False)


@register_filter
@dataclass
class SobelEdges(Filter):
    """Sobel edge detection.

    Detects edges from the magnitude of the horizontal and vertical
    Sobel gradients. Strong edges are bright, flat regions black.

    Example:
        'sobeledges' or 'edges'
    """

    def apply(self, raster: Raster, context: FilterContext | None = None) -> Raster:
        return sobel_edge_detection(raster)


register_alias('edges', SobelEdges)
register_alias('sobel', SobelEdges)


__all__ = [
    'SOBEL_X',
    'SOBEL_Y',
    'sobel_gradients',
    'sobel_edge_detection',
    'SobelEdges',
]
