# RasterLab Filters - Kernel Convolution
"""Neighborhood filters built on small square kernels.

This module provides:
- Gaussian blur (renormalized partial windows at the border)
- Sharpen (fixed 3x3 kernel, border ring copied unchanged)
- The shared kernel helpers used by the edge detectors

## Summation order

Kernel taps are accumulated offset by offset in row-major kernel order, so
every output sample sums its products in the same order as a per-pixel loop
would. Out-of-bounds taps contribute exact zeros and do not change the sum.

Usage:
    from rasterlab.filters.convolution import gaussian_blur, sharpen

    result = gaussian_blur(grid, radius=2)
    result = sharpen(grid)
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import ClassVar, Sequence

import numpy as np

from rasterlab.config import DEFAULT_BLUR_RADIUS
from rasterlab.pixel_format import PixelFormat
from rasterlab.raster import Raster, quantize, require_grid

from .base import Filter, FilterContext, register_filter, register_alias

SHARPEN_KERNEL: tuple[tuple[int, ...], ...] = (
    (0, -1, 0),
    (-1, 5, -1),
    (0, -1, 0),
)


# ============================================================================
# Kernel helpers
# ============================================================================

def gaussian_kernel(radius: int) -> np.ndarray:
    """Build a normalized ``(2r+1) x (2r+1)`` Gaussian kernel.

    Weights are ``exp(-(dx^2 + dy^2) / (2 * sigma^2))`` with
    ``sigma = radius / 3``, divided by their sequential sum.

    Args:
        radius: Kernel radius, a positive integer

    Returns:
        float64 kernel whose weights sum to 1
    """
    if radius <= 0:
        raise ValueError(f"Gaussian kernel radius must be positive, got {radius}")
    size = radius * 2 + 1
    sigma = radius / 3
    two_sigma_square = 2 * sigma * sigma

    kernel = np.empty((size, size), dtype=np.float64)
    total = 0.0
    for y in range(size):
        for x in range(size):
            dx = x - radius
            dy = y - radius
            value = math.exp(-(dx * dx + dy * dy) / two_sigma_square)
            kernel[y, x] = value
            total += value
    return kernel / total


def convolve_interior(samples: np.ndarray, kernel: Sequence[Sequence[float]]) -> np.ndarray:
    """Weighted sums of every pixel whose full 3x3 (or k x k) window fits.

    Args:
        samples: float64 2D array
        kernel: Square kernel with odd size k

    Returns:
        Array of shape ``(H - k + 1, W - k + 1)``, one sum per interior pixel
    """
    size = len(kernel)
    h, w = samples.shape
    out_h, out_w = h - size + 1, w - size + 1
    acc = np.zeros((out_h, out_w), dtype=np.float64)
    for ky in range(size):
        for kx in range(size):
            weight = kernel[ky][kx]
            if weight:
                acc += samples[ky:ky + out_h, kx:kx + out_w] * weight
    return acc


def has_interior(grid: Raster, kernel_size: int = 3) -> bool:
    """Whether at least one pixel has a complete kernel window."""
    return grid.width >= kernel_size and grid.height >= kernel_size


# ============================================================================
# Functional API
# ============================================================================

def gaussian_blur(grid: Raster, radius: int = DEFAULT_BLUR_RADIUS) -> Raster:
    """Blur with a Gaussian kernel of size ``2 * radius + 1``.

    Border pixels use only the in-bounds part of the kernel and divide by the
    sum of those weights, so edges keep their brightness instead of fading
    towards black. ``radius == 0`` returns an unchanged copy.
    """
    pixels = require_grid(grid, "gaussian_blur")
    if isinstance(radius, bool) or not isinstance(radius, (int, np.integer)):
        raise ValueError(f"Blur radius must be an integer, got {radius!r}")
    if radius < 0:
        raise ValueError(f"Blur radius must not be negative, got {radius}")
    if radius == 0:
        return grid.copy()

    kernel = gaussian_kernel(radius)
    size = kernel.shape[0]
    h, w = pixels.shape

    padded = np.zeros((h + 2 * radius, w + 2 * radius), dtype=np.float64)
    padded[radius:radius + h, radius:radius + w] = pixels
    inside = np.zeros_like(padded)
    inside[radius:radius + h, radius:radius + w] = 1.0

    weighted = np.zeros((h, w), dtype=np.float64)
    weight_sum = np.zeros((h, w), dtype=np.float64)
    for ky in range(size):
        for kx in range(size):
            weight = kernel[ky, kx]
            weighted += padded[ky:ky + h, kx:kx + w] * weight
            weight_sum += inside[ky:ky + h, kx:kx + w] * weight

    return Raster(quantize(weighted / weight_sum), PixelFormat.GRAY, copy=False)


def sharpen(grid: Raster) -> Raster:
    """Sharpen with ``[[0,-1,0],[-1,5,-1],[0,-1,0]]``.

    The outermost 1px ring is copied from the input unchanged.
    """
    pixels = require_grid(grid, "sharpen")
    result = pixels.copy()
    if has_interior(grid):
        acc = convolve_interior(pixels.astype(np.float64), SHARPEN_KERNEL)
        result[1:-1, 1:-1] = quantize(acc)
    return Raster(result, PixelFormat.GRAY, copy=False)


# ============================================================================
# Filters
# ============================================================================

@register_filter
@dataclass
class GaussianBlur(Filter):
    """Gaussian blur with edge-preserving renormalization.

    Parameters:
        radius: Kernel radius in pixels, sigma = radius / 3

    Example:
        'gaussianblur 2' or 'blur radius=3'
    """

    _primary_param: ClassVar[str] = 'radius'

    radius: int = DEFAULT_BLUR_RADIUS

    def apply(self, raster: Raster, context: FilterContext | None = None) -> Raster:
        return gaussian_blur(raster, self.radius)


@register_filter
@dataclass
class Sharpen(Filter):
    """Sharpen using a 3x3 Laplacian-style kernel.

    Example:
        'sharpen'
    """

    def apply(self, raster: Raster, context: FilterContext | None = None) -> Raster:
        return sharpen(raster)


register_alias('blur', GaussianBlur)


__all__ = [
    'SHARPEN_KERNEL',
    'gaussian_kernel',
    'convolve_interior',
    'has_interior',
    'gaussian_blur',
    'sharpen',
    'GaussianBlur',
    'Sharpen',
]
