"""
Pytest fixtures for RasterLab tests
"""

import numpy as np
import pytest

from rasterlab import PixelFormat, Raster


@pytest.fixture
def spike_grid() -> Raster:
    """3x3 grid with a bright center on a dark background."""
    return Raster.from_rows([[10, 10, 10], [10, 200, 10], [10, 10, 10]])


@pytest.fixture
def small_grid() -> Raster:
    """2x2 grid [[5, 6], [7, 8]]."""
    return Raster.from_rows([[5, 6], [7, 8]])


@pytest.fixture
def gradient_grid() -> Raster:
    """7x5 grid with a distinct value per pixel."""
    pixels = (np.arange(35, dtype=np.int64).reshape(5, 7) * 7) % 256
    return Raster(pixels.astype(np.uint8))


@pytest.fixture
def random_grid() -> Raster:
    """Reproducible 16x12 noise grid."""
    rng = np.random.default_rng(1234)
    return Raster(rng.integers(0, 256, size=(12, 16), dtype=np.uint8))


@pytest.fixture
def rgba_raster() -> Raster:
    """2x1 RGBA raster with a semi transparent pixel."""
    pixels = np.array([[[10, 20, 30, 77], [255, 255, 255, 255]]], dtype=np.uint8)
    return Raster(pixels, PixelFormat.RGBA)
