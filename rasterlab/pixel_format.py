"""Pixel formats a :class:`~rasterlab.raster.Raster` can hold."""

from __future__ import annotations

from enum import Enum
from typing import Union


class PixelFormat(Enum):
    """Sample layout of a raster."""

    GRAY = "GRAY"
    "Single luma channel, the canonical engine format"
    RGBA = "RGBA"
    "Four interleaved 8-bit channels, used at the display boundary"

    @property
    def channels(self) -> int:
        """Number of samples per pixel."""
        return 1 if self is PixelFormat.GRAY else 4

    @property
    def pil_mode(self) -> str:
        """The matching PIL image mode."""
        return "L" if self is PixelFormat.GRAY else "RGBA"


PixelFormatTypes = Union[PixelFormat, str]
"Pixel format or its string name"
