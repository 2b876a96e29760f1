"""
Implements the class :class:`.Raster`, the sample container every transform
of the engine reads from and writes to, plus the adapters between the
canonical single channel grid and the four channel display form.
"""

from __future__ import annotations

from typing import Any, Iterable, Literal, Sequence, Union

import numpy as np
import PIL.Image

from .config import LUMA_WEIGHTS, MAX_REGION_DISPLAY_PIXELS, MAX_VALUE, MIN_VALUE
from .pixel_format import PixelFormat, PixelFormatTypes

RasterSourceTypes = Union[np.ndarray, Sequence[Sequence[Any]]]
"The valid source types for constructing a raster from pixel data"


def round_half_up(values: np.ndarray | float) -> np.ndarray:
    """Round to the nearest integer with ties going towards +infinity.

    numpy's own rounding rounds ties to even which would shift values such
    as 126.5 by one step compared to the reference outputs.
    """
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


def quantize(values: np.ndarray | float) -> np.ndarray:
    """Round and clamp arbitrary numbers into storable 8-bit samples.

    NaN becomes 0, infinities saturate to 0 and 255.
    """
    values = np.nan_to_num(np.asarray(values, dtype=np.float64), nan=0.0)
    return np.clip(round_half_up(values), MIN_VALUE, MAX_VALUE).astype(np.uint8)


def luma(rgb: np.ndarray) -> np.ndarray:
    """Weighted RGB brightness as float64, not yet rounded.

    :param rgb: Array whose last axis holds at least R, G and B.
    """
    rgb = rgb.astype(np.float64)
    wr, wg, wb = LUMA_WEIGHTS
    return wr * rgb[..., 0] + wg * rgb[..., 1] + wb * rgb[..., 2]


def require_grid(raster: Raster, operation: str) -> np.ndarray:
    """Read-only samples of a gray raster; ValueError for any other format."""
    if raster.pixel_format is not PixelFormat.GRAY:
        raise ValueError(
            f"{operation} expects a GRAY raster, got {raster.pixel_format.value}"
        )
    return raster.pixels


def _check_coordinates(x: Any, y: Any) -> None:
    for name, value in (("x", x), ("y", y)):
        if not isinstance(value, (int, np.integer)):
            raise ValueError(f"Pixel {name} coordinate must be an integer, got {value!r}")


def _check_dimensions(width: Any, height: Any) -> None:
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ValueError(f"Raster {name} must be an integer, got {value!r}")
        if value <= 0:
            raise ValueError(f"Raster {name} must be positive, got {value}")


class Raster:
    """
    A rectangular grid of 8-bit samples with explicit width and height.

    Samples are stored row-major in a numpy array of shape ``(height, width)``
    for :attr:`PixelFormat.GRAY` or ``(height, width, 4)`` for
    :attr:`PixelFormat.RGBA`. Every stored sample is an integer in
    ``[0, 255]``; non 8-bit input is rounded half up and clamped on
    construction.
    """

    def __init__(
        self,
        pixels: RasterSourceTypes,
        pixel_format: PixelFormatTypes | None = None,
        copy: bool = True,
    ):
        """
        :param pixels: The sample data, a 2D array for gray rasters or a
            ``(height, width, 4)`` array for RGBA rasters.
        :param pixel_format: The pixel format. Inferred from the array rank
            if not specified.
        :param copy: Copy uint8 input instead of referencing it. Internal
            callers which allocate a fresh array pass False.

        Raises a ValueError if the geometry is invalid.
        """
        array = np.asarray(pixels)
        if pixel_format is None:
            pixel_format = PixelFormat.GRAY if array.ndim == 2 else PixelFormat.RGBA
        self.pixel_format = PixelFormat(pixel_format)
        "The sample layout"

        if self.pixel_format is PixelFormat.GRAY:
            if array.ndim != 2:
                raise ValueError(
                    f"Gray rasters need a 2D array, got shape {array.shape}"
                )
        elif array.ndim != 3 or array.shape[2] != 4:
            raise ValueError(
                f"RGBA rasters need an array of shape (H, W, 4), got {array.shape}"
            )
        if array.shape[0] == 0 or array.shape[1] == 0:
            raise ValueError(
                f"Raster dimensions must be positive, got {array.shape[1]}x{array.shape[0]}"
            )

        if array.dtype == np.uint8:
            self._pixels = array.copy() if copy else array
        else:
            if array.dtype.kind not in "biuf":
                raise ValueError(f"Unsupported sample dtype: {array.dtype}")
            self._pixels = quantize(array)

    @classmethod
    def from_samples(
        cls,
        width: int,
        height: int,
        samples: Iterable[float],
        pixel_format: PixelFormatTypes = PixelFormat.GRAY,
    ) -> Raster:
        """
        Creates a raster from a flat, row-major sample sequence.

        :param width: The width in pixels
        :param height: The height in pixels
        :param samples: ``width * height`` samples for gray rasters,
            ``width * height * 4`` interleaved samples for RGBA rasters
        :param pixel_format: The pixel format of the samples
        :return: The new raster
        """
        pixel_format = PixelFormat(pixel_format)
        _check_dimensions(width, height)
        flat = np.asarray(list(samples) if not isinstance(samples, np.ndarray) else samples)
        expected = width * height * pixel_format.channels
        if flat.ndim != 1 or flat.size != expected:
            raise ValueError(
                f"Expected {expected} samples for a {width}x{height} "
                f"{pixel_format.value} raster, got {flat.size}"
            )
        if pixel_format is PixelFormat.GRAY:
            shape = (height, width)
        else:
            shape = (height, width, 4)
        return cls(flat.reshape(shape), pixel_format)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> Raster:
        """Creates a gray raster from a list of equally long rows."""
        if len(rows) == 0:
            raise ValueError("Raster dimensions must be positive, got no rows")
        row_lengths = {len(row) for row in rows}
        if len(row_lengths) != 1:
            raise ValueError(f"All rows must have the same length, got {sorted(row_lengths)}")
        return cls(np.array(rows), PixelFormat.GRAY)

    @classmethod
    def create_empty(cls, width: int, height: int, fill_value: float = 0) -> Raster:
        """Creates a gray raster with every sample set to ``fill_value``."""
        _check_dimensions(width, height)
        pixels = np.full((height, width), quantize(fill_value), dtype=np.uint8)
        return cls(pixels, PixelFormat.GRAY, copy=False)

    @classmethod
    def from_pil(cls, image: PIL.Image.Image) -> Raster:
        """
        Wraps an image decoded by Pillow.

        Single channel images become gray rasters, everything else is
        converted to RGBA.
        """
        if image.mode == "L":
            return cls(np.asarray(image), PixelFormat.GRAY)
        return cls(np.asarray(image.convert("RGBA")), PixelFormat.RGBA)

    def to_pil(self) -> PIL.Image.Image:
        """Returns a Pillow image holding a copy of the samples."""
        return PIL.Image.fromarray(self.get_pixels())

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        """The size as (width, height)"""
        return self.width, self.height

    @property
    def channels(self) -> int:
        return self.pixel_format.channels

    @property
    def pixels(self) -> np.ndarray:
        """Read-only view onto the samples."""
        view = self._pixels.view()
        view.flags.writeable = False
        return view

    def get_pixels(self) -> np.ndarray:
        """Returns an independent copy of the samples."""
        return self._pixels.copy()

    def to_list(self) -> list:
        """The samples as nested Python lists, row by row."""
        return self._pixels.tolist()

    def copy(self) -> Raster:
        return Raster(self._pixels, self.pixel_format, copy=True)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> int:
        """
        Returns the sample at (x, y), or 0 for any coordinate outside the
        raster. RGBA rasters return the luma of the pixel. Coordinates must
        be integers, anything else raises a ValueError.
        """
        _check_coordinates(x, y)
        if not self.in_bounds(x, y):
            return 0
        if self.pixel_format is PixelFormat.GRAY:
            return int(self._pixels[y, x])
        return int(quantize(luma(self._pixels[y, x])))

    def set_pixel(self, x: int, y: int, value: float) -> None:
        """
        Stores ``value`` rounded and clamped to [0, 255]. Coordinates outside
        the raster are ignored. RGBA rasters receive the value in R, G and B,
        alpha is kept. NaN is stored as 0. Non-integer coordinates raise a
        ValueError.
        """
        _check_coordinates(x, y)
        if not self.in_bounds(x, y):
            return
        sample = quantize(value)
        if self.pixel_format is PixelFormat.GRAY:
            self._pixels[y, x] = sample
        else:
            self._pixels[y, x, :3] = sample

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Raster):
            return NotImplemented
        return (
            self.pixel_format is other.pixel_format
            and self._pixels.shape == other._pixels.shape
            and bool(np.array_equal(self._pixels, other._pixels))
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"Raster({self.width}x{self.height}, {self.pixel_format.value})"


def get_pixel(raster: Raster, x: int, y: int) -> int:
    """Sample at (x, y); 0 outside the raster."""
    return raster.get_pixel(x, y)


def set_pixel(raster: Raster, x: int, y: int, value: float) -> None:
    """Stores a rounded, clamped sample; no-op outside the raster."""
    raster.set_pixel(x, y, value)


def to_grid(raster: Raster) -> Raster:
    """
    Converts a raster into the canonical single channel luma grid.

    Each pixel becomes ``round(0.299*R + 0.587*G + 0.114*B)``, ties rounding
    up. Alpha is discarded. Gray rasters are copied unchanged.
    """
    if raster.pixel_format is PixelFormat.GRAY:
        return raster.copy()
    return Raster(quantize(luma(raster.pixels)), PixelFormat.GRAY, copy=False)


def from_grid(grid: Raster | RasterSourceTypes) -> Raster:
    """
    Converts a luma grid into a fully opaque RGBA raster for display.

    Raw arrays are accepted as well and clamped to [0, 255] first.
    """
    if not isinstance(grid, Raster):
        grid = Raster(grid, PixelFormat.GRAY)
    if grid.pixel_format is not PixelFormat.GRAY:
        raise ValueError(f"from_grid expects a GRAY raster, got {grid.pixel_format.value}")
    gray = grid.pixels
    rgba = np.empty((grid.height, grid.width, 4), dtype=np.uint8)
    rgba[..., 0] = gray
    rgba[..., 1] = gray
    rgba[..., 2] = gray
    rgba[..., 3] = MAX_VALUE
    return Raster(rgba, PixelFormat.RGBA, copy=False)


def region_values(raster: Raster, x: int, y: int, width: int, height: int) -> list[list[int]]:
    """
    Reads the samples of a rectangular selection.

    Cells outside the raster read as 0, matching :func:`get_pixel`.

    :param raster: The raster to read from
    :param x: Left edge of the selection
    :param y: Top edge of the selection
    :param width: Selection width
    :param height: Selection height
    :return: One list of samples per selected row
    """
    return [
        [raster.get_pixel(col, row) for col in range(x, x + width)]
        for row in range(y, y + height)
    ]


def can_display_region(width: int, height: int) -> bool:
    """Whether a selection is small enough to list its individual samples."""
    return width * height <= MAX_REGION_DISPLAY_PIXELS


def display_size(
    width: int, height: int, max_pixel_ratio: float | Literal["auto"] = "auto"
) -> tuple[int, int]:
    """
    Computes the on-screen size of a raster.

    With ``"auto"`` the native size is kept, otherwise the raster is scaled
    so that its longer side spans ``max_pixel_ratio`` display pixels.
    """
    if max_pixel_ratio == "auto":
        return width, height
    scale = max_pixel_ratio / max(width, height)
    return int(round_half_up(width * scale)), int(round_half_up(height * scale))


__all__ = [
    "Raster",
    "RasterSourceTypes",
    "round_half_up",
    "quantize",
    "require_grid",
    "luma",
    "get_pixel",
    "set_pixel",
    "to_grid",
    "from_grid",
    "region_values",
    "can_display_region",
    "display_size",
]
