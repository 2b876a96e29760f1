"""
RasterLab - A pixel-buffer transform engine for an image-processing playground
"""

from .pixel_format import PixelFormat, PixelFormatTypes
from .raster import (
    Raster,
    RasterSourceTypes,
    round_half_up,
    quantize,
    luma,
    get_pixel,
    set_pixel,
    to_grid,
    from_grid,
    region_values,
    can_display_region,
    display_size,
)
from .filters import (
    Filter,
    FilterContext,
    FilterPipeline,
    PaddingMode,
    adjust_contrast,
    threshold,
    invert,
    grayscale,
    gaussian_blur,
    sharpen,
    sobel_edge_detection,
    equalize_histogram,
    pad,
    zero_padding,
    replicate_padding,
    edge_padding,
    reflect_padding,
    symmetric_padding,
    wrap_padding,
    custom_padding,
)
from .catalog import (
    Operation,
    ProcessingCategory,
    ProcessingSubcategory,
    PROCESSING_CATEGORIES,
    iter_operations,
    find_operation,
)
from .operations import apply_operation, build_filter, build_pipeline, is_implemented

__all__ = [
    # Raster
    "Raster",
    "RasterSourceTypes",
    "PixelFormat",
    "PixelFormatTypes",
    "round_half_up",
    "quantize",
    "luma",
    "get_pixel",
    "set_pixel",
    "to_grid",
    "from_grid",
    "region_values",
    "can_display_region",
    "display_size",
    # Transforms
    "adjust_contrast",
    "threshold",
    "invert",
    "grayscale",
    "gaussian_blur",
    "sharpen",
    "sobel_edge_detection",
    "equalize_histogram",
    "PaddingMode",
    "pad",
    "zero_padding",
    "replicate_padding",
    "edge_padding",
    "reflect_padding",
    "symmetric_padding",
    "wrap_padding",
    "custom_padding",
    # Filters
    "Filter",
    "FilterContext",
    "FilterPipeline",
    # Catalog and dispatch
    "Operation",
    "ProcessingCategory",
    "ProcessingSubcategory",
    "PROCESSING_CATEGORIES",
    "iter_operations",
    "find_operation",
    "apply_operation",
    "build_filter",
    "build_pipeline",
    "is_implemented",
]

__version__ = "0.1.0"
