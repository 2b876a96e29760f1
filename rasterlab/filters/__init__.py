# RasterLab Filters Module
"""
Dataclass-based filter system over the pixel-buffer transform engine.

Each transform exists twice: as a plain function (``adjust_contrast``,
``gaussian_blur``, ``pad`` ...) and as a JSON-serializable ``Filter``
that can be parsed from text and composed into pipelines.
"""

from .base import (
    Filter,
    FilterContext,
    FILTER_REGISTRY,
    FILTER_ALIASES,
    register_filter,
    register_alias,
    resolve_filter_class,
)

from .color import (
    adjust_contrast,
    threshold,
    invert,
    grayscale,
    Contrast,
    Threshold,
    Invert,
    Grayscale,
)

from .convolution import (
    SHARPEN_KERNEL,
    gaussian_kernel,
    convolve_interior,
    gaussian_blur,
    sharpen,
    GaussianBlur,
    Sharpen,
)

from .edge import (
    SOBEL_X,
    SOBEL_Y,
    sobel_gradients,
    sobel_edge_detection,
    SobelEdges,
)

from .histogram import (
    compute_histogram,
    cumulative_distribution,
    equalization_lut,
    equalize_histogram,
    Equalize,
)

from .padding import (
    PaddingMode,
    pack_rgb,
    unpack_rgb,
    custom_fill_value,
    pad,
    zero_padding,
    replicate_padding,
    edge_padding,
    reflect_padding,
    symmetric_padding,
    wrap_padding,
    custom_padding,
    Pad,
)

from .pipeline import FilterPipeline, APPLIED_STEPS_KEY

__all__ = [
    # Base
    'Filter',
    'FilterContext',
    'FILTER_REGISTRY',
    'FILTER_ALIASES',
    'register_filter',
    'register_alias',
    'resolve_filter_class',
    # Point transforms
    'adjust_contrast',
    'threshold',
    'invert',
    'grayscale',
    'Contrast',
    'Threshold',
    'Invert',
    'Grayscale',
    # Convolution
    'SHARPEN_KERNEL',
    'gaussian_kernel',
    'convolve_interior',
    'gaussian_blur',
    'sharpen',
    'GaussianBlur',
    'Sharpen',
    # Edge detection
    'SOBEL_X',
    'SOBEL_Y',
    'sobel_gradients',
    'sobel_edge_detection',
    'SobelEdges',
    # Histogram
    'compute_histogram',
    'cumulative_distribution',
    'equalization_lut',
    'equalize_histogram',
    'Equalize',
    # Padding
    'PaddingMode',
    'pack_rgb',
    'unpack_rgb',
    'custom_fill_value',
    'pad',
    'zero_padding',
    'replicate_padding',
    'edge_padding',
    'reflect_padding',
    'symmetric_padding',
    'wrap_padding',
    'custom_padding',
    'Pad',
    # Pipeline
    'FilterPipeline',
    'APPLIED_STEPS_KEY',
]
