"""Engine-wide constants and operation parameter defaults.

These values are shared by the transforms, the filter classes and the
operation dispatcher so that a parameter missing from an operation resolves
to the same default everywhere.
"""

# Luma weights (ITU-R BT.601) used for every RGB -> gray conversion
LUMA_WEIGHTS: tuple[float, float, float] = (0.299, 0.587, 0.114)

# Sample range of every stored raster value
MIN_VALUE = 0
MAX_VALUE = 255

# Number of histogram bins (one per 8-bit intensity)
HISTOGRAM_BINS = 256

# Operation parameter defaults
DEFAULT_CONTRAST_FACTOR: float = 1.5
DEFAULT_THRESHOLD: int = 128
DEFAULT_PADDING_SIZE: int = 10
DEFAULT_BLUR_RADIUS: int = 1
DEFAULT_CUSTOM_RGB: tuple[int, int, int] = (128, 128, 128)
DEFAULT_CUSTOM_VALUE: int = (128 << 16) | (128 << 8) | 128
"Packed mid-gray, (r << 16) | (g << 8) | b"

# Selection regions larger than this are summarized instead of listed
MAX_REGION_DISPLAY_PIXELS = 200
