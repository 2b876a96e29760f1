"""
The static operation catalog of the image-processing playground.

The catalog is read-only reference data: the playground lists it in its
sidebar and hands the chosen :class:`Operation` (with caller-edited
parameters) to :func:`rasterlab.operations.apply_operation`. Only some of the
listed operations have a transform; see
:data:`rasterlab.operations.OPERATION_TABLE`.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import (
    DEFAULT_CONTRAST_FACTOR,
    DEFAULT_CUSTOM_VALUE,
    DEFAULT_PADDING_SIZE,
)


class Operation(BaseModel):
    """A catalog entry, or an operation request built by the caller.

    Only ``id`` and ``parameters`` are used when an operation is applied.
    Parameter values are kept as given; non-numeric values are replaced by
    defaults at dispatch time instead of being rejected here.
    """

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    id: str
    name: str = ''
    category: str = ''
    subcategory: str | None = None
    description: str = ''
    parameters: dict[str, Any] = Field(default_factory=dict)

    @field_validator('parameters', mode='before')
    @classmethod
    def parameters_default_to_empty(cls, value: Any) -> Any:
        # A missing or malformed parameter map means "use the defaults"
        return value if isinstance(value, Mapping) else {}

    def with_parameters(self, **parameters: Any) -> 'Operation':
        """Copy of this operation with ``parameters`` merged over the current ones."""
        merged = {**self.parameters, **parameters}
        return self.model_copy(update={'parameters': merged}, deep=True)


class ProcessingSubcategory(BaseModel):
    id: str
    name: str
    operations: list[Operation] = Field(default_factory=list)


class ProcessingCategory(BaseModel):
    """Top level catalog group, holding operations directly or via subcategories."""

    id: str
    name: str
    subcategories: list[ProcessingSubcategory] = Field(default_factory=list)
    operations: list[Operation] = Field(default_factory=list)

    def iter_operations(self) -> Iterator[Operation]:
        for subcategory in self.subcategories:
            yield from subcategory.operations
        yield from self.operations


def _op(operation_id: str, name: str, category: str, description: str,
        subcategory: str | None = None, **parameters: Any) -> Operation:
    return Operation(id=operation_id, name=name, category=category, subcategory=subcategory,
                     description=description, parameters=parameters)


PROCESSING_CATEGORIES: list[ProcessingCategory] = [
    ProcessingCategory(id='acquisition', name='Image Acquisition', operations=[
        _op('capture', 'Capture Image', 'acquisition',
            'Capturing image via sensors or input devices'),
    ]),
    ProcessingCategory(id='preprocessing', name='Preprocessing', subcategories=[
        ProcessingSubcategory(id='enhancement', name='Image Enhancement', operations=[
            _op('contrast', 'Contrast Adjustment', 'preprocessing',
                'Adjust image contrast', 'enhancement', factor=DEFAULT_CONTRAST_FACTOR),
            _op('histogram', 'Histogram Equalization', 'preprocessing',
                'Equalize histogram for better contrast distribution', 'enhancement'),
            _op('noise-removal', 'Noise Removal', 'preprocessing',
                'Remove noise using smoothing and filtering', 'enhancement'),
            _op('sharpening', 'Sharpening', 'preprocessing',
                'Enhance image sharpness', 'enhancement'),
        ]),
        ProcessingSubcategory(id='restoration', name='Image Restoration', operations=[
            _op('deblurring', 'Deblurring', 'preprocessing',
                'Remove blur from images', 'restoration'),
            _op('denoising', 'Denoising', 'preprocessing',
                'Advanced noise removal', 'restoration'),
            _op('inpainting', 'Inpainting', 'preprocessing',
                'Fill missing parts of the image', 'restoration'),
        ]),
    ]),
    ProcessingCategory(id='color-processing', name='Color Image Processing', operations=[
        _op('color-space', 'Color Space Conversion', 'color-processing',
            'Convert between RGB, HSV, YCbCr, etc.'),
        _op('white-balance', 'White Balancing', 'color-processing', 'Adjust white balance'),
        _op('color-correction', 'Color Correction', 'color-processing',
            'Correct color distortions'),
        _op('false-coloring', 'False Coloring', 'color-processing', 'Apply false color mapping'),
    ]),
    ProcessingCategory(id='morphological', name='Morphological Processing', operations=[
        _op('dilation', 'Dilation', 'morphological', 'Morphological dilation operation'),
        _op('erosion', 'Erosion', 'morphological', 'Morphological erosion operation'),
        _op('opening', 'Opening', 'morphological',
            'Morphological opening (erosion followed by dilation)'),
        _op('closing', 'Closing', 'morphological',
            'Morphological closing (dilation followed by erosion)'),
    ]),
    ProcessingCategory(id='segmentation', name='Image Segmentation', operations=[
        _op('thresholding', 'Thresholding', 'segmentation', 'Binary and adaptive thresholding'),
        _op('edge-detection', 'Edge Detection', 'segmentation',
            'Detect edges using Canny, Sobel, etc.'),
        _op('region-segmentation', 'Region-based Segmentation', 'segmentation',
            'Segment image into regions'),
        _op('clustering', 'Clustering', 'segmentation', 'K-means and other clustering methods'),
    ]),
    ProcessingCategory(id='representation', name='Representation & Description', operations=[
        _op('boundary-representation', 'Boundary Representation', 'representation',
            'Extract contours and boundaries'),
        _op('region-representation', 'Region Representation', 'representation',
            'Analyze texture and shape'),
        _op('feature-extraction', 'Feature Extraction', 'representation',
            'Extract key features from image'),
    ]),
    ProcessingCategory(id='recognition', name='Object Recognition', operations=[
        _op('template-matching', 'Template Matching', 'recognition', 'Match templates in image'),
        _op('classification', 'ML Classification', 'recognition',
            'Machine learning-based classification'),
    ]),
    ProcessingCategory(id='compression', name='Image Compression', operations=[
        _op('lossless', 'Lossless Compression', 'compression', 'PNG, GIF style compression'),
        _op('lossy', 'Lossy Compression', 'compression', 'JPEG, WebP style compression'),
    ]),
    ProcessingCategory(id='analysis', name='Image Analysis', operations=[
        _op('pattern-recognition', 'Pattern Recognition', 'analysis',
            'Recognize patterns in image'),
        _op('measurements', 'Quantitative Measurements', 'analysis',
            'Measure area, perimeter, etc.'),
    ]),
    ProcessingCategory(id='visualization', name='Visualization', operations=[
        _op('pseudocoloring', 'Pseudocoloring', 'visualization', 'Apply false color mapping'),
        _op('3d-visualization', '3D Visualization', 'visualization',
            'Create 3D representations'),
    ]),
    ProcessingCategory(id='padding', name='Image Padding Operations', operations=[
        _op('zero-padding', 'Zero Padding', 'padding',
            'Constant padding with value 0 - most common in deep learning',
            paddingSize=DEFAULT_PADDING_SIZE),
        _op('replicate-padding', 'Replicate Padding', 'padding',
            'Edge padding - extends edge values outward', paddingSize=DEFAULT_PADDING_SIZE),
        _op('reflect-padding', 'Reflect Padding', 'padding',
            'Mirrors image at border (excluding edge)', paddingSize=DEFAULT_PADDING_SIZE),
        _op('symmetric-padding', 'Symmetric Padding', 'padding',
            'Mirrors image including edge pixel (Reflect_101)', paddingSize=DEFAULT_PADDING_SIZE),
        _op('wrap-padding', 'Wrap Padding', 'padding',
            'Circular padding - wraps image values from opposite edge',
            paddingSize=DEFAULT_PADDING_SIZE),
        _op('custom-padding', 'Custom Padding', 'padding',
            'Custom value padding for specialized cases',
            paddingSize=DEFAULT_PADDING_SIZE, customValue=DEFAULT_CUSTOM_VALUE),
    ]),
]


def iter_operations() -> Iterator[Operation]:
    """All catalog operations in sidebar order."""
    for category in PROCESSING_CATEGORIES:
        yield from category.iter_operations()


def find_operation(operation_id: str) -> Operation | None:
    """Look up a catalog entry by id.

    Returns an independent copy so callers may edit its parameters.
    """
    for operation in iter_operations():
        if operation.id == operation_id:
            return operation.model_copy(deep=True)
    return None


__all__ = [
    'Operation',
    'ProcessingSubcategory',
    'ProcessingCategory',
    'PROCESSING_CATEGORIES',
    'iter_operations',
    'find_operation',
]
