"""
Maps operation ids of the playground catalog onto filters.

Each supported id is bound to a :class:`~rasterlab.filters.base.Filter`
class plus the operation parameters it reads. Lookup is a plain table, ids
without a binding (and the restoration placeholders) fall back to
:class:`~rasterlab.filters.color.Invert`.

Usage:
    from rasterlab.operations import apply_operation

    result = apply_operation(grid, 'contrast', {'factor': 2.0})
    result = apply_operation(grid, find_operation('wrap-padding'))
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
import numbers
from typing import Any, Callable, Iterable, Mapping, Union

from .catalog import Operation
from .config import (
    DEFAULT_BLUR_RADIUS,
    DEFAULT_CONTRAST_FACTOR,
    DEFAULT_CUSTOM_VALUE,
    DEFAULT_PADDING_SIZE,
    DEFAULT_THRESHOLD,
)
from .filters import (
    Contrast,
    Equalize,
    Filter,
    FilterContext,
    FilterPipeline,
    GaussianBlur,
    Grayscale,
    Invert,
    Pad,
    PaddingMode,
    Sharpen,
    SobelEdges,
    Threshold,
)
from .raster import Raster

logger = logging.getLogger(__name__)

OperationTypes = Union[Operation, Mapping[str, Any], str]
"An operation given as catalog model, as plain mapping or as bare id"


@dataclass(frozen=True)
class ParameterBinding:
    """Reads one operation parameter into one filter field."""

    key: str
    default: float
    convert: Callable[[float], Any] = float


@dataclass(frozen=True)
class OperationBinding:
    """The filter an operation id runs and how its parameters are read."""

    filter_cls: type[Filter]
    parameters: dict[str, ParameterBinding] = field(default_factory=dict)
    fixed: dict[str, Any] = field(default_factory=dict)

    def build(self, parameters: Mapping[str, Any] | None = None) -> Filter:
        parameters = parameters or {}
        kwargs = dict(self.fixed)
        for name, binding in self.parameters.items():
            value = numeric_parameter(parameters, binding.key, binding.default)
            kwargs[name] = binding.convert(value)
        return self.filter_cls(**kwargs)


OPERATION_TABLE: dict[str, OperationBinding] = {}
PLACEHOLDER_OPERATIONS = ('deblurring', 'denoising', 'inpainting')
FALLBACK_BINDING = OperationBinding(Invert)


def register_operation(
    operation_id: str,
    filter_cls: type[Filter],
    parameters: dict[str, ParameterBinding] | None = None,
    **fixed: Any,
) -> None:
    """Bind an operation id to a filter class.

    :param operation_id: The catalog id, e.g. 'wrap-padding'
    :param filter_cls: The filter to run
    :param parameters: Filter field name -> operation parameter binding
    :param fixed: Filter fields which do not come from the operation
    """
    OPERATION_TABLE[operation_id] = OperationBinding(filter_cls, parameters or {}, fixed)


def numeric_parameter(parameters: Mapping[str, Any], key: str, default: float) -> float:
    """The value of ``key`` if it is a finite real number, else ``default``.

    Booleans, strings, None and everything else count as not supplied.
    """
    value = parameters.get(key)
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return default
    if not math.isfinite(value):
        return default
    return value


_padding_size = ParameterBinding('paddingSize', DEFAULT_PADDING_SIZE, int)

register_operation('contrast', Contrast,
                   {'factor': ParameterBinding('factor', DEFAULT_CONTRAST_FACTOR)})
register_operation('histogram', Equalize)
register_operation('noise-removal', GaussianBlur,
                   {'radius': ParameterBinding('radius', DEFAULT_BLUR_RADIUS, int)})
register_operation('sharpening', Sharpen)
register_operation('edge-detection', SobelEdges)
register_operation('thresholding', Threshold,
                   {'cutoff': ParameterBinding('threshold', DEFAULT_THRESHOLD)})
register_operation('color-space', Grayscale)
register_operation('zero-padding', Pad, {'padding_size': _padding_size},
                   mode=PaddingMode.ZERO)
register_operation('replicate-padding', Pad, {'padding_size': _padding_size},
                   mode=PaddingMode.REPLICATE)
register_operation('reflect-padding', Pad, {'padding_size': _padding_size},
                   mode=PaddingMode.REFLECT)
register_operation('symmetric-padding', Pad, {'padding_size': _padding_size},
                   mode=PaddingMode.SYMMETRIC)
register_operation('wrap-padding', Pad, {'padding_size': _padding_size},
                   mode=PaddingMode.WRAP)
register_operation('custom-padding', Pad, {
    'padding_size': _padding_size,
    'custom_value': ParameterBinding('customValue', DEFAULT_CUSTOM_VALUE, int),
}, mode=PaddingMode.CUSTOM)


def _as_operation(operation: OperationTypes) -> Operation:
    if isinstance(operation, Operation):
        return operation
    if isinstance(operation, str):
        return Operation(id=operation)
    return Operation.model_validate(dict(operation))


def is_implemented(operation_id: str) -> bool:
    """Whether an id runs its own transform rather than the invert fallback."""
    return operation_id in OPERATION_TABLE


def build_filter(
    operation: OperationTypes,
    parameters: Mapping[str, Any] | None = None,
) -> Filter:
    """Resolve an operation into a configured filter without running it.

    :param operation: Catalog operation, mapping with ``id`` and
        ``parameters``, or a bare operation id
    :param parameters: Overrides merged over the operation's own parameters
    :returns: The bound filter. Unknown and placeholder ids yield Invert.
    """
    operation = _as_operation(operation)
    overrides = parameters if isinstance(parameters, Mapping) else {}
    merged = {**operation.parameters, **overrides}

    binding = OPERATION_TABLE.get(operation.id)
    if binding is None:
        if operation.id in PLACEHOLDER_OPERATIONS:
            logger.debug(f"Operation '{operation.id}' is a placeholder, using invert")
        else:
            logger.info(f"No transform registered for operation '{operation.id}', "
                        f"falling back to invert")
        binding = FALLBACK_BINDING

    filter_obj = binding.build(merged)
    logger.debug(f"Operation '{operation.id}' -> {filter_obj.to_string()}")
    return filter_obj


def apply_operation(
    raster: Raster,
    operation: OperationTypes,
    parameters: Mapping[str, Any] | None = None,
    context: FilterContext | None = None,
) -> Raster:
    """Run a catalog operation on a raster and return the new raster.

    The input is never modified. Unknown operation ids are not an error,
    they invert the raster.
    """
    filter_obj = build_filter(operation, parameters)
    return filter_obj(raster, context)


def build_pipeline(operations: Iterable[OperationTypes]) -> FilterPipeline:
    """Chain operations the way the playground re-applies them to its last result.

    Example:
        pipeline = build_pipeline(['contrast', find_operation('wrap-padding')])
        result = pipeline(grid)
    """
    return FilterPipeline([build_filter(operation) for operation in operations])


__all__ = [
    'OperationTypes',
    'ParameterBinding',
    'OperationBinding',
    'OPERATION_TABLE',
    'PLACEHOLDER_OPERATIONS',
    'FALLBACK_BINDING',
    'register_operation',
    'numeric_parameter',
    'is_implemented',
    'build_filter',
    'apply_operation',
    'build_pipeline',
]
