# RasterLab Filters - Pipeline
"""
Sequential composition of filters.

The playground re-applies operations to the previous result; a
:class:`FilterPipeline` captures such a session as one filter. Steps are
written ``step | step`` (or ``step; step``) in the compact text form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterable, Iterator
import re

from rasterlab.pixel_format import PixelFormat
from rasterlab.raster import Raster

from .base import Filter, FilterContext, register_filter

STEP_SEPARATOR = re.compile(r'[|;]')

# Context key listing the compact form of every step that ran
APPLIED_STEPS_KEY = 'applied_steps'


@register_filter
@dataclass
class FilterPipeline(Filter):
    """Runs its steps in order, each on the previous step's output.

    Steps convert their input themselves, so an RGBA raster may enter the
    pipeline directly. An empty pipeline returns a copy of its input.
    """

    _accepted_formats: ClassVar[list[PixelFormat] | None] = None

    filters: list[Filter] = field(default_factory=list)

    def apply(self, raster: Raster, context: FilterContext | None = None) -> Raster:
        result = raster
        for step in self.filters:
            result = step(result, context)
            if context is not None:
                context.data.setdefault(APPLIED_STEPS_KEY, []).append(step.to_string())
        if result is raster:
            return raster.copy()
        return result

    def append(self, step: Filter) -> 'FilterPipeline':
        self.filters.append(step)
        return self

    def extend(self, steps: Iterable[Filter]) -> 'FilterPipeline':
        self.filters.extend(steps)
        return self

    def __len__(self) -> int:
        return len(self.filters)

    def __iter__(self) -> Iterator[Filter]:
        return iter(self.filters)

    def __getitem__(self, index: int) -> Filter:
        return self.filters[index]

    def to_dict(self) -> dict[str, Any]:
        return {'type': self.type, 'filters': [step.to_dict() for step in self.filters]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'FilterPipeline':
        return cls(filters=[Filter.from_dict(step) for step in data.get('filters', [])])

    @classmethod
    def parse(cls, text: str) -> 'FilterPipeline':
        """Parse ``'contrast 2.0 | threshold 100'`` into a pipeline.

        Empty steps are skipped, so an empty string gives an empty pipeline.
        """
        steps = (part.strip() for part in STEP_SEPARATOR.split(text or ''))
        return cls(filters=[Filter.parse(step) for step in steps if step])

    def to_string(self) -> str:
        return '|'.join(step.to_string() for step in self.filters)


__all__ = [
    'FilterPipeline',
    'APPLIED_STEPS_KEY',
]
