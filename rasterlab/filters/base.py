# RasterLab Filters - Base Classes
"""
Base classes for the filter system.

All filters are dataclasses with JSON serialization support. A filter is a
pure function of its parameters and the input raster: it never modifies the
input and never keeps state between calls.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, field, MISSING
from enum import Enum
from typing import Any, ClassVar
import json
import re

from rasterlab.pixel_format import PixelFormat
from rasterlab.raster import Raster, to_grid


@dataclass
class FilterContext:
    """Scratch data shared by the steps of one pipeline run.

    Filters may leave intermediate results here, e.g. the histogram an
    equalization step computed from its input.
    """

    data: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.data[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self.data

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def copy(self) -> 'FilterContext':
        return FilterContext(data=dict(self.data))


# Global registries
FILTER_REGISTRY: dict[str, type['Filter']] = {}
FILTER_ALIASES: dict[str, type['Filter'] | tuple[type['Filter'], dict[str, Any]]] = {}


def register_filter(cls: type['Filter']) -> type['Filter']:
    """Decorator to register a filter class under its name and lowercase name."""
    FILTER_REGISTRY[cls.__name__] = cls
    FILTER_REGISTRY[cls.__name__.lower()] = cls
    return cls


def register_alias(
    alias: str,
    cls: type['Filter'],
    **default_params: Any
) -> None:
    """Register a short name for a filter, optionally presetting parameters.

    Examples:
        register_alias('blur', GaussianBlur)
        register_alias('wrap_pad', Pad, mode='wrap')
    """
    FILTER_ALIASES[alias.lower()] = (cls, default_params) if default_params else cls


def resolve_filter_class(name: str) -> tuple[type['Filter'] | None, dict[str, Any]]:
    """Filter class and preset parameters for a class name or alias."""
    entry = FILTER_ALIASES.get(name.lower())
    if isinstance(entry, tuple):
        return entry[0], dict(entry[1])
    if entry is not None:
        return entry, {}
    return FILTER_REGISTRY.get(name) or FILTER_REGISTRY.get(name.lower()), {}


@dataclass
class Filter(ABC):
    """Base class for all filters.

    Filters declare which pixel formats they work on via ``_accepted_formats``.
    When ``_implicit_conversion`` is enabled (default), a raster in another
    format is converted to the canonical gray grid before ``apply()`` runs.

    Example:
        @register_filter
        @dataclass
        class MyFilter(Filter):
            amount: float = 1.0

            def apply(self, raster: Raster, context: FilterContext | None = None) -> Raster:
                # Can assume raster is a GRAY grid
                ...
    """

    # Parameter filled by the first positional DSL argument
    _primary_param: ClassVar[str | None] = None

    _accepted_formats: ClassVar[list[PixelFormat] | None] = [PixelFormat.GRAY]  # None = any
    _implicit_conversion: ClassVar[bool] = True

    @abstractmethod
    def apply(self, raster: Raster, context: FilterContext | None = None) -> Raster:
        """Apply filter to a raster and return a newly allocated result.

        :param raster: The input raster. Never modified.
        :param context: Optional scratch data of the surrounding pipeline run.
        :returns: The processed raster.
        """

    def __call__(self, raster: Raster, context: FilterContext | None = None) -> Raster:
        """Apply the filter, converting the input format first if required."""
        return self.apply(self.prepare_input(raster), context)

    def prepare_input(self, raster: Raster) -> Raster:
        """Convert ``raster`` into a format this filter accepts.

        Raises a ValueError if the format is not accepted and implicit
        conversion is disabled.
        """
        if self.accepts_format(raster.pixel_format):
            return raster
        if not self._implicit_conversion:
            raise ValueError(
                f"{self.type} does not accept {raster.pixel_format.value} rasters"
            )
        return to_grid(raster)

    @classmethod
    def get_accepted_formats(cls) -> list[PixelFormat] | None:
        """Accepted input formats, or None if any format is accepted."""
        return cls._accepted_formats

    @classmethod
    def accepts_format(cls, pixel_format: PixelFormat) -> bool:
        return cls._accepted_formats is None or pixel_format in cls._accepted_formats

    @property
    def type(self) -> str:
        """Filter type name for serialization."""
        return self.__class__.__name__

    def parameters(self) -> dict[str, Any]:
        """The public dataclass fields and their current values."""
        return {f.name: getattr(self, f.name) for f in fields(self) if not f.name.startswith('_')}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON types; enums become their value."""
        data = {name: _plain_value(value) for name, value in self.parameters().items()}
        data['type'] = self.type
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Filter':
        """Deserialize a filter written by :meth:`to_dict`."""
        data = dict(data)
        filter_type = data.pop('type', cls.__name__)

        filter_cls = FILTER_REGISTRY.get(filter_type) or FILTER_REGISTRY.get(filter_type.lower())
        if filter_cls is None:
            raise ValueError(f"Unknown filter type: {filter_type}")

        if filter_cls is not cls and "from_dict" in vars(filter_cls):
            # Container filters (e.g. pipelines) deserialize their children themselves
            return filter_cls.from_dict({'type': filter_type, **data})

        return filter_cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> 'Filter':
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def parse(cls, text: str) -> 'Filter':
        """Parse a single filter from its compact text form.

        The first token names the filter (class name or alias). Further
        tokens are ``key=value`` pairs or positional values; the first
        positional value fills the primary parameter, the rest follow in
        field order.

        Examples:
            'contrast 2.0'
            'threshold cutoff=100'
            'wrap_pad 4'
            'custom_pad 2 custom_value=255,0,0'
        """
        tokens = _tokenize(text)
        if not tokens:
            raise ValueError(f"Invalid filter format: {text!r}")

        filter_cls, kwargs = resolve_filter_class(tokens[0])
        if filter_cls is None:
            raise ValueError(f"Unknown filter: {tokens[0]}")

        positional = []
        for token in tokens[1:]:
            key, sep, value = token.partition('=')
            if sep:
                kwargs[key] = _parse_value(value)
            else:
                positional.append(_parse_value(token))

        names = _positional_order(filter_cls)
        if len(positional) > len(names):
            raise ValueError(
                f"{filter_cls.__name__} takes at most {len(names)} positional "
                f"arguments, got {len(positional)}"
            )
        for name, value in zip(names, positional):
            kwargs.setdefault(name, value)

        return filter_cls(**kwargs)

    def to_string(self) -> str:
        """Compact text form, listing only parameters that differ from their defaults.

        Examples:
            'contrast factor=2.0'
            'pad padding_size=4 mode=wrap'
        """
        defaults = {f.name: f.default for f in fields(self) if f.default is not MISSING}
        parts = [self.type.lower()]
        for name, value in self.parameters().items():
            if name in defaults and value == defaults[name]:
                continue
            parts.append(f"{name}={_format_value(value)}")
        return ' '.join(parts)


def _positional_order(filter_cls: type[Filter]) -> list[str]:
    names = [f.name for f in fields(filter_cls) if not f.name.startswith('_')]
    primary = filter_cls._primary_param
    if primary in names:
        names.remove(primary)
        names.insert(0, primary)
    return names


def _plain_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return list(value)
    return value


def _format_value(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (tuple, list)):
        return ','.join(str(v) for v in value)
    return str(value)


# A token is a run of non-space characters and quoted sections
_TOKEN = re.compile(r"""(?:'[^']*'|"[^"]*"|[^\s'"])+""")


def _tokenize(text: str) -> list[str]:
    """Split filter text on whitespace outside of quotes.

    ``"pad mode='wrap'"`` -> ``['pad', "mode='wrap'"]``
    """
    return _TOKEN.findall(text)


def _parse_value(text: str) -> int | float | bool | str | tuple:
    """Convert a DSL value into a Python value.

    Quoted text stays a string, comma separated values become tuples,
    true/false become booleans and numbers accept decimal, float and
    ``0x`` notation (packed colors). Anything else is kept as a string.
    """
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in '\'"':
        return text[1:-1]
    if ',' in text:
        return tuple(_parse_value(part) for part in text.split(','))
    if text.lower() in ('true', 'false'):
        return text.lower() == 'true'
    for convert in (lambda s: int(s, 0), float):
        try:
            return convert(text)
        except ValueError:
            continue
    return text
