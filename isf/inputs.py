"""
Typed ISF inputs.

On the wire every input is one flat dictionary::

    {"NAME": "amount", "TYPE": "float", "DEFAULT": 0.5, "MIN": 0.0, "MAX": 1.0}

The ``TYPE`` tag selects which of the other keys are meaningful.  In memory an
:class:`Input` carries its name, optional label and exactly one variant object
holding only the fields that make sense for that tag.  :meth:`Input.from_dict`
and :meth:`Input.to_dict` convert between the two shapes; a decoded input
re-encodes to the same keys it was decoded from, minus anything the tag does
not use.

``audio`` and ``audioFFT`` inputs store their sample/column count under the
``MAX`` key.  That quirk is part of the format and is kept as is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple, Type, Union

from pydantic import StrictStr
from pydantic_core import core_schema

from .coercion import (
    F32,
    I32,
    U32,
    ColorValue,
    I32List,
    Point2D,
    StrList,
    coerce_bool,
    coerce_optional,
    coerce_value,
)
from .errors import CoercionError, UnknownInputType

# (attribute, wire key) pairs shared by the numeric variants.
RANGE_KEYS = (
    ("default", "DEFAULT"),
    ("min", "MIN"),
    ("max", "MAX"),
    ("identity", "IDENTITY"),
)


def _tuple_or_none(value: Any) -> Optional[tuple]:
    return None if value is None else tuple(value)


class _RangeMixin:
    """Decode/encode helpers for variants carrying DEFAULT/MIN/MAX/IDENTITY."""

    VALUE_KIND: ClassVar[Any]

    @classmethod
    def _decode_range(cls, record: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            attr: coerce_optional(cls.VALUE_KIND, record.get(key), key)
            for attr, key in RANGE_KEYS
        }

    def _encode_range(self) -> Dict[str, Any]:
        encoded: Dict[str, Any] = {}
        for attr, key in RANGE_KEYS:
            value = getattr(self, attr)
            if value is None:
                continue
            encoded[key] = list(value) if isinstance(value, tuple) else value
        return encoded


@dataclass(frozen=True, slots=True)
class EventInput:
    """A momentary trigger; carries no value."""

    TYPE: ClassVar[str] = "event"

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "EventInput":
        return cls()

    def to_record(self) -> Dict[str, Any]:
        return {}


@dataclass(frozen=True, slots=True)
class BoolInput:
    TYPE: ClassVar[str] = "bool"

    default: Optional[bool] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "BoolInput":
        value = record.get("DEFAULT")
        return cls(default=None if value is None else coerce_bool(value, "DEFAULT"))

    def to_record(self) -> Dict[str, Any]:
        if self.default is None:
            return {}
        return {"DEFAULT": self.default}


@dataclass(frozen=True, slots=True)
class LongInput(_RangeMixin):
    """
    An integer choice.

    ``values`` and ``labels`` describe a popup menu.  They are kept as two
    independent sequences because published shaders do not always keep their
    lengths in step.
    """

    TYPE: ClassVar[str] = "long"
    VALUE_KIND: ClassVar[Any] = I32

    default: Optional[int] = None
    min: Optional[int] = None
    max: Optional[int] = None
    identity: Optional[int] = None
    values: Tuple[int, ...] = ()
    labels: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))
        object.__setattr__(self, "labels", tuple(self.labels))

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "LongInput":
        values = coerce_optional(I32List, record.get("VALUES"), "VALUES")
        labels = coerce_optional(StrList, record.get("LABELS"), "LABELS")
        return cls(
            **cls._decode_range(record),
            values=values or (),
            labels=labels or (),
        )

    def to_record(self) -> Dict[str, Any]:
        encoded = self._encode_range()
        if self.values:
            encoded["VALUES"] = list(self.values)
        if self.labels:
            encoded["LABELS"] = list(self.labels)
        return encoded


@dataclass(frozen=True, slots=True)
class FloatInput(_RangeMixin):
    TYPE: ClassVar[str] = "float"
    VALUE_KIND: ClassVar[Any] = F32

    default: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    identity: Optional[float] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "FloatInput":
        return cls(**cls._decode_range(record))

    def to_record(self) -> Dict[str, Any]:
        return self._encode_range()


@dataclass(frozen=True, slots=True)
class Point2DInput(_RangeMixin):
    """A 2D position; every value is an ``(x, y)`` pair."""

    TYPE: ClassVar[str] = "point2D"
    VALUE_KIND: ClassVar[Any] = Point2D

    default: Optional[Tuple[float, float]] = None
    min: Optional[Tuple[float, float]] = None
    max: Optional[Tuple[float, float]] = None
    identity: Optional[Tuple[float, float]] = None

    def __post_init__(self) -> None:
        for attr, _ in RANGE_KEYS:
            value = _tuple_or_none(getattr(self, attr))
            if value is not None and len(value) != 2:
                raise ValueError(f"{attr} must be an (x, y) pair, got {len(value)} values")
            object.__setattr__(self, attr, value)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Point2DInput":
        return cls(**cls._decode_range(record))

    def to_record(self) -> Dict[str, Any]:
        return self._encode_range()


@dataclass(frozen=True, slots=True)
class ColorInput(_RangeMixin):
    """An RGBA color.  Values are usually four floats but any length is kept."""

    TYPE: ClassVar[str] = "color"
    VALUE_KIND: ClassVar[Any] = ColorValue

    default: Optional[Tuple[float, ...]] = None
    min: Optional[Tuple[float, ...]] = None
    max: Optional[Tuple[float, ...]] = None
    identity: Optional[Tuple[float, ...]] = None

    def __post_init__(self) -> None:
        for attr, _ in RANGE_KEYS:
            object.__setattr__(self, attr, _tuple_or_none(getattr(self, attr)))

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ColorInput":
        return cls(**cls._decode_range(record))

    def to_record(self) -> Dict[str, Any]:
        return self._encode_range()


@dataclass(frozen=True, slots=True)
class ImageInput:
    TYPE: ClassVar[str] = "image"

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ImageInput":
        return cls()

    def to_record(self) -> Dict[str, Any]:
        return {}


@dataclass(frozen=True, slots=True)
class AudioInput:
    """Raw audio waveform; ``num_samples`` travels as ``MAX``."""

    TYPE: ClassVar[str] = "audio"

    num_samples: Optional[int] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "AudioInput":
        return cls(num_samples=coerce_optional(U32, record.get("MAX"), "MAX"))

    def to_record(self) -> Dict[str, Any]:
        if self.num_samples is None:
            return {}
        return {"MAX": self.num_samples}


@dataclass(frozen=True, slots=True)
class AudioFFTInput:
    """Audio spectrum; ``num_columns`` travels as ``MAX``."""

    TYPE: ClassVar[str] = "audioFFT"

    num_columns: Optional[int] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "AudioFFTInput":
        return cls(num_columns=coerce_optional(U32, record.get("MAX"), "MAX"))

    def to_record(self) -> Dict[str, Any]:
        if self.num_columns is None:
            return {}
        return {"MAX": self.num_columns}


InputVariant = Union[
    EventInput,
    BoolInput,
    LongInput,
    FloatInput,
    Point2DInput,
    ColorInput,
    ImageInput,
    AudioInput,
    AudioFFTInput,
]

INPUT_TYPES: Dict[str, Type[Any]] = {
    variant.TYPE: variant
    for variant in (
        EventInput,
        BoolInput,
        LongInput,
        FloatInput,
        Point2DInput,
        ColorInput,
        ImageInput,
        AudioInput,
        AudioFFTInput,
    )
}


@dataclass(frozen=True, slots=True)
class Input:
    """A single declared shader parameter."""

    name: str
    variant: InputVariant
    label: Optional[str] = None

    @property
    def type(self) -> str:
        return self.variant.TYPE

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "Input":
        """
        Decode one entry of the ``INPUTS`` array.

        Raises :class:`~isf.errors.CoercionError` when a present field has the
        wrong shape and :class:`~isf.errors.UnknownInputType` when ``TYPE``
        names no known variant.
        """

        if not isinstance(record, Mapping):
            raise CoercionError("INPUTS", "each input must be a JSON object")
        if "NAME" not in record:
            raise CoercionError("NAME", "field required")
        if "TYPE" not in record:
            raise CoercionError("TYPE", "field required")

        name = coerce_value(StrictStr, record["NAME"], "NAME")
        label = coerce_optional(StrictStr, record.get("LABEL"), "LABEL")
        tag = record["TYPE"]
        if not isinstance(tag, str):
            raise CoercionError("TYPE", "expected a string")

        variant_cls = INPUT_TYPES.get(tag)
        if variant_cls is None:
            raise UnknownInputType(tag)
        return cls(name=name, variant=variant_cls.from_record(record), label=label)

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {"NAME": self.name}
        if self.label is not None:
            record["LABEL"] = self.label
        record["TYPE"] = self.variant.TYPE
        record.update(self.variant.to_record())
        return record

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_dict()
            ),
        )

    @classmethod
    def _validate(cls, value: Any) -> "Input":
        if isinstance(value, cls):
            return value
        return cls.from_dict(value)

