"""
Conversions from loosely typed JSON values to the types used by the model.

ISF files in the wild encode booleans as ``0``/``1`` and pass dimensions as
either numbers or strings.  The helpers here accept those historical shapes and
reject everything else with a :class:`~isf.errors.CoercionError`.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Any, Optional, Tuple

from pydantic import StrictFloat, StrictStr, TypeAdapter, ValidationError, conint

from .errors import CoercionError

I32 = conint(strict=True, ge=-(2**31), le=2**31 - 1)
U32 = conint(strict=True, ge=0, le=2**32 - 1)
F32 = StrictFloat
Point2D = Tuple[F32, F32]
ColorValue = Tuple[F32, ...]
I32List = Tuple[I32, ...]
StrList = Tuple[StrictStr, ...]


@lru_cache(maxsize=None)
def _adapter(kind: Any) -> TypeAdapter:
    return TypeAdapter(kind)


def coerce_bool(value: Any, field: Optional[str] = None) -> bool:
    """
    Accept ``true``/``false`` as well as integer and float flags.

    Floats are truncated toward zero before the nonzero test, so ``0.5`` is
    ``False`` and ``-1.5`` is ``True``.
    """

    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, float):
        if not math.isfinite(value):
            raise CoercionError(field, f"cannot interpret {value!r} as a boolean")
        return int(value) != 0
    raise CoercionError(field, f"expected a boolean or a number, got {_describe(value)}")


def coerce_opt_string(value: Any, field: Optional[str] = None) -> Optional[str]:
    """
    Accept a string, a number (rendered in decimal form) or ``null``.
    """

    if value is None:
        return None
    if isinstance(value, bool):
        raise CoercionError(field, "expected a string or a number, got a boolean")
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return value
    raise CoercionError(field, f"expected a string or a number, got {_describe(value)}")


def coerce_value(kind: Any, value: Any, field: Optional[str] = None) -> Any:
    """Decode ``value`` as ``kind`` using pydantic's typed validation."""

    try:
        return _adapter(kind).validate_python(value)
    except ValidationError as exc:
        raise CoercionError(field, _summarize(exc)) from exc


def coerce_optional(kind: Any, value: Any, field: Optional[str] = None) -> Any:
    if value is None:
        return None
    return coerce_value(kind, value, field)


def _summarize(error: ValidationError) -> str:
    parts = []
    for entry in error.errors(include_url=False):
        loc = ".".join(str(item) for item in entry["loc"])
        parts.append(f"[{loc}] {entry['msg']}" if loc else entry["msg"])
    return "; ".join(parts)


def _describe(value: Any) -> str:
    if isinstance(value, list):
        return "an array"
    if isinstance(value, dict):
        return "an object"
    if isinstance(value, str):
        return "a string"
    if value is None:
        return "null"
    return type(value).__name__
