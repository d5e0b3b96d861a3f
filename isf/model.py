"""
Pydantic models for the top-level ISF dictionary.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_serializer, validator

from .coercion import coerce_bool, coerce_opt_string
from .inputs import Input

WIRE_CONFIG = ConfigDict(
    frozen=True,
    extra="ignore",
    validate_by_name=True,
    validate_by_alias=True,
    serialize_by_alias=True,
)


def _is_unset(value: Any) -> bool:
    return value is None or value is False or (isinstance(value, (list, tuple, dict)) and not value)


class _WireModel(BaseModel):
    """Base for records whose absent fields are left out of the encoded form."""

    model_config = WIRE_CONFIG

    @model_serializer(mode="wrap")
    def _omit_unset(self, handler) -> Dict[str, Any]:
        data = handler(self)
        return {key: value for key, value in data.items() if not _is_unset(value)}


class ImageImport(_WireModel):
    """An imported image; ``path`` keeps the text exactly as written."""

    path: str = Field(alias="PATH")


class Pass(_WireModel):
    """
    One render pass.

    ``width`` and ``height`` stay strings because the format allows
    expressions such as ``"$WIDTH/2.0"`` as well as plain numbers.
    """

    target: Optional[str] = Field(default=None, alias="TARGET")
    persistent: bool = Field(default=False, alias="PERSISTENT")
    float_buffer: bool = Field(default=False, alias="FLOAT")
    width: Optional[str] = Field(default=None, alias="WIDTH")
    height: Optional[str] = Field(default=None, alias="HEIGHT")

    @validator("persistent", "float_buffer", pre=True)
    def _lenient_flag(cls, value: Any) -> bool:
        return coerce_bool(value)

    @validator("width", "height", pre=True)
    def _lenient_dimension(cls, value: Any) -> Optional[str]:
        return coerce_opt_string(value)


class Isf(_WireModel):
    """The decoded metadata block of one ISF shader."""

    isfvsn: Optional[str] = Field(default=None, alias="ISFVSN")
    vsn: Optional[str] = Field(default=None, alias="VSN")
    description: Optional[str] = Field(default=None, alias="DESCRIPTION")
    credit: Optional[str] = Field(default=None, alias="CREDIT")
    categories: Tuple[str, ...] = Field(default=(), alias="CATEGORIES")
    inputs: Tuple[Input, ...] = Field(default=(), alias="INPUTS")
    passes: Tuple[Pass, ...] = Field(default=(), alias="PASSES")
    imported: Dict[str, ImageImport] = Field(default_factory=dict, alias="IMPORTED")

    def input(self, name: str) -> Input:
        for item in self.inputs:
            if item.name == name:
                return item
        raise KeyError(name)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
