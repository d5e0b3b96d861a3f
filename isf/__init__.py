"""
Typed access to ISF (Interactive Shader Format) metadata.

An ISF shader starts with a ``/* ... */`` comment holding a JSON dictionary
that declares the shader's inputs, render passes and imported images.
:func:`parse` turns a shader source into an :class:`Isf` value and
:func:`dumps` writes it back out; a parsed shader re-encodes to the same
fields it was read from.
"""

from __future__ import annotations

__all__ = [
    "AudioFFTInput",
    "AudioInput",
    "BoolInput",
    "CoercionError",
    "ColorInput",
    "EventInput",
    "FloatInput",
    "INPUT_TYPES",
    "ISFError",
    "ImageImport",
    "ImageInput",
    "Input",
    "Isf",
    "LongInput",
    "MalformedMetadata",
    "NoCommentFound",
    "Pass",
    "Point2DInput",
    "UnknownInputType",
    "UnreadableShader",
    "dumps",
    "loads",
    "parse",
    "top_comment_contents",
]

from .errors import (
    CoercionError,
    ISFError,
    MalformedMetadata,
    NoCommentFound,
    UnknownInputType,
    UnreadableShader,
)
from .inputs import (
    INPUT_TYPES,
    AudioFFTInput,
    AudioInput,
    BoolInput,
    ColorInput,
    EventInput,
    FloatInput,
    ImageInput,
    Input,
    LongInput,
    Point2DInput,
)
from .model import ImageImport, Isf, Pass
from .parser import dumps, loads, parse, top_comment_contents
