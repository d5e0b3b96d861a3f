"""
Exception types raised while decoding ISF metadata.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import ValidationError


class ISFError(ValueError):
    """Base class for errors surfaced by :func:`isf.parse` and friends."""


class NoCommentFound(ISFError):
    """Raised when the source has no ``/* ... */`` block holding the metadata."""

    def __init__(self, message: str = "missing top comment") -> None:
        super().__init__(message)


class MalformedMetadata(ISFError):
    """
    Raised when the comment contents are not a valid ISF document.

    The underlying :class:`pydantic.ValidationError` is kept as ``__cause__``
    and its entries are reachable through :meth:`errors`.
    """

    def __init__(self, error: ValidationError) -> None:
        self.validation_error = error
        super().__init__(self._format(error))

    def errors(self) -> List[Dict[str, Any]]:
        """JSON-safe ``loc``/``msg``/``type`` entries, one per failure."""

        return [
            {"loc": list(entry["loc"]), "msg": entry["msg"], "type": entry["type"]}
            for entry in self.validation_error.errors(include_url=False)
        ]

    @staticmethod
    def _format(error: ValidationError) -> str:
        lines = [f"invalid ISF metadata ({error.error_count()} error(s))"]
        for entry in error.errors(include_url=False):
            location = ".".join(str(part) for part in entry["loc"]) or "<root>"
            lines.append(f"  {location}: {entry['msg']}")
        return "\n".join(lines)


class ConfigError(ISFError):
    """Raised when a configuration file cannot be used."""


class CoercionError(ValueError):
    """A wire value could not be converted to its in-memory type."""

    def __init__(self, field: Optional[str], message: str) -> None:
        self.field = field
        self.reason = message
        super().__init__(f"{field}: {message}" if field else message)


class UnknownInputType(CoercionError):
    """An input record carried a ``TYPE`` tag outside the known set."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__("TYPE", f"unknown input type {tag!r}")


class UnreadableShader(ISFError):
    """Raised when a shader file is not valid UTF-8 text."""
