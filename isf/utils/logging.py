"""
Logging setup shared by the command line tool and the HTTP service.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO, Union

DEFAULT_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"


def resolve_level(level: Union[int, str]) -> int:
    """Turn ``"debug"``/``"INFO"``/``10`` into a :mod:`logging` level number."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level {level!r}")
    return resolved


def configure_logging(
    level: Union[int, str] = logging.INFO,
    format: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure the root logger once.

    Records go to stderr by default so JSON written to stdout stays clean.
    """

    root = logging.getLogger()
    if root.handlers:
        # Respect any user provided configuration.
        root.setLevel(resolve_level(level))
        return

    logging.basicConfig(
        level=resolve_level(level),
        format=format or DEFAULT_FORMAT,
        handlers=[logging.StreamHandler(stream or sys.stderr)],
    )
