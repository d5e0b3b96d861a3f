"""
Locate and decode the JSON metadata at the top of an ISF shader.

No GLSL is parsed: the first ``/* ... */`` comment of the source is taken to
be the ISF dictionary.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from .errors import MalformedMetadata, NoCommentFound
from .model import Isf

LOG = logging.getLogger(__name__)

COMMENT_OPEN = "/*"
COMMENT_CLOSE = "*/"


def top_comment_contents(glsl_src: str) -> Optional[str]:
    """
    Return the stripped text of the first ``/* */`` comment, or ``None``.
    """

    start = glsl_src.find(COMMENT_OPEN)
    if start < 0:
        return None
    start += len(COMMENT_OPEN)
    end = glsl_src.find(COMMENT_CLOSE, start)
    if end < 0:
        return None
    return glsl_src[start:end].strip()


def parse(glsl_src: str) -> Isf:
    """
    Decode the ISF dictionary embedded in ``glsl_src``.

    Raises :class:`~isf.errors.NoCommentFound` when the source has no
    terminated top comment and :class:`~isf.errors.MalformedMetadata` when
    the comment is not a valid ISF document.
    """

    contents = top_comment_contents(glsl_src)
    if contents is None:
        raise NoCommentFound()
    return loads(contents)


def loads(json_text: str) -> Isf:
    """Decode a bare ISF JSON document."""

    try:
        # Wire keys are the uppercase aliases only; attribute names are ignored.
        isf = Isf.model_validate_json(json_text, by_alias=True, by_name=False)
    except ValidationError as exc:
        LOG.debug("ISF metadata rejected: %s", exc)
        raise MalformedMetadata(exc) from exc
    LOG.debug("Decoded ISF metadata with %d input(s), %d pass(es)", len(isf.inputs), len(isf.passes))
    return isf


def dumps(isf: Isf, indent: Optional[int] = None) -> str:
    """
    Encode ``isf`` as JSON text.

    Only populated fields are written.  Pass ``indent`` for pretty output.
    """

    return isf.model_dump_json(indent=indent)
