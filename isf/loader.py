"""
Load ISF shaders from disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from .errors import ISFError, NoCommentFound, UnreadableShader
from .model import Isf
from .parser import parse

LOG = logging.getLogger(__name__)

FRAGMENT_SUFFIX = ".fs"
VERTEX_SUFFIX = ".vs"
SHADER_SUFFIXES = (FRAGMENT_SUFFIX, VERTEX_SUFFIX)


@dataclass(frozen=True)
class ISFShader:
    path: Path
    metadata: Isf

    @property
    def id(self) -> str:
        return self.path.name

    @property
    def name(self) -> str:
        return self.path.stem

    @classmethod
    def load(cls, path: str | Path) -> "ISFShader":
        """
        Read ``path`` as UTF-8 and decode its ISF dictionary.

        Raises ``FileNotFoundError`` for missing files and the
        :class:`~isf.errors.ISFError` subclasses for undecodable text or bad
        metadata.
        """

        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(path)
        try:
            source = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise UnreadableShader(f"{path.name} is not valid UTF-8: {exc.reason}") from exc
        return cls(path=path, metadata=parse(source))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "metadata": self.metadata.to_dict(),
        }


@dataclass(frozen=True)
class ShaderLoadFailure:
    path: Path
    error: Exception

    def to_dict(self) -> dict:
        return {
            "id": self.path.name,
            "error": type(self.error).__name__,
            "detail": str(self.error),
        }


@dataclass
class ScanResult:
    shaders: List[ISFShader] = field(default_factory=list)
    failures: List[ShaderLoadFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def find(self, shader_id: str) -> Optional[ISFShader]:
        for shader in self.shaders:
            if shader.id == shader_id:
                return shader
        return None


def iter_shader_files(directory: Path) -> Iterator[Path]:
    for entry in sorted(directory.iterdir()):
        if entry.is_file() and entry.suffix.lower() in SHADER_SUFFIXES:
            yield entry


def scan_directory(directory: str | Path, *, skip_plain_vertex: bool = True) -> ScanResult:
    """
    Load every ``.fs``/``.vs`` file in ``directory``.

    Vertex shaders are allowed to omit the ISF comment; when
    ``skip_plain_vertex`` is set those files are skipped instead of being
    reported.  Any other failure is collected in the result.
    """

    directory = Path(directory)
    if not directory.is_dir():
        raise NotADirectoryError(directory)
    return _collect(iter_shader_files(directory), skip_plain_vertex=skip_plain_vertex)


def _collect(paths: Iterable[Path], *, skip_plain_vertex: bool) -> ScanResult:
    result = ScanResult()
    for path in paths:
        try:
            result.shaders.append(ISFShader.load(path))
        except NoCommentFound as exc:
            if skip_plain_vertex and path.suffix.lower() == VERTEX_SUFFIX:
                LOG.debug("Skipping %s: vertex shader without ISF metadata", path)
                continue
            LOG.warning("Failed to load %s: %s", path, exc)
            result.failures.append(ShaderLoadFailure(path=path, error=exc))
        except (ISFError, OSError) as exc:
            LOG.warning("Failed to load %s: %s", path, exc)
            result.failures.append(ShaderLoadFailure(path=path, error=exc))
    LOG.info("Loaded %d shader(s), %d failure(s)", len(result.shaders), len(result.failures))
    return result
