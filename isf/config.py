"""
Settings for the ISF command line tool and HTTP service.

Values are resolved from, in increasing priority: built-in defaults, a YAML
file, ``ISF_*`` environment variables and explicit overrides from the caller.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError
from .utils.logging import resolve_level

LOG = logging.getLogger(__name__)

ENV_SHADER_DIR = "ISF_SHADER_DIR"
ENV_LOG_LEVEL = "ISF_LOG_LEVEL"

KNOWN_KEYS = {"shader_dir", "log_level", "indent"}


@dataclass(frozen=True)
class ISFConfig:
    shader_dir: Path = Path(".")
    log_level: str = "INFO"
    indent: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "shader_dir", Path(self.shader_dir).expanduser())
        try:
            resolve_level(self.log_level)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        if self.indent is not None and (
            isinstance(self.indent, bool) or not isinstance(self.indent, int) or self.indent < 0
        ):
            raise ConfigError(f"indent must be a non-negative integer, got {self.indent!r}")

    def to_dict(self) -> dict:
        return {
            "shader_dir": str(self.shader_dir),
            "log_level": self.log_level,
            "indent": self.indent,
        }

    @classmethod
    def load(
        cls,
        path: Optional[Path | str] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "ISFConfig":
        """
        Build a configuration from ``path``, the environment and ``overrides``.

        Overrides whose value is ``None`` are ignored so argparse defaults can
        be passed through unchanged.
        """

        env = os.environ if environ is None else environ
        config = cls()

        if path is not None:
            config = replace(config, **_read_yaml(Path(path)))

        from_env: Dict[str, Any] = {}
        if env.get(ENV_SHADER_DIR):
            from_env["shader_dir"] = Path(env[ENV_SHADER_DIR])
        if env.get(ENV_LOG_LEVEL):
            from_env["log_level"] = env[ENV_LOG_LEVEL]
        if from_env:
            config = replace(config, **from_env)

        explicit = {key: value for key, value in overrides.items() if value is not None}
        unknown = set(explicit) - KNOWN_KEYS
        if unknown:
            raise TypeError(f"unknown config override(s): {', '.join(sorted(unknown))}")
        if explicit:
            config = replace(config, **explicit)
        return config


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            document = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigError(f"config file {path} must contain a mapping")

    values: Dict[str, Any] = {}
    for key, value in document.items():
        if key not in KNOWN_KEYS:
            LOG.warning("Ignoring unknown config key %r in %s", key, path)
            continue
        values[key] = value
    if "shader_dir" in values:
        shader_dir = Path(str(values["shader_dir"])).expanduser()
        if not shader_dir.is_absolute():
            shader_dir = path.parent / shader_dir
        values["shader_dir"] = shader_dir
    if "log_level" in values:
        values["log_level"] = str(values["log_level"])
    return values
