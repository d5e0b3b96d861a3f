"""
Command line entrypoint.

``isf parse`` prints the canonical JSON of one shader, ``isf inputs`` lists its
parameters, ``isf scan`` checks a whole directory and ``isf serve`` starts the
HTTP service.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from .config import ISFConfig
from .errors import ConfigError, ISFError
from .loader import ISFShader, scan_directory
from .parser import dumps
from .utils.logging import configure_logging

LOG = logging.getLogger(__name__)


def _describe_input(item) -> str:
    label = f" ({item.label})" if item.label else ""
    return f"{item.name}\t{item.type}{label}"


def cmd_parse(args: argparse.Namespace, config: ISFConfig, out: TextIO) -> int:
    shader = ISFShader.load(args.path)
    indent = args.indent if args.indent is not None else config.indent
    out.write(dumps(shader.metadata, indent=indent))
    out.write("\n")
    return 0


def cmd_inputs(args: argparse.Namespace, config: ISFConfig, out: TextIO) -> int:
    shader = ISFShader.load(args.path)
    for item in shader.metadata.inputs:
        out.write(_describe_input(item) + "\n")
    return 0


def cmd_scan(args: argparse.Namespace, config: ISFConfig, out: TextIO) -> int:
    directory = Path(args.directory) if args.directory else config.shader_dir
    result = scan_directory(directory, skip_plain_vertex=not args.strict)
    for shader in result.shaders:
        out.write(f"ok\t{shader.id}\t{len(shader.metadata.inputs)} input(s)\n")
    for failure in result.failures:
        first_line = str(failure.error).splitlines()[0]
        out.write(f"fail\t{failure.path.name}\t{first_line}\n")
    out.write(f"{len(result.shaders)} loaded, {len(result.failures)} failed\n")
    return 0 if result.ok else 1


def cmd_serve(args: argparse.Namespace, config: ISFConfig, out: TextIO) -> int:
    import uvicorn

    from .api.server import create_app

    app = create_app(config=config)
    LOG.info("Serving ISF metadata from %s on %s:%s", config.shader_dir, args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_config=None, log_level=config.log_level.lower())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="isf", description="Inspect ISF shader metadata")
    parser.add_argument("--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("--log-level", default=None, help="logging level (DEBUG, INFO, ...)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="print the ISF JSON of a shader")
    parse_cmd.add_argument("path", type=Path)
    parse_cmd.add_argument("--indent", type=int, default=None, help="pretty print with this indent")
    parse_cmd.set_defaults(handler=cmd_parse)

    inputs_cmd = subparsers.add_parser("inputs", help="list the inputs declared by a shader")
    inputs_cmd.add_argument("path", type=Path)
    inputs_cmd.set_defaults(handler=cmd_inputs)

    scan_cmd = subparsers.add_parser("scan", help="load every shader in a directory")
    scan_cmd.add_argument("directory", nargs="?", default=None)
    scan_cmd.add_argument(
        "--strict",
        action="store_true",
        help="report vertex shaders without metadata instead of skipping them",
    )
    scan_cmd.set_defaults(handler=cmd_scan)

    serve_cmd = subparsers.add_parser("serve", help="run the HTTP API")
    serve_cmd.add_argument("--host", default="127.0.0.1", help="bind host for the API server")
    serve_cmd.add_argument("--port", type=int, default=8080, help="bind port for the API server")
    serve_cmd.set_defaults(handler=cmd_serve)
    return parser


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def main(
    argv: Optional[list[str]] = None,
    *,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    args = parse_args(argv)
    out = out or sys.stdout
    err = err or sys.stderr

    try:
        config = ISFConfig.load(args.config, log_level=args.log_level)
    except ConfigError as exc:
        err.write(f"error: {exc}\n")
        return 2
    configure_logging(config.log_level)

    try:
        return args.handler(args, config, out)
    except FileNotFoundError as exc:
        err.write(f"error: no such file: {exc}\n")
    except NotADirectoryError as exc:
        err.write(f"error: not a directory: {exc}\n")
    except ISFError as exc:
        source = getattr(args, "path", None)
        prefix = f"{source}: " if source else ""
        err.write(f"error: {prefix}{exc}\n")
    return 1


def run(argv: Optional[list[str]] = None) -> None:
    try:
        sys.exit(main(argv))
    except KeyboardInterrupt:
        LOG.info("Interrupted by user.")


if __name__ == "__main__":
    run()
