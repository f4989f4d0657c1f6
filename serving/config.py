"""
Server configuration.

Built once at startup from command-line flags (Go-style, single dash) with
environment variables as defaults, then handed to every component that
needs it. Nothing reads configuration from module globals.
"""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

DEFAULT_PORT = 3000
DEFAULT_DIR = "."
DEFAULT_HOST = "0.0.0.0"

_TRUE = {"1", "t", "true", "yes", "on"}
_FALSE = {"0", "f", "false", "no", "off"}


@dataclass(frozen=True)
class ServerConfig:
    port: int = DEFAULT_PORT
    directory: str = DEFAULT_DIR
    disable_cache: bool = False
    host: str = DEFAULT_HOST
    open_browser: bool = True


def parse_bool(value: str) -> bool:
    """Parse a flag value the way Go's flag package spells booleans."""
    lowered = str(value).strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")


def root_url(port: int) -> str:
    return f"http://localhost:{port}"


def build_parser(environ: Mapping[str, str]) -> argparse.ArgumentParser:
    try:
        default_port = int(environ.get("PORT", DEFAULT_PORT))
    except ValueError:
        default_port = DEFAULT_PORT
    try:
        default_disable = parse_bool(environ.get("DISABLE_CACHE", "false"))
    except argparse.ArgumentTypeError:
        default_disable = False

    parser = argparse.ArgumentParser(
        prog="codeserve",
        description="Serve a directory over HTTP, syntax-highlighting source files.",
    )
    parser.add_argument("-port", type=int, default=default_port,
                        help="port to host (default: %(default)s)")
    parser.add_argument("-dir", dest="directory",
                        default=environ.get("SERVE_DIR", DEFAULT_DIR),
                        help="directory to host (default: %(default)s)")
    parser.add_argument("-disable-cache", dest="disable_cache", type=parse_bool,
                        nargs="?", const=True, default=default_disable,
                        help="disable http cache")
    parser.add_argument("-host", default=DEFAULT_HOST,
                        help="address to bind (default: %(default)s)")
    parser.add_argument("-open", dest="open_browser", type=parse_bool,
                        nargs="?", const=True, default=True,
                        help="open the served url in a browser once listening")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None,
               environ: Optional[Mapping[str, str]] = None) -> ServerConfig:
    """Build a ServerConfig from argv (defaults to sys.argv[1:])."""
    env = os.environ if environ is None else environ
    args = build_parser(env).parse_args(argv)
    return ServerConfig(
        port=args.port,
        directory=args.directory,
        disable_cache=args.disable_cache,
        host=args.host,
        open_browser=args.open_browser,
    )
