"""Local file server with optional syntax highlighting and cache busting."""

from serving.chain import Handler, Middleware, build_chain
from serving.config import ServerConfig, parse_args

__all__ = ["Handler", "Middleware", "ServerConfig", "build_chain", "parse_args"]
