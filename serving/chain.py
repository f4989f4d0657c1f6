"""
Request handler chain.

Each stage implements a single capability, ``handle(request) -> Response``.
Middlewares hold the next stage and decide whether, and how, to delegate.
The chain is composed explicitly by ``build_chain``:

    HighlightMiddleware -> NoCacheMiddleware -> FileResponder
"""

from __future__ import annotations

from flask import Request, Response

from serving.config import ServerConfig


class Handler:
    def handle(self, request: Request) -> Response:
        raise NotImplementedError


class Middleware(Handler):
    def __init__(self, next_handler: Handler):
        self.next_handler = next_handler


def build_chain(config: ServerConfig) -> Handler:
    # Imported here: the stages import Handler/Middleware from this module.
    from serving.highlight import HighlightMiddleware
    from serving.no_cache import NoCacheMiddleware
    from serving.responder import FileResponder

    responder = FileResponder(config.directory)
    cached = NoCacheMiddleware(responder, enabled=config.disable_cache)
    return HighlightMiddleware(config.directory, cached)
