"""Strip cache validators from requests and force no-cache on responses."""

from __future__ import annotations

from typing import Dict, Tuple

from flask import Request, Response
from werkzeug.http import http_date

from serving.chain import Handler, Middleware

NO_CACHE_HEADERS: Dict[str, str] = {
    "Expires": http_date(0),
    "Cache-Control": "no-cache, private, max-age=0",
    "Pragma": "no-cache",
    "X-Accel-Expires": "0",
}

CONDITIONAL_HEADERS: Tuple[str, ...] = (
    "ETag",
    "If-Modified-Since",
    "If-Match",
    "If-None-Match",
    "If-Range",
    "If-Unmodified-Since",
)


def _environ_key(header: str) -> str:
    return "HTTP_" + header.upper().replace("-", "_")


class NoCacheMiddleware(Middleware):
    def __init__(self, next_handler: Handler, enabled: bool = True):
        super().__init__(next_handler)
        self.enabled = enabled

    def handle(self, request: Request) -> Response:
        if not self.enabled:
            return self.next_handler.handle(request)

        # request.headers is a live view over the environ
        for header in CONDITIONAL_HEADERS:
            request.environ.pop(_environ_key(header), None)

        response = self.next_handler.handle(request)
        for name, value in NO_CACHE_HEADERS.items():
            response.headers[name] = value
        return response
