"""
Static file responder.

Maps the request path onto a file under the served root and streams it
back using Flask's ``send_file`` (MIME guessing, conditional requests and
byte ranges come from there). Directories redirect to their slash form,
serve ``index.html`` when present, and otherwise get a plain listing.
"""

from __future__ import annotations

import os
from typing import List
from urllib.parse import quote

from flask import Request, Response, redirect, send_file
from markupsafe import escape
from werkzeug.exceptions import NotFound
from werkzeug.security import safe_join

from serving.chain import Handler

INDEX_PAGE = "index.html"


def resolve(root: str, url_path: str):
    """Join a URL path onto root, or return None if it would escape it."""
    relative = url_path.lstrip("/")
    if not relative:
        return root
    return safe_join(root, relative)


class FileResponder(Handler):
    def __init__(self, directory: str):
        # send_file treats relative paths as relative to the app root
        self.root = os.path.abspath(directory)

    def handle(self, request: Request) -> Response:
        target = resolve(self.root, request.path)
        if target is None:
            return NotFound().get_response(request.environ)

        if os.path.isdir(target):
            if not request.path.endswith("/"):
                location = request.path + "/"
                if request.query_string:
                    location += "?" + request.query_string.decode("latin-1")
                return redirect(location, code=301)
            index = os.path.join(target, INDEX_PAGE)
            if os.path.isfile(index):
                return self._send(index)
            return self._listing(target)

        if not os.path.isfile(target):
            return NotFound().get_response(request.environ)
        return self._send(target)

    def _send(self, path: str) -> Response:
        rv = send_file(path, conditional=True)
        # send_file adds no-cache when max_age is None; leave caching to the client
        rv.cache_control.no_cache = None
        return rv

    def _listing(self, directory: str) -> Response:
        entries: List[str] = []
        with os.scandir(directory) as it:
            for entry in sorted(it, key=lambda e: e.name):
                name = entry.name + ("/" if entry.is_dir() else "")
                entries.append(f'<a href="{escape(quote(name))}">{escape(name)}</a>')
        body = (
            "<!doctype html>\n"
            '<meta name="viewport" content="width=device-width">\n'
            "<pre>\n" + "\n".join(entries) + "\n</pre>\n"
        )
        return Response(body, mimetype="text/html")
