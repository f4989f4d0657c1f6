"""
Syntax-highlighting middleware
------------------------------

Renders source files as a standalone HTML page (Pygments, ``monokai``
style, inline colours) instead of sending the raw bytes. Markup,
stylesheet and script files are never touched so pages still load.

Highlighting is a best-effort enhancement: every step (resolve, stat,
read, decode, highlight) yields a ``Highlighted`` result, and any failure
is logged and answered by the next handler with the untouched request.
The raw file is still served, or the responder's own 404.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from typing import Optional, Tuple

from flask import Request, Response
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import (
    TextLexer,
    get_lexer_for_filename,
    guess_lexer,
    guess_lexer_for_filename,
)
from pygments.util import ClassNotFound

from serving.chain import Handler, Middleware
from serving.responder import resolve

logger = logging.getLogger(__name__)

SKIP_SUFFIXES: Tuple[str, ...] = ("html", "css", "js")
STYLE = "monokai"


@dataclass
class Highlighted:
    html: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.html is not None


def should_skip(path: str) -> bool:
    return path.endswith(SKIP_SUFFIXES)


def pick_lexer(filename: str, text: str) -> Lexer:
    """File name, then file name and content, then content alone, then plain text."""
    for by_name in (get_lexer_for_filename, guess_lexer_for_filename):
        try:
            return by_name(filename, text)
        except ClassNotFound:
            pass
    try:
        return guess_lexer(text)
    except ClassNotFound:
        return TextLexer()


def render(filename: str, text: str) -> str:
    formatter = HtmlFormatter(full=True, style=STYLE, noclasses=True, title=filename)
    return highlight(text, pick_lexer(filename, text), formatter)


class HighlightMiddleware(Middleware):
    def __init__(self, directory: str, next_handler: Handler):
        super().__init__(next_handler)
        self.root = os.path.abspath(directory)

    def handle(self, request: Request) -> Response:
        if should_skip(request.path):
            return self.next_handler.handle(request)

        result = self.highlight_path(request.path)
        if not result.ok:
            return self.next_handler.handle(request)
        return Response(result.html, mimetype="text/html")

    def highlight_path(self, url_path: str) -> Highlighted:
        fp = resolve(self.root, url_path)
        if fp is None:
            logger.warning("fail to resolve - %s: outside of %s", url_path, self.root)
            return Highlighted(reason="resolve")

        try:
            st = os.stat(fp)
        except OSError as e:
            logger.warning("fail to stat - %s: %s", fp, e)
            return Highlighted(reason="stat")
        if stat.S_ISDIR(st.st_mode):
            return Highlighted(reason="directory")

        try:
            f = open(fp, "rb")
        except OSError as e:
            logger.warning("fail to open - %s: %s", fp, e)
            return Highlighted(reason="open")
        try:
            with f:
                data = f.read()
        except OSError as e:
            logger.warning("fail to read - %s: %s", fp, e)
            return Highlighted(reason="read")

        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning("fail to decode - %s: %s", fp, e)
            return Highlighted(reason="decode")

        try:
            html = render(os.path.basename(fp), text)
        except Exception as e:
            logger.warning("fail to highlight - %s: %s", fp, e)
            return Highlighted(reason="highlight")
        return Highlighted(html=html)
