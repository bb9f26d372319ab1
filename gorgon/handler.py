"""Request handling for the Gorgon dev server.

RequestHandler turns a method and path into a Response. Sitemap pages are
rendered fresh on every request; anything else is looked up in ``prebuild/``.
This is the one place where errors raised while rendering become visible to
the user instead of being fatal: they are returned as a 500 response carrying
the traceback.
"""

from __future__ import annotations

import re
import traceback
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlsplit

from .errors import NotConfiguredError
from .utils import content_type_for

if TYPE_CHECKING:
    from .site import Site

ALLOWED_METHODS = ("GET", "HEAD", "OPTIONS")

# A final path segment without a dot names a directory.
_DIRECTORY_RE = re.compile(r"/[^./]+$")


@dataclass
class Response:
    """Status, content type and body of a response."""

    status: int
    content_type: str
    body: bytes


def _plain(status: int, text: str) -> Response:
    return Response(status, "text/plain", text.encode("utf-8"))


def normalize_path(raw_path: str) -> str:
    """Map a request path to a sitemap path.

    Examples:
        >>> normalize_path("/")
        'index.html'
        >>> normalize_path("/about")
        'about/index.html'
        >>> normalize_path("/css/main.css?v=2")
        'css/main.css'
    """
    path = unquote(urlsplit(raw_path).path) or "/"
    if path.endswith("/"):
        path += "index.html"
    elif _DIRECTORY_RE.search(path):
        path += "/index.html"
    return path.lstrip("/")


def format_exception(exc: BaseException) -> str:
    """Return an exception with its traceback as text for a 500 response."""
    frames = traceback.format_tb(exc.__traceback__)
    lines = [line.rstrip("\n") for frame in frames for line in frame.splitlines()]
    return f"{type(exc).__name__}: {exc}\n\n\t" + "\n\t".join(lines)


class RequestHandler:
    """Serves a configured Site.

    Attributes:
        site: The site being served.
    """

    def __init__(self, site: Site):
        self.site = site

    def handle(self, method: str, raw_path: str) -> Response:
        """Return the response for one request.

        Raises:
            NotConfiguredError: If the site has not been configured.
        """
        if not self.site.configured:
            raise NotConfiguredError("Site configuration incomplete!")
        if method.upper() not in ALLOWED_METHODS:
            return _plain(405, "METHOD NOT ALLOWED")
        try:
            return self._respond(normalize_path(raw_path))
        except Exception as exc:
            full_exception = format_exception(exc)
            print(full_exception)
            return _plain(500, full_exception)

    def _respond(self, path: str) -> Response:
        site = self.site
        if path in site.sitemap:
            ctx = site.pipeline.new_context()
            content = site.pipeline.render_page(path, ctx)
            return Response(200, content_type_for(path), content)

        prebuild_dir = site.config.prebuild_dir.resolve()
        candidate = (prebuild_dir / path).resolve()
        if candidate.is_file() and candidate.is_relative_to(prebuild_dir):
            return Response(200, content_type_for(path), candidate.read_bytes())

        return _plain(404, "404 File not found")
