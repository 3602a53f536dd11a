"""Static file serving middleware built on ``send()``.

Serves files from a root directory for matching URL prefixes. Index
files, extension fallback, pre-compressed siblings and byte ranges all
come from the ``SendOptions`` given at construction.

Falls through to the next handler when nothing matches.
"""

from pathlib import Path
from typing import Any

from courier.config import SendOptions
from courier.errors import NotFound
from courier.http.request import Request
from courier.middleware.protocol import AnyResponse, Next
from courier.sendfile import send


class SendFiles:
    """Middleware that serves files from a directory through ``send()``.

    Files are served for GET and HEAD requests under the configured
    prefix. Non-matching paths, and paths ``send()`` reports as not
    found, fall through to the next handler. Other HTTP errors (400,
    403, 416) propagate to the error renderer.

    Usage::

        # Serve under a prefix
        app.add_middleware(SendFiles("./static", prefix="/static"))

        # Root-level serving (static site)
        app.add_middleware(SendFiles(
            "./public",
            index="index.html",
            extensions=["html"],
            max_age=3_600_000,
        ))
    """

    __slots__ = ("_options", "_prefix")

    def __init__(
        self,
        root: str | Path,
        prefix: str = "/",
        *,
        options: SendOptions | None = None,
        **overrides: Any,
    ) -> None:
        self._options = (options or SendOptions()).merge(root=root, **overrides)

        # Normalize prefix: ensure leading slash, strip trailing.
        # Root prefix "/" normalizes to "" (every path matches).
        stripped = "/" + prefix.strip("/")
        self._prefix = stripped if stripped != "/" else ""

    @property
    def options(self) -> SendOptions:
        return self._options

    async def __call__(self, request: Request, next: Next) -> AnyResponse:
        """Serve a file or fall through."""
        if request.method not in ("GET", "HEAD"):
            return await next(request)

        path = request.encoded_path

        if self._prefix:
            if not path.startswith(self._prefix + "/") and path != self._prefix:
                return await next(request)
            relative = path[len(self._prefix) :] or "/"
        else:
            relative = path or "/"

        try:
            return await send(request, relative, self._options)
        except NotFound:
            return await next(request)
