"""HTTP responses with a chainable .with_*() transformation API.

Each transformation returns a new response; nothing is mutated in
place.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from courier.filesystem import FileStat, FileStream


@dataclass(frozen=True, slots=True)
class Response:
    """A response with an in-memory body.

    Used for error pages and by the test client to report what the ASGI
    app sent.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    # -- Accessors --

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the last value set for *name* (case-insensitive)."""
        lowered = name.lower()
        for key, value in reversed(self.headers):
            if key.lower() == lowered:
                return value
        return default

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body


@dataclass(frozen=True, slots=True)
class FileResponse:
    """A file located by ``send()``, ready to be streamed.

    ``path`` is the resolved filesystem path actually served (a
    compressed sibling when one was chosen). ``body`` is None for a 304,
    otherwise a lazily opened stream the sender must close.

    Content-Type travels in ``headers`` like every other header; the
    ``content_type`` property reads it back.
    """

    path: str
    stat: FileStat
    body: FileStream | None
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> FileResponse:
        """Return a new FileResponse with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> FileResponse:
        """Return a new FileResponse with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the last value set for *name* (case-insensitive)."""
        lowered = name.lower()
        for key, value in reversed(self.headers):
            if key.lower() == lowered:
                return value
        return default

    @property
    def content_type(self) -> str:
        return self.header("content-type") or "application/octet-stream"
