"""Courier exception hierarchy.

Every failure ``send()`` can signal maps to exactly one HTTP status.
Shared by the resolver, the middleware, and the ASGI handler so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class CourierError(Exception):
    """Base for all courier-specific errors."""


@dataclass(frozen=True, slots=True)
class HTTPError(CourierError):
    """An error that maps directly to an HTTP status code.

    Raised by ``send()`` and the middleware. The ASGI handler catches
    these and renders them as plain responses.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class BadRequest(HTTPError):  # noqa: N818
    """400: the path could not be decoded or is malicious."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class Forbidden(HTTPError):  # noqa: N818
    """403: the path resolves outside the configured root."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status=403, detail=detail)


class NotFound(HTTPError):  # noqa: N818
    """404: missing file, hidden path, or directory without an index.

    Hidden paths report 404 rather than 403 so a prober
    cannot learn that they exist.
    """

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class RangeNotSatisfiable(HTTPError):  # noqa: N818
    """416: the requested byte range lies outside the file.

    Carries ``Content-Range: bytes */<size>`` so clients learn the
    actual length.
    """

    def __init__(self, size: int, detail: str = "Range Not Satisfiable") -> None:
        super().__init__(
            status=416,
            detail=detail,
            headers=(("Content-Range", f"bytes */{size}"),),
        )


class ServerError(HTTPError):  # noqa: N818
    """500: unexpected filesystem failure."""

    def __init__(self, detail: str = "Internal Server Error") -> None:
        super().__init__(status=500, detail=detail)


class ConfigurationError(ServerError):
    """Raised when send options are invalid.

    A caller mistake rather than bad client input, so it surfaces as a
    500 instead of a 4xx.
    """

    def __init__(self, detail: str) -> None:
        super().__init__(detail=detail)
