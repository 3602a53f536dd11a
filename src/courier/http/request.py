"""Immutable HTTP request.

Frozen metadata built from the ASGI scope. The request is honest about
what it is: received data that doesn't change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from courier.http.encoding import preferred_encoding
from courier.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Only the metadata ``send()`` consults is kept: method, path,
    headers, and the connection endpoints.
    """

    method: str
    path: str
    headers: Headers
    raw_path: bytes = b""
    query_string: bytes = b""
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    # -- Computed properties --

    @property
    def encoded_path(self) -> str:
        """The path as sent on the wire, still percent-encoded.

        ASGI servers decode ``path``; ``send()`` wants the original so it
        can reject malformed escapes itself.
        """
        if self.raw_path:
            return self.raw_path.decode("latin-1")
        return self.path

    @property
    def range(self) -> str | None:
        """The raw ``Range`` header value."""
        return self.headers.get("range")

    # -- Negotiation --

    def accepts_encodings(self, *encodings: str) -> str | None:
        """Return the first of *encodings* the client prefers, or None.

        Mirrors the usual ``accepts_encodings("br", "identity")`` idiom:
        compare the result against the compressed coding to decide whether
        the client takes it over the uncompressed body.
        """
        return preferred_encoding(self.headers.get("accept-encoding"), encodings)

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI scope."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            raw_path=scope.get("raw_path") or b"",
            query_string=scope.get("query_string", b""),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
        )

    @classmethod
    def build(
        cls,
        path: str = "/",
        *,
        method: str = "GET",
        headers: dict[str, str] | None = None,
    ) -> Request:
        """Create a Request directly, without an ASGI scope.

        Handy when calling ``send()`` outside a server::

            request = Request.build("/", headers={"Accept-Encoding": "br"})
        """
        raw = tuple(
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        )
        return cls(method=method.upper(), path=path, headers=Headers(raw))
