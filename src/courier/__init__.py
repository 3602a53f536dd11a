"""Courier — serve a single file safely from an async Python web stack.

Resolves an untrusted URL path under a root directory, picks the best
candidate (index file, extension fallback, pre-compressed sibling), and
describes it as a streamable HTTP response.

Basic usage::

    from courier import Request, send

    response = await send(request, request.encoded_path, root="public", index="index.html")

As middleware::

    from courier import App
    from courier.middleware import SendFiles

    app = App()
    app.add_middleware(SendFiles("public", index="index.html"))
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "BadRequest",
    "ConfigurationError",
    "CourierError",
    "FileResponse",
    "Forbidden",
    "HTTPError",
    "NotFound",
    "RangeNotSatisfiable",
    "Request",
    "Response",
    "SendOptions",
    "ServerError",
    "send",
]

_ERRORS = frozenset(
    {
        "BadRequest",
        "ConfigurationError",
        "CourierError",
        "Forbidden",
        "HTTPError",
        "NotFound",
        "RangeNotSatisfiable",
        "ServerError",
    }
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import courier`` fast while providing a clean top-level API.
    """
    if name == "send":
        from courier.sendfile import send

        return send

    if name == "SendOptions":
        from courier.config import SendOptions

        return SendOptions

    if name == "App":
        from courier.app import App

        return App

    if name == "Request":
        from courier.http.request import Request

        return Request

    if name in ("Response", "FileResponse"):
        from courier.http import response

        return getattr(response, name)

    if name in _ERRORS:
        from courier import errors

        return getattr(errors, name)

    raise AttributeError(f"module 'courier' has no attribute {name!r}")
