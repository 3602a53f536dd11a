"""Error rendering for courier requests.

Maps HTTPError exceptions and unexpected failures to plain-text
Response objects.
"""

import logging

from courier.errors import HTTPError
from courier.http.request import Request
from courier.http.response import Response

logger = logging.getLogger("courier.server")

_REASONS = {
    400: "Bad Request",
    403: "Forbidden",
    404: "Not Found",
    416: "Range Not Satisfiable",
    500: "Internal Server Error",
}


def handle_http_error(exc: HTTPError, request: Request, *, debug: bool = False) -> Response:
    """Map an HTTPError to a Response carrying its status and headers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    # Server-side details stay private unless debugging
    if exc.status >= 500 and not debug:
        detail = _REASONS[500]
    else:
        detail = exc.detail or _REASONS.get(exc.status, f"Error {exc.status}")
        if debug and exc.detail:
            detail = f"{exc.status}: {exc.detail}"

    resp = Response(body=detail).with_status(exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(exc: Exception, request: Request, *, debug: bool = False) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)
    if debug:
        return Response(body=f"500: {type(exc).__name__}: {exc}", status=500)
    return Response(body="Internal Server Error", status=500)
