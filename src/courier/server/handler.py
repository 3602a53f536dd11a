"""ASGI handler — translates ASGI scope/messages to courier types.

The only component that touches raw ASGI directly. Converts the scope
to a typed Request, runs the middleware pipeline, and sends the
resulting response back through ASGI send().
"""

import inspect
from collections.abc import Callable
from typing import Any

from courier._internal.asgi import Receive, Scope, Send
from courier.errors import HTTPError
from courier.http.request import Request
from courier.http.response import FileResponse, Response
from courier.middleware.protocol import AnyResponse, Next
from courier.server.errors import handle_http_error, handle_internal_error
from courier.server.sender import send_file_response, send_response


async def _call_handler(handler: Callable[..., Any], request: Request) -> AnyResponse:
    """Run the innermost handler; sync and async both accepted."""
    result = handler(request)
    if inspect.isawaitable(result):
        result = await result
    if isinstance(result, Response | FileResponse):
        return result
    if isinstance(result, bytes):
        return Response(body=result, content_type="application/octet-stream")
    return Response(body=str(result))


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    handler: Callable[..., Any],
    middleware: tuple[Callable[..., Any], ...],
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(dict(scope))

    try:

        async def dispatch(req: Request) -> AnyResponse:
            return await _call_handler(handler, req)

        # Wrap middleware around the dispatch
        pipeline: Next = dispatch
        for mw in reversed(middleware):
            outer = pipeline

            async def make_next(req: Request, _mw: Any = mw, _next: Next = outer) -> AnyResponse:
                return await _mw(req, _next)

            pipeline = make_next

        response = await pipeline(request)

    except HTTPError as exc:
        response = handle_http_error(exc, request, debug=debug)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug=debug)

    head = request.method == "HEAD"
    if isinstance(response, FileResponse):
        await send_file_response(response, send, receive, head=head)
    else:
        await send_response(response, send, head=head)
