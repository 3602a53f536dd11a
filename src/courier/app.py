"""The courier ASGI application.

A small host for ``send()``: a middleware pipeline around a
fallback handler. Most apps are one ``SendFiles`` middleware::

    from courier import App
    from courier.middleware import SendFiles

    app = App()
    app.add_middleware(SendFiles("public", index="index.html"))

Run it with any ASGI server (``uvicorn module:app``).
"""

from collections.abc import Callable
from typing import Any

from courier._internal.asgi import Receive, Scope, Send
from courier.errors import NotFound
from courier.http.request import Request
from courier.middleware.protocol import Middleware
from courier.server.handler import handle_request


def _not_found(request: Request) -> Any:
    raise NotFound()


class App:
    """The courier application.

    Mutable during setup (middleware registration), frozen on the first
    request: adding middleware afterwards raises ``RuntimeError``.
    """

    __slots__ = ("_fallback", "_frozen", "_middleware", "_middleware_list", "debug")

    def __init__(self, fallback: Callable[..., Any] | None = None, *, debug: bool = False) -> None:
        self.debug = debug
        self._fallback: Callable[..., Any] = fallback or _not_found
        self._middleware_list: list[Middleware] = []
        self._middleware: tuple[Callable[..., Any], ...] = ()
        self._frozen = False

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware to the pipeline. First added runs outermost."""
        if self._frozen:
            raise RuntimeError("Cannot add middleware after the app has started serving requests.")
        self._middleware_list.append(middleware)

    def _freeze(self) -> None:
        if not self._frozen:
            self._middleware = tuple(self._middleware_list)
            self._frozen = True

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Acknowledges lifespan events, then delegates HTTP scopes to the
        request handler pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._freeze()
        await handle_request(
            scope,
            receive,
            send,
            handler=self._fallback,
            middleware=self._middleware,
            debug=self.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                self._freeze()
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
