"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> AnyResponse

Built-in middleware:
    SendFiles -- Serve files from a directory through send()
"""

from courier.middleware.protocol import AnyResponse, Middleware, Next
from courier.middleware.static import SendFiles

__all__ = [
    "AnyResponse",
    "Middleware",
    "Next",
    "SendFiles",
]
