"""ASGI response sending — translates courier responses to ASGI messages.

Handles in-memory ``Response`` bodies and streamed ``FileResponse``
bodies. A file stream is always closed once sending ends, whether it
finished, the client went away, or ``send()`` raised.
"""

import logging
from collections.abc import MutableMapping
from typing import Any

import anyio

from courier._internal.asgi import Receive, Send
from courier.filesystem import FileStream
from courier.http.response import FileResponse, Response

logger = logging.getLogger("courier.server")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def _encode_headers(headers: tuple[tuple[str, str], ...]) -> list[tuple[bytes, bytes]]:
    return [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in headers]


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Translate a courier Response into ASGI send() calls."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    raw_headers.extend(_encode_headers(response.headers))

    body = response.body_bytes if _body_allowed(response.status) else b""

    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        }
    )


async def _stream_body(body: FileStream, send: Send) -> None:
    async for chunk in body:
        await send({"type": "http.response.body", "body": chunk, "more_body": True})
    await send({"type": "http.response.body", "body": b"", "more_body": False})


async def send_file_response(
    response: FileResponse,
    send: Send,
    receive: Receive | None = None,
    *,
    head: bool = False,
) -> None:
    """Send a FileResponse, streaming the file in chunks.

    Headers go out first with the Content-Length ``send()`` computed,
    then each chunk as a body message with ``more_body=True``. When
    *receive* is given, an ``http.disconnect`` stops the stream early.
    HEAD requests and bodiless statuses send headers only.
    """
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": _encode_headers(response.headers),
        }
    )

    body = response.body
    try:
        if body is None or head or not _body_allowed(response.status):
            await send({"type": "http.response.body", "body": b""})
            return

        if receive is None:
            await _stream_body(body, send)
            return

        async with anyio.create_task_group() as tg:

            async def watch_disconnect() -> None:
                while True:
                    message: MutableMapping[str, Any] = await receive()
                    if message["type"] == "http.disconnect":
                        logger.debug("client disconnected while sending %s", response.path)
                        tg.cancel_scope.cancel()
                        return

            async def stream() -> None:
                await _stream_body(body, send)
                tg.cancel_scope.cancel()

            tg.start_soon(watch_disconnect)
            tg.start_soon(stream)
    finally:
        if body is not None:
            with anyio.CancelScope(shield=True):
                await body.aclose()
