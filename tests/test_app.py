"""Tests for courier.app — App lifecycle, middleware pipeline, and ASGI entry."""

import logging

import pytest

from courier.app import App
from courier.errors import Forbidden
from courier.http.response import Response
from courier.testing import TestClient


class TestAppRegistration:
    def test_middleware_registration(self) -> None:
        app = App()

        async def my_mw(request, next):
            return await next(request)

        app.add_middleware(my_mw)
        assert len(app._middleware_list) == 1

    async def test_add_middleware_after_first_request(self) -> None:
        app = App()
        async with TestClient(app) as client:
            await client.get("/")

        async def late(request, next):
            return await next(request)

        with pytest.raises(RuntimeError, match="after the app has started"):
            app.add_middleware(late)


class TestPipeline:
    async def test_default_fallback_is_404(self) -> None:
        async with TestClient(App()) as client:
            response = await client.get("/anything")
            assert response.status == 404
            assert response.text == "Not Found"

    async def test_sync_fallback_string(self) -> None:
        async with TestClient(App(lambda request: f"you asked for {request.path}")) as client:
            response = await client.get("/page")
            assert response.status == 200
            assert response.text == "you asked for /page"

    async def test_async_fallback_bytes(self) -> None:
        async def fallback(request):
            return b"\x00\x01"

        async with TestClient(App(fallback)) as client:
            response = await client.get("/")
            assert response.body == b"\x00\x01"
            assert response.content_type == "application/octet-stream"

    async def test_middleware_order(self) -> None:
        calls: list[str] = []

        def tracer(name: str):
            async def middleware(request, next):
                calls.append(name)
                return await next(request)

            return middleware

        app = App(lambda request: Response("done"))
        app.add_middleware(tracer("outer"))
        app.add_middleware(tracer("inner"))

        async with TestClient(app) as client:
            await client.get("/")
        assert calls == ["outer", "inner"]

    async def test_middleware_can_rewrite_response(self) -> None:
        async def stamp(request, next):
            response = await next(request)
            return response.with_header("X-Served-By", "courier")

        app = App(lambda request: "ok")
        app.add_middleware(stamp)

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.header("x-served-by") == "courier"


class TestErrorRendering:
    async def test_http_error_status_and_detail(self) -> None:
        def fallback(request):
            raise Forbidden("keep out")

        async with TestClient(App(fallback)) as client:
            response = await client.get("/")
            assert response.status == 403
            assert response.text == "keep out"

    async def test_unexpected_exception_is_500(self, caplog) -> None:
        def fallback(request):
            raise KeyError("secret-detail")

        with caplog.at_level(logging.ERROR, logger="courier.server"):
            async with TestClient(App(fallback)) as client:
                response = await client.get("/")

        assert response.status == 500
        assert response.text == "Internal Server Error"
        assert "secret-detail" not in response.text
        assert any(record.exc_info for record in caplog.records)

    async def test_debug_shows_exception(self) -> None:
        def fallback(request):
            raise KeyError("boom")

        async with TestClient(App(fallback, debug=True)) as client:
            response = await client.get("/")
            assert response.status == 500
            assert "KeyError" in response.text


class TestLifespan:
    async def test_startup_and_shutdown(self) -> None:
        app = App()
        incoming = [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
        sent: list[dict] = []

        async def receive() -> dict:
            return incoming.pop(0)

        async def send(message: dict) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)

        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]
        assert app._frozen

    async def test_non_http_scope_ignored(self) -> None:
        sent: list[dict] = []

        async def receive() -> dict:
            return {"type": "websocket.connect"}

        async def send(message: dict) -> None:
            sent.append(message)

        await App()({"type": "websocket"}, receive, send)
        assert sent == []
