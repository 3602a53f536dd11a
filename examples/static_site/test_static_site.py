"""Tests for the static site example."""

from courier.testing import TestClient


class TestStaticSitePages:
    """Pages are served from public/ with index and extension fallback."""

    async def test_index_page(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/")
            assert response.status == 200
            assert "<h1>Static Site</h1>" in response.text
            assert "text/html" in response.content_type

    async def test_docs_page(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/docs/")
            assert response.status == 200
            assert "<h1>Documentation</h1>" in response.text

    async def test_extensionless_page(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/about")
            assert response.status == 200
            assert "<h1>About</h1>" in response.text

    async def test_custom_404(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/nonexistent")
            assert response.status == 404
            assert "Nothing here." in response.text

    async def test_404_ignores_range(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/nonexistent", headers={"Range": "bytes=0-3"})
            assert response.status == 404
            assert "Nothing here." in response.text
            assert response.header("content-range") is None

    async def test_404_ignores_oversized_range(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/nonexistent", headers={"Range": "bytes=99999-"})
            assert response.status == 404
            assert "Nothing here." in response.text

    async def test_404_ignores_conditional_headers(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get(
                "/nonexistent",
                headers={"If-Modified-Since": "Fri, 01 Jan 2100 00:00:00 GMT"},
            )
            assert response.status == 404
            assert "Nothing here." in response.text

    async def test_traversal_rejected(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/../app.py")
            assert response.status == 403


class TestStaticSiteCaching:
    async def test_pages_short_cache(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/about")
            assert response.header("cache-control") == "max-age=60"

    async def test_assets_immutable(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/assets/site.3f2a1c.css")
            assert response.status == 200
            assert "text/css" in response.content_type
            assert response.header("cache-control") == "max-age=31536000,immutable"
