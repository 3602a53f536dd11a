"""Static Site: a public/ directory served at the root with courier.

Demonstrates:
- Root-level SendFiles middleware with an index file and ``.html``
  extension fallback, so ``/docs/`` and ``/about`` both resolve
- Long-lived caching for fingerprinted assets under ``/assets``
- A fallback handler that serves ``404.html`` through ``send()``

Run with any ASGI server:
    uvicorn app:app
"""

from pathlib import Path

from courier import App, Request, send
from courier.middleware import SendFiles

PUBLIC_DIR = Path(__file__).parent / "public"


async def not_found_page(request):
    """Render public/404.html with a 404 status.

    The page is fetched with a bare request, so the client's Range and
    conditional headers (meant for the missing URL) never apply to it.
    """
    response = await send(Request.build("/404.html"), "/404.html", root=PUBLIC_DIR)
    return response.with_status(404)


app = App(not_found_page)

# Fingerprinted assets never change at a given URL
app.add_middleware(SendFiles(
    PUBLIC_DIR / "assets",
    prefix="/assets",
    max_age=365 * 24 * 60 * 60 * 1000,
    immutable=True,
))

# Everything else: pages, with a short cache
app.add_middleware(SendFiles(
    PUBLIC_DIR,
    index="index.html",
    extensions=["html"],
    max_age=60_000,
))
