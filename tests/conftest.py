"""Shared fixtures: a small file tree and a request factory."""

import gzip

import pytest

from courier.http.request import Request

USER_JSON = '{ "name": "tobi" }'


@pytest.fixture
def fixtures(tmp_path):
    """Create the file tree most send() tests resolve against."""
    root = tmp_path / "fixtures"
    root.mkdir()

    (root / "hello.txt").write_text("world")
    (root / "user.json").write_text(USER_JSON)
    (root / "test.html").write_text("<p>hi</p>")
    (root / "range.txt").write_bytes(bytes(range(100)))
    (root / "empty.txt").write_bytes(b"")

    # Pre-compressed siblings
    (root / "gzip.json").write_text(USER_JSON)
    (root / "gzip.json.gz").write_bytes(gzip.compress(USER_JSON.encode()))
    (root / "both.js").write_text("console.log('plain');")
    (root / "both.js.gz").write_bytes(b"gzip-bytes")
    (root / "both.js.br").write_bytes(b"br-bytes")

    # Directories with and without an index
    world = root / "world"
    world.mkdir()
    (world / "index.html").write_text("html index")
    (root / "empty-dir").mkdir()

    dotted = root / "some.path"
    dotted.mkdir()
    (dotted / "index.json").write_text("{}")

    # Hidden entries
    (root / ".hidden").write_text("secret")
    private = root / ".private"
    private.mkdir()
    (private / "id_rsa.txt").write_text("key")

    return root


@pytest.fixture
def make_request():
    """Build a GET Request with the given headers."""

    def factory(path: str = "/", *, method: str = "GET", **headers: str) -> Request:
        named = {name.replace("_", "-"): value for name, value in headers.items()}
        return Request.build(path, method=method, headers=named)

    return factory
