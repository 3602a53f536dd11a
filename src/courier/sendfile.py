"""send() — locate a file under a root and describe it as an HTTP response.

The caller hands over a request and an untrusted URL path; send() turns
it into a safe filesystem path, probes the candidate permutations in
priority order, and returns a ``FileResponse`` for the first regular
file it finds. Failures are raised as ``HTTPError`` subclasses.

Usage::

    response = await send(request, request.path, root="public", index="index.html")
    response.path       # the file actually served
    response.headers    # Content-Type, Content-Length, Last-Modified, ...
"""

import logging
import mimetypes
import os
from typing import Any

from courier.config import SendOptions
from courier.errors import NotFound, ServerError
from courier.filesystem import FileStat, FileStream, is_not_found, stat
from courier.http.conditional import http_date, is_fresh
from courier.http.headers import MutableHeaders
from courier.http.ranges import parse_range
from courier.http.request import Request
from courier.http.response import FileResponse
from courier.resolve import (
    Candidate,
    build_candidates,
    confine,
    decode_path,
    is_hidden,
    normalize_root,
    strip_root,
)

logger = logging.getLogger("courier.send")

_TEXTUAL_TYPES = frozenset({"application/javascript", "application/json", "application/xml"})

# A file stored compressed and served as-is is typed by its compression
_COMPRESSED_TYPES = {
    "gzip": "application/gzip",
    "bzip2": "application/x-bzip2",
    "xz": "application/x-xz",
}


def content_type_for(path: str) -> str:
    """Guess a Content-Type from *path*'s extension, with UTF-8 for text.

    A trailing compression suffix (``.gz``, ``.br``) wins over the inner
    extension: ``data.json.gz`` is a gzip file, not JSON. Compressed
    siblings are typed by their uncompressed name before reaching here.
    """
    mime_type, encoding = mimetypes.guess_type(path, strict=False)
    if encoding is not None:
        return _COMPRESSED_TYPES.get(encoding, "application/octet-stream")
    if not mime_type:
        return "application/octet-stream"
    if mime_type.startswith("text/") or mime_type in _TEXTUAL_TYPES:
        return f"{mime_type}; charset=utf-8"
    return mime_type


async def send(
    request: Request,
    path: str,
    options: SendOptions | None = None,
    *,
    headers: MutableHeaders | None = None,
    **overrides: Any,
) -> FileResponse:
    """Resolve *path* under the configured root and prepare it for streaming.

    Args:
        request: The current request; supplies encoding negotiation and
            the Range / conditional headers.
        path: The URL path, still percent-encoded.
        options: Base options; keyword *overrides* are merged on top.
        headers: Headers already set by the caller. Last-Modified,
            Cache-Control and Content-Type found here are left alone.

    Returns:
        A ``FileResponse`` whose ``path`` is the file served.

    Raises:
        BadRequest: The path cannot be decoded.
        Forbidden: The path resolves outside the root.
        NotFound: Nothing servable matched.
        RangeNotSatisfiable: The Range header lies outside the file.
        ServerError: Unexpected filesystem failure, or invalid options
            (``ConfigurationError``).
    """
    if request is None:
        raise ValueError("request required")
    if not path:
        raise ValueError("file pathname required")

    opts = (options or SendOptions()).merge(**overrides)
    logger.debug("send %r %r", path, opts)

    root = normalize_root(opts.root)
    relative, trailing_slash = strip_root(path)
    resolved = confine(root, decode_path(relative))

    candidates = build_candidates(
        resolved,
        trailing_slash=trailing_slash,
        index=opts.index,
        format=opts.format,
        extensions=opts.extensions,
        accepts=lambda coding: request.accepts_encodings(coding, "identity") == coding,
        brotli=opts.brotli,
        gzip=opts.gzip,
    )
    candidate, file_stat = await _probe(root, candidates, opts)
    if headers is None:
        headers = MutableHeaders()
    return _build_response(request, candidate, file_stat, opts, headers)


async def _probe(
    root: str,
    candidates: list[Candidate],
    opts: SendOptions,
) -> tuple[Candidate, FileStat]:
    """Stat each candidate in order; return the first regular file."""
    last = len(candidates) - 1
    for position, candidate in enumerate(candidates):
        is_last = position == last

        if not opts.hidden and is_hidden(root, candidate.path):
            logger.debug("skip hidden %s", candidate.path)
            if is_last:
                raise NotFound()
            continue

        try:
            file_stat = await stat(candidate.path)
            if file_stat.is_dir:
                if not is_last:
                    continue
                if not (opts.format and opts.index):
                    raise NotFound()
                # Directory served through its index, tried once
                index_path = os.path.join(candidate.path, opts.index)
                candidate = Candidate(index_path, type_path=index_path)
                if not opts.hidden and is_hidden(root, candidate.path):
                    raise NotFound()
                file_stat = await stat(candidate.path)
                if file_stat.is_dir:
                    raise NotFound()
        except OSError as exc:
            if is_not_found(exc):
                logger.debug("skip missing %s", candidate.path)
                if is_last:
                    raise NotFound() from exc
                continue
            raise ServerError(f"cannot stat {candidate.path}: {exc.strerror}") from exc

        return candidate, file_stat

    raise NotFound()


def _build_response(
    request: Request,
    candidate: Candidate,
    file_stat: FileStat,
    opts: SendOptions,
    headers: MutableHeaders,
) -> FileResponse:
    """Apply set_headers and the default headers, then attach the body."""
    if opts.set_headers is not None:
        opts.set_headers(headers, candidate.path, file_stat)

    # Content-Length is always ours; set_headers cannot override it
    headers["Content-Length"] = file_stat.size
    headers.setdefault("Last-Modified", http_date(file_stat.mtime))
    headers.setdefault("Cache-Control", opts.cache_control)
    headers.setdefault("Content-Type", content_type_for(candidate.type_path))
    if candidate.encoding is not None:
        headers["Content-Encoding"] = candidate.encoding
    if opts.ranges:
        headers["Accept-Ranges"] = "bytes"

    if request.method in ("GET", "HEAD") and is_fresh(request.headers, headers):
        logger.debug("not modified %s", candidate.path)
        del headers["Content-Length"]
        return FileResponse(
            path=candidate.path,
            stat=file_stat,
            body=None,
            status=304,
            headers=headers.to_tuple(),
        )

    byte_range = parse_range(request.range, file_stat.size) if opts.ranges else None
    if byte_range is not None:
        headers["Content-Range"] = byte_range.content_range
        headers["Content-Length"] = byte_range.length
        headers["Cache-Control"] = "no-cache"
        body = FileStream(candidate.path, offset=byte_range.start, length=byte_range.length)
        status = 206
    else:
        body = FileStream(candidate.path)
        status = 200

    logger.debug("serve %s (%d)", candidate.path, status)
    return FileResponse(
        path=candidate.path,
        stat=file_stat,
        body=body,
        status=status,
        headers=headers.to_tuple(),
    )
