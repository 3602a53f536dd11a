"""Async filesystem access for send().

Each call is an anyio suspension point; blocking ``os`` work runs in a
worker thread so probing candidates never stalls the event loop.
"""

from __future__ import annotations

import errno
import os
from dataclasses import dataclass
from stat import S_ISDIR

import anyio
from anyio.abc import AsyncResource

# Lookup failures that mean "not this candidate" rather than a server fault
NOT_FOUND_ERRNOS = frozenset({errno.ENOENT, errno.ENAMETOOLONG, errno.ENOTDIR})

CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True, slots=True)
class FileStat:
    """The metadata send() needs about a candidate."""

    size: int
    mtime: float
    is_dir: bool

    @classmethod
    def from_os(cls, result: os.stat_result) -> FileStat:
        return cls(
            size=result.st_size,
            mtime=result.st_mtime,
            is_dir=S_ISDIR(result.st_mode),
        )


def is_not_found(exc: OSError) -> bool:
    """Whether *exc* means the path simply isn't there."""
    return exc.errno in NOT_FOUND_ERRNOS


async def stat(path: str) -> FileStat:
    """Stat *path*, following symlinks.

    Raises:
        OSError: Unchanged from the operating system; callers classify it
            with ``is_not_found``.
    """
    result = await anyio.Path(path).stat()
    return FileStat.from_os(result)


class FileStream(AsyncResource):
    """Async byte stream over a file, optionally bounded to a byte range.

    Opens lazily on first iteration, so a stream that is never consumed
    (HEAD requests, 304s) never touches the file. ``aclose()`` is safe to
    call at any point, any number of times.

    Usage::

        async with FileStream(path, offset=0, length=50) as stream:
            async for chunk in stream:
                ...
    """

    __slots__ = ("_closed", "_file", "chunk_size", "length", "offset", "path")

    def __init__(
        self,
        path: str,
        *,
        offset: int = 0,
        length: int | None = None,
        chunk_size: int = CHUNK_SIZE,
    ) -> None:
        self.path = path
        self.offset = offset
        self.length = length
        self.chunk_size = chunk_size
        self._file: anyio.AsyncFile[bytes] | None = None
        self._closed = False

    def __repr__(self) -> str:
        return f"FileStream({self.path!r}, offset={self.offset}, length={self.length})"

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> FileStream:
        return self

    async def __anext__(self) -> bytes:
        chunk = await self.read()
        if not chunk:
            await self.aclose()
            raise StopAsyncIteration
        return chunk

    async def read(self) -> bytes:
        """Read the next chunk; empty bytes once the range is exhausted."""
        if self._closed:
            return b""
        if self.length is not None and self.length <= 0:
            return b""
        if self._file is None:
            self._file = await anyio.open_file(self.path, "rb")
            if self.offset:
                await self._file.seek(self.offset)

        size = self.chunk_size
        if self.length is not None:
            size = min(size, self.length)
        chunk = await self._file.read(size)
        if self.length is not None:
            self.length -= len(chunk)
        return chunk

    async def aclose(self) -> None:
        """Release the file handle."""
        self._closed = True
        if self._file is not None:
            file, self._file = self._file, None
            await file.aclose()
