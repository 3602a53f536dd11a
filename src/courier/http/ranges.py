"""Single byte-range parsing for ``Range: bytes=<start>-<end>``."""

from dataclasses import dataclass

from courier.errors import RangeNotSatisfiable


@dataclass(frozen=True, slots=True)
class ByteRange:
    """An inclusive byte range within a file of ``size`` bytes."""

    start: int
    end: int
    size: int

    @property
    def length(self) -> int:
        """Bytes covered. A range whose bounds coincide counts as empty."""
        if self.start == self.end:
            return 0
        return self.end - self.start + 1

    @property
    def content_range(self) -> str:
        return f"bytes {self.start}-{self.end}/{self.size}"


def parse_range(header: str | None, size: int) -> ByteRange | None:
    """Parse a ``Range`` header against a file of *size* bytes.

    Returns None when there is no usable single ``bytes`` range (absent
    header, other unit, several ranges, unparseable bounds); the caller
    then serves the whole file.

    Raises:
        RangeNotSatisfiable: If either bound is at or past *size*, or
            the start lies after the end.
    """
    if not header:
        return None
    unit, _, value = header.strip().partition("=")
    if unit.strip().lower() != "bytes" or not value or "," in value:
        return None

    first, sep, last = value.strip().partition("-")
    if not sep:
        return None
    first, last = first.strip(), last.strip()
    if not (first or last):
        return None
    if (first and not first.isdigit()) or (last and not last.isdigit()):
        return None

    start = int(first) if first else 0
    end = int(last) if last else size - 1
    if start >= size or end >= size or start > end:
        raise RangeNotSatisfiable(size)
    return ByteRange(start=start, end=end, size=size)
