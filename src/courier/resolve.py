"""Path algebra for send(): from an untrusted URL path to ordered candidates.

Nothing here touches the filesystem. The steps, in the order ``send()``
applies them:

1. ``normalize_root``   -> absolute, normalized confinement base
2. ``strip_root``       -> drop any drive/leading separator, note trailing slash
3. ``decode_path``      -> strict percent-decoding (400 on malformed input)
4. ``confine``          -> join onto root, 403 if the result escapes it
5. ``build_candidates`` -> index, extension, and encoding permutations
6. ``is_hidden``        -> per-candidate dot-segment policy
"""

import os
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias
from urllib.parse import unquote

from courier.errors import BadRequest, Forbidden

# A "%" not followed by two hex digits
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

_SEPARATORS = "/" + os.sep + (os.altsep or "")

# Pre-compressed sibling suffixes, in preference order
ENCODING_SUFFIXES: tuple[tuple[str, str], ...] = (("br", ".br"), ("gzip", ".gz"))

# Asks whether the client takes *coding* over identity
AcceptsEncoding: TypeAlias = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class Candidate:
    """One filesystem path send() may serve.

    ``type_path`` is what the content type is inferred from: the path
    without the compression suffix for a sibling, the path itself
    otherwise. ``encoding`` is the ``Content-Encoding`` to announce when
    this candidate wins.
    """

    path: str
    type_path: str
    encoding: str | None = None


def normalize_root(root: str | Path) -> str:
    """Absolute, normalized root. An empty root means the working directory."""
    return os.path.normpath(os.path.abspath(root or os.getcwd()))


def strip_root(path: str) -> tuple[str, bool]:
    """Drop the drive and leading separators from *path*.

    Returns the relative remainder and whether *path* ended in ``/``.
    """
    trailing_slash = path.endswith("/")
    _, rest = os.path.splitdrive(path)
    return rest.lstrip(_SEPARATORS), trailing_slash


def decode_path(path: str) -> str:
    """Percent-decode *path* strictly.

    Raises:
        BadRequest: On a malformed escape, an escape sequence that is not
            valid UTF-8, or a decoded NUL byte.
    """
    if _MALFORMED_ESCAPE.search(path):
        raise BadRequest("failed to decode")
    try:
        decoded = unquote(path, errors="strict")
    except UnicodeDecodeError as exc:
        raise BadRequest("failed to decode") from exc
    if "\0" in decoded:
        raise BadRequest("malicious path")
    return decoded


def confine(root: str, path: str) -> str:
    """Join *path* onto *root* and normalize, refusing to leave *root*.

    ``..`` segments are allowed as long as the normalized result stays
    inside *root*.

    Raises:
        BadRequest: If *path* is absolute once decoded.
        Forbidden: If the result lies outside *root*.
    """
    if os.path.isabs(path) or os.path.splitdrive(path)[0]:
        raise BadRequest("malicious path")
    resolved = os.path.normpath(os.path.join(root, path))
    if resolved != root and not resolved.startswith(root.rstrip(os.sep) + os.sep):
        raise Forbidden()
    return resolved


def is_hidden(root: str, path: str) -> bool:
    """Whether any segment of *path* below *root* starts with a dot."""
    relative = path[len(root) :]
    return any(segment.startswith(".") for segment in relative.split(os.sep) if segment)


def _has_extension(path: str) -> bool:
    return "." in os.path.basename(path)


def _compressed(
    path: str,
    accepts: AcceptsEncoding,
    *,
    brotli: bool,
    gzip: bool,
) -> list[Candidate]:
    enabled = {"br": brotli, "gzip": gzip}
    siblings: list[Candidate] = []
    for coding, suffix in ENCODING_SUFFIXES:
        if enabled[coding] and not path.endswith(suffix) and accepts(coding):
            siblings.append(Candidate(path + suffix, type_path=path, encoding=coding))
    return siblings


def build_candidates(
    path: str,
    *,
    trailing_slash: bool,
    index: str | None,
    format: bool,
    extensions: Sequence[str] | None,
    accepts: AcceptsEncoding,
    brotli: bool = True,
    gzip: bool = True,
) -> list[Candidate]:
    """Every path worth probing for *path*, most preferred first.

    For the path itself, then ``path/index`` when an index applies::

        path.br, path.gz, path,
        path.ext1.br, path.ext1.gz, path.ext1,
        path.ext2.br, ...

    Extensions are only tried when the basename has none of its own.
    """
    bases = [path]
    if index and (trailing_slash or format):
        bases.append(os.path.join(path, index))

    suffixes = [ext if ext.startswith(".") else f".{ext}" for ext in extensions or ()]

    candidates: list[Candidate] = []
    for base in bases:
        variants = [base]
        if suffixes and not _has_extension(base):
            variants.extend(base + suffix for suffix in suffixes)
        for variant in variants:
            candidates.extend(_compressed(variant, accepts, brotli=brotli, gzip=gzip))
            candidates.append(Candidate(variant, type_path=variant))
    return candidates
