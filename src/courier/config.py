"""Send configuration.

SendOptions is a frozen dataclass. A send() call merges its keyword
overrides into one instance up front, and invalid values are rejected
there, before any filesystem access.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeAlias

from courier.errors import ConfigurationError

if TYPE_CHECKING:
    from courier.filesystem import FileStat
    from courier.http.headers import MutableHeaders

SetHeaders: TypeAlias = Callable[["MutableHeaders", str, "FileStat"], Any]

# Older spellings still accepted by ``SendOptions.from_kwargs``
_ALIASES = {"maxage": "max_age", "maxAge": "max_age", "setHeaders": "set_headers"}


@dataclass(frozen=True, slots=True)
class SendOptions:
    """Options for a single ``send()`` call. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        options = SendOptions(root="public", index="index.html", max_age=60_000)
    """

    # Confinement
    root: str | Path = ""
    hidden: bool = False

    # Directory and extension handling
    index: str | None = None
    format: bool = True
    extensions: Sequence[str] | None = None

    # Caching (max_age is in milliseconds)
    max_age: int | float = 0
    immutable: bool = False

    # Pre-compressed siblings
    brotli: bool = True
    gzip: bool = True

    # Single-range requests
    ranges: bool = True

    # Called as set_headers(headers, path, stat) before defaults are applied
    set_headers: SetHeaders | None = None

    def __post_init__(self) -> None:
        if self.set_headers is not None and not callable(self.set_headers):
            raise ConfigurationError("option set_headers must be callable")

        extensions = self.extensions
        if extensions is False:
            object.__setattr__(self, "extensions", None)
        elif extensions is not None:
            if isinstance(extensions, str) or not isinstance(extensions, Sequence):
                raise ConfigurationError("option extensions must be a list of strings or None")
            if not all(isinstance(ext, str) for ext in extensions):
                raise ConfigurationError("option extensions must be a list of strings or None")
            object.__setattr__(self, "extensions", tuple(extensions))

        if self.index is False or self.index == "":
            object.__setattr__(self, "index", None)
        elif self.index is not None and not isinstance(self.index, str):
            raise ConfigurationError("option index must be a string or None")

        if isinstance(self.max_age, bool) or not isinstance(self.max_age, int | float):
            raise ConfigurationError("option max_age must be a number of milliseconds")
        if self.max_age < 0:
            raise ConfigurationError("option max_age must not be negative")

    @classmethod
    def from_kwargs(cls, **kwargs: Any) -> SendOptions:
        """Build options from a loose keyword bag.

        Accepts the legacy ``maxage`` / ``maxAge`` / ``setHeaders``
        spellings. Unknown keys raise ``ConfigurationError``.
        """
        return cls().merge(**kwargs)

    def merge(self, **overrides: Any) -> SendOptions:
        """Return a copy with *overrides* applied on top of these options."""
        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        normalized: dict[str, Any] = {}
        for key, value in overrides.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"unknown send option: {key!r}")
            normalized[name] = value
        return replace(self, **normalized)

    @property
    def cache_control(self) -> str:
        """The ``Cache-Control`` value derived from max_age and immutable."""
        directives = [f"max-age={int(self.max_age / 1000)}"]
        if self.immutable:
            directives.append("immutable")
        return ",".join(directives)
