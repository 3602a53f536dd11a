"""Case-insensitive HTTP headers.

``Headers`` is the immutable request side: it stores raw byte pairs from
the ASGI scope and decodes on access. ``MutableHeaders`` is the response
side: the sink ``send()`` and ``set_headers`` callbacks write into.
"""

from collections.abc import Iterable, Iterator, Mapping, MutableMapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first matching value.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        object.__setattr__(self, "_raw", raw)

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower().encode("latin-1")
        for name, value in self._raw:
            if name.lower() == key_lower:
                return value.decode("latin-1")
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower().encode("latin-1")
        return any(name.lower() == key_lower for name, _ in self._raw)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._raw:
            key = name.decode("latin-1").lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default


class MutableHeaders(MutableMapping[str, str]):
    """Case-insensitive response headers that keep their original casing.

    One value per name: assigning replaces any earlier value. Values are
    coerced to ``str`` so callbacks may assign ints (``Content-Length``).
    """

    __slots__ = ("_items",)

    def __init__(self, initial: Mapping[str, object] | Iterable[tuple[str, object]] = ()) -> None:
        self._items: dict[str, tuple[str, str]] = {}
        pairs = initial.items() if isinstance(initial, Mapping) else initial
        for name, value in pairs:
            self[name] = value  # type: ignore[assignment]

    def __getitem__(self, key: str) -> str:
        return self._items[key.lower()][1]

    def __setitem__(self, key: str, value: object) -> None:
        self._items[key.lower()] = (key, str(value))

    def __delitem__(self, key: str) -> None:
        del self._items[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._items

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        items = ", ".join(f"{name!r}: {value!r}" for name, value in self._items.values())
        return f"MutableHeaders({{{items}}})"

    def setdefault(self, key: str, default: object = "") -> str:  # type: ignore[override]
        """Set *key* only when it is not present yet; return the effective value."""
        if key not in self:
            self[key] = default
        return self[key]

    def to_tuple(self) -> tuple[tuple[str, str], ...]:
        """Freeze into the ``(name, value)`` pairs responses carry."""
        return tuple(self._items.values())
