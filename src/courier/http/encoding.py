"""Accept-Encoding negotiation.

Parses the request header into weighted codings and picks the best of
the encodings the server can provide. ``identity`` is implicitly
acceptable unless the client excludes it, at the lowest quality the
client listed.
"""

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AcceptedEncoding:
    """One ``coding;q=value`` entry, with its position in the header."""

    coding: str
    quality: float
    order: int


def parse_accept_encoding(header: str | None) -> tuple[AcceptedEncoding, ...]:
    """Parse an ``Accept-Encoding`` value.

    Malformed quality values count as ``q=0`` (not acceptable).
    """
    entries: list[AcceptedEncoding] = []
    has_identity = False
    min_quality = 1.0

    for order, part in enumerate((header or "").split(",")):
        coding, *params = (p.strip() for p in part.split(";"))
        if not coding:
            continue
        quality = 1.0
        for param in params:
            key, _, value = param.partition("=")
            if key.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        coding = coding.lower()
        if coding in ("identity", "*"):
            has_identity = True
        min_quality = min(min_quality, quality or 1.0)
        entries.append(AcceptedEncoding(coding, quality, order))

    if not has_identity:
        entries.append(AcceptedEncoding("identity", min_quality, len(entries)))
    return tuple(entries)


def _match(coding: str, accepted: Sequence[AcceptedEncoding]) -> tuple[float, int, int] | None:
    """Best (quality, specificity, -order) for *coding*, or None."""
    best: tuple[float, int, int] | None = None
    for entry in accepted:
        if entry.coding == coding:
            specificity = 1
        elif entry.coding == "*":
            specificity = 0
        else:
            continue
        key = (entry.quality, specificity, -entry.order)
        if best is None or key[1:] > best[1:]:
            best = key
    return best


def preferred_encoding(header: str | None, available: Sequence[str]) -> str | None:
    """Return the member of *available* the client prefers, or None.

    Ties on quality go to the coding listed first in the header, then to
    the order of *available*.
    """
    accepted = parse_accept_encoding(header)
    ranked: list[tuple[float, int, int, str]] = []
    for position, coding in enumerate(available):
        match = _match(coding.lower(), accepted)
        if match is None or match[0] <= 0:
            continue
        quality, _, neg_order = match
        ranked.append((quality, neg_order, -position, coding))
    if not ranked:
        return None
    return max(ranked)[3]
