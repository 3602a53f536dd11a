"""HTTP dates and conditional-request freshness.

A response is *fresh* when the client's cached copy is still valid, in
which case the server answers 304 without a body.
"""

import re
from collections.abc import Mapping
from email.utils import formatdate, parsedate_to_datetime

_NO_CACHE = re.compile(r"(?:^|,)\s*no-cache\s*(?:,|$)", re.IGNORECASE)


def http_date(timestamp: float) -> str:
    """Format a POSIX timestamp as an RFC 9110 HTTP-date (GMT)."""
    return formatdate(timestamp, usegmt=True)


def _parse_http_date(value: str) -> float | None:
    try:
        return parsedate_to_datetime(value).timestamp()
    except (TypeError, ValueError, IndexError, OverflowError):
        return None


def _etag_matches(if_none_match: str, etag: str | None) -> bool:
    if etag is None:
        return False
    if if_none_match.strip() == "*":
        return True
    bare = etag.removeprefix("W/")
    for candidate in if_none_match.split(","):
        if candidate.strip().removeprefix("W/") == bare:
            return True
    return False


def is_fresh(request_headers: Mapping[str, str], response_headers: Mapping[str, str]) -> bool:
    """Whether the client's cached copy matches the response about to be sent.

    ``If-None-Match`` takes precedence over ``If-Modified-Since``. A
    request carrying ``Cache-Control: no-cache`` is never fresh.
    """
    if_none_match = request_headers.get("if-none-match")
    if_modified_since = request_headers.get("if-modified-since")
    if not if_none_match and not if_modified_since:
        return False

    cache_control = request_headers.get("cache-control")
    if cache_control and _NO_CACHE.search(cache_control):
        return False

    if if_none_match:
        return _etag_matches(if_none_match, response_headers.get("etag"))

    last_modified = response_headers.get("last-modified")
    if not last_modified or if_modified_since is None:
        return False
    modified = _parse_http_date(last_modified)
    since = _parse_http_date(if_modified_since)
    if modified is None or since is None:
        return False
    return modified <= since
