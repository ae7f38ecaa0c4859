"""Freshness deadline for a fetched ads.txt file.

Section 3.6 of the IAB specification gives files a default validity of 7
days. A server can shorten or extend it with `Cache-Control: max-age` or an
`Expires` header; unusable values leave the default in place.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Mapping

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(days=7)

_MAX_AGE = re.compile(r"(?:^|,)\s*max-age\s*=\s*\"?(\d+)\"?\s*(?:,|$)", re.IGNORECASE)


def header_value(headers: Mapping[str, str], name: str) -> str | None:
    """Case-insensitive header lookup on any mapping."""

    value = headers.get(name)
    if value is None:
        # Plain dicts are case-sensitive; httpx.Headers is not.
        lowered = name.lower()
        for key, candidate in headers.items():
            if key.lower() == lowered:
                return candidate
    return value


def _from_cache_control(value: str, now: datetime) -> datetime | None:
    match = _MAX_AGE.search(value)
    if not match:
        return None
    try:
        return now + timedelta(seconds=int(match.group(1)))
    except OverflowError:
        logger.debug("Ignoring out of range max-age: %s", value)
        return None


def _from_expires(value: str) -> datetime | None:
    try:
        parsed = parsedate_to_datetime(value)
        if parsed is None:
            return None
        if parsed.tzinfo is None:
            # RFC 7231 dates are GMT.
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (TypeError, ValueError, IndexError, OverflowError):
        logger.debug("Ignoring unparsable Expires header: %r", value)
        return None


def resolve_expires(
    headers: Mapping[str, str],
    *,
    now: datetime | None = None,
    default_ttl: timedelta = DEFAULT_TTL,
) -> datetime:
    """Return the UTC moment after which the file should be refreshed."""

    now = now or datetime.now(timezone.utc)

    cache_control = header_value(headers, "Cache-Control")
    if cache_control:
        expires = _from_cache_control(cache_control, now)
        if expires is not None:
            return expires

    expires_header = header_value(headers, "Expires")
    if expires_header:
        expires = _from_expires(expires_header)
        if expires is not None:
            return expires

    return now + default_ttl
