"""Epoch-second to ISO-8601 conversion for bookmark timestamps."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

LOGGER = logging.getLogger(__name__)

# Leading integer, read the way browsers read ADD_DATE: sign and digits, trailing junk ignored.
_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")


def format_iso(moment: datetime) -> str:
    """Render a UTC instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    utc = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return utc.isoformat(timespec="milliseconds") + "Z"


def utc_now_iso() -> str:
    """Return the current instant in the import timestamp format."""
    return format_iso(datetime.now(timezone.utc))


def to_iso(epoch_seconds: str | None) -> str | None:
    """Convert an epoch-seconds string to an ISO-8601 instant.

    Returns None for missing input and for anything that cannot be read as
    a representable instant; malformed timestamps are dropped, never raised.
    """
    if not epoch_seconds:
        return None
    match = _LEADING_INT_RE.match(epoch_seconds)
    if match is None:
        LOGGER.debug("Dropping non-numeric timestamp %r", epoch_seconds)
        return None
    try:
        moment = datetime.fromtimestamp(int(match.group(1)), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        LOGGER.debug("Dropping out-of-range timestamp %r", epoch_seconds)
        return None
    return format_iso(moment)
