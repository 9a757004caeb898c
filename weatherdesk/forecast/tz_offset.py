"""IANA zone identifier to UTC offset resolution."""

import logging
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from weatherdesk.models.common import utc_now

logger = logging.getLogger(__name__)


def utc_offset_seconds(tz_id: str | None, now: datetime | None = None) -> int:
    """Signed UTC offset in seconds for `tz_id`, evaluated at `now`.

    Defaults to the moment of the call, so the value can be an hour off
    around DST transitions for other instants. Returns 0 on any failure.
    """
    if not tz_id:
        return 0
    if now is None:
        now = utc_now()
    try:
        zone = ZoneInfo(tz_id)
        offset = now.astimezone(zone).utcoffset()
    except (ZoneInfoNotFoundError, ValueError, TypeError, OSError):
        logger.warning("Failed to get timezone offset for %s", tz_id, exc_info=True)
        return 0
    if offset is None:
        return 0
    return int(offset.total_seconds())
