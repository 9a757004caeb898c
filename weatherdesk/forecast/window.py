"""Hourly forecast window selection.

The provider returns one entry per hour across consecutive calendar days,
labelled in the location's local wall-clock time. A window starts at the
first hour at or after the location's current local time and reads
`size` contiguous entries, wrapping to the start of the series when the
tail runs short. Wrapping can repeat early hours (e.g. today's 01:00 after
the day-after-tomorrow's 23:00).
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from weatherdesk.models.weather import ForecastHour

logger = logging.getLogger(__name__)

WINDOW_SIZE = 8
LOCAL_TIME_FORMAT = "%Y-%m-%d %H:%M"


def parse_local_time(value: str) -> datetime:
    """Parse a provider wall-clock label like '2026-10-18 9:05' (naive)."""
    return datetime.strptime(value.strip().replace("T", " "), LOCAL_TIME_FORMAT)


def find_start_index(hours: Sequence[ForecastHour], now_local: datetime) -> int:
    """Index of the first hour whose label is >= now_local, else 0."""
    for i, hour in enumerate(hours):
        if parse_local_time(hour.time) >= now_local:
            return i
    return 0


def select_window(
    hours: Sequence[ForecastHour],
    now_local: datetime,
    size: int = WINDOW_SIZE,
) -> list[ForecastHour]:
    """Select exactly `size` contiguous hours starting at the current hour.

    Reads circularly, so the result has `size` entries for any non-empty
    input. Raises ValueError if an hour label cannot be parsed.
    """
    if not hours:
        return []

    start = find_start_index(hours, now_local)
    n = len(hours)
    window = [hours[(start + i) % n] for i in range(size)]

    if start + size > n:
        logger.debug(
            "Forecast tail short by %d hours, wrapping to start", start + size - n
        )
    logger.debug(
        "Forecast window now=%s start=%d selected=%s",
        now_local.isoformat(), start, [h.time for h in window],
    )
    return window
