"""Sunrise/sunset extraction from a forecast day's astro block."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

logger = logging.getLogger(__name__)

ASTRO_FORMAT = "%Y-%m-%d %I:%M %p"


@dataclass(frozen=True)
class SunTimes:
    sunrise: float | None = None
    sunset: float | None = None

    @classmethod
    def absent(cls) -> "SunTimes":
        return cls()


def astro_instant(local_date: str, clock: str | None) -> float | None:
    """Combine '2026-10-18' and '06:42 AM' into epoch seconds.

    The wall-clock value is read as if it were UTC; the caller applies the
    location's UTC offset for display. Returns None for values the provider
    uses to signal no event (e.g. 'No sunrise') or anything unparseable.
    """
    if not clock:
        return None
    try:
        dt = datetime.strptime(f"{local_date} {clock.strip()}", ASTRO_FORMAT)
    except ValueError:
        logger.debug("Unparseable astro time %r on %s", clock, local_date)
        return None
    return dt.replace(tzinfo=UTC).timestamp()


def extract_sun_times(forecast: dict | None) -> SunTimes:
    """Pull sunrise/sunset for the first forecast day of a forecast.json body.

    Never raises; a missing astro block yields SunTimes.absent().
    """
    if not forecast:
        return SunTimes.absent()
    try:
        days = forecast.get("forecast", {}).get("forecastday") or []
        astro = days[0].get("astro") if days else None
        localtime = forecast.get("location", {}).get("localtime", "")
        local_date = localtime.split(" ")[0]
    except (AttributeError, IndexError, TypeError):
        logger.warning("Malformed forecast body, no sunrise/sunset")
        return SunTimes.absent()

    if not isinstance(astro, dict) or not local_date:
        return SunTimes.absent()

    return SunTimes(
        sunrise=astro_instant(local_date, astro.get("sunrise")),
        sunset=astro_instant(local_date, astro.get("sunset")),
    )
