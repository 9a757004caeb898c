"""Tests for sunrise/sunset extraction."""

from collections.abc import Callable
from datetime import UTC, datetime

from weatherdesk.forecast.astro import SunTimes, astro_instant, extract_sun_times


def _epoch(*args: int) -> float:
    return datetime(*args, tzinfo=UTC).timestamp()


class TestAstroInstant:
    def test_morning(self):
        assert astro_instant("2026-10-18", "07:29 AM") == _epoch(2026, 10, 18, 7, 29)

    def test_evening(self):
        assert astro_instant("2026-10-18", "06:02 PM") == _epoch(2026, 10, 18, 18, 2)

    def test_no_event_marker(self):
        assert astro_instant("2026-06-21", "No sunset") is None

    def test_missing(self):
        assert astro_instant("2026-10-18", None) is None
        assert astro_instant("2026-10-18", "") is None


class TestExtractSunTimes:
    def test_from_forecast(self, forecast_body: Callable[..., dict]):
        sun = extract_sun_times(forecast_body(localtime="2026-10-18 13:37"))
        assert sun == SunTimes(
            sunrise=_epoch(2026, 10, 18, 7, 29),
            sunset=_epoch(2026, 10, 18, 18, 2),
        )

    def test_uses_location_local_date(self, forecast_body):
        body = forecast_body(start="2026-10-18", localtime="2026-10-19 0:15")
        sun = extract_sun_times(body)
        assert sun.sunrise == _epoch(2026, 10, 19, 7, 29)

    def test_none_body(self):
        assert extract_sun_times(None) == SunTimes.absent()

    def test_missing_astro(self, forecast_body):
        body = forecast_body(days=1)
        del body["forecast"]["forecastday"][0]["astro"]
        assert extract_sun_times(body) == SunTimes(None, None)

    def test_empty_forecastday(self, forecast_body):
        body = forecast_body()
        body["forecast"]["forecastday"] = []
        assert extract_sun_times(body) == SunTimes.absent()

    def test_malformed_body(self):
        assert extract_sun_times({"forecast": "oops"}) == SunTimes.absent()

    def test_partial_astro(self, forecast_body):
        body = forecast_body(astro={"sunrise": "07:29 AM", "sunset": "No sunset"})
        sun = extract_sun_times(body)
        assert sun.sunrise is not None
        assert sun.sunset is None
