"""Weather service: composes provider responses into snapshots and windows."""

import logging
from concurrent.futures import ThreadPoolExecutor

from weatherdesk.config.schema import AppConfig
from weatherdesk.errors import InputValidationError, UpstreamDataShapeError
from weatherdesk.forecast.astro import SunTimes, extract_sun_times
from weatherdesk.forecast.tz_offset import utc_offset_seconds
from weatherdesk.forecast.window import parse_local_time, select_window
from weatherdesk.ingest.coordinates import format_coordinates, validate_coordinates
from weatherdesk.ingest.weatherapi_client import WeatherApiClient
from weatherdesk.models.common import normalize_city
from weatherdesk.models.weather import CurrentWeatherResult, ForecastHour, WeatherSnapshot

logger = logging.getLogger(__name__)

ASTRO_FORECAST_DAYS = 1


class WeatherService:
    def __init__(self, client: WeatherApiClient, config: AppConfig | None = None):
        self.client = client
        self.config = config or AppConfig()

    # --- Current conditions ---

    def current_by_city(self, city: str | None) -> CurrentWeatherResult:
        if not city or not city.strip():
            raise InputValidationError(
                "City parameter is required",
                "A valid city name must be provided",
            )
        return self._current(city.strip())

    def current_by_coords(self, lat: str | None, lon: str | None) -> CurrentWeatherResult:
        lat_num, lon_num = validate_coordinates(lat, lon)
        query = format_coordinates(
            lat_num, lon_num, self.config.provider.coordinate_precision
        )
        return self._current(query)

    def _current(self, query: str) -> CurrentWeatherResult:
        """Fetch current conditions and astro data side by side.

        Only the current-conditions call can fail the request.
        """
        pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix="upstream")
        current_future = pool.submit(self.client.fetch_current, query)
        sun_future = pool.submit(self._fetch_sun_times, query)
        try:
            data = current_future.result()
        except Exception:
            # Do not hold the error response on a still-running astro fetch.
            pool.shutdown(wait=False, cancel_futures=True)
            raise
        sun = sun_future.result()
        pool.shutdown()

        location = data["location"]
        snapshot = _compose_snapshot(data, sun)
        return CurrentWeatherResult(
            snapshot=snapshot,
            city_key=normalize_city(location.get("name") or ""),
        )

    def _fetch_sun_times(self, query: str) -> SunTimes:
        try:
            forecast = self.client.fetch_forecast(query, days=ASTRO_FORECAST_DAYS)
        except Exception:
            logger.exception("Failed to fetch sunrise/sunset")
            return SunTimes.absent()
        return extract_sun_times(forecast)

    # --- Hourly forecast ---

    def forecast(self, city: str | None) -> list[ForecastHour]:
        """Return the configured window of hours starting at the local hour."""
        if not city or not city.strip():
            raise InputValidationError(
                "City parameter is required",
                "A valid city name must be provided for forecast",
            )
        data = self.client.fetch_forecast(city.strip(), days=self.config.forecast.days)

        try:
            hours = flatten_hours(data["forecast"]["forecastday"])
            now_local = parse_local_time(data["location"]["localtime"])
            window = select_window(hours, now_local, self.config.forecast.window_hours)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise UpstreamDataShapeError(
                "Invalid forecast data", "Unexpected hourly forecast format"
            ) from e

        if not window:
            raise UpstreamDataShapeError(
                "Invalid forecast data", "Expected hourly forecast entries"
            )
        return window


def flatten_hours(forecast_days: list[dict]) -> list[ForecastHour]:
    """Concatenate each day's hourly series, keeping provider order."""
    return [
        ForecastHour(
            time=hour["time"],
            temp_c=hour["temp_c"],
            condition=hour["condition"]["text"],
            icon=absolute_icon(hour["condition"].get("icon") or ""),
        )
        for day in forecast_days
        for hour in day.get("hour") or []
    ]


def absolute_icon(icon: str) -> str:
    """The provider sends protocol-relative icon paths ('//cdn...')."""
    if icon.startswith("//"):
        return f"https:{icon}"
    return icon


def _compose_snapshot(data: dict, sun: SunTimes) -> WeatherSnapshot:
    location = data["location"]
    current = data["current"]
    condition = current.get("condition") or {}
    return WeatherSnapshot(
        city=location.get("name", ""),
        region=location.get("region", ""),
        country=location.get("country", ""),
        temp=current.get("temp_c"),
        description=condition.get("text", ""),
        icon=absolute_icon(condition.get("icon") or ""),
        last_updated=current.get("last_updated", ""),
        humidity=current.get("humidity"),
        wind=current.get("wind_kph"),
        pressure=current.get("pressure_mb"),
        visibility=current.get("vis_km"),
        feels_like=current.get("feelslike_c"),
        clouds=current.get("cloud"),
        uvi=current.get("uv"),
        sunrise=sun.sunrise,
        sunset=sun.sunset,
        timezone=utc_offset_seconds(location.get("tz_id")),
    )
