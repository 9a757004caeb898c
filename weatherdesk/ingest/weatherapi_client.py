"""WeatherAPI.com client for current conditions and N-day forecasts."""

import logging

import httpx

from weatherdesk.config.schema import WEATHERAPI_BASE_URL
from weatherdesk.errors import UpstreamDataShapeError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "weatherdesk/0.1.0"


class WeatherApiClient:
    """Thin wrapper around the provider's current.json and forecast.json.

    Each call issues exactly one request; there are no retries.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = WEATHERAPI_BASE_URL,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent

    def fetch_current(self, query: str) -> dict:
        """Fetch current conditions for a place name or 'lat,lon' pair."""
        data = self._get(
            "current.json",
            {"q": query, "aqi": "no"},
            failure_message="Failed to fetch weather data",
            default_code="unknown_error",
        )
        if not isinstance(data.get("location"), dict) or not isinstance(
            data.get("current"), dict
        ):
            raise UpstreamDataShapeError(
                "Invalid response from weather API",
                "Expected location and current data",
            )
        return data

    def fetch_forecast(self, query: str, days: int = 3) -> dict:
        """Fetch a `days`-day forecast including astro and hourly series."""
        data = self._get(
            "forecast.json",
            {"q": query, "days": days, "aqi": "no", "alerts": "no"},
            failure_message="Failed to fetch forecast data",
            default_code="forecast_error",
        )
        forecast = data.get("forecast")
        if (
            not isinstance(data.get("location"), dict)
            or not isinstance(forecast, dict)
            or not isinstance(forecast.get("forecastday"), list)
        ):
            raise UpstreamDataShapeError(
                "Invalid forecast data", "Expected forecastday array"
            )
        return data

    def _get(
        self,
        endpoint: str,
        params: dict,
        failure_message: str,
        default_code: str,
    ) -> dict:
        url = f"{self.base_url}/{endpoint}"
        headers = {"User-Agent": self.user_agent}
        try:
            resp = httpx.get(
                url,
                params={"key": self.api_key, **params},
                headers=headers,
                timeout=self.timeout,
            )
        except httpx.RequestError as e:
            # str(e) can embed the request URL, which carries the key
            logger.error(
                "Weather provider request failed: %s -> %s", endpoint, type(e).__name__
            )
            raise UpstreamUnavailableError(failure_message, code=default_code) from e

        if resp.status_code >= 400:
            message, code = _provider_error(resp)
            logger.error(
                "Weather provider %d: %s -> %s (code=%s)",
                resp.status_code, endpoint, message, code,
            )
            raise UpstreamUnavailableError(
                message or failure_message,
                status_code=resp.status_code,
                code=code or default_code,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamDataShapeError(
                "Invalid response from weather API", "Response body is not JSON"
            ) from e
        if not isinstance(data, dict):
            raise UpstreamDataShapeError(
                "Invalid response from weather API", "Expected a JSON object"
            )
        return data


def _provider_error(resp: httpx.Response) -> tuple[str | None, str | None]:
    """Extract (message, code) from the provider's {"error": {...}} body."""
    try:
        body = resp.json()
    except ValueError:
        return None, None
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return None, None
    code = error.get("code")
    return error.get("message"), str(code) if code is not None else None
