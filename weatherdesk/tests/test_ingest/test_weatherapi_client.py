"""Tests for the WeatherAPI client with mocked httpx."""

import json
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest
import respx

from weatherdesk.errors import UpstreamDataShapeError, UpstreamUnavailableError
from weatherdesk.ingest.weatherapi_client import WeatherApiClient

BASE = "https://test-weather.example.com/v1"


@pytest.fixture
def client() -> WeatherApiClient:
    return WeatherApiClient(api_key="test-key-123", base_url=BASE, timeout=5.0)


@pytest.fixture
def no_location(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "weatherapi_error_no_location.json") as f:
        return json.load(f)


class TestFetchCurrent:
    @respx.mock
    def test_success(self, client: WeatherApiClient, current_london: dict):
        route = respx.get(f"{BASE}/current.json").mock(
            return_value=httpx.Response(200, json=current_london)
        )
        result = client.fetch_current("London")
        assert result["location"]["name"] == "London"
        assert route.call_count == 1

    @respx.mock
    def test_query_params(self, client: WeatherApiClient, current_london: dict):
        route = respx.get(f"{BASE}/current.json").mock(
            return_value=httpx.Response(200, json=current_london)
        )
        client.fetch_current("51.51,-0.13")
        params = route.calls[0].request.url.params
        assert params["key"] == "test-key-123"
        assert params["q"] == "51.51,-0.13"
        assert params["aqi"] == "no"
        assert "weatherdesk" in route.calls[0].request.headers["user-agent"]

    @respx.mock
    def test_provider_error_propagated(self, client: WeatherApiClient, no_location: dict):
        respx.get(f"{BASE}/current.json").mock(
            return_value=httpx.Response(400, json=no_location)
        )
        with pytest.raises(UpstreamUnavailableError) as exc:
            client.fetch_current("Atlantis")
        err = exc.value
        assert err.status_code == 400
        assert err.http_status == 400
        assert err.message == "No matching location found."
        assert err.code == "1006"
        assert err.to_dict() == {"error": "No matching location found.", "code": "1006"}

    @respx.mock
    def test_non_json_error_uses_default_message(self, client: WeatherApiClient):
        respx.get(f"{BASE}/current.json").mock(
            return_value=httpx.Response(502, text="Bad Gateway")
        )
        with pytest.raises(UpstreamUnavailableError) as exc:
            client.fetch_current("London")
        assert exc.value.http_status == 502
        assert exc.value.message == "Failed to fetch weather data"
        assert exc.value.code == "unknown_error"

    @respx.mock
    def test_network_error_has_no_status(self, client: WeatherApiClient):
        route = respx.get(f"{BASE}/current.json").mock(
            side_effect=httpx.ConnectError("connection refused")
        )
        with pytest.raises(UpstreamUnavailableError) as exc:
            client.fetch_current("London")
        assert exc.value.status_code is None
        assert exc.value.http_status == 500
        # single attempt, no retries
        assert route.call_count == 1

    @respx.mock
    def test_timeout_is_unavailable(self, client: WeatherApiClient):
        respx.get(f"{BASE}/current.json").mock(
            side_effect=httpx.ReadTimeout("timed out")
        )
        with pytest.raises(UpstreamUnavailableError):
            client.fetch_current("London")

    @respx.mock
    def test_missing_current_block(self, client: WeatherApiClient, current_london: dict):
        del current_london["current"]
        respx.get(f"{BASE}/current.json").mock(
            return_value=httpx.Response(200, json=current_london)
        )
        with pytest.raises(UpstreamDataShapeError) as exc:
            client.fetch_current("London")
        assert exc.value.http_status == 500

    @respx.mock
    def test_non_json_success(self, client: WeatherApiClient):
        respx.get(f"{BASE}/current.json").mock(
            return_value=httpx.Response(200, text="<html>")
        )
        with pytest.raises(UpstreamDataShapeError):
            client.fetch_current("London")


class TestFetchForecast:
    @respx.mock
    def test_success(self, client: WeatherApiClient, forecast_body: Callable[..., dict]):
        route = respx.get(f"{BASE}/forecast.json").mock(
            return_value=httpx.Response(200, json=forecast_body())
        )
        result = client.fetch_forecast("London", days=3)
        assert len(result["forecast"]["forecastday"]) == 3
        params = route.calls[0].request.url.params
        assert params["days"] == "3"
        assert params["alerts"] == "no"

    @respx.mock
    def test_error_code_defaults_to_forecast_error(self, client: WeatherApiClient):
        respx.get(f"{BASE}/forecast.json").mock(return_value=httpx.Response(503))
        with pytest.raises(UpstreamUnavailableError) as exc:
            client.fetch_forecast("London")
        assert exc.value.code == "forecast_error"
        assert exc.value.message == "Failed to fetch forecast data"

    @respx.mock
    def test_missing_forecastday(self, client: WeatherApiClient, forecast_body):
        body = forecast_body()
        body["forecast"] = {}
        respx.get(f"{BASE}/forecast.json").mock(
            return_value=httpx.Response(200, json=body)
        )
        with pytest.raises(UpstreamDataShapeError, match="Invalid forecast data"):
            client.fetch_forecast("London")
