"""Shared test fixtures."""

import json
from collections.abc import Callable
from datetime import date, timedelta
from pathlib import Path

import pytest
import yaml

from weatherdesk.config.schema import AppConfig
from weatherdesk.storage.history_store import SearchHistoryStore

TEST_BASE_URL = "https://test-weather.example.com/v1"
ICON = "//cdn.weatherapi.com/weather/64x64/day/116.png"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def current_london(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "weatherapi_current_london.json") as f:
        return json.load(f)


@pytest.fixture
def forecast_body() -> Callable[..., dict]:
    """Factory for forecast.json bodies with one entry per hour per day."""

    def _make(
        start: str = "2026-10-18",
        days: int = 3,
        localtime: str = "2026-10-18 13:37",
        astro: dict | None = None,
        name: str = "London",
    ) -> dict:
        if astro is None:
            astro = {"sunrise": "07:29 AM", "sunset": "06:02 PM"}
        first = date.fromisoformat(start)
        forecastday = []
        for d in range(days):
            day = (first + timedelta(days=d)).isoformat()
            forecastday.append({
                "date": day,
                "astro": astro,
                "hour": [
                    {
                        "time": f"{day} {h:02d}:00",
                        "temp_c": round(10.0 + h * 0.5 + d, 1),
                        "condition": {"text": "Partly cloudy", "icon": ICON},
                    }
                    for h in range(24)
                ],
            })
        return {
            "location": {
                "name": name,
                "region": "City of London, Greater London",
                "country": "United Kingdom",
                "tz_id": "Europe/London",
                "localtime": localtime,
            },
            "forecast": {"forecastday": forecastday},
        }

    return _make


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """Config pointing at a fake provider and a temporary database."""
    return AppConfig(
        provider={"base_url": TEST_BASE_URL, "api_key": "test-key-123"},
        storage={"db_path": str(tmp_path / "history.db")},
    )


@pytest.fixture
def store(tmp_path: Path) -> SearchHistoryStore:
    return SearchHistoryStore(tmp_path / "history.db")


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "provider": {"timeout_seconds": 5.0},
        "history": {"recent_limit": 4},
        "storage": {"db_path": str(tmp_path / "from_yaml.db")},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
