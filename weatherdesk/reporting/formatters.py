"""Plain-text output formatters for the CLI."""

import json
from datetime import UTC, datetime

from weatherdesk.models.weather import ForecastHour, WeatherSnapshot


def format_offset(seconds: int) -> str:
    """UTC offset as 'UTC+05:30'."""
    sign = "+" if seconds >= 0 else "-"
    minutes = abs(seconds) // 60
    return f"UTC{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def format_astro(epoch: float | None) -> str:
    """Clock time of a sunrise/sunset instant, or '--' when unknown."""
    if epoch is None:
        return "--"
    # Astro instants are stored as wall-clock read as UTC
    return datetime.fromtimestamp(epoch, UTC).strftime("%H:%M")


def format_snapshot_text(s: WeatherSnapshot) -> str:
    place = ", ".join(p for p in (s.city, s.region, s.country) if p)
    lines = [
        f"=== {place} ({format_offset(s.timezone)}) ===",
        f"{s.temp}°C, {s.description} (feels like {s.feels_like}°C)",
        f"Humidity: {s.humidity}% | Wind: {s.wind} kph | Pressure: {s.pressure} mb",
        f"Visibility: {s.visibility} km | Clouds: {s.clouds}% | UV: {s.uvi}",
        f"Sunrise: {format_astro(s.sunrise)} | Sunset: {format_astro(s.sunset)}",
        f"Updated: {s.last_updated}",
    ]
    return "\n".join(lines)


def format_forecast_text(hours: list[ForecastHour]) -> str:
    return "\n".join(f"{h.time}  {h.temp_c:>5}°C  {h.condition}" for h in hours)


def format_json(data: dict | list) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)
