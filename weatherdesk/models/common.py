"""Common types and helpers shared across models."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def normalize_city(city: str) -> str:
    """Trimmed, lowercased city key used for history and autocomplete."""
    return city.strip().lower()
