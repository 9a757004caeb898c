"""Latitude/longitude parsing and range validation."""

import math

from weatherdesk.errors import InputValidationError


def validate_coordinates(lat: str | None, lon: str | None) -> tuple[float, float]:
    """Parse a latitude/longitude pair given as text.

    Raises InputValidationError when either value is missing, non-numeric,
    or outside [-90, 90] / [-180, 180].
    """
    if lat is None or lon is None or not str(lat).strip() or not str(lon).strip():
        raise InputValidationError(
            "Missing coordinates",
            "Both lat and lon parameters are required",
        )

    try:
        lat_num = float(lat)
        lon_num = float(lon)
    except (TypeError, ValueError):
        raise InputValidationError(
            "Invalid coordinates",
            "Latitude and longitude must be numbers",
        ) from None

    if not (math.isfinite(lat_num) and math.isfinite(lon_num)):
        raise InputValidationError(
            "Invalid coordinates",
            "Latitude and longitude must be numbers",
        )

    if not (-90 <= lat_num <= 90 and -180 <= lon_num <= 180):
        raise InputValidationError(
            "Invalid coordinates",
            "Latitude must be between -90 and 90, longitude between -180 and 180",
        )

    return lat_num, lon_num


def format_coordinates(lat: float, lon: float, precision: int = 2) -> str:
    """Render a coordinate pair as a provider location query, e.g. '51.51,-0.13'."""
    return f"{lat:.{precision}f},{lon:.{precision}f}"
