"""Weather snapshot and hourly forecast models."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class WeatherSnapshot:
    city: str
    region: str
    country: str
    temp: float  # °C
    description: str
    icon: str
    last_updated: str
    humidity: float
    wind: float  # kph
    pressure: float  # mb
    visibility: float  # km
    feels_like: float  # °C
    clouds: float  # %
    uvi: float
    sunrise: float | None  # epoch seconds
    sunset: float | None
    timezone: int  # UTC offset seconds

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ForecastHour:
    time: str  # local wall-clock "YYYY-MM-DD HH:MM"
    temp_c: float
    condition: str
    icon: str

    @property
    def description(self) -> str:
        return self.condition

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "temp_c": self.temp_c,
            "condition": self.condition,
            "icon": self.icon,
            "description": self.description,
        }


@dataclass(frozen=True)
class CurrentWeatherResult:
    """A composed snapshot plus the normalized city key to record."""

    snapshot: WeatherSnapshot
    city_key: str
