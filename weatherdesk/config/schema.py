"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

WEATHERAPI_BASE_URL = "https://api.weatherapi.com/v1"


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = WEATHERAPI_BASE_URL
    api_key: str = ""
    timeout_seconds: float = Field(default=10.0, ge=1.0, le=30.0)
    coordinate_precision: int = Field(default=2, ge=0, le=6)


class StorageConfig(BaseModel):
    model_config = {"extra": "forbid"}

    db_path: str = "data/weatherdesk.db"


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "0.0.0.0"
    port: int = Field(default=5000, ge=1, le=65535)
    cors_origins: list[str] = ["http://localhost:5173"]
    rate_limit: str = "100 per 15 minutes"


class HistoryConfig(BaseModel):
    model_config = {"extra": "forbid"}

    recent_limit: int = Field(default=4, ge=1)
    autocomplete_limit: int = Field(default=5, ge=1)


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    days: int = Field(default=3, ge=1, le=14)
    window_hours: int = Field(default=8, ge=1)


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: ProviderConfig = ProviderConfig()
    storage: StorageConfig = StorageConfig()
    server: ServerConfig = ServerConfig()
    history: HistoryConfig = HistoryConfig()
    forecast: ForecastConfig = ForecastConfig()
