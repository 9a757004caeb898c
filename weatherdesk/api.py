"""Weather API: FastAPI app serving current conditions, forecasts and history."""

import logging
import os

from fastapi import BackgroundTasks, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from weatherdesk.config.loader import DEFAULT_CONFIG, load_config, require_api_key
from weatherdesk.config.schema import AppConfig
from weatherdesk.errors import WeatherDeskError
from weatherdesk.ingest.weatherapi_client import WeatherApiClient
from weatherdesk.pipeline.weather_service import WeatherService
from weatherdesk.storage.autocomplete import AutocompletePrefixIndex
from weatherdesk.storage.history_store import SearchHistoryStore

logger = logging.getLogger(__name__)

APP_NAME = "WeatherDesk API"
APP_VERSION = "0.1.0"


def create_app(
    config: AppConfig,
    store: SearchHistoryStore | None = None,
    client: WeatherApiClient | None = None,
) -> FastAPI:
    """Build the app around explicitly injected config and collaborators."""
    if store is None:
        store = SearchHistoryStore(config.storage.db_path)
    if client is None:
        client = WeatherApiClient(
            api_key=config.provider.api_key,
            base_url=config.provider.base_url,
            timeout=config.provider.timeout_seconds,
        )
    service = WeatherService(client, config)
    suggestions = AutocompletePrefixIndex(store, config.history.autocomplete_limit)

    app = FastAPI(title=APP_NAME, version=APP_VERSION)

    limiter = Limiter(
        key_func=get_remote_address, default_limits=[config.server.rate_limit]
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(WeatherDeskError)
    def handle_weatherdesk_error(request: Request, exc: WeatherDeskError):
        if exc.http_status >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.http_status, content=exc.to_dict())

    # Framework errors (unknown route, wrong method) use the same envelope.
    @app.exception_handler(StarletteHTTPException)
    def handle_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    def handle_request_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422, content={"error": "Invalid request parameters"}
        )

    @app.exception_handler(Exception)
    def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Server error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    # ── Weather endpoints ───────────────────────────────────────────

    # Declared before /weather/{city} so "coords" is not taken as a city.
    @app.get("/weather/coords")
    def weather_by_coords(
        background_tasks: BackgroundTasks,
        lat: str | None = None,
        lon: str | None = None,
    ):
        """Current conditions for a latitude/longitude pair."""
        result = service.current_by_coords(lat, lon)
        background_tasks.add_task(store.record_search, result.city_key)
        return result.snapshot.to_dict()

    @app.get("/weather/{city}")
    def weather_by_city(city: str, background_tasks: BackgroundTasks):
        """Current conditions for a place name."""
        result = service.current_by_city(city)
        background_tasks.add_task(store.record_search, result.city_key)
        return result.snapshot.to_dict()

    @app.get("/forecast/{city}")
    def forecast(city: str):
        """The next hours of forecast starting at the city's local hour."""
        return [hour.to_dict() for hour in service.forecast(city)]

    # ── History endpoints ───────────────────────────────────────────

    @app.get("/history")
    def get_history():
        return store.recent_history(config.history.recent_limit)

    @app.delete("/history")
    def clear_history():
        store.clear_history()
        return {"message": "History cleared successfully"}

    @app.get("/autocomplete")
    def autocomplete(q: str | None = None):
        return suggestions.suggest(q)

    @app.get("/health")
    def health():
        return {"db_ok": store.ping()}

    return app


def create_app_from_env() -> FastAPI:
    """uvicorn factory: `uvicorn weatherdesk.api:create_app_from_env --factory`."""
    config = load_config(os.environ.get("WEATHERDESK_CONFIG", DEFAULT_CONFIG))
    require_api_key(config)
    return create_app(config)
