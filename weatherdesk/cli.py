"""CLI entry point for the weather service."""

import argparse
import logging

from weatherdesk.config.loader import (
    DEFAULT_CONFIG,
    get_config_value,
    load_config,
    require_api_key,
)
from weatherdesk.config.schema import AppConfig
from weatherdesk.errors import WeatherDeskError
from weatherdesk.ingest.weatherapi_client import WeatherApiClient
from weatherdesk.pipeline.weather_service import WeatherService
from weatherdesk.reporting.formatters import (
    format_forecast_text,
    format_json,
    format_snapshot_text,
)
from weatherdesk.storage.autocomplete import AutocompletePrefixIndex
from weatherdesk.storage.history_store import SearchHistoryStore

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherdesk",
        description="Current weather, hourly forecasts and search history",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=None, help="SQLite DB path (overrides config)")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    # weather / forecast
    weather_p = sub.add_parser("weather", help="Show current conditions for a city")
    weather_p.add_argument("city")
    weather_p.add_argument("--json", action="store_true", help="Print JSON")
    forecast_p = sub.add_parser("forecast", help="Show the next hours of forecast")
    forecast_p.add_argument("city")
    forecast_p.add_argument("--json", action="store_true", help="Print JSON")

    # history show / history clear
    history_p = sub.add_parser("history", help="Search history operations")
    history_sub = history_p.add_subparsers(dest="history_command")
    history_sub.add_parser("show", help="List recent searches")
    history_sub.add_parser("clear", help="Delete all searches")

    # suggest
    suggest_p = sub.add_parser("suggest", help="Autocomplete a city prefix")
    suggest_p.add_argument("prefix")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Get a config value")
    get_p.add_argument("key", help="Dotted key, e.g. history.recent_limit")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        if args.db:
            config = config.model_copy(
                update={"storage": config.storage.model_copy(update={"db_path": args.db})}
            )

        if args.command == "serve":
            return _cmd_serve(config, args)
        elif args.command == "weather":
            return _cmd_weather(config, args)
        elif args.command == "forecast":
            return _cmd_forecast(config, args)
        elif args.command == "history":
            return _cmd_history(config, args)
        elif args.command == "suggest":
            return _cmd_suggest(config, args)
        elif args.command == "config":
            return _cmd_config(config, args)
    except WeatherDeskError as e:
        print(f"Error: {e.message}")
        return 1

    parser.print_help()
    return 1


def _service(config: AppConfig) -> WeatherService:
    client = WeatherApiClient(
        api_key=require_api_key(config),
        base_url=config.provider.base_url,
        timeout=config.provider.timeout_seconds,
    )
    return WeatherService(client, config)


def _cmd_serve(config: AppConfig, args) -> int:
    import uvicorn

    from weatherdesk.api import create_app

    require_api_key(config)
    store = SearchHistoryStore(config.storage.db_path)
    store.initialize()
    host = args.host or config.server.host
    port = args.port or config.server.port
    logger.info("Serving on %s:%d (db=%s)", host, port, config.storage.db_path)
    uvicorn.run(create_app(config, store=store), host=host, port=port)
    return 0


def _cmd_weather(config: AppConfig, args) -> int:
    result = _service(config).current_by_city(args.city)
    SearchHistoryStore(config.storage.db_path).record_search(result.city_key)
    if args.json:
        print(format_json(result.snapshot.to_dict()))
    else:
        print(format_snapshot_text(result.snapshot))
    return 0


def _cmd_forecast(config: AppConfig, args) -> int:
    hours = _service(config).forecast(args.city)
    if args.json:
        print(format_json([h.to_dict() for h in hours]))
    else:
        print(format_forecast_text(hours))
    return 0


def _cmd_history(config: AppConfig, args) -> int:
    store = SearchHistoryStore(config.storage.db_path)
    if args.history_command == "show":
        cities = store.recent_history(config.history.recent_limit)
        if not cities:
            print("No searches yet")
        for city in cities:
            print(city)
        return 0
    elif args.history_command == "clear":
        removed = store.clear_history()
        print(f"History cleared ({removed} removed)")
        return 0
    else:
        print("Use: history show | history clear")
        return 1


def _cmd_suggest(config: AppConfig, args) -> int:
    store = SearchHistoryStore(config.storage.db_path)
    index = AutocompletePrefixIndex(store, config.history.autocomplete_limit)
    for city in index.suggest(args.prefix):
        print(city)
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    masked = config.model_copy(
        update={
            "provider": config.provider.model_copy(
                update={"api_key": "***" if config.provider.api_key else ""}
            )
        }
    )
    if args.config_command == "show":
        print(masked.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(masked, args.key)
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        print(value)
        return 0
    else:
        print("Use: config show | config get key")
        return 1
