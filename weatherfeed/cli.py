"""CLI entry point for the weather feed server."""

import argparse
import asyncio
import json
import logging
from pathlib import Path

from weatherfeed.config.loader import get_config_value, load_config
from weatherfeed.config.schema import FeedConfig
from weatherfeed.ingest.forecast_client import ForecastClient
from weatherfeed.pipeline.dataset_loader import build_loader
from weatherfeed.pipeline.dataset_store import DatasetStore

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherfeed",
        description="Turkish weather forecast and observation feed",
    )
    parser.add_argument(
        "--config", default=None, help="Config YAML path (built-in defaults if omitted)"
    )

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP/WebSocket server")
    serve_p.add_argument("--host", default=None, help="Override server.host")
    serve_p.add_argument("--port", type=int, default=None, help="Override server.port")

    # refresh
    refresh_p = sub.add_parser("refresh", help="Run one refresh cycle and exit")
    refresh_p.add_argument(
        "--output", default=None, help="Write the resulting dataset JSON here"
    )

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Display one config value")
    get_p.add_argument("key", help="Dotted key, e.g. forecast.page_size")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "refresh":
        return _cmd_refresh(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_serve(config: FeedConfig, args) -> int:
    import uvicorn

    from weatherfeed.server import create_app

    host = args.host or config.server.host
    port = args.port or config.server.port
    logger.info("Server is running on http://%s:%d", host, port)
    uvicorn.run(create_app(config), host=host, port=port)
    return 0


def _cmd_refresh(config: FeedConfig, args) -> int:
    store = DatasetStore()
    try:
        summary = asyncio.run(_refresh_once(config, store))
    except Exception as e:
        logger.exception("Refresh failed")
        print(f"Refresh failed: {e}")
        return 1

    print(json.dumps(summary.to_dict(), indent=2))
    if args.output:
        Path(args.output).write_text(
            json.dumps(store.get().to_dict(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        print(f"Dataset written to {args.output}")
    return 0


async def _refresh_once(config: FeedConfig, store: DatasetStore):
    async with ForecastClient(
        config.forecast.url, config.forecast.timeout_seconds
    ) as client:
        loader = build_loader(config, store, client)
        return await loader.refresh()


def _cmd_config(config: FeedConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        print(value)
        return 0
    else:
        print("Use: config show | config get KEY")
        return 1
