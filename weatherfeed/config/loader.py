"""YAML config loader with dotted-key lookup."""

from pathlib import Path
from typing import Any

import yaml

from weatherfeed.config.defaults import DEFAULT_OBSERVATION_SOURCES
from weatherfeed.config.schema import FeedConfig


def load_config(path: str | Path | None = None) -> FeedConfig:
    """Load and validate config from a YAML file.

    A missing path yields the built-in defaults. If no observation sources
    are specified, injects DEFAULT_OBSERVATION_SOURCES.
    """
    raw: dict = {}
    if path is not None:
        with open(Path(path)) as f:
            raw = yaml.safe_load(f) or {}

    scrape = raw.setdefault("scrape", {}) or {}
    raw["scrape"] = scrape
    if not scrape.get("sources"):
        scrape["sources"] = [s.model_dump() for s in DEFAULT_OBSERVATION_SOURCES]

    return FeedConfig(**raw)


def get_config_value(config: FeedConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'forecast.page_size'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
