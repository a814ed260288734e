"""Location list loader."""

import json
import logging
from pathlib import Path

from weatherfeed.errors import LocationListError
from weatherfeed.models.weather import Location

logger = logging.getLogger(__name__)


def load_locations(path: str | Path) -> list[Location]:
    """Read the JSON location list. Any read or parse problem is fatal."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        raise LocationListError(f"Cannot read location list {path}: {e}") from e

    if not isinstance(raw, list):
        raise LocationListError(f"Location list {path} is not a JSON array")

    locations = [Location.from_record(r) for r in raw]
    logger.info("Loaded %d locations from %s", len(locations), path)
    return locations
