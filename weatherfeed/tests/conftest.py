"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from factories import make_forecast_response
from weatherfeed.models.weather import Location


@pytest.fixture
def ankara() -> Location:
    return Location(city="Ankara", district="Cankaya", lat="39.9", lng="32.8")


@pytest.fixture
def forecast_response() -> dict:
    return make_forecast_response()


@pytest.fixture
def locations_file(tmp_path: Path) -> Path:
    """Write a 45-entry location list using the published Turkish keys."""
    records = [
        {"sehir": f"City{i}", "semt": f"District{i}", "lat": f"{36 + i * 0.1:.4f}", "lng": "32.8"}
        for i in range(45)
    ]
    path = tmp_path / "locations.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "locations_path": "data/locations.json",
        "forecast": {"page_size": 10, "page_delay_seconds": 0.5},
        "schedule": {"hour": 7, "minute": 30},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
