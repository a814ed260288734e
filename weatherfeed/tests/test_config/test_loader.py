"""Tests for config loading and dotted-key lookup."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from weatherfeed.config.defaults import DEFAULT_OBSERVATION_SOURCES
from weatherfeed.config.loader import get_config_value, load_config
from weatherfeed.config.schema import DEFAULT_FORECAST_URL, FeedConfig
from weatherfeed.models.common import ObservationCategory


class TestLoadConfig:
    def test_load_from_yaml(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert config.locations_path == "data/locations.json"
        assert config.forecast.page_size == 10
        assert config.forecast.page_delay_seconds == 0.5
        assert config.schedule.hour == 7
        assert config.schedule.minute == 30

    def test_defaults_without_path(self):
        config = load_config()
        assert config.forecast.url == DEFAULT_FORECAST_URL
        assert config.forecast.page_size == 20
        assert config.forecast.page_delay_seconds == 1.0
        assert config.schedule.hour == 6
        assert config.server.port == 3000

    def test_default_sources_injected(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert len(config.scrape.sources) == len(DEFAULT_OBSERVATION_SOURCES)
        assert {s.category for s in config.scrape.sources} == set(ObservationCategory)

    def test_explicit_sources_not_overridden(self, tmp_path: Path):
        data = {
            "scrape": {
                "sources": [
                    {"url": "https://example.com/max", "category": "Max Temperature (C)"}
                ]
            }
        }
        path = tmp_path / "custom.yaml"
        with open(path, "w") as f:
            yaml.dump(data, f)
        config = load_config(path)
        assert len(config.scrape.sources) == 1
        assert config.scrape.sources[0].category == ObservationCategory.MAX_TEMPERATURE

    def test_empty_yaml_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(path)
        assert config.scrape.row_selector == "tr.ng-scope"
        assert len(config.scrape.sources) == 3

    def test_repository_default_config(self):
        path = Path(__file__).parents[3] / "ops" / "configs" / "default.yaml"
        config = load_config(path)
        assert config.locations_path == "filtered_ililce.json"
        assert config.server.static_dir == "public"

    def test_unknown_key_rejected(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("forecast:\n  pagesize: 10\n")
        with pytest.raises(ValidationError):
            load_config(path)


class TestSchema:
    def test_page_size_positive(self):
        with pytest.raises(ValidationError):
            FeedConfig(forecast={"page_size": 0})

    def test_hour_bounds(self):
        with pytest.raises(ValidationError):
            FeedConfig(schedule={"hour": 24})

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            FeedConfig(scrape={"sources": [{"url": "https://x", "category": "Humidity"}]})


class TestGetConfigValue:
    def test_nested(self):
        config = load_config()
        assert get_config_value(config, "forecast.page_size") == 20

    def test_list_index(self):
        config = load_config()
        assert get_config_value(config, "scrape.sources.2.category") == ObservationCategory.PRECIPITATION

    def test_missing(self):
        with pytest.raises(KeyError):
            get_config_value(load_config(), "forecast.nope")
