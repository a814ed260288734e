"""Tests for CLI argument parsing and dispatch."""

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

from weatherfeed.cli import main
from weatherfeed.models.reporting import RefreshSummary


class TestCli:
    def test_no_command_prints_help(self):
        assert main([]) == 1

    def test_config_show(self, config_yaml_path: Path, capsys):
        assert main(["--config", str(config_yaml_path), "config", "show"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["forecast"]["page_size"] == 10

    def test_config_get(self, config_yaml_path: Path, capsys):
        assert main(["--config", str(config_yaml_path), "config", "get", "schedule.hour"]) == 0
        assert capsys.readouterr().out.strip() == "7"

    def test_config_get_missing(self, capsys):
        assert main(["config", "get", "schedule.nope"]) == 1
        assert "Error" in capsys.readouterr().out

    def test_refresh_writes_output(self, tmp_path: Path, capsys):
        summary = RefreshSummary(started_at="2026-03-01T06:00:00+00:00", status="completed")
        output = tmp_path / "dataset.json"
        with patch("weatherfeed.cli._refresh_once", new=AsyncMock(return_value=summary)):
            assert main(["refresh", "--output", str(output)]) == 0

        assert json.loads(output.read_text(encoding="utf-8")) == {
            "today": [], "tomorrow": [], "yesterday": [],
        }
        assert '"status": "completed"' in capsys.readouterr().out

    def test_refresh_failure_exit_code(self):
        failing = AsyncMock(side_effect=RuntimeError("no browser"))
        with patch("weatherfeed.cli._refresh_once", new=failing):
            assert main(["refresh"]) == 1

    def test_serve_uses_overrides(self):
        with patch("uvicorn.run") as run:
            assert main(["serve", "--port", "8123"]) == 0
        _, kwargs = run.call_args
        assert kwargs["port"] == 8123
        assert kwargs["host"] == "0.0.0.0"
