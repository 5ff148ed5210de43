"""CLI tests for the date parsing commands.

Every invocation points --config-path at a temporary file so the developer's
own ~/.localevents settings are never read or written.
"""

import json

import pytest
from typer.testing import CliRunner

from localevents.cli import cli
from localevents.cli.dates import dates_app


runner = CliRunner()

REFERENCE = "2024-01-15T12:00:00-06:00"
ISO_CANDIDATE = "2024-02-20T19:30:00-06:00"


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "config.json"


def _invoke(config_path, *args):
    return runner.invoke(dates_app, [*args, "--config-path", str(config_path)])


class TestParseCommand:
    def test_outputs_json(self, config_path):
        result = _invoke(config_path, "parse", "tomorrow at 2pm", "--reference", REFERENCE, "--json")

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["total"] == 1
        parsed = payload["results"][0]
        assert parsed["instant"] == "2024-01-16T14:00:00-06:00"
        assert parsed["source"] == "Tomorrow"
        assert parsed["is_all_day"] is False

    def test_renders_table(self, config_path):
        result = _invoke(config_path, "parse", "7:30 PM", "--reference", REFERENCE)

        assert result.exit_code == 0
        assert "Bare time" in result.stdout
        assert "0.40" in result.stdout

    def test_bare_weekday(self, config_path):
        result = _invoke(config_path, "parse", "Fri 8pm", "--reference", REFERENCE, "--json")

        assert result.exit_code == 0
        parsed = json.loads(result.stdout)["results"][0]
        assert parsed["source"] == "friday relative"
        assert parsed["instant"] == "2024-01-19T20:00:00-06:00"

    def test_uses_current_time_without_reference(self, config_path):
        result = _invoke(config_path, "parse", "2024-02-20", "--json")

        assert result.exit_code == 0
        assert json.loads(result.stdout)["results"][0]["source"] == "ISO Format"

    def test_bootstraps_config(self, config_path):
        _invoke(config_path, "parse", "today", "--reference", REFERENCE)

        assert config_path.exists()


class TestNoMatch:
    def test_exits_one(self, config_path):
        result = _invoke(config_path, "parse", "doors open soon", "--reference", REFERENCE)

        assert result.exit_code == 1
        assert "No date found" in result.stdout

    def test_json_payload_is_empty(self, config_path):
        result = _invoke(config_path, "parse", "doors open soon", "--reference", REFERENCE, "--json")

        assert result.exit_code == 1
        assert json.loads(result.stdout) == {"results": [], "total": 0}

    def test_implausible_iso_is_no_match(self, config_path):
        result = _invoke(config_path, "parse", "1999-12-31T20:00:00-06:00", "--reference", REFERENCE)

        assert result.exit_code == 1


class TestErrors:
    def test_invalid_reference_exits_two(self, config_path):
        result = _invoke(config_path, "parse", "tomorrow", "--reference", "last tuesday-ish")

        assert result.exit_code == 2
        assert "INVALID_REFERENCE_TIME" in result.output

    def test_invalid_timezone_exits_two(self, config_path):
        result = _invoke(config_path, "parse", "tomorrow", "--reference", REFERENCE, "--timezone", "Mars/Base")

        assert result.exit_code == 2
        assert "INVALID_TIMEZONE" in result.output

    def test_broken_config_exits_two(self, config_path):
        config_path.write_text("{broken", encoding="utf-8")

        result = _invoke(config_path, "parse", "today", "--reference", REFERENCE)

        assert result.exit_code == 2
        assert "INVALID_CONFIG" in result.output


class TestBestCommand:
    def test_shows_top_candidate(self, config_path):
        result = _invoke(
            config_path, "best", "next friday", ISO_CANDIDATE, "invalid",
            "--reference", REFERENCE, "--json",
        )

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["total"] == 1
        assert payload["results"][0]["source"] == "ISO Format"

    def test_all_shows_ranking(self, config_path):
        result = _invoke(
            config_path, "best", "next friday", ISO_CANDIDATE, "invalid",
            "--reference", REFERENCE, "--all", "--json",
        )

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["total"] == 2
        assert [r["source"] for r in payload["results"]] == ["ISO Format", "friday relative"]

    def test_min_confidence_filters_everything(self, config_path):
        result = _invoke(
            config_path, "best", "7:30 PM", "next week", "--reference", REFERENCE, "--min-confidence", "0.9",
        )

        assert result.exit_code == 1


class TestRootApp:
    def test_verbose_flag(self, config_path):
        result = runner.invoke(
            cli,
            ["--verbose", "dates", "parse", "tonight", "--reference", REFERENCE, "--config-path", str(config_path)],
        )

        assert result.exit_code == 0
        assert "Today/Tonight" in result.stdout
