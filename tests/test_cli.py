"""Tests for the command line interface."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from reclaim.cli import main
from reclaim.settings import Settings


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def junk_settings(junk_catalog):
    settings = Settings()
    settings.set("catalog", list(junk_catalog))
    return settings


@pytest.mark.usefixtures("isolate_storage", "junk_settings")
class TestRunCommand:
    def test_dry_run_json(self, runner, junk_volume):
        result = runner.invoke(main, ["run", str(junk_volume), "--json", "--no-purge-trash"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["status"] == "dry_run"
        assert data["JunkRemoved"] == 0
        assert (junk_volume / "var" / "cache" / "app" / "a.bin").exists()

    def test_apply_deletes_and_records(self, runner, junk_volume, isolate_storage):
        result = runner.invoke(main, ["run", str(junk_volume), "--apply", "--yes", "--no-purge-trash"])

        assert result.exit_code == 0, result.output
        assert "Junk removed" in result.output
        assert not (junk_volume / "var" / "cache" / "app" / "a.bin").exists()
        assert len(json.loads(isolate_storage.read_text())["runs"]) == 1

    def test_apply_asks_for_confirmation(self, runner, junk_volume):
        result = runner.invoke(main, ["run", str(junk_volume), "--apply", "--no-purge-trash"], input="n\n")

        assert "Aborted." in result.output
        assert (junk_volume / "var" / "cache" / "app" / "a.bin").exists()

    def test_non_mount_volume_is_advisory(self, runner, junk_volume):
        result = runner.invoke(main, ["run", str(junk_volume), "--no-purge-trash"])

        assert result.exit_code == 0
        assert "not a mounted volume" in result.output
        assert "dry run" in result.output

    def test_missing_volume_fails(self, runner, tmp_path):
        result = runner.invoke(main, ["run", str(tmp_path / "gone"), "--no-purge-trash"])
        assert result.exit_code == 1

    def test_log_file_written(self, runner, junk_volume, tmp_path):
        log_file = tmp_path / "actions.log"
        result = runner.invoke(
            main, ["run", str(junk_volume), "--apply", "-y", "--no-purge-trash", "--log-file", str(log_file)]
        )

        assert result.exit_code == 0, result.output
        assert "Removing" in log_file.read_text()

    def test_accounting_from_settings(self, runner, junk_volume, junk_settings):
        junk_settings.set("run.accounting", "bogus")
        result = runner.invoke(main, ["run", str(junk_volume), "--no-purge-trash"])
        assert result.exit_code == 1
        assert "Unknown accounting policy" in result.output


class TestOtherCommands:
    def test_info_root(self, runner):
        result = runner.invoke(main, ["info", "/", "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["mount_point"] == "/"

    def test_info_missing_volume(self, runner, tmp_path):
        result = runner.invoke(main, ["info", str(tmp_path / "gone")])
        assert result.exit_code == 1

    @pytest.mark.usefixtures("junk_settings")
    def test_catalog_lists_resolved_paths(self, runner, junk_volume):
        result = runner.invoke(main, ["catalog", "--volume", str(junk_volume), "--json"])

        assert result.exit_code == 0, result.output
        data = {item["entry"]: item["paths"] for item in json.loads(result.output)}
        assert data["missing/dir"] == []
        assert len(data["var/log/*.gz"]) == 2

    @pytest.mark.usefixtures("isolate_storage")
    def test_stats_empty(self, runner):
        result = runner.invoke(main, ["stats"])
        assert result.exit_code == 0
        assert "Runs:           0" in result.output

    def test_config_set_and_get(self, runner):
        assert runner.invoke(main, ["config", "set", "run.older_than_days", "14"]).exit_code == 0
        result = runner.invoke(main, ["config", "get", "run.older_than_days"])
        assert result.output.strip() == "14"

    def test_config_get_missing(self, runner):
        assert runner.invoke(main, ["config", "get", "nope"]).exit_code == 1
