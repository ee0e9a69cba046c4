"""Tests for catalog resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from reclaim.catalog import DEFAULT_CATALOG, expand_entry, load_catalog, resolve_placeholders
from reclaim.settings import Settings


class TestResolvePlaceholders:
    def test_braced_and_bare_variables(self, monkeypatch):
        monkeypatch.setenv("JUNK_ROOT", "/srv/junk")
        assert resolve_placeholders("${JUNK_ROOT}/a", "/") == "/srv/junk/a"
        assert resolve_placeholders("$JUNK_ROOT/b", "/") == "/srv/junk/b"

    def test_xdg_defaults_when_unset(self, monkeypatch, isolate_xdg):
        monkeypatch.delenv("XDG_CACHE_HOME")
        assert resolve_placeholders("${XDG_CACHE_HOME}/x", "/") == f"{isolate_xdg}/.cache/x"

    def test_volume_placeholder(self, tmp_path):
        assert resolve_placeholders("${VOLUME}/tmp", str(tmp_path)) == f"{tmp_path}/tmp"

    def test_unknown_placeholder_kept(self):
        assert resolve_placeholders("${NO_SUCH_VARIABLE_HERE}/x", "/") == "${NO_SUCH_VARIABLE_HERE}/x"

    def test_tilde_expanded(self, isolate_xdg):
        assert resolve_placeholders("~/.cache", "/") == f"{isolate_xdg}/.cache"


class TestExpandEntry:
    def test_relative_entry_joined_to_volume(self, junk_volume):
        assert expand_entry("var/cache/app", str(junk_volume)) == [junk_volume / "var" / "cache" / "app"]

    def test_missing_entry(self, junk_volume):
        assert expand_entry("var/cache/nothing", str(junk_volume)) == []

    def test_wildcards_sorted(self, junk_volume):
        paths = expand_entry("var/log/*.gz", str(junk_volume))
        assert [p.name for p in paths] == ["syslog.1.gz", "syslog.2.gz"]

    def test_wildcard_in_middle_segment(self, junk_volume):
        paths = expand_entry("var/*/app", str(junk_volume))
        assert paths == [junk_volume / "var" / "cache" / "app"]

    def test_dangling_symlink_is_found(self, junk_volume):
        link = junk_volume / "dangling"
        link.symlink_to(junk_volume / "gone")
        assert expand_entry("dangling", str(junk_volume)) == [link]

    def test_absolute_entry_ignores_volume(self, junk_volume):
        target = junk_volume / "var" / "log" / "syslog"
        assert expand_entry(str(target), "/") == [target]


class TestLoadCatalog:
    def test_defaults_without_settings(self):
        assert load_catalog() == DEFAULT_CATALOG

    def test_settings_override(self, tmp_path):
        settings = Settings(tmp_path / "settings.json")
        settings.set("catalog", ["a", "b/*.log"])
        assert load_catalog(settings) == ("a", "b/*.log")

    def test_extra_entries_appended(self, tmp_path):
        settings = Settings(tmp_path / "settings.json")
        settings.set("catalog_extra", ["opt/app/cache"])
        catalog = load_catalog(settings)
        assert catalog[: len(DEFAULT_CATALOG)] == DEFAULT_CATALOG
        assert catalog[-1] == "opt/app/cache"

    def test_invalid_catalog_falls_back(self, tmp_path):
        settings = Settings(tmp_path / "settings.json")
        settings.set("catalog", "not-a-list")
        assert load_catalog(settings) == DEFAULT_CATALOG

    @pytest.mark.parametrize("entry", DEFAULT_CATALOG)
    def test_default_entries_are_relative_or_placeholders(self, entry):
        assert not Path(entry).is_absolute() or entry.startswith("$")
