"""Tests for field-group definition paths and loading."""

import json
from pathlib import Path

from portfolio_cms.config import CmsConfig, PluginConfig
from portfolio_cms.fieldgroups import (
    KEEP_FILENAME,
    ensure_definitions_dir,
    load_field_groups,
    load_paths,
    save_path,
)


def _config(tmp_path: Path) -> CmsConfig:
    return CmsConfig(plugin=PluginConfig(directory=str(tmp_path / "plugin")))


def _write_group(directory: Path, filename: str, payload: object) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / filename).write_text(json.dumps(payload), encoding="utf-8")


class TestPaths:
    def test_save_path_ignores_default(self, tmp_path: Path):
        config = _config(tmp_path)
        assert save_path(config, tmp_path / "theme" / "acf-json") == (
            tmp_path / "plugin" / "acf-json"
        )

    def test_load_paths_replaces_theme_path(self, tmp_path: Path):
        config = _config(tmp_path)
        paths = load_paths(config, [tmp_path / "theme", tmp_path / "extra"])
        assert paths == [tmp_path / "extra", tmp_path / "plugin" / "acf-json"]

    def test_load_paths_single_theme_path(self, tmp_path: Path):
        paths = load_paths(_config(tmp_path), [tmp_path / "theme" / "acf-json"])
        assert paths == [tmp_path / "plugin" / "acf-json"]

    def test_load_paths_empty(self, tmp_path: Path):
        assert load_paths(_config(tmp_path), []) == [tmp_path / "plugin" / "acf-json"]


class TestEnsureDefinitionsDir:
    def test_creates_dir_and_placeholder(self, tmp_path: Path):
        target = tmp_path / "plugin" / "acf-json"
        ensure_definitions_dir(target)
        assert target.is_dir()
        assert (target / KEEP_FILENAME).exists()

    def test_idempotent_and_keeps_existing_files(self, tmp_path: Path):
        target = tmp_path / "acf-json"
        ensure_definitions_dir(target)
        (target / "group_abc.json").write_text("{}", encoding="utf-8")
        ensure_definitions_dir(target)
        assert sorted(p.name for p in target.iterdir()) == [KEEP_FILENAME, "group_abc.json"]


class TestLoadFieldGroups:
    def test_reads_groups(self, tmp_path: Path):
        directory = tmp_path / "acf-json"
        _write_group(
            directory,
            "group_author.json",
            {
                "key": "group_author",
                "title": "Author Profile",
                "fields": [{"key": "field_1", "name": "linkedin_url", "type": "url"}],
                "location": [[{"param": "user_form", "operator": "==", "value": "all"}]],
            },
        )
        groups = load_field_groups([directory])
        assert len(groups) == 1
        assert groups[0].title == "Author Profile"
        assert groups[0].fields[0]["name"] == "linkedin_url"
        assert groups[0].source_path.endswith("group_author.json")

    def test_later_path_overrides(self, tmp_path: Path):
        _write_group(tmp_path / "a", "g.json", {"key": "group_x", "title": "Old"})
        _write_group(tmp_path / "b", "g.json", {"key": "group_x", "title": "New"})
        groups = load_field_groups([tmp_path / "a", tmp_path / "b"])
        assert [g.title for g in groups] == ["New"]

    def test_skips_bad_files(self, tmp_path: Path):
        directory = tmp_path / "acf-json"
        directory.mkdir()
        (directory / "broken.json").write_text("{", encoding="utf-8")
        (directory / "list.json").write_text("[]", encoding="utf-8")
        (directory / "nokey.json").write_text('{"title": "x"}', encoding="utf-8")
        _write_group(directory, "ok.json", {"key": "group_ok"})
        assert [g.key for g in load_field_groups([directory])] == ["group_ok"]

    def test_missing_directory(self, tmp_path: Path):
        assert load_field_groups([tmp_path / "missing"]) == []
