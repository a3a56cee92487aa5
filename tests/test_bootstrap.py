"""Tests for build_service and activate."""

import logging
from pathlib import Path
from unittest.mock import patch

from portfolio_cms.bootstrap import CmsService, activate, build_service
from portfolio_cms.config import CmsConfig
from portfolio_cms.fieldgroups import KEEP_FILENAME
from portfolio_cms.routes import ROUTES_FILENAME


class TestBuildService:
    def test_schema_declared(self, service: CmsService):
        assert {c.key for c in service.registry.content_types()} == {"article", "project"}
        assert {t.key for t in service.registry.taxonomies()} == {"category", "tag"}

    def test_fields_registered(self, service: CmsService):
        assert len(service.fields.names_for("user")) == 12
        assert "author_profile" in service.fields.names_for("article")

    def test_config_flows_into_projection(self, cms_config: CmsConfig):
        cms_config.site.fallback_author_name = "Owner"
        cms_config.site.image_size = "medium"
        service = build_service(cms_config)
        assert service.projection.fallback_author_name == "Owner"
        assert service.projection.image_size == "medium"

    def test_routes_empty_until_activation(self, service: CmsService):
        assert service.routes.rules == []


class TestActivate:
    def test_all_steps(self, service: CmsService):
        report = activate(service)
        assert report.success is True
        assert report.steps_completed == ["schema", "definitions_dir", "routes"]
        assert report.finished_at is not None

    def test_definitions_dir_created(self, service: CmsService):
        activate(service)
        definitions = service.config.definitions_dir
        assert definitions.is_dir()
        assert (definitions / KEEP_FILENAME).exists()

    def test_definitions_dir_follows_save_path(self, service: CmsService, tmp_path: Path):
        target = tmp_path / "exported"
        with patch("portfolio_cms.bootstrap.save_path", return_value=target) as resolve:
            report = activate(service)
        resolve.assert_called_once_with(service.config)
        assert report.success is True
        assert (target / KEEP_FILENAME).exists()

    def test_routes_regenerated_and_persisted(self, service: CmsService):
        activate(service)
        assert service.routes.resolve("/articles/x").key == "article"
        assert (service.config.data_dir / ROUTES_FILENAME).exists()

        fresh = build_service(service.config)
        assert fresh.routes.resolve("/projects/y").key == "project"

    def test_repeatable(self, service: CmsService):
        activate(service)
        report = activate(service)
        assert report.success is True
        assert len(service.registry.content_types()) == 2
        assert service.routes.generation == 2

    def test_definitions_failure_is_logged_not_raised(self, service: CmsService, caplog):
        with patch(
            "portfolio_cms.bootstrap.ensure_definitions_dir",
            side_effect=PermissionError("read-only filesystem"),
        ):
            with caplog.at_level(logging.WARNING, logger="portfolio_cms.bootstrap"):
                report = activate(service)

        assert report.success is False
        assert report.steps_completed == ["schema", "routes"]
        assert report.issues[0].step == "definitions_dir"
        assert report.issues[0].error_type == "PermissionError"
        assert "read-only filesystem" in caplog.text
        assert service.routes.resolve("/articles/x") is not None

    def test_definitions_path_is_a_file(self, cms_config: CmsConfig, tmp_path: Path):
        plugin = Path(cms_config.plugin.directory)
        plugin.mkdir(parents=True)
        (plugin / "acf-json").write_text("not a directory", encoding="utf-8")
        report = activate(build_service(cms_config))
        assert [i.step for i in report.issues] == ["definitions_dir"]
        assert "schema" in report.steps_completed
