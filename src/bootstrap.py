"""Composition root and one-time activation.

``build_service`` wires every component explicitly at startup.
``activate`` is run when the module is first enabled: it re-declares the
schema, makes sure the definitions directory exists and regenerates the
route table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from portfolio_cms.config import CmsConfig
from portfolio_cms.content.store import ContentStore
from portfolio_cms.errors import ActivationReport
from portfolio_cms.fieldgroups import ensure_definitions_dir, save_path
from portfolio_cms.profiles.store import ProfileFieldStore
from portfolio_cms.rest.api import ContentAPI
from portfolio_cms.rest.fields import RestFieldRegistry
from portfolio_cms.rest.projection import ProjectionLayer
from portfolio_cms.routes import ROUTES_FILENAME, RouteTable
from portfolio_cms.schema.definitions import declare_portfolio_schema
from portfolio_cms.schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)


@dataclass
class CmsService:
    """Every long-lived component of a running service."""

    config: CmsConfig
    registry: SchemaRegistry
    content: ContentStore
    profiles: ProfileFieldStore
    fields: RestFieldRegistry
    projection: ProjectionLayer
    routes: RouteTable
    api: ContentAPI


def build_service(config: CmsConfig) -> CmsService:
    """Assemble the service from configuration."""
    registry = declare_portfolio_schema(SchemaRegistry())
    data_dir = config.data_dir
    content = ContentStore(data_dir)
    profiles = ProfileFieldStore(data_dir)
    projection = ProjectionLayer(
        content,
        profiles,
        fallback_author_name=config.site.fallback_author_name,
        image_size=config.site.image_size,
    )
    fields = RestFieldRegistry()
    projection.register(fields, registry)
    routes = RouteTable(data_dir / ROUTES_FILENAME)
    api = ContentAPI(registry, content, fields, projection)
    return CmsService(
        config=config,
        registry=registry,
        content=content,
        profiles=profiles,
        fields=fields,
        projection=projection,
        routes=routes,
        api=api,
    )


def activate(service: CmsService) -> ActivationReport:
    """Run the one-time setup.

    A filesystem failure while preparing the definitions directory is
    logged and recorded in the report; schema declaration and route
    regeneration still run.
    """
    report = ActivationReport()

    declare_portfolio_schema(service.registry)
    report.mark_step_complete("schema")

    definitions_dir = save_path(service.config)
    try:
        ensure_definitions_dir(definitions_dir)
        report.mark_step_complete("definitions_dir")
        logger.info("Definitions directory ready at %s", definitions_dir)
    except OSError as exc:
        logger.warning("Could not prepare definitions directory %s: %s", definitions_dir, exc)
        report.add_issue("definitions_dir", str(exc), error_type=type(exc).__name__)

    try:
        service.routes.flush(service.registry)
        report.mark_step_complete("routes")
    except OSError as exc:
        logger.warning("Could not persist route table: %s", exc)
        report.add_issue("routes", str(exc), error_type=type(exc).__name__)

    report.finish()
    return report
