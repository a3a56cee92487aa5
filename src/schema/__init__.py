"""Schema domain — content type and taxonomy declarations."""

from portfolio_cms.schema.definitions import (
    ARTICLE,
    CATEGORY,
    PROJECT,
    TAG,
    declare_portfolio_schema,
)
from portfolio_cms.schema.models import (
    ContentTypeDefinition,
    Labels,
    Support,
    TaxonomyDefinition,
)
from portfolio_cms.schema.registry import SchemaRegistry

__all__ = [
    "ARTICLE",
    "CATEGORY",
    "PROJECT",
    "TAG",
    "ContentTypeDefinition",
    "Labels",
    "SchemaRegistry",
    "Support",
    "TaxonomyDefinition",
    "declare_portfolio_schema",
]
