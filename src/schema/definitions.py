"""The portfolio schema: Articles, Projects, Categories and Tags."""

from __future__ import annotations

from portfolio_cms.schema.models import ContentTypeDefinition, Labels, TaxonomyDefinition
from portfolio_cms.schema.registry import SchemaRegistry

ARTICLE = ContentTypeDefinition(
    key="article",
    labels=Labels(
        name="Articles",
        singular_name="Article",
        menu_name="Articles",
        all_items="All Articles",
    ),
    rewrite_slug="articles",
    graphql_single_name="article",
    graphql_plural_name="articles",
)

PROJECT = ContentTypeDefinition(
    key="project",
    labels=Labels(
        name="Projects",
        singular_name="Project",
        menu_name="Projects",
        all_items="All Projects",
    ),
    rewrite_slug="projects",
    graphql_single_name="project",
    graphql_plural_name="projects",
)

CATEGORY = TaxonomyDefinition(
    key="category",
    labels=Labels(name="Categories", singular_name="Category", all_items="All Categories"),
    hierarchical=True,
    object_types=frozenset({ARTICLE.key, PROJECT.key}),
    rewrite_slug="category",
    rest_base="categories",
    graphql_single_name="category",
    graphql_plural_name="categories",
)

TAG = TaxonomyDefinition(
    key="tag",
    labels=Labels(name="Tags", singular_name="Tag", all_items="All Tags"),
    hierarchical=False,
    object_types=frozenset({ARTICLE.key, PROJECT.key}),
    rewrite_slug="tag",
    rest_base="tags",
    graphql_single_name="tag",
    graphql_plural_name="tags",
)

CONTENT_TYPES = (ARTICLE, PROJECT)
TAXONOMIES = (CATEGORY, TAG)


def declare_portfolio_schema(registry: SchemaRegistry) -> SchemaRegistry:
    """Declare both content types and both taxonomies.

    Safe to call repeatedly; content types are declared first because
    taxonomies must target declared types.
    """
    for content_type in CONTENT_TYPES:
        registry.declare_content_type(content_type)
    for taxonomy in TAXONOMIES:
        registry.declare_taxonomy(taxonomy)
    return registry
