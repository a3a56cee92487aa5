"""In-process registry of declared content types and taxonomies."""

from __future__ import annotations

import logging

from portfolio_cms.errors import SchemaConflictError, SchemaError
from portfolio_cms.schema.models import ContentTypeDefinition, TaxonomyDefinition

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """Holds the static schema declared at startup.

    Declarations are keyed by ``key``. Declaring the same definition again
    is a no-op; declaring a different definition under an existing key
    raises ``SchemaConflictError``.
    """

    def __init__(self) -> None:
        self._content_types: dict[str, ContentTypeDefinition] = {}
        self._taxonomies: dict[str, TaxonomyDefinition] = {}

    # ── Declarations ─────────────────────────────────────────────

    def declare_content_type(self, definition: ContentTypeDefinition) -> ContentTypeDefinition:
        """Declare a content type, returning the registered definition."""
        existing = self._content_types.get(definition.key)
        if existing is not None:
            if existing != definition:
                raise SchemaConflictError("content type", definition.key)
            return existing
        self._content_types[definition.key] = definition
        logger.debug("Declared content type %s (/%s)", definition.key, definition.rewrite_slug)
        return definition

    def declare_taxonomy(self, definition: TaxonomyDefinition) -> TaxonomyDefinition:
        """Declare a taxonomy, returning the registered definition.

        Raises SchemaError if the taxonomy targets an undeclared content type.
        """
        unknown = sorted(t for t in definition.object_types if t not in self._content_types)
        if unknown:
            raise SchemaError(
                f"Taxonomy '{definition.key}' targets undeclared content types: "
                + ", ".join(unknown)
            )
        existing = self._taxonomies.get(definition.key)
        if existing is not None:
            if existing != definition:
                raise SchemaConflictError("taxonomy", definition.key)
            return existing
        self._taxonomies[definition.key] = definition
        logger.debug(
            "Declared taxonomy %s (hierarchical=%s) for %s",
            definition.key,
            definition.hierarchical,
            ", ".join(sorted(definition.object_types)),
        )
        return definition

    # ── Queries ──────────────────────────────────────────────────

    def content_type(self, key: str) -> ContentTypeDefinition | None:
        return self._content_types.get(key)

    def taxonomy(self, key: str) -> TaxonomyDefinition | None:
        return self._taxonomies.get(key)

    def content_types(self) -> list[ContentTypeDefinition]:
        return list(self._content_types.values())

    def taxonomies(self) -> list[TaxonomyDefinition]:
        return list(self._taxonomies.values())

    def taxonomies_for(self, type_key: str) -> list[TaxonomyDefinition]:
        """Return the taxonomies attached to a content type."""
        return [t for t in self._taxonomies.values() if t.applies_to(type_key)]

    def rest_content_types(self) -> list[ContentTypeDefinition]:
        """Content types exposed through the content API."""
        return [c for c in self._content_types.values() if c.show_in_rest]

    def content_type_for_rest_base(self, rest_base: str) -> ContentTypeDefinition | None:
        for definition in self.rest_content_types():
            if definition.rest_base == rest_base:
                return definition
        return None

    def graphql_types(self) -> dict[str, str]:
        """Map GraphQL single names to plural names for discoverable schema."""
        names: dict[str, str] = {}
        for item in [*self._content_types.values(), *self._taxonomies.values()]:
            if item.show_in_graphql and item.graphql_single_name:
                names[item.graphql_single_name] = item.graphql_plural_name
        return names
