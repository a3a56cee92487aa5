"""URL route table derived from the declared schema.

Routes are only rebuilt by an explicit ``flush``; until then a newly
declared content type has no reachable URL prefix. The table is persisted
so later processes see the routes generated at activation time.
"""

from __future__ import annotations

import json
import logging
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field

from portfolio_cms.schema.registry import SchemaRegistry
from portfolio_cms.storage import atomic_write

logger = logging.getLogger(__name__)

ROUTES_FILENAME = ".portfolio-cms-routes.json"


class RouteKind(StrEnum):
    CONTENT_TYPE = "content_type"
    TAXONOMY = "taxonomy"


class RouteRule(BaseModel):
    """A URL prefix and the schema object it serves."""

    prefix: str
    kind: RouteKind
    key: str


class RouteMatch(BaseModel):
    """Result of resolving a path."""

    kind: RouteKind
    key: str
    slug: str = ""


class _RouteData(BaseModel):
    generation: int = 0
    rules: list[RouteRule] = Field(default_factory=list)


class RouteTable:
    """Prefix → schema object lookup with JSON persistence."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._data = self._load()

    @property
    def generation(self) -> int:
        return self._data.generation

    @property
    def rules(self) -> list[RouteRule]:
        return list(self._data.rules)

    @property
    def prefixes(self) -> list[str]:
        return [r.prefix for r in self._data.rules]

    def _load(self) -> _RouteData:
        if self._path is None or not self._path.exists():
            return _RouteData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _RouteData.model_validate(raw)
        except (json.JSONDecodeError, ValueError):
            logger.warning("Corrupt route table at %s, starting empty", self._path)
            return _RouteData()

    def flush(self, registry: SchemaRegistry) -> int:
        """Rebuild every rule from the registry and persist the table.

        Returns the new generation number.
        """
        rules = [
            RouteRule(prefix=c.rewrite_slug, kind=RouteKind.CONTENT_TYPE, key=c.key)
            for c in registry.content_types()
            if c.public and c.publicly_queryable
        ]
        rules.extend(
            RouteRule(prefix=t.rewrite_slug, kind=RouteKind.TAXONOMY, key=t.key)
            for t in registry.taxonomies()
            if t.public
        )
        self._data = _RouteData(generation=self._data.generation + 1, rules=rules)
        if self._path is not None:
            atomic_write(self._path, self._data.model_dump_json(indent=2))
        logger.info(
            "Regenerated %d routes (generation %d)", len(rules), self._data.generation
        )
        return self._data.generation

    def resolve(self, path: str) -> RouteMatch | None:
        """Match ``/<prefix>/<slug>/`` style paths, or None."""
        parts = [p for p in path.strip("/").split("/") if p]
        if not parts:
            return None
        prefix, rest = parts[0], parts[1:]
        for rule in self._data.rules:
            if rule.prefix == prefix:
                return RouteMatch(kind=rule.kind, key=rule.key, slug=rest[0] if rest else "")
        return None
