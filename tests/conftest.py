"""Shared fixtures: a fully wired service over temporary directories."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest
from portfolio_cms.bootstrap import CmsService, build_service
from portfolio_cms.config import CmsConfig, PluginConfig, StorageConfig
from portfolio_cms.content.models import ContentItem, ContentStatus, MediaItem, User


@pytest.fixture
def cms_config(tmp_path: Path) -> CmsConfig:
    return CmsConfig(
        storage=StorageConfig(data_dir=str(tmp_path / "data")),
        plugin=PluginConfig(directory=str(tmp_path / "plugin")),
    )


@pytest.fixture
def service(cms_config: CmsConfig) -> CmsService:
    return build_service(cms_config)


@pytest.fixture
def seeded_service(service: CmsService) -> CmsService:
    """Service with an admin author, a nameless author, media and items.

    - user 1: administrator "Ada Admin"
    - user 2: author with no display name
    - media 10: has a large rendition; media 11: original only
    - item 100: published article by user 1 with media 10
    - item 101: published article by user 2, no image
    - item 102: draft article by user 1
    - item 200: published project by user 1 with media 11
    """
    content = service.content
    content.upsert_user(User(id=1, login="ada", display_name="Ada Admin", roles=["administrator"]))
    content.upsert_user(User(id=2, login="ghost", roles=["author"]))
    content.upsert_media(
        MediaItem(
            id=10,
            source_url="https://cdn.example/hero.jpg",
            sizes={
                "thumbnail": "https://cdn.example/hero-150x150.jpg",
                "large": "https://cdn.example/hero-1024x768.jpg",
            },
        )
    )
    content.upsert_media(MediaItem(id=11, source_url="https://cdn.example/small.png"))
    created = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)
    content.upsert(
        ContentItem(
            id=100,
            post_type="article",
            slug="hello-headless",
            title="Hello Headless",
            body="<p>Body</p>",
            excerpt="Intro",
            status=ContentStatus.PUBLISHED,
            author_id=1,
            featured_image_id=10,
            terms={"category": ["engineering"], "tag": ["python", "cms"]},
            created_at=created,
        )
    )
    content.upsert(
        ContentItem(
            id=101,
            post_type="article",
            slug="anonymous",
            title="Anonymous",
            status=ContentStatus.PUBLISHED,
            author_id=2,
            created_at=created,
        )
    )
    content.upsert(
        ContentItem(
            id=102,
            post_type="article",
            slug="work-in-progress",
            status=ContentStatus.DRAFT,
            author_id=1,
            created_at=created,
        )
    )
    content.upsert(
        ContentItem(
            id=200,
            post_type="project",
            slug="portfolio-site",
            title="Portfolio Site",
            status=ContentStatus.PUBLISHED,
            author_id=1,
            featured_image_id=11,
            created_at=created,
        )
    )
    return service
