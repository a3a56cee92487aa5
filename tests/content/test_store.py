"""Tests for ContentStore: JSON-backed host content store."""

import json
from pathlib import Path

from portfolio_cms.content.models import ContentItem, ContentStatus, MediaItem, User
from portfolio_cms.content.store import STORE_FILENAME, ContentStore


def _make_item(
    item_id: int = 1,
    post_type: str = "article",
    status: ContentStatus = ContentStatus.PUBLISHED,
    **kwargs: object,
) -> ContentItem:
    """Helper to build a ContentItem with sensible defaults."""
    return ContentItem(
        id=item_id,
        post_type=post_type,
        slug=f"{post_type}-{item_id}",
        status=status,
        **kwargs,  # type: ignore[arg-type]
    )


class TestItems:
    def test_upsert_and_get(self, tmp_path: Path):
        store = ContentStore(tmp_path)
        store.upsert(_make_item(title="First"))

        fetched = store.get(1)
        assert fetched is not None
        assert fetched.title == "First"

    def test_overwrites_existing(self, tmp_path: Path):
        store = ContentStore(tmp_path)
        store.upsert(_make_item(title="Version 1"))
        store.upsert(_make_item(title="Version 2"))

        assert len(store.list()) == 1
        assert store.get(1).title == "Version 2"

    def test_get_with_wrong_type(self, tmp_path: Path):
        store = ContentStore(tmp_path)
        store.upsert(_make_item(post_type="project"))
        assert store.get(1, post_type="article") is None
        assert store.get(1, post_type="project") is not None

    def test_get_missing(self, tmp_path: Path):
        assert ContentStore(tmp_path).get(404) is None

    def test_list_filters(self, tmp_path: Path):
        store = ContentStore(tmp_path)
        store.upsert(_make_item(3, "article"))
        store.upsert(_make_item(1, "article", status=ContentStatus.DRAFT))
        store.upsert(_make_item(2, "project"))

        assert [i.id for i in store.list()] == [1, 2, 3]
        assert [i.id for i in store.list(post_type="article")] == [1, 3]
        assert [i.id for i in store.list(status=ContentStatus.PUBLISHED)] == [2, 3]
        assert [
            i.id for i in store.list(post_type="article", status=ContentStatus.DRAFT)
        ] == [1]

    def test_delete(self, tmp_path: Path):
        store = ContentStore(tmp_path)
        store.upsert(_make_item())
        assert store.delete(1) is True
        assert store.delete(1) is False
        assert store.get(1) is None


class TestUsersAndMedia:
    def test_users_by_role(self, tmp_path: Path):
        store = ContentStore(tmp_path)
        store.upsert_user(User(id=5, login="e", roles=["editor"]))
        store.upsert_user(User(id=2, login="a", roles=["administrator"]))
        store.upsert_user(User(id=9, login="b", roles=["administrator"]))

        assert [u.id for u in store.users()] == [2, 5, 9]
        assert [u.id for u in store.users(role="administrator")] == [2, 9]

    def test_upsert_user_replaces(self, tmp_path: Path):
        store = ContentStore(tmp_path)
        store.upsert_user(User(id=1, login="a"))
        store.upsert_user(User(id=1, login="a", display_name="Alice"))
        assert store.get_user(1).display_name == "Alice"
        assert len(store.users()) == 1

    def test_media(self, tmp_path: Path):
        store = ContentStore(tmp_path)
        store.upsert_media(MediaItem(id=7, source_url="https://cdn.example/x.jpg"))
        assert store.get_media(7).source_url == "https://cdn.example/x.jpg"
        assert store.get_media(8) is None


class TestPersistence:
    def test_persists_to_disk(self, tmp_path: Path):
        store = ContentStore(tmp_path)
        store.upsert(_make_item())

        data = json.loads((tmp_path / STORE_FILENAME).read_text(encoding="utf-8"))
        assert len(data["items"]) == 1
        assert data["items"][0]["slug"] == "article-1"

    def test_reload(self, tmp_path: Path):
        store = ContentStore(tmp_path)
        store.upsert_user(User(id=1, login="a"))
        store.upsert(_make_item(author_id=1, terms={"tag": ["x"]}))

        reloaded = ContentStore(tmp_path)
        assert reloaded.get_user(1).login == "a"
        assert reloaded.get(1).terms == {"tag": ["x"]}

    def test_corrupt_file_starts_fresh(self, tmp_path: Path):
        (tmp_path / STORE_FILENAME).write_text("{not json", encoding="utf-8")
        store = ContentStore(tmp_path)
        assert store.list() == []
        assert store.users() == []

    def test_wrong_shape_starts_fresh(self, tmp_path: Path):
        (tmp_path / STORE_FILENAME).write_text(
            json.dumps({"items": [{"slug": "missing-fields"}]}), encoding="utf-8"
        )
        store = ContentStore(tmp_path)
        assert store.list() == []

    def test_missing_dir_created_on_write(self, tmp_path: Path):
        store = ContentStore(tmp_path / "nested" / "data")
        store.upsert(_make_item())
        assert (tmp_path / "nested" / "data" / STORE_FILENAME).exists()
