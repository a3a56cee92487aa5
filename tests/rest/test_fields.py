"""Tests for RestFieldRegistry."""

from portfolio_cms.rest.fields import RestFieldRegistry


class TestRestFieldRegistry:
    def test_register_and_lookup(self):
        fields = RestFieldRegistry()
        fields.register("user", "nickname", get_callback=lambda obj, ctx: "nick")
        field = fields.get("user", "nickname")
        assert field is not None
        assert field.readable is True
        assert field.writable is False
        assert field.schema == {}

    def test_order_preserved(self):
        fields = RestFieldRegistry()
        for name in ("b", "a", "c"):
            fields.register("article", name, get_callback=lambda obj, ctx: None)
        assert fields.names_for("article") == ["b", "a", "c"]

    def test_reregister_replaces(self):
        fields = RestFieldRegistry()
        fields.register("user", "x", get_callback=lambda obj, ctx: 1)
        fields.register("user", "x", get_callback=lambda obj, ctx: 2)
        assert len(fields.fields_for("user")) == 1
        assert fields.get("user", "x").get_callback(None, None) == 2

    def test_object_types_are_separate(self):
        fields = RestFieldRegistry()
        fields.register("article", "author_name")
        fields.register("project", "author_name")
        assert fields.object_types() == ["article", "project"]
        assert fields.get("user", "author_name") is None
        assert fields.fields_for("page") == []
