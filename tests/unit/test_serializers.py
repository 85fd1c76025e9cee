"""Tests for API serializers."""

import pytest

from news_curator.web.serializers import SerializerRegistry, interaction_to_dict


class TestInteractionToDict:
    """Tests for interaction_to_dict."""

    def test_share_payload_only(self, make_user, make_article, interact):
        share = interact(
            make_user("reader"), make_article(), "share", share_metadata={"platform": "email"}
        )

        data = interaction_to_dict(share)

        assert data["share_metadata"] == {"platform": "email", "message": None}
        assert "content" not in data

    def test_view_has_no_payload(self, make_user, make_article, interact):
        data = interaction_to_dict(interact(make_user("reader"), make_article(), "view"))
        assert "content" not in data
        assert "share_metadata" not in data


class TestSerializerRegistry:
    """Tests for SerializerRegistry."""

    def test_serialize_user(self, make_user):
        user = make_user("reader", interests=["ai"])
        data = SerializerRegistry.serialize("user", user)
        assert data["username"] == "reader"
        assert data["interests"] == ["ai"]

    def test_unknown_type(self):
        assert not SerializerRegistry.has_serializer("feed")
        with pytest.raises(ValueError, match="No serializer registered"):
            SerializerRegistry.serialize("feed", object())

    def test_register(self, monkeypatch):
        monkeypatch.setattr(SerializerRegistry, "_serializers", dict(SerializerRegistry._serializers))

        SerializerRegistry.register("point", lambda p: {"x": p[0], "y": p[1]})

        assert SerializerRegistry.has_serializer("point")
        assert SerializerRegistry.serialize_list("point", [(1, 2)]) == [{"x": 1, "y": 2}]

    def test_register_as_decorator(self, monkeypatch):
        monkeypatch.setattr(SerializerRegistry, "_serializers", dict(SerializerRegistry._serializers))

        @SerializerRegistry.register("tag")
        def tag_to_dict(tag):
            return {"name": tag}

        assert SerializerRegistry.serialize("tag", "ai") == {"name": "ai"}
        assert tag_to_dict("x") == {"name": "x"}
