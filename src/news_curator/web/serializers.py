"""
JSON shapes for API responses.

Models and core result objects are turned into plain dicts by serializers
registered under a model type name; ``api_response`` wraps them in the
envelope every endpoint returns.
"""

from datetime import datetime
from typing import Any, Callable, Optional

from flask import jsonify

Serializer = Callable[[Any], dict]


def serialize_datetime(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt else None


def _timestamps(model) -> dict:
    return {
        "created_at": serialize_datetime(model.created_at),
        "updated_at": serialize_datetime(model.updated_at),
    }


def api_response(
    success: bool = True,
    data: Any = None,
    message: Optional[str] = None,
    error: Optional[str] = None,
    status: int = 200,
) -> tuple:
    """Envelope shared by all endpoints: ``{success, data, message, error}``.

    Returns:
        A ``(response, status)`` tuple Flask accepts from a view
    """
    body = {"success": success, "data": data, "message": message, "error": error}
    return jsonify(body), status


class SerializerRegistry:
    """Serializers keyed by model type ("article", "user", ...).

    Usage:
        data = SerializerRegistry.serialize("article", article_model)

        @SerializerRegistry.register("digest")
        def digest_to_dict(digest): ...
    """

    _serializers: dict[str, Serializer] = {}

    @classmethod
    def register(cls, model_type: str, serializer_func: Optional[Serializer] = None):
        """Register or replace a serializer; without a function, act as a decorator."""
        if serializer_func is None:
            def decorator(func: Serializer) -> Serializer:
                cls._serializers[model_type] = func
                return func

            return decorator

        cls._serializers[model_type] = serializer_func
        return serializer_func

    @classmethod
    def serialize(cls, model_type: str, model: Any) -> dict:
        """Raises ValueError for a type with no serializer."""
        try:
            serializer = cls._serializers[model_type]
        except KeyError:
            raise ValueError(f"No serializer registered for model type: '{model_type}'") from None
        return serializer(model)

    @classmethod
    def serialize_list(cls, model_type: str, models: list[Any]) -> list[dict]:
        return [cls.serialize(model_type, model) for model in models]

    @classmethod
    def has_serializer(cls, model_type: str) -> bool:
        return model_type in cls._serializers


@SerializerRegistry.register("article")
def article_to_dict(article) -> dict:
    return {
        "id": article.id,
        "title": article.title,
        "content": article.content,
        "author": article.author,
        "summary": article.summary,
        "tags": article.tag_list,
        **_timestamps(article),
    }


@SerializerRegistry.register("user")
def user_to_dict(user) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "interests": user.interest_list,
        **_timestamps(user),
    }


@SerializerRegistry.register("interaction")
def interaction_to_dict(interaction) -> dict:
    """Only the payload belonging to the interaction type is included."""
    data = {
        "id": interaction.id,
        "user_id": interaction.user_id,
        "article_id": interaction.article_id,
        "interaction_type": interaction.interaction_type,
        **_timestamps(interaction),
    }
    if interaction.interaction_type == "comment":
        data["content"] = interaction.content
    elif interaction.interaction_type == "share":
        data["share_metadata"] = {
            "platform": interaction.share_platform,
            "message": interaction.share_message,
        }
    return data


@SerializerRegistry.register("recommendation")
def recommendation_to_dict(recommendation) -> dict:
    return {
        "article": article_to_dict(recommendation.article),
        "score": recommendation.score,
        "reasons": list(recommendation.reasons),
    }


@SerializerRegistry.register("trending")
def trending_to_dict(trending) -> dict:
    return {
        "article": article_to_dict(trending.article),
        "stats": trending.stats.to_dict(),
    }
