"""
Summary API blueprint.
"""

from flask import Blueprint
from pydantic import ValidationError

from news_curator.core import SummaryOptions
from news_curator.core.services import SummaryService
from news_curator.web.blueprints.base import json_object, validation_message
from news_curator.web.serializers import api_response


class SummaryBlueprint:
    """Blueprint for ad-hoc summaries and provider status."""

    def __init__(self, summary_service: SummaryService):
        self.summary_service = summary_service
        self.blueprint = Blueprint("summaries", __name__, url_prefix="/api/summaries")
        self.blueprint.add_url_rule("", view_func=self._summarize, methods=["POST"])
        self.blueprint.add_url_rule("/providers", view_func=self._providers, methods=["GET"])

    def _summarize(self):
        """Summarize the posted text.

        Body: ``{"text": "...", "options": {...}, "method": "best" | "extractive"}``
        """
        data = json_object() or {}
        text = data.get("text")
        if not isinstance(text, str) or not text.strip():
            return api_response(success=False, error="text is required", status=400)

        options_data = data.get("options") or {}
        if not isinstance(options_data, dict):
            return api_response(success=False, error="options must be a JSON object", status=400)

        try:
            options = SummaryOptions(**options_data)
        except ValidationError as e:
            return api_response(success=False, error=validation_message(e), status=400)

        if data.get("method") == "extractive":
            summary = self.summary_service.generate_summary(text, options)
            return api_response(
                success=True,
                data={"summary": summary, "provider": "extractive", "model": "tf-idf", "method": "extractive"},
            )

        best = self.summary_service.generate_best_summary(text, options)
        return api_response(success=True, data=best.to_dict())

    def _providers(self):
        """Availability of each summary provider."""
        statuses = self.summary_service.check_providers()
        data = {name: status.to_dict() for name, status in statuses.items()}
        return api_response(success=True, data=data)
