"""
Article API blueprint.

This module contains all article-related API endpoints. Articles created
without a summary get one from the summary service.
"""

from flask import request
from pydantic import ValidationError

from news_curator.core.services import SummaryService
from news_curator.logger import get_logger
from news_curator.models.article import ArticleCreate, ArticleUpdate
from news_curator.storage.database import DatabaseManager
from news_curator.storage.repositories.article_repo import ArticleRepository
from news_curator.web.blueprints.base import (
    CRUDBlueprint,
    bad_body,
    json_object,
    query_int,
    validation_message,
)
from news_curator.web.serializers import api_response

logger = get_logger(__name__)


class ArticleBlueprint(CRUDBlueprint):
    """Blueprint for article CRUD operations."""

    resource_name = "Article"
    repository_class = ArticleRepository
    create_schema = ArticleCreate
    update_schema = ArticleUpdate

    def __init__(self, db_manager: DatabaseManager, summary_service: SummaryService):
        """Initialize the article blueprint.

        Args:
            db_manager: Database manager shared by the application
            summary_service: Service used to summarize new articles
        """
        self.summary_service = summary_service
        super().__init__(db_manager, url_prefix="/api/articles")
        self._register_custom_routes()

    def _register_custom_routes(self):
        """Register custom article-specific routes."""
        self.blueprint.add_url_rule(
            "/<int:id>/summary/regenerate",
            view_func=self._regenerate_summary,
            methods=["POST"]
        )

    def _list(self):
        """List articles, optionally filtered by text, tag and author."""
        limit = query_int("limit", 20, maximum=100)
        offset = query_int("offset", 0, minimum=0)
        query = request.args.get("q", "").strip()
        tag = request.args.get("tag", "").strip()
        author = request.args.get("author", "").strip()

        with self.db_manager.session() as session:
            repo = ArticleRepository(session)
            filters = {"query": query or None, "tag": tag or None, "author": author or None}
            articles = repo.search(**filters, limit=limit, offset=offset)
            data = [self.serialize(article) for article in articles]
            total = repo.count_search(**filters)

        return api_response(success=True, data={"items": data, "total": total})

    def _create(self):
        """Create an article, generating its summary if none was supplied."""
        data = json_object()
        if not data:
            return bad_body()

        try:
            article_data = ArticleCreate(**data)
        except ValidationError as e:
            return api_response(success=False, error=validation_message(e), status=400)

        summary = self.summary_service.generate_summary_for_article(
            article_data.content, article_data.summary
        )
        # Generated summaries bypass the length limit placed on supplied ones
        article_data = article_data.model_copy(update={"summary": summary.summary or None})

        with self.db_manager.session() as session:
            article = ArticleRepository(session).create(article_data)
            logger.info(
                f"Created article {article.id} (summary via {summary.provider}, {summary.method})"
            )
            payload = self.serialize(article)

        payload["summary_metadata"] = {
            "generated": summary.generated,
            "provider": summary.provider,
            "model": summary.model,
            "method": summary.method,
        }
        return api_response(success=True, data=payload, message="Article created", status=201)

    def _regenerate_summary(self, id: int):
        """Replace an article's summary with a freshly generated one."""
        with self.db_manager.session() as session:
            repo = ArticleRepository(session)
            article = repo.get_by_id(id)
            if not article:
                return self._not_found()

            best = self.summary_service.generate_best_summary(article.content)
            article.summary = best.summary
            session.flush()

            payload = self.serialize(article)

        payload["summary_metadata"] = {"generated": True, **best.to_dict()}
        payload["summary_metadata"].pop("summary")
        return api_response(success=True, data=payload, message="Summary regenerated")
