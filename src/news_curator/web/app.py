"""
Flask application for the News Curator JSON API.
"""

from typing import Optional

import httpx
from flask import Flask

from news_curator.config import ProviderSettings, get_config
from news_curator.core.services import SummaryService, create_summary_service
from news_curator.logger import get_logger, setup_logger
from news_curator.storage.database import DatabaseManager
from news_curator.web.serializers import api_response

logger = get_logger(__name__)


def create_app(
    db_path: Optional[str] = None,
    debug: bool = False,
    provider_settings: Optional[ProviderSettings] = None,
    http_client: Optional[httpx.Client] = None,
) -> Flask:
    """Build the API application.

    Args:
        db_path: SQLite file; the configured database is used when omitted
        debug: Force Flask debug mode on
        provider_settings: Summary provider credentials, ``config.providers`` by default
        http_client: httpx client shared by the summary providers

    The app keeps its ``DatabaseManager`` and ``SummaryService`` in
    ``app.config`` under ``DB_MANAGER`` and ``SUMMARY_SERVICE``.
    """
    config = get_config()
    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=config.web.secret_key,
        DEBUG=debug or config.web.debug,
    )

    db_manager = DatabaseManager(db_path, db_config=None if db_path else config.database)
    db_manager.init_db()
    summary_service = create_summary_service(
        settings=provider_settings or config.providers,
        client=http_client,
    )
    app.config.update(DB_MANAGER=db_manager, SUMMARY_SERVICE=summary_service)

    _register_blueprints(app, db_manager, summary_service)
    _register_error_handlers(app)

    @app.get("/health")
    def health():
        return api_response(data={"status": "ok", "version": config.version})

    logger.info(f"API ready on {db_manager.engine.url.render_as_string()}")
    return app


def _register_blueprints(app: Flask, db_manager: DatabaseManager, summary_service: SummaryService) -> None:
    from news_curator.web.blueprints import (
        ArticleBlueprint,
        InteractionBlueprint,
        RecommendationBlueprint,
        SummaryBlueprint,
        UserBlueprint,
    )

    for resource in (
        ArticleBlueprint(db_manager, summary_service),
        UserBlueprint(db_manager),
        InteractionBlueprint(db_manager),
        RecommendationBlueprint(db_manager),
        SummaryBlueprint(summary_service),
    ):
        app.register_blueprint(resource.blueprint)


def _register_error_handlers(app: Flask) -> None:
    """JSON envelopes for errors Flask would otherwise render as HTML."""

    @app.errorhandler(404)
    def not_found(e):
        return api_response(success=False, error="Not found", status=404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return api_response(success=False, error="Method not allowed", status=405)

    @app.errorhandler(500)
    def server_error(e):
        logger.opt(exception=getattr(e, "original_exception", None)).error(f"Unhandled error: {e}")
        return api_response(success=False, error="Internal server error", status=500)


def main() -> None:
    """Run the development server (``news-curator`` console script)."""
    config = get_config()
    setup_logger(config=config.logging)
    app = create_app()
    app.run(host=config.web.host, port=config.web.port, debug=config.web.debug)


if __name__ == "__main__":
    main()
