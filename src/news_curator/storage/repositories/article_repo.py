"""
Article repository for database operations.
"""

from typing import Optional

from sqlalchemy import desc, or_
from sqlalchemy.orm import Session

from news_curator.models import ArticleModel
from news_curator.models.article import ArticleCreate, ArticleUpdate
from news_curator.storage.mixins import JSONListFieldMixin
from news_curator.storage.repositories.base import BaseRepository


class ArticleRepository(
    BaseRepository[ArticleModel, ArticleCreate, ArticleUpdate],
    JSONListFieldMixin,
):
    """Repository for Article CRUD and candidate queries."""

    def __init__(self, session: Session) -> None:
        super().__init__(session, ArticleModel)

    json_list_fields = frozenset({"tags"})

    def create(self, article_data: ArticleCreate) -> ArticleModel:
        """Create a new article.

        Args:
            article_data: Article creation data

        Returns:
            Created ArticleModel instance
        """
        data_dict = article_data.model_dump(exclude_none=True)
        data_dict = self._encode_list_fields(data_dict)

        article = ArticleModel(**data_dict)
        self.session.add(article)
        self.session.flush()
        self.session.refresh(article)
        return article

    def update(self, article: ArticleModel, article_data: ArticleUpdate) -> ArticleModel:
        """Update an article with the fields that were explicitly set."""
        update_data = article_data.model_dump(exclude_unset=True)
        update_data = self._encode_list_fields(update_data)

        for field, value in update_data.items():
            setattr(article, field, value)

        self.session.flush()
        self.session.refresh(article)
        return article

    def get_by_ids(self, article_ids: list[int]) -> dict[int, ArticleModel]:
        """Fetch several articles keyed by id."""
        if not article_ids:
            return {}
        articles = (
            self.session.query(ArticleModel).filter(ArticleModel.id.in_(article_ids)).all()
        )
        return {article.id: article for article in articles}

    def list_excluding(self, excluded_ids: set[int], limit: int) -> list[ArticleModel]:
        """Newest articles whose ids are not in ``excluded_ids``.

        Args:
            excluded_ids: Article ids to skip
            limit: Maximum number of results

        Returns:
            Articles ordered newest first
        """
        query = self.session.query(ArticleModel)
        if excluded_ids:
            query = query.filter(ArticleModel.id.notin_(excluded_ids))
        return (
            query.order_by(desc(ArticleModel.created_at), desc(ArticleModel.id))
            .limit(limit)
            .all()
        )

    def list_by_author(
        self, author: str, limit: int = 10, exclude_id: Optional[int] = None
    ) -> list[ArticleModel]:
        """The author's most recent articles.

        Args:
            author: Exact author name
            limit: Maximum number of results
            exclude_id: Article id to leave out (typically the one being scored)
        """
        query = self.session.query(ArticleModel).filter(ArticleModel.author == author)
        if exclude_id is not None:
            query = query.filter(ArticleModel.id != exclude_id)
        return (
            query.order_by(desc(ArticleModel.created_at), desc(ArticleModel.id))
            .limit(limit)
            .all()
        )

    def _search_query(
        self,
        query: Optional[str] = None,
        tag: Optional[str] = None,
        author: Optional[str] = None,
    ):
        q = self.session.query(ArticleModel)

        if query:
            q = q.filter(
                or_(
                    ArticleModel.title.ilike(f"%{query}%"),
                    ArticleModel.content.ilike(f"%{query}%"),
                    ArticleModel.author.ilike(f"%{query}%"),
                )
            )
        if tag:
            # Tags are JSON text, so match the quoted element
            q = q.filter(ArticleModel.tags.contains(f'"{tag.strip().lower()}"'))
        if author:
            q = q.filter(ArticleModel.author.ilike(f"%{author}%"))
        return q

    def search(
        self,
        query: Optional[str] = None,
        tag: Optional[str] = None,
        author: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[ArticleModel]:
        """Filter articles by free text, tag and author, newest first."""
        return (
            self._search_query(query, tag, author)
            .order_by(desc(ArticleModel.created_at), desc(ArticleModel.id))
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count_search(
        self,
        query: Optional[str] = None,
        tag: Optional[str] = None,
        author: Optional[str] = None,
    ) -> int:
        """Number of articles ``search`` would match without paging."""
        return self._search_query(query, tag, author).count()
