"""
Shared building blocks for the resource blueprints.

``CRUDBlueprint`` wires list/get/create/update/delete endpoints for one
repository. Subclasses declare the repository, schemas and resource name as
class attributes and override individual views where a resource needs more.
"""

from typing import Any, Callable, ClassVar, Optional

from flask import Blueprint, request
from pydantic import ValidationError

from news_curator.logger import get_logger
from news_curator.storage.database import DatabaseManager
from news_curator.web.serializers import SerializerRegistry, api_response

logger = get_logger(__name__)

# route name -> (rule, HTTP method, view attribute)
CRUD_ROUTES = {
    "list": ("", "GET", "_list"),
    "get": ("/<int:id>", "GET", "_get_by_id"),
    "create": ("", "POST", "_create"),
    "update": ("/<int:id>", "PUT", "_update"),
    "delete": ("/<int:id>", "DELETE", "_delete"),
}


def validation_message(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one readable line."""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        parts.append(f"{location}: {item.get('msg')}" if location else item.get("msg", ""))
    return "; ".join(parts)


def json_object() -> Optional[dict]:
    """The request body when it is a JSON object, else None."""
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else None


def bad_body():
    return api_response(success=False, error="Request body must be a non-empty JSON object", status=400)


def query_int(name: str, default: int, minimum: int = 1, maximum: Optional[int] = None) -> int:
    """Read a bounded integer query parameter."""
    value = max(request.args.get(name, default, type=int), minimum)
    return value if maximum is None else min(value, maximum)


class CRUDBlueprint:
    """One Flask blueprint serving a repository-backed resource.

    Responses use the ``api_response`` envelope and models are rendered
    through ``SerializerRegistry`` under ``resource_name.lower()``.
    """

    resource_name: ClassVar[str]
    repository_class: ClassVar[type]
    create_schema: ClassVar[Callable[..., Any]]
    update_schema: ClassVar[Callable[..., Any]]
    crud_routes: ClassVar[tuple[str, ...]] = tuple(CRUD_ROUTES)

    def __init__(self, db_manager: DatabaseManager, url_prefix: str):
        self.db_manager = db_manager
        self.blueprint = Blueprint(
            self.resource_name.lower(), self.__class__.__module__, url_prefix=url_prefix
        )
        for route in self.crud_routes:
            rule, method, attr = CRUD_ROUTES[route]
            self.blueprint.add_url_rule(rule, endpoint=route, view_func=getattr(self, attr), methods=[method])

    def serialize(self, model: Any) -> dict:
        return SerializerRegistry.serialize(self.resource_name.lower(), model)

    def check_exists(self, repository: Any, data: Any) -> bool:
        """Whether ``data`` collides with a stored resource (409 on create)."""
        return False

    def _not_found(self):
        return api_response(success=False, error=f"{self.resource_name} not found", status=404)

    def _invalid(self, error: ValidationError):
        return api_response(success=False, error=validation_message(error), status=400)

    def _list(self):
        limit = query_int("limit", 20, maximum=100)
        offset = query_int("offset", 0, minimum=0)

        with self.db_manager.session() as session:
            repo = self.repository_class(session)
            items = [self.serialize(item) for item in repo.list(limit=limit, offset=offset)]
            total = repo.count()

        return api_response(success=True, data={"items": items, "total": total})

    def _get_by_id(self, id: int):
        with self.db_manager.session() as session:
            item = self.repository_class(session).get_by_id(id)
            if item is None:
                return self._not_found()
            return api_response(success=True, data=self.serialize(item))

    def _create(self):
        payload = json_object()
        if not payload:
            return bad_body()

        try:
            data = self.create_schema(**payload)
        except ValidationError as e:
            return self._invalid(e)

        with self.db_manager.session() as session:
            repo = self.repository_class(session)
            if self.check_exists(repo, data):
                return api_response(
                    success=False, error=f"{self.resource_name} already exists", status=409
                )

            item = repo.create(data)
            logger.info(f"Created {self.resource_name.lower()} {item.id}")
            return api_response(
                success=True,
                data=self.serialize(item),
                message=f"{self.resource_name} created",
                status=201,
            )

    def _update(self, id: int):
        payload = json_object()
        if payload is None:
            return bad_body()

        try:
            data = self.update_schema(**payload)
        except ValidationError as e:
            return self._invalid(e)

        with self.db_manager.session() as session:
            repo = self.repository_class(session)
            item = repo.get_by_id(id)
            if item is None:
                return self._not_found()

            return api_response(
                success=True,
                data=self.serialize(repo.update(item, data)),
                message=f"{self.resource_name} updated",
            )

    def _delete(self, id: int):
        with self.db_manager.session() as session:
            repo = self.repository_class(session)
            item = repo.get_by_id(id)
            if item is None:
                return self._not_found()

            repo.delete(item)
            logger.info(f"Deleted {self.resource_name.lower()} {id}")
            return api_response(success=True, message=f"{self.resource_name} deleted")
