"""
Declarative base shared by all ORM models.
"""

import json
from typing import Optional

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""


def load_json_list(value: Optional[str]) -> list[str]:
    """Parse a JSON-encoded list column, tolerating empty or corrupt values."""
    if not value:
        return []
    try:
        parsed = json.loads(value)
    except (json.JSONDecodeError, TypeError):
        return []
    return [str(item) for item in parsed] if isinstance(parsed, list) else []


def normalize_terms(values: Optional[list[str]]) -> list[str]:
    """Trim, lowercase and de-duplicate tag/interest strings, keeping order."""
    result: list[str] = []
    for value in values or []:
        term = value.strip().lower()
        if term and term not in result:
            result.append(term)
    return result
