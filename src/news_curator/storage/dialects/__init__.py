"""Database dialects keyed by the configured ``DatabaseConfig.type``."""

from news_curator.storage.dialects.base import BaseDialect
from news_curator.storage.dialects.postgresql import PostgreSQLDialect
from news_curator.storage.dialects.sqlite import SQLiteDialect

DIALECTS: dict[str, type[BaseDialect]] = {
    "sqlite": SQLiteDialect,
    "postgresql": PostgreSQLDialect,
}

ALIASES = {"postgres": "postgresql"}


def resolve_dialect_name(name: str) -> str:
    """Canonical dialect name for a configured type.

    Raises:
        ValueError: If the name is not supported
    """
    key = name.strip().lower()
    key = ALIASES.get(key, key)
    if key not in DIALECTS:
        raise ValueError(
            f"Unsupported database dialect: {name!r}. "
            f"Supported dialects: {', '.join(get_supported_dialects())}"
        )
    return key


def get_dialect(name: str) -> BaseDialect:
    """Dialect instance for a configured type ("postgres" is accepted)."""
    return DIALECTS[resolve_dialect_name(name)]()


def get_supported_dialects() -> list[str]:
    """Supported names, aliases included."""
    return sorted([*DIALECTS, *ALIASES])


__all__ = [
    "BaseDialect",
    "SQLiteDialect",
    "PostgreSQLDialect",
    "get_dialect",
    "get_supported_dialects",
    "resolve_dialect_name",
]
