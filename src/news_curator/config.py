"""
Configuration management for News Curator.

Every section is a pydantic-settings model with its own environment prefix,
so a deployment can be configured from env vars, a ``.env`` file or YAML.
"""

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DATABASE_TYPES = ("sqlite", "postgresql")
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
DEFAULT_CONFIG_PATH = Path("config/news_curator.yaml")


class DatabaseConfig(BaseSettings):
    """Where articles, users and interactions live (``DB_*``).

    SQLite needs only ``path``; ``:memory:`` gives a throwaway database.
    PostgreSQL reads ``host``, ``port``, ``database``, ``user`` and
    ``password``.
    """

    model_config = SettingsConfigDict(env_prefix="DB_")

    type: str = Field(default="sqlite", description="sqlite or postgresql")
    path: str = Field(default="data/news_curator.db", description="SQLite file, URL or :memory:")

    host: Optional[str] = None
    port: Optional[int] = None
    database: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None

    echo: bool = Field(default=False, description="Log every SQL statement")
    pool_size: int = Field(default=5, ge=1, le=100)
    max_overflow: int = Field(default=10, ge=0)

    @field_validator("type")
    @classmethod
    def normalize_type(cls, value: str) -> str:
        name = value.strip().lower()
        name = "postgresql" if name == "postgres" else name
        if name not in DATABASE_TYPES:
            raise ValueError(f"Unknown database type {value!r}, expected one of {DATABASE_TYPES}")
        return name

    @field_validator("port")
    @classmethod
    def check_port(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and not 0 < value < 65536:
            raise ValueError(f"Port out of range: {value}")
        return value


class LoggingConfig(BaseSettings):
    """Loguru sinks (``LOG_*``)."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = "INFO"
    format: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> <level>{level: <8}</level> "
        "<cyan>{name}:{line}</cyan> <level>{message}</level>"
    )

    console_enabled: bool = True
    file_enabled: bool = True
    file_path: str = "logs/news_curator.log"
    rotation: str = Field(default="50 MB", description="Size or interval that starts a new file")
    retention: str = Field(default="14 days", description="How long rotated files are kept")

    @field_validator("level")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r}, expected one of {LOG_LEVELS}")
        return level


class SummarizerConfig(BaseSettings):
    """Summary generation defaults."""

    model_config = SettingsConfigDict(env_prefix="SUMMARIZER_")

    max_sentences: int = Field(default=3, ge=1, le=20, description="Maximum sentences in extractive summary")
    max_tokens: int = Field(default=150, ge=10, le=4096, description="Max tokens for chat-style providers")
    temperature: float = Field(default=0.3, ge=0.0, le=2.0, description="Sampling temperature")
    max_length: int = Field(default=150, ge=10, le=1000, description="Target summary length for providers")

    # Sentence noise filter
    min_sentence_chars: int = Field(default=15, ge=1, description="Minimum sentence length in characters")
    min_sentence_words: int = Field(default=4, ge=1, description="Minimum words per sentence")


class ProviderSettings(BaseSettings):
    """Credentials and endpoints for summary providers.

    Frozen: the orchestrator receives one immutable instance at construction
    time. A provider with no key (or, for Ollama, no base URL) is skipped.
    """

    model_config = SettingsConfigDict(env_prefix="PROVIDER_", frozen=True)

    # Local model
    ollama_base_url: Optional[str] = Field(default="http://localhost:11434", description="Ollama server URL")
    ollama_model: str = Field(default="llama2", description="Default Ollama model")
    ollama_timeout_seconds: float = Field(default=60.0, gt=0, le=300)

    # Hosted providers
    cohere_api_key: Optional[str] = Field(default=None, description="Cohere API key")
    cohere_model: str = Field(default="command-light", description="Default Cohere model")
    cohere_timeout_seconds: float = Field(default=30.0, gt=0, le=300)

    huggingface_api_key: Optional[str] = Field(default=None, description="HuggingFace API key")
    huggingface_model: str = Field(default="sshleifer/distilbart-cnn-12-6", description="Default HF model")
    huggingface_timeout_seconds: float = Field(default=60.0, gt=0, le=300)

    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    openai_model: str = Field(default="gpt-3.5-turbo", description="Default OpenAI model")
    openai_timeout_seconds: float = Field(default=30.0, gt=0, le=300)

    @field_validator("ollama_base_url", "cohere_api_key", "huggingface_api_key", "openai_api_key")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank strings as missing credentials."""
        if v is not None and not v.strip():
            return None
        return v


class RecommenderConfig(BaseSettings):
    """Recommendation scoring configuration."""

    model_config = SettingsConfigDict(env_prefix="RECOMMENDER_")

    default_limit: int = Field(default=10, ge=1, le=100, description="Default number of recommendations")
    max_limit: int = Field(default=100, ge=1, le=1000, description="Upper bound on requested limit")
    candidate_multiplier: int = Field(default=2, ge=1, le=10, description="Candidates fetched per requested item")
    author_history: int = Field(default=10, ge=1, le=100, description="Author articles used for reputation")


class TrendingConfig(BaseSettings):
    """Trending aggregation configuration."""

    model_config = SettingsConfigDict(env_prefix="TRENDING_")

    window_hours: int = Field(default=24, ge=1, le=24 * 90, description="Trailing window in hours")
    default_limit: int = Field(default=10, ge=1, le=100, description="Default number of trending articles")
    max_limit: int = Field(default=100, ge=1, le=1000, description="Upper bound on requested limit")
    max_window_hours: int = Field(default=24 * 90, ge=1, description="Upper bound on requested window")


class WebConfig(BaseSettings):
    """Flask API server (``WEB_*``)."""

    model_config = SettingsConfigDict(env_prefix="WEB_")

    host: str = "127.0.0.1"
    port: int = Field(default=5000, ge=1, le=65535)
    debug: bool = False
    secret_key: str = Field(default="change-me", description="Flask SECRET_KEY")


class Config(BaseSettings):
    """All configuration sections plus application identity (``CURATOR_*``)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CURATOR_",
        case_sensitive=False,
    )

    version: str = "0.1.0"
    app_name: str = "NewsCurator"
    debug: bool = False

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    summarizer: SummarizerConfig = Field(default_factory=SummarizerConfig)
    providers: ProviderSettings = Field(default_factory=ProviderSettings)
    recommender: RecommenderConfig = Field(default_factory=RecommenderConfig)
    trending: TrendingConfig = Field(default_factory=TrendingConfig)
    web: WebConfig = Field(default_factory=WebConfig)


SECTIONS: dict[str, type[BaseSettings]] = {
    name: field.default_factory
    for name, field in Config.model_fields.items()
    if field.default_factory is not None
}

_config: Optional[Config] = None


def get_config() -> Config:
    """Process-wide configuration, built from the environment on first use."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def _build_config(data: dict[str, Any]) -> Config:
    # Sections are constructed one by one so env vars still fill missing keys
    top_level = {key: value for key, value in data.items() if key not in SECTIONS}
    sections = {name: cls(**(data.get(name) or {})) for name, cls in SECTIONS.items()}
    return Config(**top_level, **sections)


def load_config_from_yaml(yaml_path: str) -> Config:
    """Build a ``Config`` from a YAML file; file values override env vars.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If a value is out of range
    """
    import yaml

    path = Path(yaml_path)
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

    return _build_config(yaml.safe_load(path.read_text(encoding="utf-8")) or {})


def reload_config(yaml_path: Optional[str] = None) -> Config:
    """Rebuild the global configuration.

    The YAML file is ``yaml_path``, else ``$CURATOR_CONFIG``, else
    ``config/news_curator.yaml`` when present; otherwise only the
    environment is read.
    """
    global _config
    candidate = yaml_path or os.environ.get("CURATOR_CONFIG")
    if candidate:
        _config = load_config_from_yaml(candidate)
    elif DEFAULT_CONFIG_PATH.is_file():
        _config = load_config_from_yaml(str(DEFAULT_CONFIG_PATH))
    else:
        _config = Config()
    return _config
