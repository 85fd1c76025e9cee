"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from news_curator.config import (
    Config,
    DatabaseConfig,
    ProviderSettings,
    get_config,
    load_config_from_yaml,
    reload_config,
)


class TestDefaults:
    """Tests for default values."""

    def test_section_defaults(self, monkeypatch):
        for name in ("SUMMARIZER_MAX_SENTENCES", "RECOMMENDER_DEFAULT_LIMIT", "TRENDING_WINDOW_HOURS"):
            monkeypatch.delenv(name, raising=False)
        config = Config()

        assert config.summarizer.max_sentences == 3
        assert config.summarizer.min_sentence_chars == 15
        assert config.recommender.default_limit == 10
        assert config.recommender.candidate_multiplier == 2
        assert config.trending.window_hours == 24
        assert config.database.type == "sqlite"

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reload_config(self):
        first = get_config()
        reload_config()
        assert get_config() is not first

    def test_reload_config_from_env_path(self, tmp_path, monkeypatch):
        path = tmp_path / "curator.yaml"
        path.write_text("trending:\n  default_limit: 3\n", encoding="utf-8")
        monkeypatch.setenv("CURATOR_CONFIG", str(path))

        assert reload_config().trending.default_limit == 3
        monkeypatch.delenv("CURATOR_CONFIG")
        reload_config()


class TestProviderSettings:
    """Tests for ProviderSettings."""

    def test_frozen(self):
        settings = ProviderSettings(ollama_base_url=None)
        with pytest.raises(ValidationError):
            settings.openai_api_key = "sk-new"

    def test_blank_key_is_missing(self):
        settings = ProviderSettings(cohere_api_key="   ", ollama_base_url="")
        assert settings.cohere_api_key is None
        assert settings.ollama_base_url is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PROVIDER_OPENAI_API_KEY", "sk-env")
        monkeypatch.setenv("PROVIDER_OPENAI_MODEL", "gpt-4o-mini")

        settings = ProviderSettings()

        assert settings.openai_api_key == "sk-env"
        assert settings.openai_model == "gpt-4o-mini"


class TestDatabaseConfig:
    """Tests for DatabaseConfig validation."""

    def test_postgres_alias(self):
        assert DatabaseConfig(type="Postgres").type == "postgresql"

    def test_invalid_type(self):
        with pytest.raises(ValidationError):
            DatabaseConfig(type="mysql")

    def test_invalid_port(self):
        with pytest.raises(ValidationError):
            DatabaseConfig(port=70000)


class TestLoadConfigFromYaml:
    """Tests for YAML configuration files."""

    def test_load(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "app_name: TestCurator\n"
            "summarizer:\n"
            "  max_sentences: 5\n"
            "providers:\n"
            "  ollama_base_url: http://gpu-box:11434\n"
            "trending:\n"
            "  window_hours: 48\n",
            encoding="utf-8",
        )

        config = load_config_from_yaml(str(path))

        assert config.app_name == "TestCurator"
        assert config.summarizer.max_sentences == 5
        assert config.providers.ollama_base_url == "http://gpu-box:11434"
        assert config.trending.window_hours == 48

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert isinstance(load_config_from_yaml(str(path)), Config)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_from_yaml(str(tmp_path / "missing.yaml"))

    def test_invalid_value(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("summarizer:\n  max_sentences: 0\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config_from_yaml(str(path))
