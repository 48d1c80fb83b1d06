"""Configuration loading and validation."""

import pytest

from feed_server.config import DEFAULT_CATEGORIES, ServerConfig, get_config, reload_config


@pytest.fixture
def clean_env(monkeypatch):
    for key in (
        "DATABASE_URL", "JWT_SECRET", "PORT", "EMBEDDING_SERVICE_URL", "ML_SERVICE_URL",
        "EMBEDDING_PROVIDER", "GNEWS_API_KEY", "INGEST_CATEGORIES", "DATABASE_SSL",
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def _ingest_config(**overrides):
    values = dict(
        gnews_api_key="key",
        embedding_service_url="https://embed.example.com",
        database_url="postgresql://u:p@db.example.com/news",
    )
    values.update(overrides)
    return ServerConfig(**values)


class TestFromEnv:
    def test_defaults(self, clean_env):
        config = ServerConfig.from_env()
        assert config.port == 4000
        assert config.database_url is None
        assert config.database_ssl is True
        assert config.embedding_provider == "gradio"
        assert config.ingest_categories == DEFAULT_CATEGORIES
        assert config.ingest_articles_per_category == 50
        assert config.ingest_category_delay == 2.0

    def test_overrides_and_alias(self, clean_env):
        clean_env.setenv("PORT", "8080")
        clean_env.setenv("ML_SERVICE_URL", "https://space.example.com")
        clean_env.setenv("INGEST_CATEGORIES", "science, sports,")
        clean_env.setenv("DATABASE_SSL", "false")
        config = ServerConfig.from_env()
        assert config.port == 8080
        assert config.embedding_service_url == "https://space.example.com"
        assert config.ingest_categories == ["science", "sports"]
        assert config.database_ssl is False


class TestValidation:
    def test_serving_requires_jwt_secret(self):
        valid, errors = ServerConfig().validate()
        assert not valid
        assert any("JWT_SECRET" in e for e in errors)
        assert ServerConfig(jwt_secret="s").validate() == (True, [])

    def test_ingestion_ok(self):
        assert _ingest_config().validate_ingestion() == (True, [])

    @pytest.mark.parametrize("url", ["http://localhost:7860", "http://127.0.0.1:7860/"])
    def test_ingestion_rejects_localhost_embedding_service(self, url):
        valid, errors = _ingest_config(embedding_service_url=url).validate_ingestion()
        assert not valid
        assert any("public URL" in e for e in errors)

    def test_ingestion_lists_every_missing_setting(self):
        valid, errors = ServerConfig().validate_ingestion()
        assert not valid
        joined = " ".join(errors)
        for name in ("GNEWS_API_KEY", "EMBEDDING_SERVICE_URL", "DATABASE_URL"):
            assert name in joined


class TestGlobalConfig:
    def test_reload_picks_up_environment(self, clean_env):
        clean_env.setenv("PORT", "5001")
        assert reload_config().port == 5001
        assert get_config() is get_config()
        clean_env.setenv("PORT", "5002")
        assert get_config().port == 5001
        assert reload_config().port == 5002
