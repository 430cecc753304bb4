"""Settings read from the environment."""

from mflix_api.configs.api import APISettings
from mflix_api.configs.database import MongoSettings
from mflix_api.configs.settings import Settings


def test_shared_fields_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("DEBUG", "true")

    settings = Settings(_env_file=None)

    assert settings.environment == "production"
    assert settings.log_level == "DEBUG"
    assert settings.debug is True


def test_defaults_without_environment(monkeypatch) -> None:
    for name in ("ENVIRONMENT", "LOG_LEVEL", "DEBUG"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.environment == "development"
    assert settings.log_level == "INFO"
    assert settings.debug is False


def test_prefixed_settings_inherit_shared_fields(monkeypatch) -> None:
    monkeypatch.setenv("MONGODB_DB", "mflix_test")
    monkeypatch.setenv("MONGODB_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("API_MAX_PAGE_SIZE", "25")

    mongo = MongoSettings(_env_file=None)
    api = APISettings(_env_file=None)

    assert mongo.db == "mflix_test"
    assert mongo.log_level == "WARNING"
    assert api.max_page_size == 25
    assert api.log_level == "INFO"
