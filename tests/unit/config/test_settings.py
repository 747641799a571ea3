"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from grailclient.config import Settings, get_settings
from grailclient.config.settings import ApiSettings

BASE_URL = "https://catalog.example.com"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run from an empty dir with only the base URL set, so a developer's .env can't leak in."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GRAIL_API__BASE_URL", BASE_URL)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults() -> None:
    settings = Settings()

    assert settings.api.base_url == BASE_URL
    assert settings.api.timeout == 10.0
    assert settings.api.max_retries == 3
    assert settings.catalog.artist_per_page == 25
    assert settings.catalog.page_window_size == 10
    assert settings.catalog.currency == "USD"
    assert settings.observability.log_level == "INFO"


def test_nested_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("GRAIL_API__TIMEOUT", "2.5")
    monkeypatch.setenv("GRAIL_CATALOG__LABEL_PER_PAGE", "50")
    monkeypatch.setenv("GRAIL_OBSERVABILITY__JSON_FORMAT", "true")

    settings = Settings()

    assert settings.api.timeout == 2.5
    assert settings.catalog.label_per_page == 50
    assert settings.observability.json_format is True


def test_dotenv_file_is_read(tmp_path) -> None:
    (tmp_path / ".env").write_text("GRAIL_CATALOG__CURRENCY=EUR\n")

    assert Settings().catalog.currency == "EUR"


def test_invalid_values_are_rejected(monkeypatch) -> None:
    monkeypatch.setenv("GRAIL_CATALOG__ARTIST_PER_PAGE", "0")

    with pytest.raises(ValidationError):
        Settings()


def test_base_url_is_required(monkeypatch) -> None:
    monkeypatch.delenv("GRAIL_API__BASE_URL")

    with pytest.raises(ValidationError):
        Settings()


@pytest.mark.parametrize("url", ["", "/api", "catalog.example.com", "ftp://catalog.example.com"])
def test_base_url_must_be_absolute_http(url: str) -> None:
    with pytest.raises(ValidationError, match="absolute http"):
        ApiSettings(base_url=url)


def test_base_url_trailing_slash_is_dropped() -> None:
    assert ApiSettings(base_url="http://localhost:8080/").base_url == "http://localhost:8080"


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
