"""Tests for the viewer session, clocks and client wiring."""

from datetime import UTC, datetime

from grailclient.bootstrap import create_catalog_client
from grailclient.config import Settings
from grailclient.config.settings import ApiSettings
from grailclient.infrastructure.clock import FixedClock, SystemClock
from grailclient.infrastructure.integrations import CatalogApiClient
from grailclient.infrastructure.session import ViewerSession


class TestViewerSession:
    def test_needs_token_and_username(self) -> None:
        assert ViewerSession("digger", "t").is_authenticated
        assert not ViewerSession("digger", None).is_authenticated
        assert not ViewerSession(None, "t").is_authenticated

    def test_sign_in_and_out(self) -> None:
        session = ViewerSession()

        session.sign_in("digger", "abc")
        assert session.is_authenticated
        assert session.token == "abc"

        session.sign_out()
        assert not session.is_authenticated
        assert session.username is None


class TestClocks:
    def test_fixed_clock(self) -> None:
        instant = datetime(2024, 5, 1, tzinfo=UTC)
        assert FixedClock(instant).now() is instant

    def test_system_clock_is_utc(self) -> None:
        assert SystemClock().now().tzinfo is UTC


def test_create_catalog_client_uses_settings() -> None:
    settings = Settings(api=ApiSettings(base_url="https://catalog.test", timeout=3.0))
    session = ViewerSession("digger", "t")

    client = create_catalog_client(session, settings=settings, setup_logging=False)

    assert isinstance(client, CatalogApiClient)
    assert client.settings.base_url == "https://catalog.test"
    assert client.catalog_settings is settings.catalog
    assert client.session is session
