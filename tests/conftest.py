"""Shared fixtures for grailclient tests."""

from unittest.mock import AsyncMock

import pytest

from grailclient.application.services.feedback_channel import FeedbackChannel
from grailclient.domain.entities import EntityRef, EntityType
from grailclient.domain.ports import ICatalogApi
from grailclient.infrastructure.session import ViewerSession


@pytest.fixture
def api() -> AsyncMock:
    """Catalog port double - every method is an AsyncMock."""
    return AsyncMock(spec=ICatalogApi)


@pytest.fixture
def session() -> ViewerSession:
    """Signed-in viewer."""
    return ViewerSession(username="digger", token="token-123")


@pytest.fixture
def anonymous_session() -> ViewerSession:
    return ViewerSession()


@pytest.fixture
def feedback() -> FeedbackChannel:
    return FeedbackChannel()


@pytest.fixture
def artist_ref() -> EntityRef:
    return EntityRef(EntityType.ARTIST, "42")
