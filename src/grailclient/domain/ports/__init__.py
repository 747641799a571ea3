"""Domain ports (interfaces) for dependency inversion."""

from abc import ABC, abstractmethod
from datetime import datetime

from grailclient.domain.entities import (
    ArtistOverview,
    EditBuffer,
    EntityRef,
    FollowState,
    LabelOverview,
    OverviewQuery,
    ReleaseOverview,
)


# Hey future me, ICatalogApi is a PORT (Hexagonal Architecture)! It's the contract the core needs
# from the remote catalog: fetch + mutate primitives, nothing else. The httpx implementation lives
# in infrastructure/integrations/catalog_client.py. Services only ever see this interface, so
# tests hand them an AsyncMock(spec=ICatalogApi). Every method raises DomainException subclasses
# (RemoteServiceException, EntityNotFoundException) - never raw httpx errors.
class ICatalogApi(ABC):
    """Remote catalog operations used by the state core."""

    @abstractmethod
    async def get_follow_status(self, ref: EntityRef) -> FollowState:
        """GET /api/{entityType}/{id}/follow-status."""
        pass

    @abstractmethod
    async def follow(self, ref: EntityRef) -> None:
        """POST /api/{entityType}/{id}/follow."""
        pass

    @abstractmethod
    async def unfollow(self, ref: EntityRef) -> None:
        """DELETE /api/{entityType}/{id}/unfollow."""
        pass

    @abstractmethod
    async def get_release_overview(self, release_id: str) -> ReleaseOverview:
        """GET /api/releases/{id}/overview."""
        pass

    @abstractmethod
    async def save_collection_entry(self, release_id: str, buffer: EditBuffer) -> None:
        """POST /api/releases/{id}/collection (server decides create vs update)."""
        pass

    @abstractmethod
    async def remove_collection_entry(self, release_id: str) -> None:
        """DELETE /api/releases/{id}/collection."""
        pass

    @abstractmethod
    async def get_artist_overview(
        self, artist_id: str, query: OverviewQuery
    ) -> ArtistOverview:
        """GET /api/artists/{id}/overview?page&per_page&sort&sort_order."""
        pass

    @abstractmethod
    async def get_label_overview(self, label_id: str, query: OverviewQuery) -> LabelOverview:
        """GET /api/labels/{id}/overview?page&per_page."""
        pass


class IViewerSession(ABC):
    """Read-only view of the signed-in viewer.

    Owned and refreshed outside this package. Components only read it.
    """

    @property
    @abstractmethod
    def is_authenticated(self) -> bool:
        """True when a viewer is signed in."""
        pass

    @property
    @abstractmethod
    def username(self) -> str | None:
        """Viewer's username, None when anonymous."""
        pass

    @property
    @abstractmethod
    def token(self) -> str | None:
        """Bearer token for API calls, None when anonymous."""
        pass


class IClock(ABC):
    """Source of the current time (injected so derived text is testable)."""

    @abstractmethod
    def now(self) -> datetime:
        """Current timezone-aware datetime."""
        pass


__all__ = ["ICatalogApi", "IClock", "IViewerSession"]
