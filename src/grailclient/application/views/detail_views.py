"""Detail-page state: one object per open artist, label or release page.

Hey future me - a page OWNS its components. It creates them, loads them, and
closes them when the viewer navigates away (close() is the teardown guard:
anything still in flight is dropped when it lands). All components of one page
share one FeedbackChannel, so the newest message wins the toast slot.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

from grailclient.application.services.collection_editor import CollectionEditor
from grailclient.application.services.feedback_channel import FeedbackChannel
from grailclient.application.services.overview_loader import (
    OverviewLoader,
    artist_overview_loader,
    label_overview_loader,
)
from grailclient.application.services.relationship_store import RelationshipStore
from grailclient.application.services.release_summary import (
    community_rating_average,
    master_versions_summary,
    related_releases,
)
from grailclient.config.settings import CatalogSettings
from grailclient.domain.entities import (
    ArtistOverview,
    EntityRef,
    EntityType,
    LabelOverview,
)
from grailclient.domain.exceptions import ValidationException
from grailclient.domain.ports import ICatalogApi, IViewerSession
from grailclient.domain.value_objects import parse_entity_id

logger = logging.getLogger(__name__)


def _require_id(slug: str, kind: str) -> str:
    entity_id = parse_entity_id(slug)
    if entity_id is None:
        raise ValidationException(f"Invalid {kind} ID: {slug!r}")
    return entity_id


class _EntityDetailView(ABC):
    """Shared wiring of the artist and label pages."""

    entity_type: EntityType

    def __init__(
        self,
        api: ICatalogApi,
        session: IViewerSession,
        entity_id: str,
        loader: OverviewLoader[Any],
        feedback: FeedbackChannel | None = None,
    ) -> None:
        self.entity_id = entity_id
        self.feedback = feedback or FeedbackChannel()
        self.loader = loader
        self.follow = RelationshipStore(
            api, session, self.feedback, EntityRef(self.entity_type, entity_id)
        )

    @abstractmethod
    def _entity(self) -> dict[str, Any]:
        """Entity block of the loaded overview, empty before the first load."""
        pass

    async def open(self) -> None:
        """Load the listing and the follow status side by side."""
        await asyncio.gather(self.loader.load(), self.follow.load_status())
        name = self._entity().get("name")
        if name:
            self.follow.entity_name = name

    def close(self) -> None:
        self.loader.close()
        self.follow.close()


class ArtistDetailView(_EntityDetailView):
    """Artist page: sortable releases table plus follow button."""

    entity_type = EntityType.ARTIST

    def __init__(
        self,
        api: ICatalogApi,
        session: IViewerSession,
        artist_slug: str,
        settings: CatalogSettings | None = None,
        feedback: FeedbackChannel | None = None,
    ) -> None:
        settings = settings or CatalogSettings()
        artist_id = _require_id(artist_slug, "artist")
        self.loader: OverviewLoader[ArtistOverview] = artist_overview_loader(
            api,
            artist_id,
            per_page=settings.artist_per_page,
            window_size=settings.page_window_size,
        )
        super().__init__(api, session, artist_id, self.loader, feedback)

    def _entity(self) -> dict[str, Any]:
        return self.loader.data.artist if self.loader.data is not None else {}


class LabelDetailView(_EntityDetailView):
    """Label page: paged releases table plus follow button."""

    entity_type = EntityType.LABEL

    def __init__(
        self,
        api: ICatalogApi,
        session: IViewerSession,
        label_slug: str,
        settings: CatalogSettings | None = None,
        feedback: FeedbackChannel | None = None,
    ) -> None:
        settings = settings or CatalogSettings()
        label_id = _require_id(label_slug, "label")
        self.loader: OverviewLoader[LabelOverview] = label_overview_loader(
            api,
            label_id,
            per_page=settings.label_per_page,
            window_size=settings.page_window_size,
        )
        super().__init__(api, session, label_id, self.loader, feedback)

    def _entity(self) -> dict[str, Any]:
        return self.loader.data.label if self.loader.data is not None else {}


class ReleaseDetailView:
    """Release page: collection editor plus a follow button for the main artist."""

    def __init__(
        self,
        api: ICatalogApi,
        session: IViewerSession,
        release_slug: str,
        feedback: FeedbackChannel | None = None,
    ) -> None:
        self._api = api
        self._session = session
        self.release_id = _require_id(release_slug, "release")
        self.feedback = feedback or FeedbackChannel()
        self.editor = CollectionEditor(api, session, self.feedback, self.release_id)
        # Known only once the overview names the credited artists
        self.artist_follow: RelationshipStore | None = None
        self._closed = False

    async def open(self) -> None:
        """Load the overview, then the follow status of the first credited artist."""
        overview = await self.editor.load()
        if overview is None or self._closed:
            return

        artists = overview.release.get("artists") or []
        primary = artists[0] if artists and isinstance(artists[0], dict) else {}
        if not primary.get("id"):
            return
        if self.artist_follow is None:
            self.artist_follow = RelationshipStore(
                self._api,
                self._session,
                self.feedback,
                EntityRef(EntityType.ARTIST, str(primary["id"])),
                entity_name=primary.get("name"),
            )
        await self.artist_follow.load_status()

    @property
    def artist_names(self) -> str:
        overview = self.editor.overview
        artists = overview.release.get("artists") if overview is not None else None
        if not isinstance(artists, list) or not artists:
            return "Unknown artist"
        return ", ".join(a.get("name", "") for a in artists if isinstance(a, dict))

    @property
    def format_summary(self) -> list[dict[str, Any]]:
        overview = self.editor.overview
        return master_versions_summary(overview) if overview is not None else []

    @property
    def related(self) -> list[dict[str, Any]]:
        overview = self.editor.overview
        return related_releases(overview) if overview is not None else []

    @property
    def community_rating(self) -> float | None:
        overview = self.editor.overview
        return community_rating_average(overview) if overview is not None else None

    def close(self) -> None:
        self._closed = True
        self.editor.close()
        if self.artist_follow is not None:
            self.artist_follow.close()
