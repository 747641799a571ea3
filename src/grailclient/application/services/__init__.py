"""Application services: the state core behind the detail pages."""

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

__all__ = [
    "CollectionEditor",
    "FeedbackChannel",
    "OverviewLoader",
    "RelationshipStore",
    "artist_overview_loader",
    "community_rating_average",
    "label_overview_loader",
    "master_versions_summary",
    "related_releases",
]
