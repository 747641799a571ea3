"""Detail-page composition of the state components."""

from grailclient.application.views.detail_views import (
    ArtistDetailView,
    LabelDetailView,
    ReleaseDetailView,
)

__all__ = ["ArtistDetailView", "LabelDetailView", "ReleaseDetailView"]
