"""Domain entities."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from grailclient.domain.value_objects.collection_values import (
    normalize_rating,
)


# Hey future me, the catalog API uses the SINGULAR form in follow URLs
# (/api/artist/123/follow) - the enum value goes straight into the path.
class EntityType(str, Enum):
    """Type of a followable entity."""

    ARTIST = "artist"
    LABEL = "label"


class SortOrder(str, Enum):
    """Sort direction for paginated listings."""

    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortOrder":
        """Return the opposite direction."""
        return SortOrder.DESC if self is SortOrder.ASC else SortOrder.ASC


class ArtistSortField(str, Enum):
    """Sort fields accepted by the artist overview endpoint."""

    YEAR = "year"
    TITLE = "title"
    FORMAT = "format"


class FeedbackSeverity(str, Enum):
    """Severity of a transient feedback message."""

    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"


class ActionStatus(str, Enum):
    """Outcome of a mutating operation.

    - COMPLETED: mutation and reconciliation ran
    - FAILED: remote call failed, prior state kept
    - DENIED: viewer not signed in (or input rejected), no network call
    - BUSY: another action of the same component is in flight
    - DISCARDED: owner was closed while the call was pending
    """

    COMPLETED = "completed"
    FAILED = "failed"
    DENIED = "denied"
    BUSY = "busy"
    DISCARDED = "discarded"


def _as_bool(value: Any) -> bool:
    # The API is loose here: 0/1, "0"/"1" and real booleans all show up
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class EntityRef:
    """Identifies a followable artist or label."""

    entity_type: EntityType
    entity_id: str

    def __str__(self) -> str:
        return f"{self.entity_type.value} {self.entity_id}"


@dataclass(frozen=True)
class FollowState:
    """Follow status of the viewer for one entity.

    Always built from a remote response (or the fail-open default), never
    computed locally.
    """

    entity_ref: EntityRef
    is_following: bool = False
    follower_count: int = 0

    @classmethod
    def not_following(cls, entity_ref: EntityRef) -> "FollowState":
        """Conservative default used when the status cannot be loaded."""
        return cls(entity_ref=entity_ref, is_following=False, follower_count=0)

    @classmethod
    def from_api(cls, entity_ref: EntityRef, data: dict[str, Any]) -> "FollowState":
        """Build from a follow-status response body."""
        return cls(
            entity_ref=entity_ref,
            is_following=_as_bool(data.get("is_following") or False),
            follower_count=max(0, _as_int(data.get("follower_count"))),
        )


@dataclass(frozen=True)
class CollectionEntry:
    """Persisted relationship of the viewer to one release.

    wishlist=True means wantlist, False means collection. An entry existing at
    all means the viewer has SOME relationship to the release.
    """

    release_id: str
    wishlist: bool = False
    notes: str = ""
    price_threshold: Decimal | None = None
    rating: int | None = None

    @classmethod
    def from_api(cls, release_id: str, data: dict[str, Any]) -> "CollectionEntry":
        """Build from the collectionEntry object of a release overview."""
        price_raw = data.get("priceThreshold", data.get("price_threshold"))
        price: Decimal | None
        try:
            price = Decimal(str(price_raw)) if price_raw not in (None, "") else None
        except InvalidOperation:
            price = None
        if price is not None and (not price.is_finite() or price < 0):
            price = None

        return cls(
            release_id=release_id,
            wishlist=_as_bool(data.get("wishlist")),
            notes=data.get("notes") or "",
            price_threshold=price,
            rating=normalize_rating(data.get("rating")),
        )


@dataclass
class EditBuffer:
    """Local, uncommitted copy of a CollectionEntry used for staged editing.

    Price is kept as the raw text the viewer typed. It is only checked when
    the buffer is saved.
    """

    wishlist: bool = False
    notes: str = ""
    price_threshold: str = ""
    rating: int | None = None

    @classmethod
    def from_entry(
        cls, entry: CollectionEntry | None, user_rating: int | None = None
    ) -> "EditBuffer":
        """Build a buffer from an entry, or defaults when there is none.

        Args:
            entry: Persisted entry (None = no relationship)
            user_rating: Overview-level rating used when the entry has none
        """
        if entry is None:
            return cls(rating=user_rating)
        return cls(
            wishlist=entry.wishlist,
            notes=entry.notes,
            price_threshold=(
                str(entry.price_threshold) if entry.price_threshold is not None else ""
            ),
            rating=entry.rating if entry.rating is not None else user_rating,
        )

    def to_payload(self) -> dict[str, Any]:
        """Request body for the collection upsert endpoint."""
        return {
            "wishlist": self.wishlist,
            "notes": self.notes,
            "priceThreshold": self.price_threshold,
            "rating": self.rating,
        }


@dataclass(frozen=True)
class OverviewQuery:
    """Parameters of a paginated (and optionally sorted) overview fetch.

    Frozen on purpose: each fetch is keyed by the snapshot taken at call time.
    """

    page: int = 1
    per_page: int = 25
    sort_field: str | None = None
    sort_order: SortOrder = SortOrder.DESC

    def to_params(self) -> dict[str, Any]:
        """Query-string parameters for the overview endpoints."""
        params: dict[str, Any] = {"page": self.page, "per_page": self.per_page}
        if self.sort_field is not None:
            params["sort"] = str(getattr(self.sort_field, "value", self.sort_field))
            params["sort_order"] = self.sort_order.value
        return params


@dataclass(frozen=True)
class PaginationMeta:
    """Pagination block returned by the catalog API (read-only)."""

    page: int = 1
    pages: int = 0
    per_page: int = 0
    total: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any] | None) -> "PaginationMeta":
        """Build from a pagination object, tolerating missing keys."""
        data = data or {}
        return cls(
            page=_as_int(data.get("page"), 1),
            pages=max(0, _as_int(data.get("pages"))),
            per_page=_as_int(data.get("per_page", data.get("perPage"))),
            total=_as_int(data.get("items", data.get("total"))),
        )


@dataclass(frozen=True)
class Feedback:
    """Transient message shown after an action. Replaced, never queued."""

    severity: FeedbackSeverity
    text: str


@dataclass(frozen=True)
class ActionResult:
    """What a mutating call did, plus the feedback it emitted (if any)."""

    status: ActionStatus
    feedback: Feedback | None = None

    @property
    def ok(self) -> bool:
        """True when the mutation went through."""
        return self.status is ActionStatus.COMPLETED


@dataclass(frozen=True)
class ReleasesPage:
    """Paginated sub-list of releases inside an artist or label overview."""

    releases: list[dict[str, Any]] = field(default_factory=list)
    pagination: PaginationMeta = field(default_factory=PaginationMeta)

    @classmethod
    def from_api(cls, data: dict[str, Any] | None) -> "ReleasesPage":
        """Build from the releases block ({releases: [...], pagination: {...}})."""
        data = data or {}
        return cls(
            releases=list(data.get("releases") or []),
            pagination=PaginationMeta.from_api(data.get("pagination")),
        )


@dataclass(frozen=True)
class ArtistOverview:
    """Artist detail read model."""

    artist: dict[str, Any]
    releases: ReleasesPage
    stats: dict[str, Any] = field(default_factory=dict)

    @property
    def pagination(self) -> PaginationMeta:
        return self.releases.pagination

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ArtistOverview":
        return cls(
            artist=data.get("artist") or {},
            releases=ReleasesPage.from_api(data.get("releases")),
            stats=data.get("stats") or {},
        )


@dataclass(frozen=True)
class LabelOverview:
    """Label detail read model."""

    label: dict[str, Any]
    releases: ReleasesPage
    stats: dict[str, Any] = field(default_factory=dict)

    @property
    def pagination(self) -> PaginationMeta:
        return self.releases.pagination

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "LabelOverview":
        return cls(
            label=data.get("label") or {},
            releases=ReleasesPage.from_api(data.get("releases")),
            stats=data.get("stats") or {},
        )


@dataclass(frozen=True)
class ReleaseOverview:
    """Release detail read model, including the viewer's collection entry."""

    release_id: str
    release: dict[str, Any]
    stats: dict[str, Any] = field(default_factory=dict)
    collection_entry: CollectionEntry | None = None
    community_rating: dict[str, Any] = field(default_factory=dict)
    master_versions: dict[str, Any] = field(default_factory=dict)
    user_rating: int | None = None

    @classmethod
    def from_api(cls, release_id: str, data: dict[str, Any]) -> "ReleaseOverview":
        entry_data = data.get("collectionEntry")
        return cls(
            release_id=release_id,
            release=data.get("release") or {},
            stats=data.get("stats") or {},
            collection_entry=(
                CollectionEntry.from_api(release_id, entry_data) if entry_data else None
            ),
            community_rating=data.get("communityRating") or {},
            master_versions=data.get("masterVersions") or {},
            user_rating=normalize_rating(data.get("userRating")),
        )


__all__ = [
    "ActionResult",
    "ActionStatus",
    "ArtistOverview",
    "ArtistSortField",
    "CollectionEntry",
    "EditBuffer",
    "EntityRef",
    "EntityType",
    "Feedback",
    "FeedbackSeverity",
    "FollowState",
    "LabelOverview",
    "OverviewQuery",
    "PaginationMeta",
    "ReleaseOverview",
    "ReleasesPage",
    "SortOrder",
]
