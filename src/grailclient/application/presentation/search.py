"""Search result rendering, one function per result type.

Hey future me - SearchType is a CLOSED set. render_result() dispatches with an
exhaustive match and assert_never(), so adding a type without a render
function is caught by mypy instead of silently falling back to the release
card.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, assert_never

from grailclient.domain.entities import EntityRef, EntityType

PROFILE_PREVIEW_LENGTH = 160


class SearchType(str, Enum):
    """Kind of thing being searched for."""

    RELEASE = "release"
    ARTIST = "artist"
    LABEL = "label"


@dataclass(frozen=True)
class SearchCard:
    """Render-ready data for one search result."""

    item_id: str
    title: str
    subtitle: str = ""
    detail_path: str = ""
    external_url: str | None = None
    thumb: str | None = None
    # Artist and label cards carry a follow button
    follow_ref: EntityRef | None = None


def _truncate(text: str | None, length: int = PROFILE_PREVIEW_LENGTH) -> str:
    if not text:
        return ""
    return text if len(text) <= length else text[:length].rstrip() + "..."


def render_release(item: dict[str, Any]) -> SearchCard:
    genre = item.get("genre")
    genres = ", ".join(genre) if isinstance(genre, list) else (genre or "")
    year = str(item.get("year") or "")
    return SearchCard(
        item_id=str(item.get("id", "")),
        title=item.get("title") or "",
        subtitle=" · ".join(part for part in (year, genres) if part),
        detail_path=f"/release/{item.get('id')}",
        thumb=item.get("thumb"),
    )


def render_artist(item: dict[str, Any]) -> SearchCard:
    item_id = str(item.get("id", ""))
    return SearchCard(
        item_id=item_id,
        title=item.get("name") or "",
        subtitle=item.get("realName") or _truncate(item.get("profile")),
        detail_path=f"/artist/{item_id}",
        external_url=item.get("uri") or item.get("resourceUrl"),
        thumb=item.get("thumb"),
        follow_ref=EntityRef(EntityType.ARTIST, item_id),
    )


def render_label(item: dict[str, Any]) -> SearchCard:
    item_id = str(item.get("id", ""))
    return SearchCard(
        item_id=item_id,
        title=item.get("name") or "",
        subtitle=item.get("country") or _truncate(item.get("profile")),
        detail_path=f"/label/{item_id}",
        external_url=item.get("uri") or item.get("resourceUrl"),
        thumb=item.get("thumb"),
        follow_ref=EntityRef(EntityType.LABEL, item_id),
    )


def render_result(search_type: SearchType, item: dict[str, Any]) -> SearchCard:
    """Render one result with the function for its type."""
    match search_type:
        case SearchType.RELEASE:
            return render_release(item)
        case SearchType.ARTIST:
            return render_artist(item)
        case SearchType.LABEL:
            return render_label(item)
        case _:
            assert_never(search_type)


def render_results(search_type: SearchType, items: list[dict[str, Any]]) -> list[SearchCard]:
    return [render_result(search_type, item) for item in items]


def empty_state_message(search_type: SearchType) -> str:
    """Hint shown when a search returns nothing."""
    match search_type:
        case SearchType.ARTIST:
            return "Try refining the artist name or adding more details"
        case SearchType.LABEL:
            return "Try refining the label name or adding more details"
        case SearchType.RELEASE:
            return "Try adjusting your search terms"
        case _:
            assert_never(search_type)


def icon_for_type(search_type: SearchType) -> str:
    match search_type:
        case SearchType.ARTIST:
            return "fa-user"
        case SearchType.LABEL:
            return "fa-tag"
        case SearchType.RELEASE:
            return "fa-music"
        case _:
            assert_never(search_type)
