"""Unit tests for release overview summaries."""

from grailclient.application.services.release_summary import (
    community_rating_average,
    master_versions_summary,
    related_releases,
)
from grailclient.domain.entities import ReleaseOverview


def overview(versions=None, release_id=1, rating=None) -> ReleaseOverview:
    return ReleaseOverview(
        release_id=str(release_id),
        release={"id": release_id},
        master_versions={"versions": versions} if versions is not None else {},
        community_rating=rating or {},
    )


def test_format_summary_counts_most_common_first() -> None:
    versions = [
        {"id": 1, "format": "Vinyl"},
        {"id": 2, "format": ["CD", "Album"]},
        {"id": 3, "format": "Vinyl"},
        {"id": 4},
        {"id": 5, "format": "Cassette"},
        {"id": 6, "format": "Box Set"},
    ]

    summary = master_versions_summary(overview(versions))

    assert summary == [
        {"format": "Vinyl", "count": 2},
        {"format": "CD, Album", "count": 1},
        {"format": "Unknown", "count": 1},
        {"format": "Cassette", "count": 1},
    ]


def test_format_summary_without_master() -> None:
    assert master_versions_summary(overview()) == []


def test_related_releases_skip_current_and_cap_at_eight() -> None:
    versions = [{"id": i} for i in range(1, 12)]

    related = related_releases(overview(versions, release_id=3))

    assert len(related) == 8
    assert {"id": 3} not in related
    assert related[0] == {"id": 1}


def test_community_rating_nested_and_flat() -> None:
    assert community_rating_average(overview(rating={"rating": {"average": 4.25}})) == 4.25
    assert community_rating_average(overview(rating={"average": "3.5"})) == 3.5
    assert community_rating_average(overview(rating={"rating": {"average": 0}})) is None
    assert community_rating_average(overview(rating={"average": "n/a"})) is None
    assert community_rating_average(overview()) is None
