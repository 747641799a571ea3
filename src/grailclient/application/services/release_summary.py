"""Derived summaries of a release overview (master versions, ratings)."""

from collections import Counter
from typing import Any

from grailclient.domain.entities import ReleaseOverview

MAX_FORMAT_SUMMARY = 4
MAX_RELATED_RELEASES = 8


def _versions(overview: ReleaseOverview) -> list[dict[str, Any]]:
    versions = overview.master_versions.get("versions")
    return versions if isinstance(versions, list) else []


def _format_label(version: dict[str, Any]) -> str:
    fmt = version.get("format")
    if isinstance(fmt, list):
        return ", ".join(str(f) for f in fmt)
    return str(fmt) if fmt else "Unknown"


def master_versions_summary(overview: ReleaseOverview) -> list[dict[str, Any]]:
    """Most common formats among the master's versions.

    Returns:
        Up to four {"format", "count"} dicts, most frequent first
    """
    counts = Counter(_format_label(v) for v in _versions(overview))
    # Counter.most_common keeps first-seen order on ties
    return [
        {"format": fmt, "count": count}
        for fmt, count in counts.most_common(MAX_FORMAT_SUMMARY)
    ]


def related_releases(overview: ReleaseOverview) -> list[dict[str, Any]]:
    """Other versions of the same master, without the release itself."""
    current_id = overview.release.get("id")
    others = [v for v in _versions(overview) if v.get("id") != current_id]
    return others[:MAX_RELATED_RELEASES]


def community_rating_average(overview: ReleaseOverview) -> float | None:
    """Average community rating, from either response shape.

    The API returns {"rating": {"average": x}} for some releases and a flat
    {"average": x} for others.
    """
    rating = overview.community_rating
    nested = rating.get("rating")
    value = nested.get("average") if isinstance(nested, dict) else None
    if not value:
        value = rating.get("average")
    if not value:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
