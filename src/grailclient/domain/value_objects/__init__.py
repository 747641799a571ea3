"""Value objects and pure helpers of the catalog domain."""

from grailclient.domain.value_objects.collection_values import (
    RATING_SCALE,
    normalize_rating,
    parse_price_threshold,
    validate_rating,
)
from grailclient.domain.value_objects.pagination import page_window
from grailclient.domain.value_objects.slugs import parse_entity_id

__all__ = [
    "RATING_SCALE",
    "normalize_rating",
    "page_window",
    "parse_entity_id",
    "parse_price_threshold",
    "validate_rating",
]
