"""Rating and price-target rules for collection entries.

Hey future me - ratings are a CLOSED set (1..5 or nothing). We never round,
clamp or otherwise invent a rating: API values outside the set are read as
"no rating", and viewer input outside the set is a programming error.
Price targets are free text while editing and only have to parse as a
non-negative decimal when the entry is saved.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from grailclient.domain.exceptions import ValidationException

RATING_SCALE: tuple[int, ...] = (1, 2, 3, 4, 5)


def normalize_rating(value: Any) -> int | None:
    """Read a rating coming from the API.

    Returns:
        The rating if it is in the scale, otherwise None
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        rating = int(value)
    except (TypeError, ValueError):
        return None
    return rating if rating in RATING_SCALE else None


def validate_rating(value: int | None) -> int | None:
    """Check a rating selected by the viewer.

    Raises:
        ValidationException: If value is not None and not in 1..5
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value not in RATING_SCALE:
        raise ValidationException(f"Rating must be one of {RATING_SCALE} or None, got {value!r}")
    return value


def parse_price_threshold(text: str) -> Decimal | None:
    """Parse a price target typed by the viewer.

    Args:
        text: Raw input, may be empty

    Returns:
        None for empty input, otherwise the parsed amount

    Raises:
        ValidationException: If the text is not a finite non-negative number
    """
    stripped = (text or "").strip()
    if not stripped:
        return None
    try:
        amount = Decimal(stripped)
    except InvalidOperation as e:
        raise ValidationException(f"Invalid price target: {text!r}") from e
    if not amount.is_finite() or amount < 0:
        raise ValidationException(f"Price target must be non-negative: {text!r}")
    return amount
