"""Page-number window for paginated listings."""

from grailclient.domain.exceptions import ValidationException


# Hey future me - this is the little row of page buttons under every listing.
# With size=10 and 20 pages: near the start you get 1..10, near the end 11..20,
# and in between a window around the current page, leaning one step forward
# (7 -> 3..12, so the current page sits at the fifth of ten slots). The output
# ALWAYS has min(total_pages, size) entries, strictly increasing, all within
# [1, total_pages]. Callers clamp current_page themselves.
# NOTE: the old browser pager started the middle window at current-half
# (7 -> 2..11). This one starts at current-half+1, giving 7 -> 3..12.
def page_window(current_page: int, total_pages: int, size: int = 10) -> list[int]:
    """Compute the page numbers to display.

    Args:
        current_page: Page the viewer is on
        total_pages: Total number of pages reported by the API
        size: Maximum number of page links (positive, even)

    Returns:
        Ordered list of page numbers

    Raises:
        ValidationException: If size is not a positive even number
    """
    if size <= 0 or size % 2:
        raise ValidationException(f"Page window size must be positive and even, got {size}")
    if total_pages <= 0:
        return []
    if total_pages <= size:
        return list(range(1, total_pages + 1))

    half = size // 2
    if current_page <= half:
        return list(range(1, size + 1))
    if current_page >= total_pages - (half - 1):
        return list(range(total_pages - size + 1, total_pages + 1))
    return list(range(current_page - half + 1, current_page + half + 1))
