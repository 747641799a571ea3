"""Hover state for result cards.

Hey future me - cards never get their style mutated in place. The renderer
asks card_style(id) on every draw and gets the style for the CURRENT hover
set. Enter/leave only change the set.
"""

from collections.abc import Hashable
from typing import Any

RESTING_STYLE: dict[str, str] = {
    "transform": "translateY(0)",
    "boxShadow": "0 1px 3px rgba(0,0,0,0.1)",
}
HOVERED_STYLE: dict[str, str] = {
    "transform": "translateY(-5px)",
    "boxShadow": "0 4px 12px rgba(0,0,0,0.15)",
}


class HoverState:
    """Set of hovered item ids driving style selection."""

    def __init__(self) -> None:
        self.hovered: set[Hashable] = set()

    def enter(self, item_id: Hashable) -> None:
        self.hovered.add(item_id)

    def leave(self, item_id: Hashable) -> None:
        self.hovered.discard(item_id)

    def is_hovered(self, item_id: Hashable) -> bool:
        return item_id in self.hovered

    def card_style(self, item_id: Hashable) -> dict[str, Any]:
        """Style dict for one card (a fresh copy each call)."""
        return dict(HOVERED_STYLE if self.is_hovered(item_id) else RESTING_STYLE)
