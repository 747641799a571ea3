"""Declarative helpers the rendering layer uses to turn state into markup."""

from grailclient.application.presentation.footer import copyright_text
from grailclient.application.presentation.hover import HoverState
from grailclient.application.presentation.search import (
    SearchCard,
    SearchType,
    empty_state_message,
    icon_for_type,
    render_result,
    render_results,
)

__all__ = [
    "HoverState",
    "SearchCard",
    "SearchType",
    "copyright_text",
    "empty_state_message",
    "icon_for_type",
    "render_result",
    "render_results",
]
