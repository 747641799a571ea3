"""Feedback channel carrying transient messages from actions to the UI.

Hey future me - this is the single "toast slot" of a detail page. Every
store/editor/loader on the page publishes here. There is exactly ONE current
message: a new one REPLACES the old one, nothing is queued or persisted.
The rendering layer subscribes and redraws when the message changes.
"""

import logging
from collections.abc import Callable

from grailclient.domain.entities import Feedback, FeedbackSeverity

logger = logging.getLogger(__name__)

FeedbackListener = Callable[[Feedback | None], None]

# Tone names used by the page stylesheet for each severity
FEEDBACK_TONES: dict[FeedbackSeverity, str] = {
    FeedbackSeverity.SUCCESS: "grail-alert--success",
    FeedbackSeverity.WARNING: "grail-alert--warning",
    FeedbackSeverity.DANGER: "grail-alert--danger",
}


class FeedbackChannel:
    """Holds the current feedback message and notifies subscribers."""

    def __init__(self) -> None:
        self._current: Feedback | None = None
        self._listeners: list[FeedbackListener] = []

    @property
    def current(self) -> Feedback | None:
        """The message on screen right now (None = nothing)."""
        return self._current

    @property
    def tone(self) -> str:
        """Style tone for the current message ("" when there is none)."""
        if self._current is None:
            return ""
        return FEEDBACK_TONES.get(self._current.severity, "")

    def subscribe(self, listener: FeedbackListener) -> Callable[[], None]:
        """Register a listener.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, severity: FeedbackSeverity, text: str) -> Feedback:
        """Replace the current message and notify listeners."""
        feedback = Feedback(severity=severity, text=text)
        self._current = feedback
        logger.debug("[FEEDBACK] %s: %s", severity.value, text)
        self._notify()
        return feedback

    def success(self, text: str) -> Feedback:
        return self.publish(FeedbackSeverity.SUCCESS, text)

    def warning(self, text: str) -> Feedback:
        return self.publish(FeedbackSeverity.WARNING, text)

    def danger(self, text: str) -> Feedback:
        return self.publish(FeedbackSeverity.DANGER, text)

    def clear(self) -> None:
        """Remove the current message."""
        if self._current is None:
            return
        self._current = None
        self._notify()

    def _notify(self) -> None:
        # A broken listener must not stop the others (or the action that published)
        for listener in list(self._listeners):
            try:
                listener(self._current)
            except Exception as e:
                logger.warning(f"[FEEDBACK] Listener failed: {e}")
