"""Follow status of the viewer for one artist or label.

Hey future me - this is the state behind the Follow button. Two rules matter:

1. Loading the status FAILS OPEN. If the status call breaks we show "not
   following, 0 followers" and move on. A follow widget must never block the
   page it sits on.
2. After follow/unfollow we RELOAD the status (reconciliation-by-reload)
   instead of doing is_following=True / follower_count += 1 locally. Other
   viewers follow and unfollow concurrently; a local guess drifts, the server
   number doesn't. It costs one extra round trip. Do NOT "optimize" this into
   an optimistic update!

Follow/unfollow are committed immediately (no staging) - unlike the
collection editor, there is nothing the viewer typed that could be lost.
"""

import logging
from collections.abc import Awaitable, Callable

from grailclient.application.services.component import PageComponent
from grailclient.application.services.feedback_channel import FeedbackChannel
from grailclient.domain.entities import (
    ActionResult,
    ActionStatus,
    EntityRef,
    FollowState,
)
from grailclient.domain.exceptions import AuthRequiredException, DomainException
from grailclient.domain.ports import ICatalogApi, IViewerSession

logger = logging.getLogger(__name__)

SIGN_IN_MESSAGE = "Please log in to follow artists and labels"


class RelationshipStore(PageComponent):
    """Tracks and mutates "viewer follows entity" for one EntityRef.

    Example:
        store = RelationshipStore(api, session, feedback, EntityRef(EntityType.ARTIST, "42"),
                                  entity_name="Sun Ra")
        await store.load_status()
        result = await store.follow()
        store.state.follower_count  # authoritative number from the reload
    """

    def __init__(
        self,
        api: ICatalogApi,
        session: IViewerSession,
        feedback: FeedbackChannel,
        entity_ref: EntityRef,
        entity_name: str | None = None,
        on_follow_change: Callable[[bool], None] | None = None,
    ) -> None:
        super().__init__()
        self._api = api
        self._session = session
        self._feedback = feedback
        self.entity_ref = entity_ref
        self.entity_name = entity_name
        self._on_follow_change = on_follow_change
        self.state: FollowState | None = None
        self.loading = False

    @property
    def display_name(self) -> str:
        """Name used in feedback ("artist 42" when we don't know better)."""
        return self.entity_name or str(self.entity_ref)

    @property
    def is_following(self) -> bool:
        return self.state.is_following if self.state is not None else False

    @property
    def follower_count(self) -> int:
        return self.state.follower_count if self.state is not None else 0

    @property
    def follower_label(self) -> str:
        """"1 follower" / "12 followers", empty when nobody follows."""
        count = self.follower_count
        if count <= 0:
            return ""
        return f"{count} follower{'' if count == 1 else 's'}"

    @property
    def control_disabled(self) -> bool:
        """True while the button must not accept clicks."""
        return self.loading or self.action_in_flight

    async def load_status(self) -> FollowState:
        """Fetch the current follow status.

        Never raises for remote failures: falls back to "not following".
        Whatever the server answers is kept as is, for anonymous viewers too.

        Returns:
            The loaded (or fail-open) state. Not applied if the store was closed.
        """
        ref = self.entity_ref
        self.loading = True
        try:
            state = await self._api.get_follow_status(ref)
        except DomainException as e:
            logger.warning(f"[FOLLOW] Could not load follow status for {ref}: {e}")
            state = FollowState.not_following(ref)
        finally:
            self.loading = False

        if self._closed:
            logger.debug("[FOLLOW] Store for %s closed, dropping status", ref)
            return state

        self.state = state
        return state

    async def follow(self) -> ActionResult:
        """Follow the entity, then reload the status."""
        return await self._mutate(
            "follow",
            self._api.follow,
            success_text=f"Now following {self.display_name}!",
            failure_text="Failed to follow. Please try again.",
            following=True,
        )

    async def unfollow(self) -> ActionResult:
        """Unfollow the entity, then reload the status.

        No check against the local state: unfollowing something we think we
        don't follow still hits the server (our view may be stale).
        """
        return await self._mutate(
            "unfollow",
            self._api.unfollow,
            success_text=f"Unfollowed {self.display_name}",
            failure_text="Failed to unfollow. Please try again.",
            following=False,
        )

    async def _mutate(
        self,
        action: str,
        call: Callable[[EntityRef], Awaitable[None]],
        success_text: str,
        failure_text: str,
        following: bool,
    ) -> ActionResult:
        if self._closed:
            return self._discarded(action)

        if not self._session.is_authenticated:
            feedback = self._feedback.warning(SIGN_IN_MESSAGE)
            return ActionResult(status=ActionStatus.DENIED, feedback=feedback)

        if self.action_in_flight:
            logger.debug("[FOLLOW] %s ignored, action in flight for %s", action, self.entity_ref)
            return ActionResult(status=ActionStatus.BUSY)

        # Set BEFORE the first await so a second click on the same loop sees it
        self.action_in_flight = True
        try:
            try:
                await call(self.entity_ref)
            except AuthRequiredException:
                if self._closed:
                    return self._discarded(action)
                feedback = self._feedback.warning(SIGN_IN_MESSAGE)
                return ActionResult(status=ActionStatus.DENIED, feedback=feedback)
            except DomainException as e:
                logger.warning(f"[FOLLOW] {action} failed for {self.entity_ref}: {e}")
                if self._closed:
                    return self._discarded(action)
                feedback = self._feedback.danger(failure_text)
                return ActionResult(status=ActionStatus.FAILED, feedback=feedback)

            if self._closed:
                return self._discarded(action)

            # Reconciliation-by-reload
            await self.load_status()
            if self._closed:
                return self._discarded(action)

            logger.info("[FOLLOW] %s %s succeeded", action, self.entity_ref)
            feedback = self._feedback.success(success_text)
            if self._on_follow_change is not None:
                self._on_follow_change(following)
            return ActionResult(status=ActionStatus.COMPLETED, feedback=feedback)
        finally:
            self.action_in_flight = False
