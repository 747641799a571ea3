"""Viewer's collection/wantlist entry for one release.

Hey future me - this is the "Manage Your Copy" panel. It works in TWO PHASES:

    edit  -> set_rating / set_notes / set_price_threshold / set_membership
             only touch the local EditBuffer, no network
    commit -> save() sends the WHOLE buffer as one upsert, remove() deletes

After a successful commit we reload the release overview so entry AND buffer
come from the server again (same reconciliation-by-reload rule as the follow
button). After a FAILED save the buffer stays exactly as the viewer left it -
throwing away typed notes because of a flaky connection is not acceptable.

Don't merge this with the follow button's immediate-commit model. The two
policies are different on purpose.
"""

import logging

from grailclient.application.services.component import PageComponent
from grailclient.application.services.feedback_channel import FeedbackChannel
from grailclient.domain.entities import (
    ActionResult,
    ActionStatus,
    CollectionEntry,
    EditBuffer,
    ReleaseOverview,
)
from grailclient.domain.exceptions import (
    AuthRequiredException,
    DomainException,
    EntityNotFoundException,
    RemoteServiceException,
    ValidationException,
)
from grailclient.domain.ports import ICatalogApi, IViewerSession
from grailclient.domain.value_objects import parse_price_threshold, validate_rating

logger = logging.getLogger(__name__)

SIGN_IN_MESSAGE = "Please sign in to manage this release."
SAVED_MESSAGE = "Changes saved."
SAVE_FAILED_MESSAGE = "Unable to save changes right now."
REMOVED_MESSAGE = "Removed from your lists."
REMOVE_FAILED_MESSAGE = "Unable to remove this release right now."
INVALID_PRICE_MESSAGE = "Price target must be a non-negative number."


class CollectionEditor(PageComponent):
    """Tracks and mutates the viewer's entry for one release."""

    def __init__(
        self,
        api: ICatalogApi,
        session: IViewerSession,
        feedback: FeedbackChannel,
        release_id: str,
    ) -> None:
        super().__init__()
        self._api = api
        self._session = session
        self._feedback = feedback
        self.release_id = release_id

        self.overview: ReleaseOverview | None = None
        self.entry: CollectionEntry | None = None
        self.buffer = EditBuffer()
        self.loading = False
        self.error: str | None = None
        self.not_found = False

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def membership_label(self) -> str:
        """Badge text for the persisted entry (not the buffer)."""
        if self.entry is None:
            return "Not saved"
        return "Wantlist" if self.entry.wishlist else "In collection"

    def initialize(self, entry: CollectionEntry | None, user_rating: int | None = None) -> None:
        """Seed entry and buffer from an overview fetched elsewhere."""
        self.entry = entry
        self.buffer = EditBuffer.from_entry(entry, user_rating)

    async def load(self) -> ReleaseOverview | None:
        """Fetch the release overview and reset the buffer from it.

        On failure the previous overview, entry and buffer are kept and
        `error` (or `not_found`) is set.

        Returns:
            The fresh overview, or None if the load failed or was discarded
        """
        self.loading = True
        self.error = None
        try:
            overview = await self._api.get_release_overview(self.release_id)
        except EntityNotFoundException:
            if not self._closed:
                self.not_found = True
            return None
        except DomainException as e:
            logger.warning(f"[COLLECTION] Loading release {self.release_id} failed: {e}")
            if not self._closed:
                self.error = (
                    e.display_message if isinstance(e, RemoteServiceException) else e.message
                )
            return None
        finally:
            self.loading = False

        if self._closed:
            logger.debug("[COLLECTION] Editor for %s closed, dropping overview", self.release_id)
            return None

        self.not_found = False
        self.overview = overview
        self.initialize(overview.collection_entry, overview.user_rating)
        return overview

    # ------------------------------------------------------------------
    # Edit phase (local only)
    # ------------------------------------------------------------------

    def set_rating(self, value: int | None) -> ActionResult:
        """Stage a rating. Signed-in viewers only; nothing is sent until save().

        Raises:
            ValidationException: If value is not None and not in 1..5
        """
        rating = validate_rating(value)
        if not self._session.is_authenticated:
            feedback = self._feedback.warning(SIGN_IN_MESSAGE)
            return ActionResult(status=ActionStatus.DENIED, feedback=feedback)
        self.buffer.rating = rating
        return ActionResult(status=ActionStatus.COMPLETED)

    def set_notes(self, text: str) -> None:
        self.buffer.notes = text

    def set_price_threshold(self, text: str) -> None:
        """Store the raw price text (checked on save)."""
        self.buffer.price_threshold = text

    def set_membership(self, wishlist: bool) -> None:
        """Choose wantlist (True) or collection (False)."""
        self.buffer.wishlist = wishlist

    # ------------------------------------------------------------------
    # Commit phase
    # ------------------------------------------------------------------

    async def save(self) -> ActionResult:
        """Upsert the whole buffer, then reload."""
        denied = self._precheck("save")
        if denied is not None:
            return denied

        try:
            parse_price_threshold(self.buffer.price_threshold)
        except ValidationException:
            feedback = self._feedback.warning(INVALID_PRICE_MESSAGE)
            return ActionResult(status=ActionStatus.DENIED, feedback=feedback)

        self.action_in_flight = True
        try:
            try:
                await self._api.save_collection_entry(self.release_id, self.buffer)
            except AuthRequiredException:
                return self._after_auth_failure("save")
            except DomainException as e:
                # Buffer stays untouched - the viewer's edits survive the failure
                logger.warning(f"[COLLECTION] Saving release {self.release_id} failed: {e}")
                if self._closed:
                    return self._discarded("save")
                feedback = self._feedback.danger(SAVE_FAILED_MESSAGE)
                return ActionResult(status=ActionStatus.FAILED, feedback=feedback)

            return await self._reconcile("save", SAVED_MESSAGE)
        finally:
            self.action_in_flight = False

    async def remove(self) -> ActionResult:
        """Delete the entry for this release, then reload."""
        denied = self._precheck("remove")
        if denied is not None:
            return denied

        self.action_in_flight = True
        try:
            try:
                await self._api.remove_collection_entry(self.release_id)
            except AuthRequiredException:
                return self._after_auth_failure("remove")
            except DomainException as e:
                logger.warning(f"[COLLECTION] Removing release {self.release_id} failed: {e}")
                if self._closed:
                    return self._discarded("remove")
                feedback = self._feedback.danger(REMOVE_FAILED_MESSAGE)
                return ActionResult(status=ActionStatus.FAILED, feedback=feedback)

            return await self._reconcile("remove", REMOVED_MESSAGE)
        finally:
            self.action_in_flight = False

    def _precheck(self, action: str) -> ActionResult | None:
        if self._closed:
            return self._discarded(action)
        if not self._session.is_authenticated:
            feedback = self._feedback.warning(SIGN_IN_MESSAGE)
            return ActionResult(status=ActionStatus.DENIED, feedback=feedback)
        if self.action_in_flight:
            logger.debug("[COLLECTION] %s ignored, action in flight", action)
            return ActionResult(status=ActionStatus.BUSY)
        return None

    def _after_auth_failure(self, action: str) -> ActionResult:
        # Session expired server-side; treat like an anonymous viewer
        if self._closed:
            return self._discarded(action)
        feedback = self._feedback.warning(SIGN_IN_MESSAGE)
        return ActionResult(status=ActionStatus.DENIED, feedback=feedback)

    async def _reconcile(self, action: str, success_text: str) -> ActionResult:
        if self._closed:
            return self._discarded(action)

        # Reconciliation-by-reload. If the reload itself fails the mutation is
        # still persisted: keep the buffer, load() already recorded the error.
        await self.load()
        if self._closed:
            return self._discarded(action)

        logger.info("[COLLECTION] %s release %s succeeded", action, self.release_id)
        feedback = self._feedback.success(success_text)
        return ActionResult(status=ActionStatus.COMPLETED, feedback=feedback)
