"""Shared lifecycle for page-owned state components."""

import logging

from grailclient.domain.entities import ActionResult, ActionStatus

logger = logging.getLogger(__name__)


# Hey future me - every store/editor/loader is owned by ONE detail page. When the page goes away
# the owner calls close(), but a request may still be pending. After close() any late result MUST
# be dropped instead of being written into defunct state - check `closed` after EVERY await.
# The action_in_flight flag serializes a component's own mutations (no follow+unfollow or
# save+remove at the same time). It is advisory: it only disables our own control.
class PageComponent:
    """Base class with the teardown guard and the in-flight flag."""

    def __init__(self) -> None:
        self._closed = False
        self.action_in_flight = False

    @property
    def closed(self) -> bool:
        """True once the owning page has torn this component down."""
        return self._closed

    def close(self) -> None:
        """Tear down. Results of pending requests will be discarded."""
        if not self._closed:
            logger.debug("%s closed", type(self).__name__)
        self._closed = True

    def _discarded(self, what: str) -> ActionResult:
        logger.debug("%s: discarding late result of %s", type(self).__name__, what)
        return ActionResult(status=ActionStatus.DISCARDED)
