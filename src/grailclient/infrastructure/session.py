"""In-memory viewer session.

Token storage and sign-in live outside this package. Whoever owns them calls
sign_in()/sign_out() on this object; every component reads it through the
IViewerSession port.
"""

import logging

from grailclient.domain.ports import IViewerSession

logger = logging.getLogger(__name__)


class ViewerSession(IViewerSession):
    """Viewer identity shared (read-only) by all components of a page."""

    def __init__(self, username: str | None = None, token: str | None = None) -> None:
        self._username = username
        self._token = token

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token and self._username)

    @property
    def username(self) -> str | None:
        return self._username

    @property
    def token(self) -> str | None:
        return self._token

    def sign_in(self, username: str, token: str) -> None:
        self._username = username
        self._token = token
        logger.info("Viewer %s signed in", username)

    def sign_out(self) -> None:
        if self._username:
            logger.info("Viewer %s signed out", self._username)
        self._username = None
        self._token = None
