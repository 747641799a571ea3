"""HTTP client for the vinyl catalog API."""

import logging
from typing import Any, cast

import httpx

from grailclient.config.settings import ApiSettings, CatalogSettings
from grailclient.domain.entities import (
    ArtistOverview,
    EditBuffer,
    EntityRef,
    FollowState,
    LabelOverview,
    OverviewQuery,
    ReleaseOverview,
)
from grailclient.domain.exceptions import (
    AuthRequiredException,
    EntityNotFoundException,
    RemoteServiceException,
)
from grailclient.domain.ports import ICatalogApi, IViewerSession
from grailclient.infrastructure.integrations.retry import send_with_backoff
from grailclient.infrastructure.observability.logging import get_correlation_id

logger = logging.getLogger(__name__)


class CatalogApiClient(ICatalogApi):
    """httpx implementation of the catalog port.

    Hey future me - this is the ONLY place that knows URLs and JSON shapes.
    It translates every failure into domain exceptions:
    - 401/403 -> AuthRequiredException (session expired server-side)
    - 404 -> EntityNotFoundException (views show an empty state)
    - anything else (5xx, timeouts, refused connections, broken JSON)
      -> RemoteServiceException
    429 is retried with backoff before any of that (see retry.py).
    """

    def __init__(
        self,
        session: IViewerSession,
        settings: ApiSettings,
        catalog_settings: CatalogSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the catalog client.

        Args:
            session: Viewer session providing the bearer token
            settings: API connection settings (base URL is required)
            catalog_settings: Page sizes and currency for overview requests
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.session = session
        self.settings = settings
        self.catalog_settings = catalog_settings or CatalogSettings()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.settings.base_url,
                timeout=self.settings.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.session.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        correlation_id = get_correlation_id()
        if correlation_id:
            headers["X-Correlation-ID"] = correlation_id
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        not_found: tuple[str, Any] | None = None,
    ) -> Any:
        """
        Perform a request and decode the JSON body.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            params: Query parameters
            json: JSON body
            not_found: (entity_type, entity_id) reported when the API answers 404

        Returns:
            Decoded JSON body, or None for empty responses

        Raises:
            AuthRequiredException: 401/403
            EntityNotFoundException: 404
            RemoteServiceException: Any other failure
        """
        client = await self._get_client()
        headers = self._headers()
        logger.debug("[CATALOG] %s %s params=%s", method, path, params)

        try:
            response = await send_with_backoff(
                lambda: client.request(method, path, params=params, json=json, headers=headers),
                max_attempts=self.settings.max_retries,
                initial_delay=self.settings.initial_backoff_seconds,
            )
        except httpx.TimeoutException as e:
            raise RemoteServiceException(f"{method} {path} timed out") from e
        except httpx.HTTPError as e:
            raise RemoteServiceException(f"{method} {path} failed: {e}") from e

        status = response.status_code
        if status in (httpx.codes.UNAUTHORIZED, httpx.codes.FORBIDDEN):
            raise AuthRequiredException(f"{method} {path} rejected with {status}")
        if status == httpx.codes.NOT_FOUND:
            entity_type, entity_id = not_found or ("resource", path)
            raise EntityNotFoundException(entity_type, entity_id)
        if response.is_error:
            raise RemoteServiceException(
                f"{method} {path} returned {status}",
                status_code=status,
                server_message=self._server_message(response),
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RemoteServiceException(
                f"{method} {path} returned invalid JSON", status_code=status
            ) from e

    @staticmethod
    def _server_message(response: httpx.Response) -> str | None:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict) and isinstance(body.get("message"), str):
            return cast(str, body["message"])
        return None

    @staticmethod
    def _expect_object(data: Any, what: str) -> dict[str, Any]:
        if not isinstance(data, dict):
            raise RemoteServiceException(f"Unexpected {what} response: {type(data).__name__}")
        return cast(dict[str, Any], data)

    # ------------------------------------------------------------------
    # Follows
    # ------------------------------------------------------------------

    def _follow_path(self, ref: EntityRef, action: str) -> str:
        return f"/api/{ref.entity_type.value}/{ref.entity_id}/{action}"

    async def get_follow_status(self, ref: EntityRef) -> FollowState:
        data = await self._request(
            "GET",
            self._follow_path(ref, "follow-status"),
            not_found=(ref.entity_type.value, ref.entity_id),
        )
        return FollowState.from_api(ref, self._expect_object(data, "follow-status"))

    async def follow(self, ref: EntityRef) -> None:
        await self._request(
            "POST",
            self._follow_path(ref, "follow"),
            json={},
            not_found=(ref.entity_type.value, ref.entity_id),
        )

    async def unfollow(self, ref: EntityRef) -> None:
        await self._request(
            "DELETE",
            self._follow_path(ref, "unfollow"),
            not_found=(ref.entity_type.value, ref.entity_id),
        )

    # ------------------------------------------------------------------
    # Releases and collection
    # ------------------------------------------------------------------

    async def get_release_overview(self, release_id: str) -> ReleaseOverview:
        params = {
            "includeMaster": "true",
            "curr_abbr": self.catalog_settings.currency,
            "master_per_page": self.catalog_settings.master_per_page,
        }
        data = await self._request(
            "GET",
            f"/api/releases/{release_id}/overview",
            params=params,
            not_found=("release", release_id),
        )
        return ReleaseOverview.from_api(release_id, self._expect_object(data, "release overview"))

    async def save_collection_entry(self, release_id: str, buffer: EditBuffer) -> None:
        await self._request(
            "POST",
            f"/api/releases/{release_id}/collection",
            json=buffer.to_payload(),
            not_found=("release", release_id),
        )

    async def remove_collection_entry(self, release_id: str) -> None:
        await self._request(
            "DELETE",
            f"/api/releases/{release_id}/collection",
            not_found=("release", release_id),
        )

    # ------------------------------------------------------------------
    # Artist / label overviews
    # ------------------------------------------------------------------

    async def get_artist_overview(self, artist_id: str, query: OverviewQuery) -> ArtistOverview:
        data = await self._request(
            "GET",
            f"/api/artists/{artist_id}/overview",
            params=query.to_params(),
            not_found=("artist", artist_id),
        )
        overview = ArtistOverview.from_api(self._expect_object(data, "artist overview"))
        # The API answers 200 with an empty artist for unknown ids
        if not overview.artist:
            raise EntityNotFoundException("artist", artist_id)
        return overview

    async def get_label_overview(self, label_id: str, query: OverviewQuery) -> LabelOverview:
        # Label listings are not sortable: only page and per_page go out
        params = {"page": query.page, "per_page": query.per_page}
        data = await self._request(
            "GET",
            f"/api/labels/{label_id}/overview",
            params=params,
            not_found=("label", label_id),
        )
        overview = LabelOverview.from_api(self._expect_object(data, "label overview"))
        if not overview.label:
            raise EntityNotFoundException("label", label_id)
        return overview

    async def __aenter__(self) -> "CatalogApiClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
