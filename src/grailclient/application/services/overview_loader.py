"""Paged/sorted loader for the sub-list of a detail page.

Hey future me - one of these drives the releases table on the artist and
label pages. The query (page, per_page, sort) only changes through explicit
viewer actions, and EVERY change fires exactly one fetch keyed by the query
snapshot taken at call time.

KNOWN RACE (last-write-wins): there is no de-duplication, debouncing or
cancellation. Click page 2, then page 3, and if page 2's response is slower,
page 2's rows end up on screen while the query says page 3. We accept that
because the triggers are discrete clicks, not keystrokes. `data_query` tells
you which query the rows on screen actually belong to.
If you want the race gone, construct the loader with
discard_stale_responses=True: every fetch gets a generation number and only
the newest generation may write. That is a behavior change, so it's opt-in.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import Generic, TypeVar

from grailclient.application.services.component import PageComponent
from grailclient.domain.entities import (
    ArtistOverview,
    ArtistSortField,
    LabelOverview,
    OverviewQuery,
    PaginationMeta,
    SortOrder,
)
from grailclient.domain.exceptions import (
    DomainException,
    EntityNotFoundException,
    RemoteServiceException,
)
from grailclient.domain.ports import ICatalogApi
from grailclient.domain.value_objects import page_window

logger = logging.getLogger(__name__)

T = TypeVar("T")

OverviewFetcher = Callable[[OverviewQuery], Awaitable[T]]


class OverviewLoader(PageComponent, Generic[T]):
    """Holds an OverviewQuery and the most recent fetch result."""

    def __init__(
        self,
        fetcher: OverviewFetcher[T],
        query: OverviewQuery | None = None,
        discard_stale_responses: bool = False,
        window_size: int = 10,
        name: str = "overview",
    ) -> None:
        super().__init__()
        self._fetcher = fetcher
        self.query = query or OverviewQuery()
        self.discard_stale_responses = discard_stale_responses
        self.window_size = window_size
        self.name = name

        self.data: T | None = None
        self.data_query: OverviewQuery | None = None
        self.error: str | None = None
        self.not_found = False
        self._pending = 0
        self._generation = 0

    @property
    def loading(self) -> bool:
        """True while at least one fetch is outstanding."""
        return self._pending > 0

    @property
    def pagination(self) -> PaginationMeta | None:
        """Pagination of the data on screen, if the overview carries one."""
        if self.data is None:
            return None
        return getattr(self.data, "pagination", None)

    @property
    def page_numbers(self) -> list[int]:
        """Page links to render around the current page."""
        pagination = self.pagination
        if pagination is None:
            return []
        return page_window(self.query.page, pagination.pages, self.window_size)

    async def load(self) -> T | None:
        """Fetch with the current query."""
        return await self._fetch(self.query)

    async def retry(self) -> T | None:
        """Re-issue the current query (the "Try again" button)."""
        return await self._fetch(self.query)

    async def change_sort(self, field: str) -> T | None:
        """Sort by field; same field flips the order, a new field starts at desc.

        Always goes back to page 1: the old page index means nothing under a
        different order.
        """
        # ArtistSortField members go out as their value ("title"), not their name
        field = str(getattr(field, "value", field))
        if field == self.query.sort_field:
            self.query = replace(self.query, sort_order=self.query.sort_order.flipped(), page=1)
        else:
            self.query = replace(
                self.query, sort_field=field, sort_order=SortOrder.DESC, page=1
            )
        return await self._fetch(self.query)

    async def change_page(self, page: int) -> T | None:
        """Go to a page. No clamping here - callers keep n within 1..pages."""
        self.query = replace(self.query, page=page)
        return await self._fetch(self.query)

    async def _fetch(self, query: OverviewQuery) -> T | None:
        if self._closed:
            return None

        self._generation += 1
        generation = self._generation
        self._pending += 1
        logger.debug("[OVERVIEW] %s fetch #%d %s", self.name, generation, query)
        try:
            data = await self._fetcher(query)
        except EntityNotFoundException as e:
            if self._should_apply(generation):
                logger.info(f"[OVERVIEW] {self.name}: {e}")
                self.not_found = True
                self.error = None
            return None
        except DomainException as e:
            # Previously loaded data stays on screen; error drives the retry panel
            logger.warning(f"[OVERVIEW] {self.name} fetch failed for {query}: {e}")
            if self._should_apply(generation):
                self.error = (
                    e.display_message if isinstance(e, RemoteServiceException) else e.message
                )
            return None
        finally:
            self._pending -= 1

        if not self._should_apply(generation):
            return None

        self.data = data
        self.data_query = query
        self.error = None
        self.not_found = False
        return data

    def _should_apply(self, generation: int) -> bool:
        if self._closed:
            logger.debug("[OVERVIEW] %s closed, dropping fetch #%d", self.name, generation)
            return False
        if self.discard_stale_responses and generation != self._generation:
            logger.debug("[OVERVIEW] %s dropping stale fetch #%d", self.name, generation)
            return False
        return True


def artist_overview_loader(
    api: ICatalogApi,
    artist_id: str,
    per_page: int = 25,
    window_size: int = 10,
    discard_stale_responses: bool = False,
) -> OverviewLoader[ArtistOverview]:
    """Loader for the artist releases table (sortable, newest first)."""

    async def fetch(query: OverviewQuery) -> ArtistOverview:
        return await api.get_artist_overview(artist_id, query)

    return OverviewLoader(
        fetch,
        query=OverviewQuery(
            page=1,
            per_page=per_page,
            sort_field=ArtistSortField.YEAR.value,
            sort_order=SortOrder.DESC,
        ),
        discard_stale_responses=discard_stale_responses,
        window_size=window_size,
        name=f"artist {artist_id}",
    )


def label_overview_loader(
    api: ICatalogApi,
    label_id: str,
    per_page: int = 25,
    window_size: int = 10,
    discard_stale_responses: bool = False,
) -> OverviewLoader[LabelOverview]:
    """Loader for the label releases table (pages only, no sorting)."""

    async def fetch(query: OverviewQuery) -> LabelOverview:
        return await api.get_label_overview(label_id, query)

    return OverviewLoader(
        fetch,
        query=OverviewQuery(page=1, per_page=per_page),
        discard_stale_responses=discard_stale_responses,
        window_size=window_size,
        name=f"label {label_id}",
    )
