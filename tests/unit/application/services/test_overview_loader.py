"""Unit tests for OverviewLoader (paged/sorted detail listings)."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from grailclient.application.services.overview_loader import (
    OverviewLoader,
    artist_overview_loader,
    label_overview_loader,
)
from grailclient.domain.entities import (
    ArtistSortField,
    OverviewQuery,
    PaginationMeta,
    ReleasesPage,
    SortOrder,
)
from grailclient.domain.exceptions import EntityNotFoundException, RemoteServiceException


def page_of(query: OverviewQuery, pages: int = 20) -> ReleasesPage:
    return ReleasesPage(
        releases=[{"id": query.page}],
        pagination=PaginationMeta(page=query.page, pages=pages, per_page=query.per_page),
    )


class TestSorting:
    """change_sort()."""

    async def test_sort_sequence_resets_page(self) -> None:
        fetcher = AsyncMock(side_effect=page_of)
        loader = OverviewLoader(
            fetcher,
            query=OverviewQuery(page=5, per_page=25, sort_field="year", sort_order=SortOrder.DESC),
        )

        await loader.change_sort("title")
        assert (loader.query.sort_field, loader.query.sort_order, loader.query.page) == (
            "title",
            SortOrder.DESC,
            1,
        )

        await loader.change_sort("title")
        assert (loader.query.sort_field, loader.query.sort_order, loader.query.page) == (
            "title",
            SortOrder.ASC,
            1,
        )
        assert fetcher.await_count == 2

    async def test_same_field_flips_and_resets_page(self) -> None:
        fetcher = AsyncMock(side_effect=page_of)
        loader = OverviewLoader(
            fetcher, query=OverviewQuery(page=3, sort_field="year", sort_order=SortOrder.ASC)
        )

        await loader.change_sort("year")

        assert loader.query == OverviewQuery(page=1, sort_field="year", sort_order=SortOrder.DESC)
        fetcher.assert_awaited_once_with(loader.query)

    async def test_enum_field_is_stored_as_value(self) -> None:
        loader = OverviewLoader(
            AsyncMock(side_effect=page_of),
            query=OverviewQuery(sort_field="title", sort_order=SortOrder.DESC),
        )

        await loader.change_sort(ArtistSortField.TITLE)

        assert loader.query.sort_field == "title"
        assert type(loader.query.sort_field) is str
        assert loader.query.sort_order is SortOrder.ASC


class TestPaging:
    """change_page() and the page window."""

    async def test_change_page_is_verbatim(self) -> None:
        fetcher = AsyncMock(side_effect=page_of)
        loader = OverviewLoader(fetcher)

        await loader.change_page(99)

        assert loader.query.page == 99
        fetcher.assert_awaited_once_with(OverviewQuery(page=99))

    async def test_page_numbers_follow_pagination(self) -> None:
        loader = OverviewLoader(AsyncMock(side_effect=page_of))
        assert loader.page_numbers == []

        await loader.change_page(7)

        assert loader.page_numbers == [3, 4, 5, 6, 7, 8, 9, 10, 11, 12]
        assert loader.pagination == PaginationMeta(page=7, pages=20, per_page=25)


class TestFailures:
    """Errors keep data and offer a retry."""

    async def test_failure_keeps_previous_data(self) -> None:
        fetcher = AsyncMock(side_effect=page_of)
        loader = OverviewLoader(fetcher)
        first = await loader.load()

        fetcher.side_effect = RemoteServiceException(
            "boom", status_code=500, server_message="Upstream timeout"
        )
        assert await loader.change_page(2) is None

        assert loader.data == first
        assert loader.error == "Upstream timeout"
        assert loader.loading is False

    async def test_retry_reissues_same_query(self) -> None:
        fetcher = AsyncMock(side_effect=[RemoteServiceException("boom"), page_of(OverviewQuery(page=4))])
        loader = OverviewLoader(fetcher, query=OverviewQuery(page=4))

        await loader.load()
        assert loader.error == "boom"

        data = await loader.retry()

        assert data is not None
        assert loader.error is None
        assert [call.args[0] for call in fetcher.await_args_list] == [
            OverviewQuery(page=4),
            OverviewQuery(page=4),
        ]

    async def test_not_found_is_not_an_error(self) -> None:
        loader = OverviewLoader(AsyncMock(side_effect=EntityNotFoundException("artist", "1")))

        await loader.load()

        assert loader.not_found is True
        assert loader.error is None


class TestRaces:
    """Overlapping fetches."""

    @staticmethod
    def gated_fetcher(gates: dict[int, asyncio.Event]) -> AsyncMock:
        async def fetch(query: OverviewQuery) -> ReleasesPage:
            await gates[query.page].wait()
            return page_of(query)

        return AsyncMock(side_effect=fetch)

    async def test_last_response_wins_even_if_stale(self) -> None:
        """Page 2 answers after page 3: page 2's rows end up on screen."""
        gates = {2: asyncio.Event(), 3: asyncio.Event()}
        loader = OverviewLoader(self.gated_fetcher(gates))

        page_two = asyncio.create_task(loader.change_page(2))
        page_three = asyncio.create_task(loader.change_page(3))
        await asyncio.sleep(0)
        assert loader.loading is True

        gates[3].set()
        await page_three
        gates[2].set()
        await page_two

        assert loader.query.page == 3
        assert loader.data is not None
        assert loader.data.releases == [{"id": 2}]
        assert loader.data_query == OverviewQuery(page=2)
        assert loader.loading is False

    async def test_stale_responses_dropped_when_enabled(self) -> None:
        gates = {2: asyncio.Event(), 3: asyncio.Event()}
        loader = OverviewLoader(self.gated_fetcher(gates), discard_stale_responses=True)

        page_two = asyncio.create_task(loader.change_page(2))
        page_three = asyncio.create_task(loader.change_page(3))
        await asyncio.sleep(0)

        gates[3].set()
        await page_three
        gates[2].set()
        assert await page_two is None

        assert loader.data is not None
        assert loader.data.releases == [{"id": 3}]

    async def test_closed_loader_drops_late_response(self) -> None:
        gates = {1: asyncio.Event()}
        loader = OverviewLoader(self.gated_fetcher(gates))

        task = asyncio.create_task(loader.load())
        await asyncio.sleep(0)
        loader.close()
        gates[1].set()

        assert await task is None
        assert loader.data is None
        assert await loader.change_page(1) is None


class TestFactories:
    """Artist and label loaders."""

    async def test_artist_loader_defaults(self, api: AsyncMock) -> None:
        loader = artist_overview_loader(api, "6365678")

        await loader.load()

        api.get_artist_overview.assert_awaited_once_with(
            "6365678",
            OverviewQuery(page=1, per_page=25, sort_field="year", sort_order=SortOrder.DESC),
        )

    async def test_label_loader_is_unsorted(self, api: AsyncMock) -> None:
        loader = label_overview_loader(api, "1", per_page=50)

        await loader.change_page(2)

        api.get_label_overview.assert_awaited_once_with("1", OverviewQuery(page=2, per_page=50))


@pytest.mark.parametrize("field", ["year", "title", "format"])
async def test_new_field_always_starts_descending(field: str) -> None:
    loader = OverviewLoader(
        AsyncMock(side_effect=page_of),
        query=OverviewQuery(sort_field="other", sort_order=SortOrder.ASC),
    )
    await loader.change_sort(field)
    assert loader.query.sort_order is SortOrder.DESC
