"""Tests for the pagination page window."""

import pytest

from grailclient.domain.exceptions import ValidationException
from grailclient.domain.value_objects import page_window


class TestPageWindow:
    """Test page_window()."""

    def test_middle_page_gets_window_around_it(self) -> None:
        assert page_window(7, 20, 10) == [3, 4, 5, 6, 7, 8, 9, 10, 11, 12]

    def test_few_pages_shows_all(self) -> None:
        assert page_window(3, 5, 10) == [1, 2, 3, 4, 5]

    def test_last_page_shows_last_window(self) -> None:
        assert page_window(20, 20, 10) == list(range(11, 21))

    def test_first_pages_show_leading_window(self) -> None:
        assert page_window(1, 20) == list(range(1, 11))
        assert page_window(5, 20) == list(range(1, 11))

    def test_near_end_shows_trailing_window(self) -> None:
        assert page_window(16, 20) == list(range(11, 21))
        assert page_window(15, 20) == list(range(11, 21))

    def test_exactly_size_pages(self) -> None:
        assert page_window(10, 10) == list(range(1, 11))

    def test_no_pages(self) -> None:
        assert page_window(1, 0) == []

    @pytest.mark.parametrize("total", [1, 9, 10, 11, 37, 100])
    def test_postconditions_hold_for_every_page(self, total: int) -> None:
        """Length, ordering and bounds hold for every current page."""
        for current in range(1, total + 1):
            window = page_window(current, total, 10)
            assert len(window) == min(total, 10)
            assert window == sorted(set(window))
            assert window[0] >= 1
            assert window[-1] <= total
            assert current in window

    def test_custom_size(self) -> None:
        assert page_window(10, 30, 4) == [9, 10, 11, 12]

    @pytest.mark.parametrize("size", [0, -2, 7])
    def test_invalid_size_rejected(self, size: int) -> None:
        with pytest.raises(ValidationException):
            page_window(1, 20, size)
