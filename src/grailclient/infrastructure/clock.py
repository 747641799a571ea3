"""Clock implementations."""

from datetime import UTC, datetime

from grailclient.domain.ports import IClock


class SystemClock(IClock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock(IClock):
    """Always returns the same instant (previews, tests)."""

    def __init__(self, instant: datetime) -> None:
        self._instant = instant

    def now(self) -> datetime:
        return self._instant
