"""Clock and Bangkok civil calendar helpers.

Ledger timestamps are stored as naive UTC datetimes. Business days are
Bangkok calendar dates, resolved here and nowhere else.
"""

from datetime import date, datetime, time, timedelta, UTC

from dateutil import tz

BANGKOK = tz.gettz("Asia/Bangkok")


def to_utc(instant: datetime) -> datetime:
    """Return an aware UTC datetime; naive input is taken to be UTC already."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)


def to_naive_utc(instant: datetime) -> datetime:
    """Return a naive UTC datetime suitable for storage."""
    return to_utc(instant).replace(tzinfo=None)


def bangkok_date(instant: datetime) -> date:
    """Bangkok calendar date of a UTC instant."""
    return to_utc(instant).astimezone(BANGKOK).date()


def bangkok_day_bounds(day: date) -> tuple[datetime, datetime]:
    """Half-open naive UTC window covering one Bangkok calendar day.

    Returns:
        (start, end) such that an instant belongs to ``day`` iff start <= instant < end
    """
    start = datetime.combine(day, time.min, tzinfo=BANGKOK)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=BANGKOK)
    return to_naive_utc(start), to_naive_utc(end)


class Clock:
    """Source of the current instant and the current business day."""

    def now(self) -> datetime:
        """Current instant as an aware UTC datetime."""
        raise NotImplementedError

    def today(self) -> date:
        """Current Bangkok calendar date."""
        return bangkok_date(self.now())


class BangkokClock(Clock):
    """Wall clock; independent of the host timezone."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock(Clock):
    """Clock pinned to a given instant, movable by hand."""

    def __init__(self, instant: datetime):
        self.instant = to_utc(instant)

    def now(self) -> datetime:
        return self.instant

    def set(self, instant: datetime) -> None:
        self.instant = to_utc(instant)

    def advance(self, **kwargs) -> None:
        """Move the clock forward, e.g. ``advance(days=1)``."""
        self.instant = self.instant + timedelta(**kwargs)
