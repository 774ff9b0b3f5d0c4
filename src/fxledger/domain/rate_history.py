"""Rate history domain service."""

import logging
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from fxledger.database.base import Database
from fxledger.domain.entities import DailyRateStats, RateObservation, RateType
from fxledger.domain.errors import ValidationError, invalid_rate_type
from fxledger.utils.amount_parser import quantize_rate
from fxledger.utils.clock import BangkokClock, Clock, bangkok_date, bangkok_day_bounds

logger = logging.getLogger(__name__)

DEFAULT_STATS_DAYS = 7


def parse_rate_type(rate_type: "str | RateType") -> RateType:
    """Coerce a string into a RateType.

    Raises:
        ValidationError: If the value is neither 'buy' nor 'sell'
    """
    if isinstance(rate_type, RateType):
        return rate_type
    try:
        return RateType(str(rate_type).strip().lower())
    except ValueError:
        raise ValidationError(invalid_rate_type(rate_type))


class RateHistoryService:
    """Records executed rates and answers statistics over them."""

    def __init__(self, db: Database, clock: Optional[Clock] = None):
        """Initialize rate history service.

        Args:
            db: Database instance
            clock: Source of the recording time and of "today"
        """
        self.db = db
        self.clock = clock or BangkokClock()

    def record(
        self,
        supplier_id: int,
        rate_type: "str | RateType",
        rate: Decimal,
        mmk_amount: Decimal,
        thb_amount: Decimal,
    ) -> int:
        """Append an observation of an executed rate. Returns its ID."""
        rate_type = parse_rate_type(rate_type)
        observation_id = self.db.create_rate_observation(
            supplier_id=supplier_id,
            rate_type=rate_type.value,
            exchange_rate=rate,
            mmk_amount=mmk_amount,
            thb_amount=thb_amount,
            recorded_at=self.clock.now(),
        )
        logger.debug("Recorded %s rate %s for supplier %s", rate_type.value, rate, supplier_id)
        return observation_id

    def list_observations(
        self,
        supplier_id: Optional[int] = None,
        rate_type: "str | RateType | None" = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> list[RateObservation]:
        """List observations, newest first.

        Args:
            supplier_id: Optional supplier filter
            rate_type: Optional 'buy' or 'sell' filter
            start_date: Optional first Bangkok date (inclusive)
            end_date: Optional last Bangkok date (inclusive)
            limit: Optional maximum number of rows

        Returns:
            List of rate observations
        """
        if limit is not None and limit <= 0:
            raise ValidationError("Limit must be a positive integer")
        type_value = parse_rate_type(rate_type).value if rate_type is not None else None
        start = bangkok_day_bounds(start_date)[0] if start_date is not None else None
        end = bangkok_day_bounds(end_date)[1] if end_date is not None else None
        return self.db.list_rate_observations(
            supplier_id=supplier_id, rate_type=type_value, start=start, end=end, limit=limit
        )

    def daily_stats(self, supplier_id: Optional[int] = None, days: int = DEFAULT_STATS_DAYS) -> list[DailyRateStats]:
        """Min/avg/max/count of rates per Bangkok day and direction.

        Covers observations recorded on or after ``today - days``, newest day
        first and 'buy' before 'sell' within a day.
        """
        if days < 0:
            raise ValidationError("Days must not be negative")
        since = self.clock.today() - timedelta(days=days)
        observations = self.db.list_rate_observations(
            supplier_id=supplier_id, start=bangkok_day_bounds(since)[0]
        )

        groups: dict[tuple[date, RateType], list[Decimal]] = defaultdict(list)
        for obs in observations:
            groups[(bangkok_date(obs.recorded_at), obs.rate_type)].append(obs.exchange_rate)

        stats = [
            DailyRateStats(
                date=day,
                rate_type=rate_type,
                min_rate=min(rates),
                avg_rate=quantize_rate(sum(rates, Decimal("0")) / len(rates)),
                max_rate=max(rates),
                count=len(rates),
            )
            for (day, rate_type), rates in groups.items()
        ]
        stats.sort(key=lambda s: s.rate_type.value)
        stats.sort(key=lambda s: s.date, reverse=True)
        return stats
