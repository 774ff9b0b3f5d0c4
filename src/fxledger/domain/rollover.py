"""Daily balance rollover and aggregation.

Every supplier has one summary row per Bangkok calendar day. A new day's
opening balance is copied from the closing balance of the most recent earlier
day at the moment the row is created. Aggregates are always re-derived from
the ledger in full, so concurrent recomputes converge on the same values and
running a recompute twice is harmless.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from fxledger.database.base import Database
from fxledger.domain.entities import DailySummary
from fxledger.domain.errors import ConflictError, NotFoundError, supplier_not_found
from fxledger.utils.amount_parser import quantize_money, quantize_rate
from fxledger.utils.clock import BangkokClock, Clock, bangkok_day_bounds

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def closing_balances(
    opening_thb: Decimal,
    opening_mmk: Decimal,
    purchased_thb: Decimal,
    purchased_mmk: Decimal,
    sold_thb: Decimal,
    sold_mmk: Decimal,
) -> dict[str, Decimal]:
    """Derive closing balances, average rate and profit for one day.

    The average rate is cumulative over the opening stock and the day's
    purchases. Profit is the day's THB cash-flow delta (purchased minus sold),
    not a matched-lot figure.
    """
    stock_thb = opening_thb + purchased_thb
    stock_mmk = opening_mmk + purchased_mmk
    avg_rate = stock_thb / stock_mmk if stock_mmk > 0 else ZERO

    return {
        "closing_thb": quantize_money(opening_thb + purchased_thb - sold_thb),
        "closing_mmk": quantize_money(opening_mmk + purchased_mmk - sold_mmk),
        "closing_avg_rate": quantize_rate(avg_rate),
        "daily_profit_thb": quantize_money(purchased_thb - sold_thb),
    }


class RolloverEngine:
    """Creates and refreshes daily summaries."""

    def __init__(self, db: Database, clock: Optional[Clock] = None):
        """Initialize the rollover engine.

        Args:
            db: Database instance
            clock: Source of "today"; defaults to the Bangkok wall clock
        """
        self.db = db
        self.clock = clock or BangkokClock()

    def today(self) -> date:
        """Current Bangkok business day."""
        return self.clock.today()

    def ensure_summary(self, supplier_id: int, summary_date: Optional[date] = None) -> DailySummary:
        """Return the summary for a supplier and day, creating it if absent.

        A new row opens with the closing figures of the most recent earlier
        row, or zeros on the supplier's first day. When another writer creates
        the same row first, the existing row is re-read and returned.

        Args:
            supplier_id: Supplier ID
            summary_date: Bangkok calendar date (defaults to today)

        Returns:
            DailySummary entity
        """
        summary_date = summary_date or self.today()

        existing = self.db.get_daily_summary(supplier_id, summary_date)
        if existing is not None:
            return existing

        previous = self.db.get_previous_daily_summary(supplier_id, summary_date)
        if previous is not None:
            opening = (previous.closing_thb, previous.closing_mmk, previous.closing_avg_rate)
        else:
            opening = (ZERO, ZERO, ZERO)

        try:
            self.db.create_daily_summary(
                supplier_id=supplier_id,
                summary_date=summary_date,
                opening_thb=opening[0],
                opening_mmk=opening[1],
                opening_avg_rate=opening[2],
            )
            logger.info(
                "Opened daily summary for supplier %s on %s (opening THB %s, MMK %s)",
                supplier_id,
                summary_date,
                opening[0],
                opening[1],
            )
        except ConflictError:
            logger.info("Daily summary for supplier %s on %s created concurrently; re-reading", supplier_id, summary_date)

        summary = self.db.get_daily_summary(supplier_id, summary_date)
        if summary is None:
            raise RuntimeError(f"Daily summary for supplier {supplier_id} on {summary_date} missing after create")
        return summary

    def recompute(self, supplier_id: int, summary_date: date) -> None:
        """Re-derive a day's aggregates from the ledger and store them.

        The summary row must already exist (see ``ensure_summary``). All
        derived fields are written in a single commit.

        Raises:
            RuntimeError: If the summary row does not exist
        """
        summary = self.db.get_daily_summary(supplier_id, summary_date)
        if summary is None:
            raise RuntimeError(
                f"Daily summary for supplier {supplier_id} on {summary_date} does not exist; "
                "ensure_summary must run first"
            )

        start, end = bangkok_day_bounds(summary_date)
        purchased_thb, purchased_mmk = self.db.sum_purchases(supplier_id, start, end)
        sold_thb, sold_mmk = self.db.sum_sales(supplier_id, start, end)

        derived = closing_balances(
            opening_thb=summary.opening_thb,
            opening_mmk=summary.opening_mmk,
            purchased_thb=purchased_thb,
            purchased_mmk=purchased_mmk,
            sold_thb=sold_thb,
            sold_mmk=sold_mmk,
        )

        self.db.update_daily_summary_totals(
            supplier_id=supplier_id,
            summary_date=summary_date,
            purchased_thb=quantize_money(purchased_thb),
            purchased_mmk=quantize_money(purchased_mmk),
            sold_thb=quantize_money(sold_thb),
            sold_mmk=quantize_money(sold_mmk),
            **derived,
        )
        logger.debug("Recomputed daily summary for supplier %s on %s: %s", supplier_id, summary_date, derived)

    def ensure_and_recompute(self, supplier_id: int, summary_date: Optional[date] = None) -> DailySummary:
        """Ensure a summary exists, refresh it from the ledger and return it.

        This is the single entry point for read paths that want a summary
        consistent with the ledger at read time.
        """
        summary_date = summary_date or self.today()
        self.ensure_summary(supplier_id, summary_date)
        self.recompute(supplier_id, summary_date)
        return self.db.get_daily_summary(supplier_id, summary_date)

    def recompute_today(self, supplier_id: int) -> None:
        """Refresh today's summary for a supplier, creating it if needed.

        Raises:
            NotFoundError: If the supplier does not exist
        """
        self._require_supplier(supplier_id)
        self.ensure_and_recompute(supplier_id)

    def close_day(self, supplier_id: int) -> DailySummary:
        """Mark today's summary as closed.

        The flag is advisory; later entries still aggregate into the day.

        Raises:
            NotFoundError: If the supplier does not exist
        """
        self._require_supplier(supplier_id)
        today = self.today()
        self.ensure_summary(supplier_id, today)
        self.db.close_daily_summary(supplier_id, today, closed_at=self.clock.now())
        logger.info("Closed day %s for supplier %s", today, supplier_id)
        return self.db.get_daily_summary(supplier_id, today)

    def _require_supplier(self, supplier_id: int) -> None:
        if self.db.get_supplier(supplier_id) is None:
            raise NotFoundError(supplier_not_found(supplier_id))
