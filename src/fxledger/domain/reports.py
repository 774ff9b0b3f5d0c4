"""Read-side reporting over daily summaries.

Dashboard-style reads refresh today's summary for every supplier before
reading it, so they always reflect the ledger at read time. The cost is one
ensure+recompute cycle per supplier per request.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from fxledger.database.base import Database
from fxledger.domain.entities import (
    DailySummary,
    DayOverview,
    ProfitReport,
    SummaryLine,
    SupplierBalance,
    SupplierDetail,
)
from fxledger.domain.errors import NotFoundError, ValidationError, supplier_not_found
from fxledger.domain.rollover import RolloverEngine
from fxledger.utils.clock import BangkokClock, Clock, bangkok_day_bounds

ZERO = Decimal("0")

OVERVIEW_TOTAL_FIELDS = {
    "total_opening_thb": "opening_thb",
    "total_purchased_thb": "purchased_thb",
    "total_sold_thb": "sold_thb",
    "total_closing_thb": "closing_thb",
    "total_profit_thb": "daily_profit_thb",
}

PROFIT_TOTAL_FIELDS = {
    "total_purchased_thb": "purchased_thb",
    "total_sold_thb": "sold_thb",
    "total_profit_thb": "daily_profit_thb",
}


def sum_fields(summaries: list[DailySummary], fields: dict[str, str]) -> dict[str, Decimal]:
    """Total the given summary attributes, keyed by output name."""
    return {
        key: sum((getattr(summary, attr) for summary in summaries), ZERO)
        for key, attr in fields.items()
    }


class ReportService:
    """Dashboards, alerts and ranged reports."""

    def __init__(self, db: Database, clock: Optional[Clock] = None):
        """Initialize report service.

        Args:
            db: Database instance
            clock: Source of "today"
        """
        self.db = db
        self.clock = clock or BangkokClock()
        self.rollover = RolloverEngine(db, self.clock)

    def dashboard(self) -> list[SupplierBalance]:
        """Every supplier with a freshly recomputed summary for today."""
        today = self.clock.today()
        return [
            SupplierBalance(supplier=supplier, summary=self.rollover.ensure_and_recompute(supplier.id, today))
            for supplier in self.db.list_suppliers()
        ]

    def low_balance_alerts(self) -> list[SupplierBalance]:
        """Suppliers whose closing THB today is under their alert threshold."""
        return [balance for balance in self.dashboard() if balance.low_balance]

    def today_overview(self) -> DayOverview:
        """Today's summaries for all suppliers, by supplier name, with THB totals."""
        lines = sorted(
            (SummaryLine(balance.supplier.name, balance.summary) for balance in self.dashboard()),
            key=lambda line: line.supplier_name,
        )
        return DayOverview(
            date=self.clock.today(),
            lines=tuple(lines),
            totals=sum_fields([line.summary for line in lines], OVERVIEW_TOTAL_FIELDS),
        )

    def supplier_detail(self, supplier_id: int) -> SupplierDetail:
        """A supplier with today's fresh summary and today's entries, newest first.

        Raises:
            NotFoundError: If the supplier does not exist
        """
        supplier = self.db.get_supplier(supplier_id)
        if supplier is None:
            raise NotFoundError(supplier_not_found(supplier_id))

        today = self.clock.today()
        summary = self.rollover.ensure_and_recompute(supplier_id, today)
        start, end = bangkok_day_bounds(today)
        return SupplierDetail(
            supplier=supplier,
            summary=summary,
            purchases=tuple(self.db.list_purchases(supplier_id=supplier_id, start=start, end=end)),
            sales=tuple(self.db.list_sales(supplier_id=supplier_id, start=start, end=end)),
        )

    def list_summaries(
        self,
        supplier_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[SummaryLine]:
        """Stored summaries in a date range (inclusive), newest day first.

        Rows are returned as stored; no recompute is triggered.
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError(f"Start date {start_date} is after end date {end_date}")

        names = {supplier.id: supplier.name for supplier in self.db.list_suppliers()}
        summaries = self.db.list_daily_summaries(
            supplier_id=supplier_id, start_date=start_date, end_date=end_date
        )
        lines = [SummaryLine(names.get(s.supplier_id, f"#{s.supplier_id}"), s) for s in summaries]
        lines.sort(key=lambda line: line.supplier_name)
        lines.sort(key=lambda line: line.summary.summary_date, reverse=True)
        return lines

    def profit_report(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        supplier_id: Optional[int] = None,
    ) -> ProfitReport:
        """Summaries in a date range with purchased, sold and profit THB totals."""
        lines = self.list_summaries(supplier_id=supplier_id, start_date=start_date, end_date=end_date)
        return ProfitReport(
            start_date=start_date,
            end_date=end_date,
            lines=tuple(lines),
            totals=sum_fields([line.summary for line in lines], PROFIT_TOTAL_FIELDS),
        )
