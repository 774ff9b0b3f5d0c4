"""Domain model entities for fxledger.

These are pure data classes representing business concepts, independent of
database schema. Amounts in THB and MMK are Decimals with two places; rates
carry eight.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class RateType(str, Enum):
    """Direction of an executed exchange rate."""

    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class Supplier:
    """Exchange counter (till) domain entity."""

    id: int
    name: str
    low_balance_alert: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Purchase:
    """THB acquired with MMK at a counter."""

    id: int
    supplier_id: int
    mmk_amount: Decimal
    exchange_rate: Decimal
    total_thb: Decimal
    note: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Sale:
    """THB disbursed to a customer for MMK."""

    id: int
    supplier_id: int
    customer_name: str
    thb_amount: Decimal
    exchange_rate: Decimal
    total_mmk: Decimal
    receipt_no: str
    note: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class DailySummary:
    """Per-supplier, per-Bangkok-day balance snapshot."""

    id: int
    supplier_id: int
    summary_date: date
    opening_thb: Decimal
    opening_mmk: Decimal
    opening_avg_rate: Decimal
    purchased_thb: Decimal
    purchased_mmk: Decimal
    sold_thb: Decimal
    sold_mmk: Decimal
    closing_thb: Decimal
    closing_mmk: Decimal
    closing_avg_rate: Decimal
    daily_profit_thb: Decimal
    is_closed: bool
    closed_at: Optional[datetime]


@dataclass(frozen=True)
class RateObservation:
    """Immutable record of an executed rate."""

    id: int
    supplier_id: int
    rate_type: RateType
    exchange_rate: Decimal
    mmk_amount: Decimal
    thb_amount: Decimal
    recorded_at: datetime


@dataclass(frozen=True)
class PurchaseReceipt:
    """Result of recording a purchase."""

    id: int
    total_thb: Decimal


@dataclass(frozen=True)
class SaleReceipt:
    """Result of recording a sale."""

    id: int
    receipt_no: str
    total_mmk: Decimal


@dataclass(frozen=True)
class DailyRateStats:
    """Min/avg/max of observed rates for one Bangkok day and direction."""

    date: date
    rate_type: RateType
    min_rate: Decimal
    avg_rate: Decimal
    max_rate: Decimal
    count: int


@dataclass(frozen=True)
class SupplierBalance:
    """Dashboard line: a supplier with today's fresh summary."""

    supplier: Supplier
    summary: DailySummary

    @property
    def low_balance(self) -> bool:
        return self.summary.closing_thb < self.supplier.low_balance_alert


@dataclass(frozen=True)
class SupplierDetail:
    """A supplier with today's summary and today's ledger entries."""

    supplier: Supplier
    summary: DailySummary
    purchases: tuple[Purchase, ...] = ()
    sales: tuple[Sale, ...] = ()


@dataclass(frozen=True)
class SummaryLine:
    """A daily summary together with its supplier's name."""

    supplier_name: str
    summary: DailySummary


@dataclass(frozen=True)
class DayOverview:
    """Today's summaries for all suppliers with THB totals."""

    date: date
    lines: tuple[SummaryLine, ...]
    totals: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class ProfitReport:
    """Summaries within a date range with THB totals."""

    start_date: Optional[date]
    end_date: Optional[date]
    lines: tuple[SummaryLine, ...]
    totals: dict[str, Decimal] = field(default_factory=dict)
