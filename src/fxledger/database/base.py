"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from fxledger.domain.entities import (
    Supplier,
    Purchase,
    Sale,
    DailySummary,
    RateObservation,
)


class Database(ABC):
    """Abstract database interface for fxledger.

    Timestamps passed in and out are UTC. Date-window arguments are half-open
    ``[start, end)`` UTC instants; callers translate Bangkok days into windows.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Supplier operations
    @abstractmethod
    def create_supplier(self, name: str, low_balance_alert: Decimal) -> int:
        """Create a new supplier. Returns supplier ID.

        Raises:
            ConflictError: If the name is already taken
        """
        pass

    @abstractmethod
    def get_supplier(self, supplier_id: int) -> Optional[Supplier]:
        """Get supplier by ID."""
        pass

    @abstractmethod
    def get_supplier_by_name(self, name: str) -> Optional[Supplier]:
        """Get supplier by exact name."""
        pass

    @abstractmethod
    def list_suppliers(self) -> list[Supplier]:
        """List all suppliers, newest first."""
        pass

    @abstractmethod
    def update_supplier(
        self, supplier_id: int, name: Optional[str] = None, low_balance_alert: Optional[Decimal] = None
    ) -> None:
        """Update supplier name and/or alert threshold."""
        pass

    @abstractmethod
    def delete_supplier(self, supplier_id: int) -> None:
        """Delete a supplier together with its ledger, summaries and rate history."""
        pass

    # Ledger operations
    @abstractmethod
    def create_purchase(
        self,
        supplier_id: int,
        mmk_amount: Decimal,
        exchange_rate: Decimal,
        total_thb: Decimal,
        note: Optional[str],
        created_at: datetime,
    ) -> int:
        """Insert a purchase. Returns purchase ID."""
        pass

    @abstractmethod
    def get_purchase(self, purchase_id: int) -> Optional[Purchase]:
        """Get purchase by ID."""
        pass

    @abstractmethod
    def delete_purchase(self, purchase_id: int) -> None:
        """Delete a purchase."""
        pass

    @abstractmethod
    def list_purchases(
        self,
        supplier_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Purchase]:
        """List purchases, newest first."""
        pass

    @abstractmethod
    def create_sale(
        self,
        supplier_id: int,
        customer_name: str,
        thb_amount: Decimal,
        exchange_rate: Decimal,
        total_mmk: Decimal,
        receipt_no: str,
        note: Optional[str],
        created_at: datetime,
    ) -> int:
        """Insert a sale. Returns sale ID."""
        pass

    @abstractmethod
    def get_sale(self, sale_id: int) -> Optional[Sale]:
        """Get sale by ID."""
        pass

    @abstractmethod
    def delete_sale(self, sale_id: int) -> None:
        """Delete a sale."""
        pass

    @abstractmethod
    def list_sales(
        self,
        supplier_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Sale]:
        """List sales, newest first."""
        pass

    @abstractmethod
    def sum_purchases(self, supplier_id: int, start: datetime, end: datetime) -> tuple[Decimal, Decimal]:
        """Return (sum of total_thb, sum of mmk_amount) for purchases in the window."""
        pass

    @abstractmethod
    def sum_sales(self, supplier_id: int, start: datetime, end: datetime) -> tuple[Decimal, Decimal]:
        """Return (sum of thb_amount, sum of total_mmk) for sales in the window."""
        pass

    # Daily summary operations
    @abstractmethod
    def get_daily_summary(self, supplier_id: int, summary_date: date) -> Optional[DailySummary]:
        """Get the summary row for a supplier and day."""
        pass

    @abstractmethod
    def get_previous_daily_summary(self, supplier_id: int, before: date) -> Optional[DailySummary]:
        """Get the most recent summary strictly before the given day."""
        pass

    @abstractmethod
    def create_daily_summary(
        self,
        supplier_id: int,
        summary_date: date,
        opening_thb: Decimal,
        opening_mmk: Decimal,
        opening_avg_rate: Decimal,
    ) -> int:
        """Insert a summary row with zeroed aggregates. Returns its ID.

        Raises:
            ConflictError: If a row for (supplier_id, summary_date) already exists
        """
        pass

    @abstractmethod
    def update_daily_summary_totals(
        self,
        supplier_id: int,
        summary_date: date,
        purchased_thb: Decimal,
        purchased_mmk: Decimal,
        sold_thb: Decimal,
        sold_mmk: Decimal,
        closing_thb: Decimal,
        closing_mmk: Decimal,
        closing_avg_rate: Decimal,
        daily_profit_thb: Decimal,
    ) -> None:
        """Write all derived fields of a summary row in one commit."""
        pass

    @abstractmethod
    def close_daily_summary(self, supplier_id: int, summary_date: date, closed_at: datetime) -> None:
        """Set the advisory closed flag on a summary row."""
        pass

    @abstractmethod
    def list_daily_summaries(
        self,
        supplier_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[DailySummary]:
        """List summaries, newest day first."""
        pass

    # Rate history operations
    @abstractmethod
    def create_rate_observation(
        self,
        supplier_id: int,
        rate_type: str,
        exchange_rate: Decimal,
        mmk_amount: Decimal,
        thb_amount: Decimal,
        recorded_at: datetime,
    ) -> int:
        """Append a rate observation. Returns its ID."""
        pass

    @abstractmethod
    def list_rate_observations(
        self,
        supplier_id: Optional[int] = None,
        rate_type: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[RateObservation]:
        """List rate observations, newest first."""
        pass

    # Receipt counters
    @abstractmethod
    def next_receipt_sequence(self, supplier_id: int, counter_date: date) -> int:
        """Atomically increment and return the receipt sequence for a supplier and day."""
        pass
