"""Ledger domain service: recording and deleting purchases and sales."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from fxledger.database.base import Database
from fxledger.domain.entities import (
    Purchase as PurchaseEntity,
    PurchaseReceipt,
    RateType,
    Sale as SaleEntity,
    SaleReceipt,
)
from fxledger.domain.errors import (
    NotFoundError,
    ValidationError,
    must_be_positive,
    purchase_not_found,
    required_field,
    sale_not_found,
    supplier_not_found,
)
from fxledger.domain.rate_history import RateHistoryService
from fxledger.domain.receipts import ReceiptNumberer
from fxledger.domain.rollover import RolloverEngine
from fxledger.utils.amount_parser import quantize_money, quantize_rate
from fxledger.utils.clock import BangkokClock, Clock, bangkok_day_bounds

logger = logging.getLogger(__name__)


def _positive(value, field: str, quantize) -> Decimal:
    """Parse and round a required amount; it must stay above zero once rounded."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(required_field(field))
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field} is not a number: {value!r}")
    if not number.is_finite():
        raise ValidationError(must_be_positive(field))
    number = quantize(number)
    if number <= 0:
        raise ValidationError(must_be_positive(field))
    return number


def _clean_note(note: Optional[str]) -> Optional[str]:
    if note is None or not note.strip():
        return None
    return note.strip()


class LedgerService:
    """Records exchange transactions and keeps today's summary fresh.

    Each write follows the same sequence: make sure today's summary exists,
    insert the ledger entry, append a rate observation, recompute the
    summary. If the final recompute fails the entry stays recorded and the
    next read-side refresh catches the summary up.
    """

    def __init__(self, db: Database, clock: Optional[Clock] = None):
        """Initialize ledger service.

        Args:
            db: Database instance
            clock: Source of entry timestamps and of "today"
        """
        self.db = db
        self.clock = clock or BangkokClock()
        self.rollover = RolloverEngine(db, self.clock)
        self.rates = RateHistoryService(db, self.clock)
        self.receipts = ReceiptNumberer(db, self.clock)

    def record_purchase(
        self,
        supplier_id: int,
        mmk_amount: Decimal,
        exchange_rate: Decimal,
        note: Optional[str] = None,
    ) -> PurchaseReceipt:
        """Record THB bought with MMK.

        Args:
            supplier_id: Supplier ID
            mmk_amount: MMK amount exchanged
            exchange_rate: THB per MMK
            note: Optional note

        Returns:
            PurchaseReceipt with the new ID and total_thb = mmk_amount * exchange_rate

        Raises:
            ValidationError: If an amount or the rate is missing or not positive
            NotFoundError: If the supplier does not exist
        """
        mmk_amount = _positive(mmk_amount, "MMK amount", quantize_money)
        exchange_rate = _positive(exchange_rate, "Exchange rate", quantize_rate)
        total_thb = quantize_money(mmk_amount * exchange_rate)
        if total_thb <= 0:
            raise ValidationError(must_be_positive("THB total"))
        self._require_supplier(supplier_id)

        today = self.clock.today()
        self.rollover.ensure_summary(supplier_id, today)

        purchase_id = self.db.create_purchase(
            supplier_id=supplier_id,
            mmk_amount=mmk_amount,
            exchange_rate=exchange_rate,
            total_thb=total_thb,
            note=_clean_note(note),
            created_at=self.clock.now(),
        )
        logger.info(
            "Recorded purchase %s for supplier %s: %s MMK at %s = %s THB",
            purchase_id,
            supplier_id,
            mmk_amount,
            exchange_rate,
            total_thb,
        )

        self.rates.record(supplier_id, RateType.BUY, exchange_rate, mmk_amount, total_thb)
        self.rollover.recompute(supplier_id, today)
        return PurchaseReceipt(id=purchase_id, total_thb=total_thb)

    def record_sale(
        self,
        supplier_id: int,
        customer_name: str,
        thb_amount: Decimal,
        exchange_rate: Decimal,
        note: Optional[str] = None,
    ) -> SaleReceipt:
        """Record THB sold to a customer.

        Args:
            supplier_id: Supplier ID
            customer_name: Customer name printed on the receipt
            thb_amount: THB amount disbursed
            exchange_rate: THB per MMK
            note: Optional note

        Returns:
            SaleReceipt with the new ID, receipt number and total_mmk = thb_amount / exchange_rate

        Raises:
            ValidationError: If the customer name, an amount or the rate is invalid
            NotFoundError: If the supplier does not exist
        """
        if customer_name is None or not customer_name.strip():
            raise ValidationError(required_field("Customer name"))
        thb_amount = _positive(thb_amount, "THB amount", quantize_money)
        exchange_rate = _positive(exchange_rate, "Exchange rate", quantize_rate)
        total_mmk = quantize_money(thb_amount / exchange_rate)
        if total_mmk <= 0:
            raise ValidationError(must_be_positive("MMK total"))
        self._require_supplier(supplier_id)

        today = self.clock.today()
        self.rollover.ensure_summary(supplier_id, today)

        receipt_no = self.receipts.generate_receipt_no(supplier_id)
        sale_id = self.db.create_sale(
            supplier_id=supplier_id,
            customer_name=customer_name.strip(),
            thb_amount=thb_amount,
            exchange_rate=exchange_rate,
            total_mmk=total_mmk,
            receipt_no=receipt_no,
            note=_clean_note(note),
            created_at=self.clock.now(),
        )
        logger.info(
            "Recorded sale %s (%s) for supplier %s: %s THB at %s = %s MMK",
            sale_id,
            receipt_no,
            supplier_id,
            thb_amount,
            exchange_rate,
            total_mmk,
        )

        self.rates.record(supplier_id, RateType.SELL, exchange_rate, total_mmk, thb_amount)
        self.rollover.recompute(supplier_id, today)
        return SaleReceipt(id=sale_id, receipt_no=receipt_no, total_mmk=total_mmk)

    def get_purchase(self, purchase_id: int) -> Optional[PurchaseEntity]:
        """Get purchase by ID."""
        return self.db.get_purchase(purchase_id)

    def get_sale(self, sale_id: int) -> Optional[SaleEntity]:
        """Get sale by ID."""
        return self.db.get_sale(sale_id)

    def delete_purchase(self, purchase_id: int) -> None:
        """Delete a purchase and refresh the supplier's summary for today.

        Raises:
            NotFoundError: If the purchase does not exist
        """
        purchase = self.db.get_purchase(purchase_id)
        if purchase is None:
            raise NotFoundError(purchase_not_found(purchase_id))

        self.db.delete_purchase(purchase_id)
        logger.info("Deleted purchase %s of supplier %s", purchase_id, purchase.supplier_id)
        self.rollover.ensure_and_recompute(purchase.supplier_id)

    def delete_sale(self, sale_id: int) -> None:
        """Delete a sale and refresh the supplier's summary for today.

        Raises:
            NotFoundError: If the sale does not exist
        """
        sale = self.db.get_sale(sale_id)
        if sale is None:
            raise NotFoundError(sale_not_found(sale_id))

        self.db.delete_sale(sale_id)
        logger.info("Deleted sale %s (%s) of supplier %s", sale_id, sale.receipt_no, sale.supplier_id)
        self.rollover.ensure_and_recompute(sale.supplier_id)

    def list_purchases(
        self, supplier_id: Optional[int] = None, on_date: Optional[date] = None
    ) -> list[PurchaseEntity]:
        """List purchases, optionally for one supplier and/or one Bangkok day."""
        start, end = bangkok_day_bounds(on_date) if on_date is not None else (None, None)
        return self.db.list_purchases(supplier_id=supplier_id, start=start, end=end)

    def list_sales(self, supplier_id: Optional[int] = None, on_date: Optional[date] = None) -> list[SaleEntity]:
        """List sales, optionally for one supplier and/or one Bangkok day."""
        start, end = bangkok_day_bounds(on_date) if on_date is not None else (None, None)
        return self.db.list_sales(supplier_id=supplier_id, start=start, end=end)

    def _require_supplier(self, supplier_id: int) -> None:
        if self.db.get_supplier(supplier_id) is None:
            raise NotFoundError(supplier_not_found(supplier_id))
