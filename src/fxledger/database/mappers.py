"""Mapper functions to convert SQLAlchemy models into domain entities.

This layer isolates the conversion logic, so the domain layer never sees
ORM rows or naive timestamps.
"""

from decimal import Decimal

from fxledger.domain import entities as domain
from fxledger.database.models import (
    Supplier as ORMSupplier,
    Purchase as ORMPurchase,
    Sale as ORMSale,
    DailySummary as ORMDailySummary,
    RateHistory as ORMRateHistory,
)
from fxledger.utils.clock import to_utc


def _dec(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value or 0))


def supplier_to_domain(orm_supplier: ORMSupplier) -> domain.Supplier:
    """Convert SQLAlchemy Supplier model to domain Supplier entity."""
    return domain.Supplier(
        id=orm_supplier.id,
        name=orm_supplier.name,
        low_balance_alert=_dec(orm_supplier.low_balance_alert),
        created_at=to_utc(orm_supplier.created_at),
    )


def purchase_to_domain(orm_purchase: ORMPurchase) -> domain.Purchase:
    """Convert SQLAlchemy Purchase model to domain Purchase entity."""
    return domain.Purchase(
        id=orm_purchase.id,
        supplier_id=orm_purchase.supplier_id,
        mmk_amount=_dec(orm_purchase.mmk_amount),
        exchange_rate=_dec(orm_purchase.exchange_rate),
        total_thb=_dec(orm_purchase.total_thb),
        note=orm_purchase.note,
        created_at=to_utc(orm_purchase.created_at),
    )


def sale_to_domain(orm_sale: ORMSale) -> domain.Sale:
    """Convert SQLAlchemy Sale model to domain Sale entity."""
    return domain.Sale(
        id=orm_sale.id,
        supplier_id=orm_sale.supplier_id,
        customer_name=orm_sale.customer_name,
        thb_amount=_dec(orm_sale.thb_amount),
        exchange_rate=_dec(orm_sale.exchange_rate),
        total_mmk=_dec(orm_sale.total_mmk),
        receipt_no=orm_sale.receipt_no,
        note=orm_sale.note,
        created_at=to_utc(orm_sale.created_at),
    )


def daily_summary_to_domain(orm_summary: ORMDailySummary) -> domain.DailySummary:
    """Convert SQLAlchemy DailySummary model to domain DailySummary entity."""
    return domain.DailySummary(
        id=orm_summary.id,
        supplier_id=orm_summary.supplier_id,
        summary_date=orm_summary.summary_date,
        opening_thb=_dec(orm_summary.opening_thb),
        opening_mmk=_dec(orm_summary.opening_mmk),
        opening_avg_rate=_dec(orm_summary.opening_avg_rate),
        purchased_thb=_dec(orm_summary.purchased_thb),
        purchased_mmk=_dec(orm_summary.purchased_mmk),
        sold_thb=_dec(orm_summary.sold_thb),
        sold_mmk=_dec(orm_summary.sold_mmk),
        closing_thb=_dec(orm_summary.closing_thb),
        closing_mmk=_dec(orm_summary.closing_mmk),
        closing_avg_rate=_dec(orm_summary.closing_avg_rate),
        daily_profit_thb=_dec(orm_summary.daily_profit_thb),
        is_closed=bool(orm_summary.is_closed),
        closed_at=to_utc(orm_summary.closed_at) if orm_summary.closed_at else None,
    )


def rate_observation_to_domain(orm_rate: ORMRateHistory) -> domain.RateObservation:
    """Convert SQLAlchemy RateHistory model to domain RateObservation entity."""
    return domain.RateObservation(
        id=orm_rate.id,
        supplier_id=orm_rate.supplier_id,
        rate_type=domain.RateType(orm_rate.rate_type),
        exchange_rate=_dec(orm_rate.exchange_rate),
        mmk_amount=_dec(orm_rate.mmk_amount),
        thb_amount=_dec(orm_rate.thb_amount),
        recorded_at=to_utc(orm_rate.recorded_at),
    )
