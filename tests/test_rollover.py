"""Tests for daily summary rollover and recompute."""

from datetime import date, datetime, UTC
from decimal import Decimal

import pytest

from fxledger.domain.errors import NotFoundError
from fxledger.domain.rollover import RolloverEngine, closing_balances


DAY = date(2024, 1, 2)


class TestClosingBalances:
    """Pure arithmetic of a day's closing figures."""

    def _derive(self, **overrides):
        values = dict(
            opening_thb=Decimal("0"),
            opening_mmk=Decimal("0"),
            purchased_thb=Decimal("0"),
            purchased_mmk=Decimal("0"),
            sold_thb=Decimal("0"),
            sold_mmk=Decimal("0"),
        )
        values.update({k: Decimal(v) for k, v in overrides.items()})
        return closing_balances(**values)

    def test_closing_thb_adds_purchases_and_subtracts_sales(self):
        result = self._derive(opening_thb="1000", purchased_thb="500", sold_thb="300")
        assert result["closing_thb"] == Decimal("1200.00")

    def test_closing_mmk(self):
        result = self._derive(opening_mmk="50", purchased_mmk="100", sold_mmk="30")
        assert result["closing_mmk"] == Decimal("120.00")

    def test_average_rate_over_stock(self):
        result = self._derive(purchased_thb="800", purchased_mmk="100")
        assert result["closing_avg_rate"] == Decimal("8")

    def test_average_rate_includes_opening_stock(self):
        result = self._derive(opening_thb="1000", opening_mmk="50", purchased_thb="800", purchased_mmk="100")
        # (1000 + 800) / (50 + 100)
        assert result["closing_avg_rate"] == Decimal("12")

    def test_average_rate_zero_without_stock(self):
        result = self._derive()
        assert result["closing_avg_rate"] == Decimal("0")

    def test_profit_is_purchased_minus_sold(self):
        result = self._derive(purchased_thb="800", sold_thb="300")
        assert result["daily_profit_thb"] == Decimal("500.00")

    def test_profit_can_be_negative(self):
        result = self._derive(opening_thb="1000", sold_thb="300")
        assert result["daily_profit_thb"] == Decimal("-300.00")


def test_first_day_opens_at_zero(rollover, sample_supplier):
    summary = rollover.ensure_summary(sample_supplier.id, DAY)

    assert summary.summary_date == DAY
    assert summary.opening_thb == Decimal("0")
    assert summary.opening_mmk == Decimal("0")
    assert summary.opening_avg_rate == Decimal("0")
    assert summary.is_closed is False


def test_ensure_summary_defaults_to_today(rollover, sample_supplier):
    summary = rollover.ensure_summary(sample_supplier.id)
    assert summary.summary_date == DAY


def test_ensure_summary_is_get_or_create(rollover, sample_supplier, temp_db):
    first = rollover.ensure_summary(sample_supplier.id, DAY)
    second = rollover.ensure_summary(sample_supplier.id, DAY)

    assert first.id == second.id
    assert len(temp_db.list_daily_summaries(supplier_id=sample_supplier.id)) == 1


def test_rollover_copies_previous_closing(ledger_service, rollover, sample_supplier, clock):
    clock.set(datetime(2024, 1, 1, 5, 0, tzinfo=UTC))
    ledger_service.record_purchase(sample_supplier.id, Decimal("50"), Decimal("20"))

    summary = rollover.ensure_summary(sample_supplier.id, date(2024, 1, 2))

    assert summary.opening_thb == Decimal("1000.00")
    assert summary.opening_mmk == Decimal("50.00")
    assert summary.opening_avg_rate == Decimal("20")


def test_rollover_uses_most_recent_earlier_day(ledger_service, rollover, sample_supplier, clock):
    clock.set(datetime(2023, 12, 20, 5, 0, tzinfo=UTC))
    ledger_service.record_purchase(sample_supplier.id, Decimal("100"), Decimal("1"))
    clock.set(datetime(2023, 12, 28, 5, 0, tzinfo=UTC))
    ledger_service.record_purchase(sample_supplier.id, Decimal("100"), Decimal("2"))

    # No activity between 28 Dec and 2 Jan; the gap is skipped
    summary = rollover.ensure_summary(sample_supplier.id, date(2024, 1, 2))
    assert summary.opening_thb == Decimal("300.00")
    assert summary.opening_mmk == Decimal("200.00")


def test_recompute_is_idempotent(ledger_service, rollover, sample_supplier, temp_db):
    ledger_service.record_purchase(sample_supplier.id, Decimal("1000"), Decimal("0.8"))
    ledger_service.record_sale(sample_supplier.id, "Ko Aung", Decimal("300"), Decimal("0.75"))

    rollover.recompute(sample_supplier.id, DAY)
    first = temp_db.get_daily_summary(sample_supplier.id, DAY)
    rollover.recompute(sample_supplier.id, DAY)
    second = temp_db.get_daily_summary(sample_supplier.id, DAY)

    assert first == second


def test_recompute_reflects_ledger(ledger_service, temp_db, sample_supplier):
    ledger_service.record_purchase(sample_supplier.id, Decimal("100"), Decimal("8"))
    ledger_service.record_sale(sample_supplier.id, "Ma Hla", Decimal("300"), Decimal("8"))

    summary = temp_db.get_daily_summary(sample_supplier.id, DAY)
    assert summary.purchased_thb == Decimal("800.00")
    assert summary.purchased_mmk == Decimal("100.00")
    assert summary.sold_thb == Decimal("300.00")
    assert summary.sold_mmk == Decimal("37.50")
    assert summary.closing_thb == Decimal("500.00")
    assert summary.closing_mmk == Decimal("62.50")
    assert summary.closing_avg_rate == Decimal("8")
    assert summary.daily_profit_thb == Decimal("500.00")


def test_recompute_without_summary_raises(rollover, sample_supplier):
    with pytest.raises(RuntimeError, match="ensure_summary"):
        rollover.recompute(sample_supplier.id, DAY)


def test_entry_late_utc_evening_counts_towards_next_bangkok_day(rollover, sample_supplier, temp_db):
    temp_db.create_purchase(
        supplier_id=sample_supplier.id,
        mmk_amount=Decimal("100"),
        exchange_rate=Decimal("1"),
        total_thb=Decimal("100"),
        note=None,
        created_at=datetime(2024, 1, 1, 23, 59, tzinfo=UTC),
    )

    first_day = rollover.ensure_and_recompute(sample_supplier.id, date(2024, 1, 1))
    second_day = rollover.ensure_and_recompute(sample_supplier.id, date(2024, 1, 2))

    assert first_day.purchased_thb == Decimal("0")
    assert second_day.purchased_thb == Decimal("100.00")


def test_concurrent_create_rereads_existing_row(rollover, sample_supplier, temp_db, monkeypatch):
    existing = rollover.ensure_summary(sample_supplier.id, DAY)

    real_get = temp_db.get_daily_summary
    calls = []

    def stale_first_read(supplier_id, summary_date):
        calls.append(summary_date)
        if len(calls) == 1:
            return None
        return real_get(supplier_id, summary_date)

    monkeypatch.setattr(temp_db, "get_daily_summary", stale_first_read)

    summary = rollover.ensure_summary(sample_supplier.id, DAY)
    assert summary.id == existing.id
    assert len(calls) == 2


def test_ensure_and_recompute_returns_fresh_summary(rollover, sample_supplier, temp_db):
    temp_db.create_purchase(
        supplier_id=sample_supplier.id,
        mmk_amount=Decimal("100"),
        exchange_rate=Decimal("2"),
        total_thb=Decimal("200"),
        note=None,
        created_at=datetime(2024, 1, 2, 1, 0, tzinfo=UTC),
    )

    summary = rollover.ensure_and_recompute(sample_supplier.id)
    assert summary.summary_date == DAY
    assert summary.closing_thb == Decimal("200.00")


def test_recompute_today_unknown_supplier(rollover):
    with pytest.raises(NotFoundError):
        rollover.recompute_today(999)


def test_close_day_sets_flag(rollover, sample_supplier, clock):
    summary = rollover.close_day(sample_supplier.id)

    assert summary.summary_date == DAY
    assert summary.is_closed is True
    assert summary.closed_at == clock.now()


def test_close_day_is_advisory(rollover, ledger_service, sample_supplier, temp_db):
    rollover.close_day(sample_supplier.id)
    ledger_service.record_purchase(sample_supplier.id, Decimal("100"), Decimal("1"))

    summary = temp_db.get_daily_summary(sample_supplier.id, DAY)
    assert summary.is_closed is True
    assert summary.purchased_thb == Decimal("100.00")


def test_engine_defaults_to_wall_clock(temp_db):
    engine = RolloverEngine(temp_db)
    assert isinstance(engine.today(), date)
