"""Tests for the rate history service."""

from datetime import date, datetime, UTC
from decimal import Decimal

import pytest

from fxledger.domain.entities import RateType
from fxledger.domain.errors import ValidationError
from fxledger.domain.rate_history import parse_rate_type


def _record(rate_service, clock, supplier_id, when, rate_type, rate):
    clock.set(when)
    rate_service.record(supplier_id, rate_type, Decimal(rate), Decimal("100"), Decimal("1"))


def test_parse_rate_type():
    assert parse_rate_type("buy") == RateType.BUY
    assert parse_rate_type(" SELL ") == RateType.SELL
    assert parse_rate_type(RateType.BUY) == RateType.BUY


def test_parse_rate_type_invalid():
    with pytest.raises(ValidationError, match="Invalid rate type 'hold'"):
        parse_rate_type("hold")


def test_record_returns_id_and_stores_observation(rate_service, sample_supplier, clock):
    observation_id = rate_service.record(
        sample_supplier.id, "buy", Decimal("0.0079"), Decimal("1000000"), Decimal("7900")
    )

    observations = rate_service.list_observations()
    assert [o.id for o in observations] == [observation_id]
    observation = observations[0]
    assert observation.rate_type == RateType.BUY
    assert observation.exchange_rate == Decimal("0.0079")
    assert observation.recorded_at == clock.now()


def test_list_filters(rate_service, supplier_service, sample_supplier, clock):
    other_id = supplier_service.create_supplier("Market Till")
    _record(rate_service, clock, sample_supplier.id, datetime(2024, 1, 1, 3, 0, tzinfo=UTC), "buy", "0.0078")
    _record(rate_service, clock, sample_supplier.id, datetime(2024, 1, 2, 3, 0, tzinfo=UTC), "sell", "0.0080")
    _record(rate_service, clock, other_id, datetime(2024, 1, 2, 4, 0, tzinfo=UTC), "buy", "0.0077")

    assert len(rate_service.list_observations()) == 3
    assert len(rate_service.list_observations(supplier_id=sample_supplier.id)) == 2
    assert [o.supplier_id for o in rate_service.list_observations(rate_type="buy")] == [other_id, sample_supplier.id]

    on_second = rate_service.list_observations(start_date=date(2024, 1, 2), end_date=date(2024, 1, 2))
    assert len(on_second) == 2

    newest = rate_service.list_observations(limit=1)
    assert newest[0].supplier_id == other_id


def test_list_rejects_non_positive_limit(rate_service):
    with pytest.raises(ValidationError):
        rate_service.list_observations(limit=0)


def test_daily_stats_groups_by_bangkok_day_and_type(rate_service, sample_supplier, clock):
    # 18:00 UTC on 1 Jan is already 2 Jan in Bangkok
    _record(rate_service, clock, sample_supplier.id, datetime(2024, 1, 1, 18, 0, tzinfo=UTC), "buy", "0.0078")
    _record(rate_service, clock, sample_supplier.id, datetime(2024, 1, 2, 2, 0, tzinfo=UTC), "buy", "0.0080")
    _record(rate_service, clock, sample_supplier.id, datetime(2024, 1, 2, 3, 0, tzinfo=UTC), "sell", "0.0082")
    _record(rate_service, clock, sample_supplier.id, datetime(2024, 1, 1, 3, 0, tzinfo=UTC), "sell", "0.0081")
    clock.set(datetime(2024, 1, 2, 5, 0, tzinfo=UTC))

    stats = rate_service.daily_stats()

    assert [(s.date, s.rate_type) for s in stats] == [
        (date(2024, 1, 2), RateType.BUY),
        (date(2024, 1, 2), RateType.SELL),
        (date(2024, 1, 1), RateType.SELL),
    ]
    buy = stats[0]
    assert buy.min_rate == Decimal("0.0078")
    assert buy.max_rate == Decimal("0.0080")
    assert buy.avg_rate == Decimal("0.0079")
    assert buy.count == 2


def test_daily_stats_window(rate_service, sample_supplier, clock):
    _record(rate_service, clock, sample_supplier.id, datetime(2023, 12, 20, 3, 0, tzinfo=UTC), "buy", "0.0070")
    _record(rate_service, clock, sample_supplier.id, datetime(2023, 12, 30, 3, 0, tzinfo=UTC), "buy", "0.0075")
    clock.set(datetime(2024, 1, 2, 3, 0, tzinfo=UTC))

    stats = rate_service.daily_stats(days=7)
    assert [s.date for s in stats] == [date(2023, 12, 30)]

    assert len(rate_service.daily_stats(days=30)) == 2


def test_daily_stats_per_supplier(rate_service, supplier_service, sample_supplier, clock):
    other_id = supplier_service.create_supplier("Market Till")
    _record(rate_service, clock, sample_supplier.id, datetime(2024, 1, 2, 1, 0, tzinfo=UTC), "buy", "0.0078")
    _record(rate_service, clock, other_id, datetime(2024, 1, 2, 2, 0, tzinfo=UTC), "buy", "0.0090")

    stats = rate_service.daily_stats(supplier_id=other_id)
    assert len(stats) == 1
    assert stats[0].max_rate == Decimal("0.0090")


def test_daily_stats_empty(rate_service):
    assert rate_service.daily_stats() == []
