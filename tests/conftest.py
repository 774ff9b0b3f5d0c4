"""Shared pytest fixtures for fxledger tests."""

import tempfile
import os
from datetime import datetime, UTC
from decimal import Decimal

import pytest

from fxledger.database.factories import create_sqlite_database
from fxledger.domain.ledger import LedgerService
from fxledger.domain.rate_history import RateHistoryService
from fxledger.domain.reports import ReportService
from fxledger.domain.rollover import RolloverEngine
from fxledger.domain.supplier import SupplierService
from fxledger.utils.clock import FixedClock


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def clock():
    """Clock fixed at 2024-01-02 10:00 in Bangkok (03:00 UTC)."""
    return FixedClock(datetime(2024, 1, 2, 3, 0, tzinfo=UTC))


@pytest.fixture
def supplier_service(temp_db):
    """Create a SupplierService with a temporary database."""
    return SupplierService(temp_db)


@pytest.fixture
def ledger_service(temp_db, clock):
    """Create a LedgerService with a temporary database and fixed clock."""
    return LedgerService(temp_db, clock)


@pytest.fixture
def rollover(temp_db, clock):
    """Create a RolloverEngine with a temporary database and fixed clock."""
    return RolloverEngine(temp_db, clock)


@pytest.fixture
def rate_service(temp_db, clock):
    """Create a RateHistoryService with a temporary database and fixed clock."""
    return RateHistoryService(temp_db, clock)


@pytest.fixture
def report_service(temp_db, clock):
    """Create a ReportService with a temporary database and fixed clock."""
    return ReportService(temp_db, clock)


@pytest.fixture
def sample_supplier(supplier_service):
    """Create a sample supplier for testing."""
    supplier_id = supplier_service.create_supplier(name="Bridge Till", low_balance_alert=Decimal("1000"))
    return supplier_service.get_supplier(supplier_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
