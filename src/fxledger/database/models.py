"""SQLAlchemy models for fxledger database."""

from datetime import datetime, UTC
from decimal import Decimal

from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

MONEY = Numeric(18, 2)
RATE = Numeric(18, 8)


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class Supplier(Base):
    """Exchange counter model."""

    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    low_balance_alert = Column(MONEY, default=Decimal("10000"), nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    purchases = relationship("Purchase", back_populates="supplier", cascade="all, delete-orphan")
    sales = relationship("Sale", back_populates="supplier", cascade="all, delete-orphan")
    daily_summaries = relationship(
        "DailySummary", back_populates="supplier", cascade="all, delete-orphan"
    )
    rate_history = relationship("RateHistory", cascade="all, delete-orphan")
    receipt_counters = relationship("ReceiptCounter", cascade="all, delete-orphan")


class Purchase(Base):
    """THB bought with MMK."""

    __tablename__ = "purchases"

    id = Column(Integer, primary_key=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False, index=True)
    mmk_amount = Column(MONEY, nullable=False)
    exchange_rate = Column(RATE, nullable=False)
    total_thb = Column(MONEY, nullable=False)
    note = Column(String, nullable=True)
    # Naive UTC
    created_at = Column(DateTime, default=_utcnow, nullable=False, index=True)

    supplier = relationship("Supplier", back_populates="purchases")


class Sale(Base):
    """THB sold to a customer for MMK."""

    __tablename__ = "sales"

    id = Column(Integer, primary_key=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_name = Column(String, nullable=False)
    thb_amount = Column(MONEY, nullable=False)
    exchange_rate = Column(RATE, nullable=False)
    total_mmk = Column(MONEY, nullable=False)
    receipt_no = Column(String, unique=True, nullable=False)
    note = Column(String, nullable=True)
    # Naive UTC
    created_at = Column(DateTime, default=_utcnow, nullable=False, index=True)

    supplier = relationship("Supplier", back_populates="sales")


class DailySummary(Base):
    """Per-supplier balance snapshot for one Bangkok calendar day."""

    __tablename__ = "daily_summaries"

    id = Column(Integer, primary_key=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False)
    summary_date = Column(Date, nullable=False)
    opening_thb = Column(MONEY, default=Decimal("0"), nullable=False)
    opening_mmk = Column(MONEY, default=Decimal("0"), nullable=False)
    opening_avg_rate = Column(RATE, default=Decimal("0"), nullable=False)
    purchased_thb = Column(MONEY, default=Decimal("0"), nullable=False)
    purchased_mmk = Column(MONEY, default=Decimal("0"), nullable=False)
    sold_thb = Column(MONEY, default=Decimal("0"), nullable=False)
    sold_mmk = Column(MONEY, default=Decimal("0"), nullable=False)
    closing_thb = Column(MONEY, default=Decimal("0"), nullable=False)
    closing_mmk = Column(MONEY, default=Decimal("0"), nullable=False)
    closing_avg_rate = Column(RATE, default=Decimal("0"), nullable=False)
    daily_profit_thb = Column(MONEY, default=Decimal("0"), nullable=False)
    is_closed = Column(Boolean, default=False, nullable=False)
    closed_at = Column(DateTime, nullable=True)

    # At most one summary per supplier and day
    __table_args__ = (
        UniqueConstraint("supplier_id", "summary_date", name="uq_supplier_summary_date"),
    )

    supplier = relationship("Supplier", back_populates="daily_summaries")


class RateHistory(Base):
    """Append-only log of executed rates."""

    __tablename__ = "rate_history"

    id = Column(Integer, primary_key=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False, index=True)
    rate_type = Column(String(4), nullable=False)
    exchange_rate = Column(RATE, nullable=False)
    mmk_amount = Column(MONEY, nullable=False)
    thb_amount = Column(MONEY, nullable=False)
    recorded_at = Column(DateTime, default=_utcnow, nullable=False, index=True)


class ReceiptCounter(Base):
    """Last receipt sequence issued per supplier and Bangkok day."""

    __tablename__ = "receipt_counters"

    id = Column(Integer, primary_key=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False)
    counter_date = Column(Date, nullable=False)
    last_sequence = Column(Integer, default=0, nullable=False)

    __table_args__ = (
        UniqueConstraint("supplier_id", "counter_date", name="uq_supplier_counter_date"),
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Turn on SQLite foreign key enforcement so ON DELETE CASCADE applies."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
