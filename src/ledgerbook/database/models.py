"""SQLAlchemy models for ledgerbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Chart of accounts model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    code = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    account_type = Column(String, nullable=False)
    is_bank_account = Column(Boolean, default=False, nullable=False)
    opening_balance = Column(Numeric(14, 2), default=0, nullable=False)
    is_group = Column(Boolean, default=False, nullable=False)
    currency = Column(String, default="INR", nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    entries = relationship("LedgerEntry", back_populates="account")


class Transaction(Base):
    """Business transaction model with optional GST and TDS details."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    transaction_number = Column(String, nullable=True)
    transaction_type = Column(String, nullable=False)
    status = Column(String, default="DRAFT", nullable=False)
    date = Column(Date, nullable=False)
    total_amount = Column(Numeric(14, 2), default=0, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # GST
    gst_type = Column(String, nullable=True)
    gst_rate = Column(Numeric(5, 2), nullable=True)
    gst_taxable_amount = Column(Numeric(14, 2), nullable=True)
    cgst_amount = Column(Numeric(14, 2), nullable=True)
    sgst_amount = Column(Numeric(14, 2), nullable=True)
    igst_amount = Column(Numeric(14, 2), nullable=True)
    total_gst = Column(Numeric(14, 2), nullable=True)

    # TDS
    tds_section = Column(String, nullable=True)
    tds_rate = Column(Numeric(5, 2), nullable=True)
    tds_amount = Column(Numeric(14, 2), nullable=True)
    tds_base_amount = Column(Numeric(14, 2), nullable=True)
    tds_pan_provided = Column(Boolean, nullable=True)
    tds_pan_number = Column(String, nullable=True)

    # Relationships
    entries = relationship(
        "LedgerEntry",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="LedgerEntry.position",
    )


class LedgerEntry(Base):
    """Debit or credit line of a transaction."""

    __tablename__ = "ledger_entries"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    position = Column(Integer, nullable=False)
    debit = Column(Numeric(14, 2), default=0, nullable=False)
    credit = Column(Numeric(14, 2), default=0, nullable=False)
    description = Column(String, nullable=True)

    # Relationships
    transaction = relationship("Transaction", back_populates="entries")
    account = relationship("Account", back_populates="entries")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
