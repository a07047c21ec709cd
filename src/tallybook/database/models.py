"""SQLAlchemy models for tallybook database."""

import uuid
from datetime import datetime, UTC
from sqlalchemy import (
    Column,
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


def _new_id() -> str:
    return str(uuid.uuid4())


class Account(Base):
    """Chart of accounts model."""

    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, unique=True, nullable=False)
    type = Column(String(16), nullable=False)
    code = Column(String(32), unique=True, nullable=False)
    # Cache written from ledger-derived balances, never read by the engine
    balance = Column(Numeric(15, 2), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Contact(Base):
    """Customer or vendor model."""

    __tablename__ = "contacts"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    type = Column(String(16), nullable=False)
    email = Column(String(255), nullable=True)
    balance = Column(Numeric(15, 2), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    invoices = relationship("Invoice", back_populates="customer")


class Transaction(Base):
    """Ledger posting model."""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=_new_id)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    type = Column(String(16), nullable=False)
    status = Column(String(16), nullable=False, default="completed")
    debit_account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False)
    credit_account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False)
    category = Column(String, nullable=True)
    contact_id = Column(String(36), ForeignKey("contacts.id"), nullable=True)
    contact_type = Column(String(16), nullable=True)
    is_payment = Column(Boolean, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    debit_account = relationship("Account", foreign_keys=[debit_account_id])
    credit_account = relationship("Account", foreign_keys=[credit_account_id])
    contact = relationship("Contact")


class Invoice(Base):
    """Customer invoice model."""

    __tablename__ = "invoices"

    id = Column(String(36), primary_key=True, default=_new_id)
    invoice_number = Column(String(50), unique=True, nullable=True)
    customer_id = Column(String(36), ForeignKey("contacts.id"), nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    status = Column(String(16), nullable=False, default="draft")
    issue_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    customer = relationship("Contact", back_populates="invoices")


class RecurringTransaction(Base):
    """Recurring transaction template model."""

    __tablename__ = "recurring_transactions"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    type = Column(String(16), nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    description = Column(String, nullable=False)
    frequency = Column(String(16), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    next_date = Column(Date, nullable=False)
    debit_account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False)
    credit_account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False)
    contact_id = Column(String(36), ForeignKey("contacts.id"), nullable=True)
    contact_type = Column(String(16), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_payment = Column(Boolean, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Expense(Base):
    """Vendor expense claim model."""

    __tablename__ = "expenses"

    id = Column(String(36), primary_key=True, default=_new_id)
    vendor_id = Column(String(36), ForeignKey("contacts.id"), nullable=False)
    account_id = Column(String(36), ForeignKey("accounts.id"), nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    status = Column(String(16), nullable=False, default="draft")
    date = Column(Date, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    # Relationships
    vendor = relationship("Contact")
    account = relationship("Account")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
