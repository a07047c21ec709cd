"""Shared pytest fixtures for tallybook tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal

import pytest

from tallybook.database.factories import create_sqlite_database
from tallybook.domain.account import AccountService
from tallybook.domain.contact import ContactService
from tallybook.domain.expense import ExpenseService
from tallybook.domain.invoice import InvoiceService
from tallybook.domain.ledger import LedgerService
from tallybook.domain.recurring import RecurringService
from tallybook.domain.reports import ReportService
from tallybook.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests that open their own connection
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def contact_service(temp_db):
    """Create a ContactService with a temporary database."""
    return ContactService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def invoice_service(temp_db):
    """Create an InvoiceService with a temporary database."""
    return InvoiceService(temp_db)


@pytest.fixture
def expense_service(temp_db):
    """Create an ExpenseService with a temporary database."""
    return ExpenseService(temp_db)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def recurring_service(temp_db):
    """Create a RecurringService with a temporary database."""
    return RecurringService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def chart_of_accounts(account_service):
    """Create a small chart of accounts, keyed by short name."""
    accounts = [
        ("cash", "Cash", "asset", "1000"),
        ("receivables", "Accounts Receivable", "asset", "1100"),
        ("payables", "Accounts Payable", "liability", "2000"),
        ("capital", "Owner Capital", "equity", "3000"),
        ("sales", "Sales", "revenue", "4000"),
        ("supplies", "Office Supplies", "expense", "5000"),
    ]
    return {
        key: account_service.create_account(name=name, type=account_type, code=code)
        for key, name, account_type, code in accounts
    }


@pytest.fixture
def sample_contacts(contact_service):
    """Create one customer and one vendor."""
    return {
        "customer": contact_service.create_contact(name="Acme Ltd", type="customer"),
        "vendor": contact_service.create_contact(
            name="Office Supplies Co", type="vendor", email="ap@example.com"
        ),
    }


@pytest.fixture
def sample_ledger(transaction_service, invoice_service, chart_of_accounts, sample_contacts):
    """Record a month of activity.

    - owner invests 1000 cash
    - 500 of consulting income received from the customer
    - 120 of supplies bought on credit from the vendor, then paid
    - a paid 250 invoice and a sent 800 invoice for the customer
    """
    accounts = chart_of_accounts
    transaction_service.create_transaction(
        date=date(2024, 1, 2),
        description="Owner investment",
        amount=Decimal("1000"),
        type="transfer",
        debit_account=accounts["cash"],
        credit_account=accounts["capital"],
    )
    transaction_service.create_transaction(
        date=date(2024, 1, 10),
        description="Consulting",
        amount=Decimal("500"),
        type="income",
        debit_account=accounts["cash"],
        credit_account=accounts["sales"],
        contact=sample_contacts["customer"],
    )
    transaction_service.create_transaction(
        date=date(2024, 1, 15),
        description="Paper and toner",
        amount=Decimal("120"),
        type="expense",
        debit_account=accounts["supplies"],
        credit_account=accounts["payables"],
        contact=sample_contacts["vendor"],
        is_payment=False,
    )
    transaction_service.create_transaction(
        date=date(2024, 1, 20),
        description="Settle supplies bill",
        amount=Decimal("120"),
        type="transfer",
        debit_account=accounts["payables"],
        credit_account=accounts["cash"],
        contact=sample_contacts["vendor"],
        is_payment=True,
    )
    invoice_service.create_invoice(
        customer_id=sample_contacts["customer"],
        amount=Decimal("250"),
        date=date(2024, 1, 5),
        due_date=date(2024, 1, 20),
        status="paid",
        invoice_number="INV-001",
    )
    invoice_service.create_invoice(
        customer_id=sample_contacts["customer"],
        amount=Decimal("800"),
        date=date(2024, 1, 25),
        due_date=date(2024, 2, 24),
        status="sent",
        invoice_number="INV-002",
    )
    return accounts


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
