"""Domain model entities for tallybook.

These are pure data classes representing business concepts, independent of
database schema. The balance engine consumes them as immutable snapshots and
never relies on the cached ``balance`` fields carried by accounts and
contacts.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Account types in the chart of accounts."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"


# Account types whose natural balance is on the debit side
DEBIT_NORMAL_TYPES = (AccountType.ASSET, AccountType.EXPENSE)


class TransactionType(str, Enum):
    """Transaction types."""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class TransactionStatus(str, Enum):
    """Transaction lifecycle status."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ContactType(str, Enum):
    """Contact types."""

    CUSTOMER = "customer"
    VENDOR = "vendor"


class InvoiceStatus(str, Enum):
    """Invoice status."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


class ExpenseStatus(str, Enum):
    """Expense claim status."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"
    REIMBURSED = "reimbursed"


class RecurringFrequency(str, Enum):
    """How often a recurring transaction repeats."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class Account:
    """Chart of accounts entry."""

    id: str
    name: str
    type: AccountType
    code: str
    balance: Optional[Decimal] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Contact:
    """Customer or vendor."""

    id: str
    name: str
    type: ContactType
    balance: Optional[Decimal] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Transaction:
    """Double-entry posting of a single amount.

    ``is_payment`` tags vendor settlements explicitly. None means the
    transaction is untagged and payment detection falls back to the
    description text.
    """

    id: str
    date: date
    description: str
    amount: Decimal
    type: TransactionType
    debit_account: str
    credit_account: str
    category: Optional[str] = None
    contact: Optional[str] = None
    contact_type: Optional[ContactType] = None
    status: TransactionStatus = TransactionStatus.COMPLETED
    is_payment: Optional[bool] = None


@dataclass(frozen=True)
class Invoice:
    """Customer invoice."""

    id: str
    customer_id: str
    amount: Decimal
    status: InvoiceStatus
    date: date
    due_date: date
    invoice_number: Optional[str] = None


@dataclass(frozen=True)
class RecurringTransaction:
    """Template that produces a transaction on every scheduled date."""

    id: str
    name: str
    type: TransactionType
    amount: Decimal
    description: str
    frequency: RecurringFrequency
    start_date: date
    next_date: date
    debit_account: str
    credit_account: str
    end_date: Optional[date] = None
    contact: Optional[str] = None
    contact_type: Optional[ContactType] = None
    is_active: bool = True
    is_payment: Optional[bool] = None


@dataclass(frozen=True)
class Expense:
    """Expense claim against a vendor, booked to an account.

    Expenses are tracked through their approval status and do not post to
    the ledger.
    """

    id: str
    vendor_id: str
    account_id: str
    amount: Decimal
    status: ExpenseStatus
    date: date
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class TransactionBalanceCheck:
    """Result of a double-entry validation pass."""

    is_valid: bool
    total_debits: Decimal
    total_credits: Decimal
    difference: Decimal


@dataclass(frozen=True)
class AccountTypeSummary:
    """Derived balances summed per account type."""

    asset: Decimal = Decimal("0")
    liability: Decimal = Decimal("0")
    equity: Decimal = Decimal("0")
    revenue: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")


@dataclass(frozen=True)
class AccountingEquationCheck:
    """Result of checking Assets = Liabilities + Equity."""

    is_balanced: bool
    assets: Decimal
    liabilities: Decimal
    equity: Decimal
    difference: Decimal


@dataclass(frozen=True)
class LedgerSnapshot:
    """Everything the balance engine needs, captured at one point in time."""

    accounts: tuple[Account, ...] = ()
    contacts: tuple[Contact, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    invoices: tuple[Invoice, ...] = ()


@dataclass(frozen=True)
class LedgerReport:
    """Balances and consistency checks derived from a ledger snapshot."""

    account_balances: dict[str, Decimal]
    contact_balances: dict[str, Decimal]
    type_summary: AccountTypeSummary
    transaction_check: TransactionBalanceCheck
    double_entry_check: TransactionBalanceCheck
    equation_check: AccountingEquationCheck


@dataclass(frozen=True)
class PeriodTotals:
    """Income and expense totals for one reporting period."""

    period: str
    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    transfers: Decimal = Decimal("0")
    count: int = 0

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


@dataclass(frozen=True)
class DashboardSummary:
    """Headline figures for the dashboard."""

    start_date: Optional[date]
    end_date: Optional[date]
    total_balance: Decimal
    income: Decimal
    expenses: Decimal
    total_invoiced: Decimal
    total_paid: Decimal
    overdue_invoices: int

    @property
    def net_income(self) -> Decimal:
        return self.income - self.expenses

    @property
    def outstanding(self) -> Decimal:
        return self.total_invoiced - self.total_paid


AGING_BUCKETS = ("current", "1-30", "31-60", "61-90", "90+")


@dataclass(frozen=True)
class ReceivablesAging:
    """Unpaid invoice amounts bucketed by days past due."""

    as_of: date
    buckets: dict[str, Decimal] = field(
        default_factory=lambda: {name: Decimal("0") for name in AGING_BUCKETS}
    )

    @property
    def total(self) -> Decimal:
        return sum(self.buckets.values(), Decimal("0"))


@dataclass(frozen=True)
class BalanceSheet:
    """Derived balances per account type plus open receivables."""

    summary: AccountTypeSummary
    receivables: Decimal
    equation_check: AccountingEquationCheck

    @property
    def net_income(self) -> Decimal:
        return self.summary.revenue - self.summary.expense


@dataclass(frozen=True)
class GroupTotal:
    """Amount and record count for one group of an analysis report."""

    key: str
    amount: Decimal
    count: int


@dataclass(frozen=True)
class ContactAnalysis:
    """Totals per contact and per status over a date range."""

    by_contact: tuple[GroupTotal, ...] = ()
    by_status: tuple[GroupTotal, ...] = ()

    @property
    def total(self) -> Decimal:
        return sum((row.amount for row in self.by_status), Decimal("0"))


@dataclass(frozen=True)
class ContactsSummary:
    """Contact counts and derived balance totals."""

    total_contacts: int
    customers: int
    vendors: int
    total_customer_balance: Decimal
    total_vendor_balance: Decimal
