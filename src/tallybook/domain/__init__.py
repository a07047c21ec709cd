"""Domain layer for tallybook application."""

from tallybook.domain.account import AccountService
from tallybook.domain.contact import ContactService
from tallybook.domain.transaction import TransactionService
from tallybook.domain.invoice import InvoiceService
from tallybook.domain.expense import ExpenseService
from tallybook.domain.ledger import LedgerService
from tallybook.domain.recurring import RecurringService
from tallybook.domain.reports import ReportService

__all__ = [
    "AccountService",
    "ContactService",
    "TransactionService",
    "InvoiceService",
    "ExpenseService",
    "LedgerService",
    "RecurringService",
    "ReportService",
]
