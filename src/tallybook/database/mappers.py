"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so string columns become domain
enums here and nowhere else.
"""

from tallybook.domain import entities as domain
from tallybook.database.models import (
    Account as ORMAccount,
    Contact as ORMContact,
    Transaction as ORMTransaction,
    Invoice as ORMInvoice,
    RecurringTransaction as ORMRecurringTransaction,
    Expense as ORMExpense,
)


def _optional_contact_type(value):
    return domain.ContactType(value) if value is not None else None


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        code=orm_account.code,
        balance=orm_account.balance,
        created_at=orm_account.created_at,
    )


def contact_to_domain(orm_contact: ORMContact) -> domain.Contact:
    """Convert SQLAlchemy Contact model to domain Contact entity."""
    return domain.Contact(
        id=orm_contact.id,
        name=orm_contact.name,
        type=domain.ContactType(orm_contact.type),
        balance=orm_contact.balance,
        email=orm_contact.email,
        created_at=orm_contact.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        amount=orm_transaction.amount,
        type=domain.TransactionType(orm_transaction.type),
        debit_account=orm_transaction.debit_account_id,
        credit_account=orm_transaction.credit_account_id,
        category=orm_transaction.category,
        contact=orm_transaction.contact_id,
        contact_type=_optional_contact_type(orm_transaction.contact_type),
        status=domain.TransactionStatus(orm_transaction.status),
        is_payment=orm_transaction.is_payment,
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model to domain Invoice entity."""
    return domain.Invoice(
        id=orm_invoice.id,
        customer_id=orm_invoice.customer_id,
        amount=orm_invoice.amount,
        status=domain.InvoiceStatus(orm_invoice.status),
        date=orm_invoice.issue_date,
        due_date=orm_invoice.due_date,
        invoice_number=orm_invoice.invoice_number,
    )


def recurring_to_domain(orm_recurring: ORMRecurringTransaction) -> domain.RecurringTransaction:
    """Convert SQLAlchemy RecurringTransaction model to domain entity."""
    return domain.RecurringTransaction(
        id=orm_recurring.id,
        name=orm_recurring.name,
        type=domain.TransactionType(orm_recurring.type),
        amount=orm_recurring.amount,
        description=orm_recurring.description,
        frequency=domain.RecurringFrequency(orm_recurring.frequency),
        start_date=orm_recurring.start_date,
        next_date=orm_recurring.next_date,
        debit_account=orm_recurring.debit_account_id,
        credit_account=orm_recurring.credit_account_id,
        end_date=orm_recurring.end_date,
        contact=orm_recurring.contact_id,
        contact_type=_optional_contact_type(orm_recurring.contact_type),
        is_active=orm_recurring.is_active,
        is_payment=orm_recurring.is_payment,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        vendor_id=orm_expense.vendor_id,
        account_id=orm_expense.account_id,
        amount=orm_expense.amount,
        status=domain.ExpenseStatus(orm_expense.status),
        date=orm_expense.date,
        description=orm_expense.description,
        created_at=orm_expense.created_at,
        updated_at=orm_expense.updated_at,
    )
