"""Parsing of enumerated domain values."""

from enum import Enum
from typing import TypeVar

from tallybook.domain.entities import (
    AccountType,
    ContactType,
    ExpenseStatus,
    InvoiceStatus,
    RecurringFrequency,
    TransactionStatus,
    TransactionType,
)
from tallybook.domain.errors import ValidationError, invalid_choice

E = TypeVar("E", bound=Enum)


def parse_choice(choice_type: type[E], value, field: str) -> E:
    """Parse an enum member from a member or its name, case-insensitively.

    Raises:
        ValidationError: If the value is not one of the choices
    """
    raw = getattr(value, "value", value)
    try:
        return choice_type(str(raw).strip().lower())
    except ValueError:
        raise ValidationError(invalid_choice(field, raw, choice_type))


def parse_account_type(value) -> AccountType:
    return parse_choice(AccountType, value, "account type")


def parse_contact_type(value) -> ContactType:
    return parse_choice(ContactType, value, "contact type")


def parse_transaction_type(value) -> TransactionType:
    return parse_choice(TransactionType, value, "transaction type")


def parse_transaction_status(value) -> TransactionStatus:
    return parse_choice(TransactionStatus, value, "transaction status")


def parse_invoice_status(value) -> InvoiceStatus:
    return parse_choice(InvoiceStatus, value, "invoice status")


def parse_expense_status(value) -> ExpenseStatus:
    return parse_choice(ExpenseStatus, value, "expense status")


def parse_frequency(value) -> RecurringFrequency:
    return parse_choice(RecurringFrequency, value, "frequency")
