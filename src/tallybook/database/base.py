"""Abstract database interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional
from datetime import date
from decimal import Decimal

# Annotation-only: domain/__init__.py loads services that import this module
if TYPE_CHECKING:
    from tallybook.domain.entities import (
        Account,
        Contact,
        Expense,
        Invoice,
        RecurringTransaction,
        Transaction,
    )


class Database(ABC):
    """Abstract database interface for tallybook."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, type: str, code: str) -> str:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_code(self, code: str) -> Optional[Account]:
        """Get account by its chart of accounts code."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts ordered by code."""
        pass

    @abstractmethod
    def update_account_balance(self, account_id: str, balance: Optional[Decimal]) -> None:
        """Store a cached balance on an account."""
        pass

    @abstractmethod
    def update_account(
        self, account_id: str, name: Optional[str] = None, code: Optional[str] = None
    ) -> None:
        """Rename an account or change its code."""
        pass

    @abstractmethod
    def delete_account(self, account_id: str) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def count_account_references(self, account_id: str) -> int:
        """Count transactions, recurring transactions and expenses using an account."""
        pass

    # Contact operations
    @abstractmethod
    def create_contact(self, name: str, type: str, email: Optional[str] = None) -> str:
        """Create a new contact. Returns contact ID."""
        pass

    @abstractmethod
    def get_contact(self, contact_id: str) -> Optional[Contact]:
        """Get contact by ID."""
        pass

    @abstractmethod
    def list_contacts(self, type: Optional[str] = None) -> list[Contact]:
        """List contacts, optionally filtered by type."""
        pass

    @abstractmethod
    def update_contact_balance(self, contact_id: str, balance: Optional[Decimal]) -> None:
        """Store a cached balance on a contact."""
        pass

    @abstractmethod
    def update_contact(
        self, contact_id: str, name: Optional[str] = None, email: Optional[str] = None
    ) -> None:
        """Update a contact's name or email."""
        pass

    @abstractmethod
    def delete_contact(self, contact_id: str) -> None:
        """Delete a contact."""
        pass

    @abstractmethod
    def count_contact_references(self, contact_id: str) -> int:
        """Count transactions, invoices, recurring transactions and expenses for a contact."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        date: date,
        description: str,
        amount: Decimal,
        type: str,
        debit_account: str,
        credit_account: str,
        category: Optional[str] = None,
        contact: Optional[str] = None,
        contact_type: Optional[str] = None,
        status: str = "completed",
        is_payment: Optional[bool] = None,
    ) -> str:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[str] = None,
        contact_id: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters.

        Args:
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            account_id: Only transactions debiting or crediting this account
            contact_id: Only transactions with this contact
        """
        pass

    @abstractmethod
    def update_transaction_status(self, transaction_id: str, status: str) -> None:
        """Update transaction status."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction."""
        pass

    # Invoice operations
    @abstractmethod
    def create_invoice(
        self,
        customer_id: str,
        amount: Decimal,
        date: date,
        due_date: date,
        status: str = "draft",
        invoice_number: Optional[str] = None,
    ) -> str:
        """Create an invoice. Returns invoice ID."""
        pass

    @abstractmethod
    def get_invoice(self, invoice_id: str) -> Optional[Invoice]:
        """Get invoice by ID."""
        pass

    @abstractmethod
    def list_invoices(
        self, customer_id: Optional[str] = None, status: Optional[str] = None
    ) -> list[Invoice]:
        """List invoices, optionally filtered by customer and status."""
        pass

    @abstractmethod
    def update_invoice_status(self, invoice_id: str, status: str) -> None:
        """Update invoice status."""
        pass

    @abstractmethod
    def delete_invoice(self, invoice_id: str) -> None:
        """Delete an invoice."""
        pass

    # Recurring transaction operations
    @abstractmethod
    def create_recurring(
        self,
        name: str,
        type: str,
        amount: Decimal,
        description: str,
        frequency: str,
        start_date: date,
        next_date: date,
        debit_account: str,
        credit_account: str,
        end_date: Optional[date] = None,
        contact: Optional[str] = None,
        contact_type: Optional[str] = None,
        is_payment: Optional[bool] = None,
    ) -> str:
        """Create a recurring transaction. Returns its ID."""
        pass

    @abstractmethod
    def get_recurring(self, recurring_id: str) -> Optional[RecurringTransaction]:
        """Get recurring transaction by ID."""
        pass

    @abstractmethod
    def list_recurring(self, active_only: bool = False) -> list[RecurringTransaction]:
        """List recurring transactions."""
        pass

    @abstractmethod
    def update_recurring_schedule(
        self, recurring_id: str, next_date: date, is_active: bool
    ) -> None:
        """Move a recurring transaction to its next date."""
        pass

    @abstractmethod
    def set_recurring_active(self, recurring_id: str, is_active: bool) -> None:
        """Pause or resume a recurring transaction."""
        pass

    @abstractmethod
    def delete_recurring(self, recurring_id: str) -> None:
        """Delete a recurring transaction."""
        pass

    @abstractmethod
    def record_recurring_occurrences(
        self,
        recurring_id: str,
        occurrences: list[Transaction],
        next_date: date,
        is_active: bool,
    ) -> list[str]:
        """Insert occurrence transactions and move the schedule in one commit.

        Either every occurrence is recorded and the schedule advanced, or
        nothing is written.

        Returns:
            IDs of the recorded transactions
        """
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self,
        vendor_id: str,
        account_id: str,
        amount: Decimal,
        date: date,
        status: str = "draft",
        description: Optional[str] = None,
    ) -> str:
        """Create an expense. Returns expense ID."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: str) -> Optional[Expense]:
        """Get expense by ID."""
        pass

    @abstractmethod
    def list_expenses(
        self,
        vendor_id: Optional[str] = None,
        status: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Expense]:
        """List expenses, newest first, with optional filters."""
        pass

    @abstractmethod
    def update_expense(
        self,
        expense_id: str,
        vendor_id: Optional[str] = None,
        account_id: Optional[str] = None,
        amount: Optional[Decimal] = None,
        status: Optional[str] = None,
        date: Optional[date] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update the given expense fields."""
        pass

    @abstractmethod
    def delete_expense(self, expense_id: str) -> None:
        """Delete an expense."""
        pass
