"""Expense domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from tallybook.database.base import Database
from tallybook.domain.choices import parse_expense_status
from tallybook.domain.entities import ContactType, Expense as ExpenseEntity, ExpenseStatus
from tallybook.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    contact_not_found,
    contact_type_mismatch,
    expense_not_found,
)

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for vendor expense claims."""

    def __init__(self, db: Database):
        """Initialize expense service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_vendor(self, vendor_id: str) -> None:
        vendor = self.db.get_contact(vendor_id)
        if vendor is None:
            raise NotFoundError(contact_not_found(vendor_id))
        if vendor.type != ContactType.VENDOR:
            raise ValidationError(
                contact_type_mismatch(vendor.name, "vendor", ContactType(vendor.type).value)
            )

    def _check_account(self, account_id: str) -> None:
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

    def create_expense(
        self,
        vendor_id: str,
        account_id: str,
        amount: Decimal,
        date: date,
        status: str = ExpenseStatus.DRAFT.value,
        description: Optional[str] = None,
    ) -> str:
        """Record an expense claim.

        Args:
            vendor_id: Contact ID of a vendor
            account_id: Account the expense is booked to
            amount: Non-negative amount
            date: Date the expense was incurred
            status: draft, submitted, approved, rejected or reimbursed
            description: Optional note

        Returns:
            Expense ID

        Raises:
            ValidationError: If the contact is not a vendor or values are invalid
            NotFoundError: If the vendor or account doesn't exist
        """
        if amount < 0:
            raise ValidationError(f"Expense amount must not be negative, got {amount}")
        expense_status = parse_expense_status(status)
        self._check_vendor(vendor_id)
        self._check_account(account_id)

        return self.db.create_expense(
            vendor_id=vendor_id,
            account_id=account_id,
            amount=amount,
            date=date,
            status=expense_status.value,
            description=description,
        )

    def get_expense(self, expense_id: str) -> Optional[ExpenseEntity]:
        """Get expense by ID."""
        return self.db.get_expense(expense_id)

    def list_expenses(
        self,
        vendor_id: Optional[str] = None,
        status: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[ExpenseEntity]:
        """List expenses, newest first."""
        expense_status = parse_expense_status(status) if status is not None else None
        return self.db.list_expenses(
            vendor_id=vendor_id,
            status=expense_status.value if expense_status else None,
            start_date=start_date,
            end_date=end_date,
        )

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
        """Update only the fields that are provided.

        Raises:
            NotFoundError: If the expense, vendor or account doesn't exist
            ValidationError: If a new value is invalid
        """
        if self.db.get_expense(expense_id) is None:
            raise NotFoundError(expense_not_found(expense_id))
        if amount is not None and amount < 0:
            raise ValidationError(f"Expense amount must not be negative, got {amount}")
        expense_status = parse_expense_status(status) if status is not None else None
        if vendor_id is not None:
            self._check_vendor(vendor_id)
        if account_id is not None:
            self._check_account(account_id)

        self.db.update_expense(
            expense_id,
            vendor_id=vendor_id,
            account_id=account_id,
            amount=amount,
            status=expense_status.value if expense_status else None,
            date=date,
            description=description,
        )
        if expense_status is not None:
            logger.info("Expense %s is now %s", expense_id, expense_status.value)

    def delete_expense(self, expense_id: str) -> None:
        """Delete an expense.

        Raises:
            NotFoundError: If the expense doesn't exist
        """
        if self.db.get_expense(expense_id) is None:
            raise NotFoundError(expense_not_found(expense_id))
        self.db.delete_expense(expense_id)
