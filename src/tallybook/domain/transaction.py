"""Transaction domain service."""

from typing import Optional
from datetime import date
from decimal import Decimal
from tallybook.database.base import Database
from tallybook.domain.choices import (
    parse_contact_type,
    parse_transaction_status,
    parse_transaction_type,
)
from tallybook.domain.entities import (
    ContactType,
    Transaction as TransactionEntity,
    TransactionStatus,
)
from tallybook.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    contact_not_found,
    contact_type_mismatch,
    transaction_not_found,
)


class TransactionService:
    """Service for recording ledger transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def resolve_contact_type(
        self, contact_id: Optional[str], contact_type: Optional[str]
    ) -> Optional[ContactType]:
        """Validate a contact reference and return its role.

        When ``contact_type`` is omitted it is taken from the contact record.

        Raises:
            NotFoundError: If the contact does not exist
            ValidationError: If ``contact_type`` disagrees with the contact record
        """
        if contact_id is None:
            if contact_type is not None:
                raise ValidationError("Contact type given without a contact")
            return None

        contact = self.db.get_contact(contact_id)
        if contact is None:
            raise NotFoundError(contact_not_found(contact_id))

        if contact_type is None:
            return ContactType(contact.type)

        requested = parse_contact_type(contact_type)
        if requested != contact.type:
            raise ValidationError(
                contact_type_mismatch(contact.name, requested.value, ContactType(contact.type).value)
            )
        return requested

    def check_accounts(self, *account_ids: str) -> None:
        """Raise NotFoundError unless every account exists."""
        for account_id in account_ids:
            if self.db.get_account(account_id) is None:
                raise NotFoundError(account_not_found(account_id))

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
        status: str = TransactionStatus.COMPLETED.value,
        is_payment: Optional[bool] = None,
    ) -> str:
        """Record a transaction.

        Args:
            date: Transaction date
            description: Free-text description
            amount: Non-negative amount
            type: income, expense or transfer
            debit_account: ID of the account debited
            credit_account: ID of the account credited
            category: Optional category label
            contact: Optional contact ID
            contact_type: Optional contact role; defaults to the contact's type
            status: pending, completed or cancelled
            is_payment: Explicit vendor payment tag, or None for untagged

        Returns:
            Transaction ID

        Raises:
            ValidationError: If amount is negative or a choice is invalid
            NotFoundError: If an account or the contact doesn't exist
        """
        if amount < 0:
            raise ValidationError(f"Transaction amount must not be negative, got {amount}")

        txn_type = parse_transaction_type(type)
        txn_status = parse_transaction_status(status)

        self.check_accounts(debit_account, credit_account)
        resolved_contact_type = self.resolve_contact_type(contact, contact_type)

        return self.db.create_transaction(
            date=date,
            description=description,
            amount=amount,
            type=txn_type.value,
            debit_account=debit_account,
            credit_account=credit_account,
            category=category,
            contact=contact,
            contact_type=resolved_contact_type.value if resolved_contact_type else None,
            status=txn_status.value,
            is_payment=is_payment,
        )

    def get_transaction(self, transaction_id: str) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[str] = None,
        contact_id: Optional[str] = None,
    ) -> list[TransactionEntity]:
        """List transactions with optional filters.

        Args:
            start_date: Optional start date filter
            end_date: Optional end date filter
            account_id: Only transactions posting to this account
            contact_id: Only transactions with this contact

        Returns:
            List of transaction entities ordered by date
        """
        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            account_id=account_id,
            contact_id=contact_id,
        )

    def update_status(self, transaction_id: str, status: str) -> None:
        """Set a transaction's status.

        Cancelling a transaction takes it out of every derived balance.

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If the status is unknown
        """
        txn_status = parse_transaction_status(status)
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        self.db.update_transaction_status(transaction_id, txn_status.value)

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        self.db.delete_transaction(transaction_id)
