"""Account domain service."""

from typing import Optional
from tallybook.database.base import Database
from tallybook.domain.choices import parse_account_type
from tallybook.domain.entities import Account as AccountEntity
from tallybook.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    still_referenced,
)


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str, type: str, code: str) -> str:
        """Create a new account.

        Args:
            name: Account name
            type: Account type (asset, liability, equity, revenue, expense)
            code: Chart of accounts code, e.g. "1000"

        Returns:
            Account ID

        Raises:
            ValidationError: If the type is unknown or name/code is empty
            ConflictError: If account name or code already exists
        """
        account_type = parse_account_type(type)
        name = name.strip()
        code = code.strip()
        if not name:
            raise ValidationError("Account name cannot be empty")
        if not code:
            raise ValidationError("Account code cannot be empty")

        for acc in self.db.list_accounts():
            if acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")
            if acc.code == code:
                raise ConflictError(f"Account with code '{code}' already exists")

        return self.db.create_account(name=name, type=account_type.value, code=code)

    def get_account(self, account_id: str) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def get_account_by_code(self, code: str) -> Optional[AccountEntity]:
        """Get account by chart of accounts code."""
        return self.db.get_account_by_code(code)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts.

        Returns:
            List of account entities ordered by code
        """
        return self.db.list_accounts()

    def update_account(
        self, account_id: str, name: Optional[str] = None, code: Optional[str] = None
    ) -> None:
        """Rename an account or change its code.

        Args:
            account_id: Account ID to update
            name: Optional new name
            code: Optional new chart of accounts code

        Raises:
            NotFoundError: If the account doesn't exist
            ValidationError: If a new name or code is empty
            ConflictError: If another account already uses the name or code
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Account name cannot be empty")
        if code is not None:
            code = code.strip()
            if not code:
                raise ValidationError("Account code cannot be empty")

        # Check for duplicates (excluding current account)
        for acc in self.db.list_accounts():
            if acc.id == account_id:
                continue
            if name is not None and acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")
            if code is not None and acc.code == code:
                raise ConflictError(f"Account with code '{code}' already exists")

        self.db.update_account(account_id, name=name, code=code)

    def delete_account(self, account_id: str) -> None:
        """Delete an account that nothing posts to.

        Raises:
            NotFoundError: If the account doesn't exist
            ConflictError: If transactions, recurring transactions or expenses use it
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        references = self.db.count_account_references(account_id)
        if references > 0:
            raise ConflictError(still_referenced("account", account.name, references))

        self.db.delete_account(account_id)
