"""Utilities for resolving account and contact references to IDs."""

from tallybook.domain.account import AccountService
from tallybook.domain.contact import ContactService
from tallybook.domain.errors import NotFoundError, ValidationError, account_not_found, contact_not_found


def resolve_account(account_service: AccountService, account: str) -> str:
    """Resolve an account ID, code or name to an account ID.

    IDs are tried first, then chart of accounts codes, then names.

    Args:
        account_service: AccountService instance
        account: Account ID, code or name

    Returns:
        Account ID

    Raises:
        NotFoundError: If no account matches
    """
    if account_service.get_account(account) is not None:
        return account

    by_code = account_service.get_account_by_code(account)
    if by_code is not None:
        return by_code.id

    for acc in account_service.list_accounts():
        if acc.name == account:
            return acc.id

    raise NotFoundError(account_not_found(account))


def resolve_contact(contact_service: ContactService, contact: str) -> str:
    """Resolve a contact ID or name to a contact ID.

    Raises:
        NotFoundError: If no contact matches
        ValidationError: If the name matches more than one contact
    """
    if contact_service.get_contact(contact) is not None:
        return contact

    matches = [c for c in contact_service.list_contacts() if c.name == contact]
    if not matches:
        raise NotFoundError(contact_not_found(contact))
    if len(matches) > 1:
        raise ValidationError(f"Contact name '{contact}' is ambiguous; use the contact ID")
    return matches[0].id
