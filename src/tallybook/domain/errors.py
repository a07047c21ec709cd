"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def account_not_found(account: str) -> str:
    """Return message for missing account."""
    return f"Account '{account}' not found"


def contact_not_found(contact: str) -> str:
    """Return message for missing contact."""
    return f"Contact '{contact}' not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def invoice_not_found(invoice_id: str) -> str:
    """Return message for missing invoice."""
    return f"Invoice {invoice_id} not found"


def recurring_not_found(recurring_id: str) -> str:
    """Return message for missing recurring transaction."""
    return f"Recurring transaction {recurring_id} not found"


def expense_not_found(expense_id: str) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def still_referenced(kind: str, name: str, count: int) -> str:
    """Return message when a record cannot be deleted while in use."""
    records = "record" if count == 1 else "records"
    return (
        f"Cannot delete {kind} '{name}': it is used by {count} {records}. "
        f"Please reassign or delete them first."
    )


def invalid_choice(field: str, value: object, choices) -> str:
    """Return message for a value outside an enumerated set."""
    allowed = ", ".join(c.value for c in choices)
    return f"Invalid {field} '{value}'. Expected one of: {allowed}"


def contact_type_mismatch(contact: str, expected: str, actual: str) -> str:
    """Return message when a contact is used in the wrong role."""
    return f"Contact '{contact}' is a {actual}, not a {expected}"
