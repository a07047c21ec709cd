"""Contact domain service."""

from typing import Optional
from tallybook.database.base import Database
from tallybook.domain.choices import parse_contact_type
from tallybook.domain.entities import Contact as ContactEntity
from tallybook.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    contact_not_found,
    still_referenced,
)


class ContactService:
    """Service for managing customers and vendors."""

    def __init__(self, db: Database):
        """Initialize contact service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_contact(self, name: str, type: str, email: Optional[str] = None) -> str:
        """Create a new contact.

        Args:
            name: Contact name
            type: "customer" or "vendor"
            email: Optional email address

        Returns:
            Contact ID

        Raises:
            ValidationError: If the name is empty or the type is unknown
        """
        contact_type = parse_contact_type(type)
        name = name.strip()
        if not name:
            raise ValidationError("Contact name cannot be empty")
        return self.db.create_contact(name=name, type=contact_type.value, email=email)

    def get_contact(self, contact_id: str) -> Optional[ContactEntity]:
        """Get contact by ID."""
        return self.db.get_contact(contact_id)

    def list_contacts(self, type: Optional[str] = None) -> list[ContactEntity]:
        """List contacts, optionally only customers or only vendors."""
        contact_type = parse_contact_type(type) if type is not None else None
        return self.db.list_contacts(type=contact_type.value if contact_type else None)

    def update_contact(
        self, contact_id: str, name: Optional[str] = None, email: Optional[str] = None
    ) -> None:
        """Update a contact's name or email.

        Raises:
            NotFoundError: If the contact doesn't exist
            ValidationError: If the new name is empty
        """
        if self.db.get_contact(contact_id) is None:
            raise NotFoundError(contact_not_found(contact_id))
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Contact name cannot be empty")
        self.db.update_contact(contact_id, name=name, email=email)

    def delete_contact(self, contact_id: str) -> None:
        """Delete a contact with no transactions, invoices or expenses.

        Raises:
            NotFoundError: If the contact doesn't exist
            ConflictError: If any record still refers to the contact
        """
        contact = self.db.get_contact(contact_id)
        if contact is None:
            raise NotFoundError(contact_not_found(contact_id))

        references = self.db.count_contact_references(contact_id)
        if references > 0:
            raise ConflictError(still_referenced("contact", contact.name, references))

        self.db.delete_contact(contact_id)
