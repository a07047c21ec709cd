"""Invoice domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from tallybook.database.base import Database
from tallybook.domain.choices import parse_invoice_status
from tallybook.domain.entities import ContactType, Invoice as InvoiceEntity, InvoiceStatus
from tallybook.domain.errors import (
    NotFoundError,
    ValidationError,
    contact_not_found,
    contact_type_mismatch,
    invoice_not_found,
)

logger = logging.getLogger(__name__)


class InvoiceService:
    """Service for managing customer invoices."""

    def __init__(self, db: Database):
        """Initialize invoice service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_invoice(
        self,
        customer_id: str,
        amount: Decimal,
        date: date,
        due_date: date,
        status: str = InvoiceStatus.DRAFT.value,
        invoice_number: Optional[str] = None,
    ) -> str:
        """Create an invoice for a customer.

        Args:
            customer_id: Contact ID of a customer
            amount: Invoice total, non-negative
            date: Issue date
            due_date: Payment due date, not before the issue date
            status: Initial status
            invoice_number: Optional human-facing number

        Returns:
            Invoice ID

        Raises:
            NotFoundError: If the customer doesn't exist
            ValidationError: If the contact is a vendor or values are invalid
        """
        customer = self.db.get_contact(customer_id)
        if customer is None:
            raise NotFoundError(contact_not_found(customer_id))
        if customer.type != ContactType.CUSTOMER:
            raise ValidationError(
                contact_type_mismatch(customer.name, "customer", ContactType(customer.type).value)
            )
        if amount < 0:
            raise ValidationError(f"Invoice amount must not be negative, got {amount}")
        if due_date < date:
            raise ValidationError("Invoice due date cannot be before its issue date")

        invoice_status = parse_invoice_status(status)
        return self.db.create_invoice(
            customer_id=customer_id,
            amount=amount,
            date=date,
            due_date=due_date,
            status=invoice_status.value,
            invoice_number=invoice_number,
        )

    def get_invoice(self, invoice_id: str) -> Optional[InvoiceEntity]:
        """Get invoice by ID."""
        return self.db.get_invoice(invoice_id)

    def list_invoices(
        self, customer_id: Optional[str] = None, status: Optional[str] = None
    ) -> list[InvoiceEntity]:
        """List invoices, optionally for one customer or one status."""
        invoice_status = parse_invoice_status(status) if status is not None else None
        return self.db.list_invoices(
            customer_id=customer_id,
            status=invoice_status.value if invoice_status else None,
        )

    def update_status(self, invoice_id: str, status: str) -> None:
        """Set an invoice's status.

        Raises:
            NotFoundError: If the invoice doesn't exist
            ValidationError: If the status is unknown
        """
        invoice_status = parse_invoice_status(status)
        if self.db.get_invoice(invoice_id) is None:
            raise NotFoundError(invoice_not_found(invoice_id))
        self.db.update_invoice_status(invoice_id, invoice_status.value)

    def refresh_overdue(self, as_of: Optional[date] = None) -> list[str]:
        """Mark sent invoices whose due date has passed as overdue.

        Args:
            as_of: Reference date, defaults to today

        Returns:
            IDs of the invoices that changed status
        """
        as_of = as_of or date.today()
        changed = []
        for invoice in self.db.list_invoices(status=InvoiceStatus.SENT.value):
            if invoice.due_date < as_of:
                self.db.update_invoice_status(invoice.id, InvoiceStatus.OVERDUE.value)
                changed.append(invoice.id)

        logger.info("Marked %d invoice(s) overdue as of %s", len(changed), as_of)
        return changed

    def delete_invoice(self, invoice_id: str) -> None:
        """Delete an invoice.

        Raises:
            NotFoundError: If the invoice doesn't exist
        """
        if self.db.get_invoice(invoice_id) is None:
            raise NotFoundError(invoice_not_found(invoice_id))
        self.db.delete_invoice(invoice_id)
