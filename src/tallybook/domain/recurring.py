"""Recurring transaction scheduling.

Occurrence dates are always computed from the start date (start + n periods),
so a schedule starting on the 31st lands on the last day of shorter months
without drifting to the 28th afterwards.
"""

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Iterator, Optional

from dateutil.relativedelta import relativedelta

from tallybook.database.base import Database
from tallybook.domain.entities import (
    RecurringFrequency,
    RecurringTransaction,
    Transaction,
    TransactionStatus,
)
from tallybook.domain.choices import parse_frequency, parse_transaction_type
from tallybook.domain.errors import NotFoundError, ValidationError, recurring_not_found
from tallybook.domain.transaction import TransactionService

logger = logging.getLogger(__name__)


def _period(frequency: RecurringFrequency, count: int) -> relativedelta:
    frequency = RecurringFrequency(frequency)
    if frequency == RecurringFrequency.DAILY:
        return relativedelta(days=count)
    if frequency == RecurringFrequency.WEEKLY:
        return relativedelta(weeks=count)
    if frequency == RecurringFrequency.MONTHLY:
        return relativedelta(months=count)
    return relativedelta(years=count)


def advance_date(current: date, frequency: RecurringFrequency) -> date:
    """Return the date one period after ``current``."""
    return current + _period(frequency, 1)


def first_due_date(start_date: date, frequency: RecurringFrequency) -> date:
    """Return the first scheduled date, one period after the start date."""
    return advance_date(start_date, frequency)


def occurrences(recurring: RecurringTransaction) -> Iterator[date]:
    """Yield every scheduled date of a recurring transaction, in order."""
    count = 1
    while True:
        yield recurring.start_date + _period(recurring.frequency, count)
        count += 1


def due_dates(recurring: RecurringTransaction, as_of: date) -> list[date]:
    """Dates from ``next_date`` up to ``as_of`` that have not been recorded yet.

    Inactive schedules have no due dates, and nothing past ``end_date`` is due.
    """
    if not recurring.is_active:
        return []

    dates = []
    for occurrence in occurrences(recurring):
        if occurrence < recurring.next_date:
            continue
        if occurrence > as_of:
            break
        if recurring.end_date is not None and occurrence > recurring.end_date:
            break
        dates.append(occurrence)
    return dates


def following_date(recurring: RecurringTransaction, after: date) -> date:
    """First scheduled date strictly after ``after``."""
    for occurrence in occurrences(recurring):
        if occurrence > after:
            return occurrence
    raise AssertionError("occurrences() is unbounded")


def build_occurrence(recurring: RecurringTransaction, on: date) -> Transaction:
    """Materialize the transaction a recurring template produces on a date.

    The occurrence gets a fresh ID, which is the ID it is recorded under.
    """
    return Transaction(
        id=str(uuid.uuid4()),
        date=on,
        description=recurring.description,
        amount=recurring.amount,
        type=recurring.type,
        debit_account=recurring.debit_account,
        credit_account=recurring.credit_account,
        category=recurring.name,
        contact=recurring.contact,
        contact_type=recurring.contact_type,
        status=TransactionStatus.COMPLETED,
        is_payment=recurring.is_payment,
    )


class RecurringService:
    """Service for managing and running recurring transactions."""

    def __init__(self, db: Database):
        """Initialize recurring service.

        Args:
            db: Database instance
        """
        self.db = db
        self.transactions = TransactionService(db)

    def create_recurring(
        self,
        name: str,
        type: str,
        amount: Decimal,
        description: str,
        frequency: str,
        start_date: date,
        debit_account: str,
        credit_account: str,
        end_date: Optional[date] = None,
        contact: Optional[str] = None,
        contact_type: Optional[str] = None,
        is_payment: Optional[bool] = None,
    ) -> str:
        """Create a recurring transaction.

        The first occurrence is scheduled one period after ``start_date``.
        ``is_payment`` is copied onto every occurrence.

        Returns:
            Recurring transaction ID

        Raises:
            ValidationError: If values are invalid
            NotFoundError: If an account or the contact doesn't exist
        """
        if not name.strip():
            raise ValidationError("Recurring transaction name cannot be empty")
        if amount < 0:
            raise ValidationError(f"Recurring amount must not be negative, got {amount}")
        if end_date is not None and end_date < start_date:
            raise ValidationError("End date cannot be before start date")

        txn_type = parse_transaction_type(type)
        recurrence = parse_frequency(frequency)
        self.transactions.check_accounts(debit_account, credit_account)
        resolved_contact_type = self.transactions.resolve_contact_type(contact, contact_type)

        return self.db.create_recurring(
            name=name.strip(),
            type=txn_type.value,
            amount=amount,
            description=description,
            frequency=recurrence.value,
            start_date=start_date,
            next_date=first_due_date(start_date, recurrence),
            debit_account=debit_account,
            credit_account=credit_account,
            end_date=end_date,
            contact=contact,
            contact_type=resolved_contact_type.value if resolved_contact_type else None,
            is_payment=is_payment,
        )

    def get_recurring(self, recurring_id: str) -> Optional[RecurringTransaction]:
        """Get recurring transaction by ID."""
        return self.db.get_recurring(recurring_id)

    def list_recurring(self, active_only: bool = False) -> list[RecurringTransaction]:
        """List recurring transactions."""
        return self.db.list_recurring(active_only=active_only)

    def toggle_active(self, recurring_id: str) -> bool:
        """Pause an active schedule or resume a paused one.

        Resuming does not record missed occurrences retroactively; the next
        ``run_due`` records everything from ``next_date`` on.

        Returns:
            The new active state

        Raises:
            NotFoundError: If the recurring transaction doesn't exist
        """
        recurring = self.db.get_recurring(recurring_id)
        if recurring is None:
            raise NotFoundError(recurring_not_found(recurring_id))

        is_active = not recurring.is_active
        self.db.set_recurring_active(recurring_id, is_active)
        logger.info(
            "Recurring transaction '%s' %s", recurring.name, "resumed" if is_active else "paused"
        )
        return is_active

    def delete_recurring(self, recurring_id: str) -> None:
        """Delete a recurring transaction; recorded occurrences are kept.

        Raises:
            NotFoundError: If the recurring transaction doesn't exist
        """
        if self.db.get_recurring(recurring_id) is None:
            raise NotFoundError(recurring_not_found(recurring_id))
        self.db.delete_recurring(recurring_id)

    def run_due(self, as_of: Optional[date] = None) -> list[str]:
        """Record every occurrence that has come due.

        Each active schedule records one transaction per due date and moves
        ``next_date`` past ``as_of`` in a single database commit, so a failed
        run leaves the schedule untouched and can be repeated safely.
        Schedules whose next date falls after their end date are deactivated.

        Args:
            as_of: Reference date, defaults to today

        Returns:
            IDs of the transactions recorded

        Raises:
            NotFoundError: If a schedule refers to an account or contact that no
                longer exists
        """
        as_of = as_of or date.today()
        created = []

        for recurring in self.db.list_recurring(active_only=True):
            dates = due_dates(recurring, as_of)
            next_date = following_date(recurring, dates[-1]) if dates else recurring.next_date
            is_active = recurring.end_date is None or next_date <= recurring.end_date

            if dates:
                self.transactions.check_accounts(
                    recurring.debit_account, recurring.credit_account
                )
                self.transactions.resolve_contact_type(
                    recurring.contact,
                    recurring.contact_type.value if recurring.contact_type else None,
                )
                occurrences = [build_occurrence(recurring, on) for on in dates]
                created.extend(
                    self.db.record_recurring_occurrences(
                        recurring.id, occurrences, next_date, is_active
                    )
                )
                logger.info(
                    "Recorded %d occurrence(s) of '%s'; next on %s",
                    len(dates),
                    recurring.name,
                    next_date,
                )
            elif not is_active:
                self.db.update_recurring_schedule(recurring.id, next_date, is_active)

            if not is_active:
                logger.info("Recurring transaction '%s' has ended", recurring.name)

        return created
