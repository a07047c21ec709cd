"""Tests for recurring transaction scheduling."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import SQLAlchemyError

from tallybook.domain.entities import (
    RecurringFrequency,
    RecurringTransaction,
    TransactionStatus,
    TransactionType,
)
from tallybook.domain.errors import NotFoundError, ValidationError
from tallybook.domain.recurring import (
    advance_date,
    build_occurrence,
    due_dates,
    first_due_date,
    following_date,
)


def _recurring(start, frequency=RecurringFrequency.MONTHLY, next_date=None, **kwargs):
    return RecurringTransaction(
        id="r1",
        name="Rent",
        type=TransactionType.EXPENSE,
        amount=Decimal("2500"),
        description="Office rent",
        frequency=frequency,
        start_date=start,
        next_date=next_date or first_due_date(start, frequency),
        debit_account="rent",
        credit_account="cash",
        **kwargs,
    )


@pytest.mark.parametrize(
    "frequency,expected",
    [
        (RecurringFrequency.DAILY, date(2024, 1, 16)),
        (RecurringFrequency.WEEKLY, date(2024, 1, 22)),
        (RecurringFrequency.MONTHLY, date(2024, 2, 15)),
        (RecurringFrequency.YEARLY, date(2025, 1, 15)),
    ],
)
def test_advance_date(frequency, expected):
    assert advance_date(date(2024, 1, 15), frequency) == expected


def test_first_due_date_is_one_period_after_start():
    assert first_due_date(date(2024, 1, 1), RecurringFrequency.MONTHLY) == date(2024, 2, 1)


def test_monthly_dates_clamp_without_drift():
    recurring = _recurring(date(2024, 1, 31))

    dates = due_dates(recurring, date(2024, 5, 31))

    assert dates == [date(2024, 2, 29), date(2024, 3, 31), date(2024, 4, 30), date(2024, 5, 31)]


def test_due_dates_respect_next_date():
    recurring = _recurring(date(2024, 1, 1), next_date=date(2024, 3, 1))

    assert due_dates(recurring, date(2024, 4, 15)) == [date(2024, 3, 1), date(2024, 4, 1)]


def test_due_dates_stop_at_end_date():
    recurring = _recurring(
        date(2024, 1, 1), RecurringFrequency.WEEKLY, end_date=date(2024, 1, 20)
    )

    assert due_dates(recurring, date(2024, 3, 1)) == [date(2024, 1, 8), date(2024, 1, 15)]


def test_inactive_schedule_has_no_due_dates():
    recurring = _recurring(date(2024, 1, 1), is_active=False)

    assert due_dates(recurring, date(2025, 1, 1)) == []


def test_following_date():
    recurring = _recurring(date(2024, 1, 31))

    assert following_date(recurring, date(2024, 2, 29)) == date(2024, 3, 31)


def test_build_occurrence():
    recurring = _recurring(date(2024, 1, 1))

    txn = build_occurrence(recurring, date(2024, 2, 1))

    assert txn.date == date(2024, 2, 1)
    assert txn.amount == Decimal("2500")
    assert txn.debit_account == "rent"
    assert txn.credit_account == "cash"
    assert txn.category == "Rent"
    assert txn.status == TransactionStatus.COMPLETED


def test_create_recurring(recurring_service, temp_db, chart_of_accounts):
    recurring_id = recurring_service.create_recurring(
        name="Rent",
        type="expense",
        amount=Decimal("2500"),
        description="Office rent",
        frequency="monthly",
        start_date=date(2024, 1, 1),
        debit_account=chart_of_accounts["supplies"],
        credit_account=chart_of_accounts["cash"],
    )

    recurring = temp_db.get_recurring(recurring_id)
    assert recurring.next_date == date(2024, 2, 1)
    assert recurring.frequency == RecurringFrequency.MONTHLY
    assert recurring.is_active


def test_create_recurring_end_before_start(recurring_service, chart_of_accounts):
    with pytest.raises(ValidationError, match="End date"):
        recurring_service.create_recurring(
            name="Rent",
            type="expense",
            amount=Decimal("2500"),
            description="Office rent",
            frequency="monthly",
            start_date=date(2024, 2, 1),
            end_date=date(2024, 1, 1),
            debit_account=chart_of_accounts["supplies"],
            credit_account=chart_of_accounts["cash"],
        )


def test_create_recurring_invalid_frequency(recurring_service, chart_of_accounts):
    with pytest.raises(ValidationError, match="Invalid frequency"):
        recurring_service.create_recurring(
            name="Rent",
            type="expense",
            amount=Decimal("2500"),
            description="Office rent",
            frequency="fortnightly",
            start_date=date(2024, 1, 1),
            debit_account=chart_of_accounts["supplies"],
            credit_account=chart_of_accounts["cash"],
        )


def test_run_due_records_and_advances(
    recurring_service, transaction_service, temp_db, chart_of_accounts, sample_contacts
):
    recurring_id = recurring_service.create_recurring(
        name="Supplies subscription",
        type="expense",
        amount=Decimal("40"),
        description="Monthly supplies box",
        frequency="monthly",
        start_date=date(2024, 1, 10),
        debit_account=chart_of_accounts["supplies"],
        credit_account=chart_of_accounts["payables"],
        contact=sample_contacts["vendor"],
    )

    created = recurring_service.run_due(as_of=date(2024, 3, 15))

    assert len(created) == 2
    recorded = transaction_service.list_transactions()
    assert [t.date for t in recorded] == [date(2024, 2, 10), date(2024, 3, 10)]
    assert all(t.contact == sample_contacts["vendor"] for t in recorded)
    assert temp_db.get_recurring(recurring_id).next_date == date(2024, 4, 10)

    # Running again on the same day records nothing new
    assert recurring_service.run_due(as_of=date(2024, 3, 15)) == []


def test_run_due_deactivates_after_end_date(
    recurring_service, temp_db, chart_of_accounts
):
    recurring_id = recurring_service.create_recurring(
        name="Short lease",
        type="expense",
        amount=Decimal("100"),
        description="Lease",
        frequency="monthly",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 3, 1),
        debit_account=chart_of_accounts["supplies"],
        credit_account=chart_of_accounts["cash"],
    )

    created = recurring_service.run_due(as_of=date(2024, 12, 31))

    assert len(created) == 2
    recurring = temp_db.get_recurring(recurring_id)
    assert not recurring.is_active
    assert recurring_service.list_recurring(active_only=True) == []


def test_build_occurrence_carries_payment_tag_and_fresh_id():
    recurring = _recurring(date(2024, 1, 1), is_payment=True)

    first = build_occurrence(recurring, date(2024, 2, 1))
    second = build_occurrence(recurring, date(2024, 3, 1))

    assert first.is_payment is True
    assert first.id != second.id


def _supplies_box(recurring_service, chart_of_accounts, **kwargs):
    fields = {
        "name": "Supplies box",
        "type": "expense",
        "amount": Decimal("40"),
        "description": "Monthly supplies box",
        "frequency": "monthly",
        "start_date": date(2024, 1, 10),
        "debit_account": chart_of_accounts["supplies"],
        "credit_account": chart_of_accounts["cash"],
    }
    fields.update(kwargs)
    return recurring_service.create_recurring(**fields)


def test_run_due_records_occurrences_under_returned_ids(
    recurring_service, transaction_service, chart_of_accounts
):
    _supplies_box(recurring_service, chart_of_accounts)

    created = recurring_service.run_due(as_of=date(2024, 3, 15))

    assert sorted(created) == sorted(t.id for t in transaction_service.list_transactions())


def test_recurring_vendor_payment_settles_balance(
    recurring_service, transaction_service, ledger_service, chart_of_accounts, sample_contacts
):
    vendor = sample_contacts["vendor"]
    transaction_service.create_transaction(
        date=date(2024, 1, 5),
        description="Quarterly supplies",
        amount=Decimal("120"),
        type="expense",
        debit_account=chart_of_accounts["supplies"],
        credit_account=chart_of_accounts["payables"],
        contact=vendor,
    )
    recurring_id = _supplies_box(
        recurring_service,
        chart_of_accounts,
        name="Instalment",
        type="transfer",
        description="Instalment",
        debit_account=chart_of_accounts["payables"],
        credit_account=chart_of_accounts["cash"],
        contact=vendor,
        is_payment=True,
    )
    assert recurring_service.get_recurring(recurring_id).is_payment is True

    recurring_service.run_due(as_of=date(2024, 3, 15))

    # The description says nothing about payment; the tag decides
    instalments = [
        t
        for t in transaction_service.list_transactions(contact_id=vendor)
        if t.type == TransactionType.TRANSFER
    ]
    assert len(instalments) == 2
    assert all(t.is_payment for t in instalments)
    assert ledger_service.contact_balances()[vendor] == Decimal("40")


def test_run_due_failure_leaves_schedule_untouched(
    recurring_service, transaction_service, temp_db, chart_of_accounts, monkeypatch
):
    recurring_id = _supplies_box(recurring_service, chart_of_accounts)

    # Both due occurrences get the same ID, so the second insert fails
    monkeypatch.setattr(
        "tallybook.domain.recurring.uuid.uuid4", lambda: "11111111-same-id"
    )
    with pytest.raises(SQLAlchemyError):
        recurring_service.run_due(as_of=date(2024, 3, 15))

    assert transaction_service.list_transactions() == []
    assert temp_db.get_recurring(recurring_id).next_date == date(2024, 2, 10)

    monkeypatch.undo()
    assert len(recurring_service.run_due(as_of=date(2024, 3, 15))) == 2
    assert temp_db.get_recurring(recurring_id).next_date == date(2024, 4, 10)


def test_run_due_missing_account_records_nothing(
    recurring_service, transaction_service, temp_db, chart_of_accounts
):
    recurring_id = _supplies_box(recurring_service, chart_of_accounts)
    temp_db.delete_account(chart_of_accounts["supplies"])

    with pytest.raises(NotFoundError):
        recurring_service.run_due(as_of=date(2024, 3, 15))

    assert transaction_service.list_transactions() == []
    assert temp_db.get_recurring(recurring_id).next_date == date(2024, 2, 10)


def test_toggle_active(recurring_service, chart_of_accounts):
    recurring_id = _supplies_box(recurring_service, chart_of_accounts)

    assert recurring_service.toggle_active(recurring_id) is False
    assert recurring_service.run_due(as_of=date(2024, 3, 15)) == []
    assert recurring_service.list_recurring(active_only=True) == []

    assert recurring_service.toggle_active(recurring_id) is True
    # Resuming records what came due while paused
    assert len(recurring_service.run_due(as_of=date(2024, 3, 15))) == 2


def test_toggle_missing_recurring(recurring_service):
    with pytest.raises(NotFoundError, match="Recurring transaction nope not found"):
        recurring_service.toggle_active("nope")


def test_delete_recurring_keeps_recorded_transactions(
    recurring_service, transaction_service, chart_of_accounts
):
    recurring_id = _supplies_box(recurring_service, chart_of_accounts)
    recurring_service.run_due(as_of=date(2024, 2, 15))

    recurring_service.delete_recurring(recurring_id)

    assert recurring_service.get_recurring(recurring_id) is None
    assert len(transaction_service.list_transactions()) == 1
    with pytest.raises(NotFoundError):
        recurring_service.delete_recurring(recurring_id)