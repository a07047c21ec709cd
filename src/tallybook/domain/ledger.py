"""Ledger domain service.

Loads a snapshot of the books from the database and runs the balance engine
over it. The ledger is the source of truth: balances stored on accounts and
contacts are only a cache refreshed from here.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from tallybook.database.base import Database
from tallybook.domain import balance
from tallybook.domain.entities import (
    LedgerReport,
    LedgerSnapshot,
    Transaction,
    TransactionStatus,
)

logger = logging.getLogger(__name__)


def booked_transactions(transactions: Iterable[Transaction]) -> tuple[Transaction, ...]:
    """Transactions that count toward balances: everything not cancelled."""
    return tuple(txn for txn in transactions if txn.status != TransactionStatus.CANCELLED)


class LedgerService:
    """Service for deriving balances and consistency checks from the books."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def load_snapshot(self) -> LedgerSnapshot:
        """Read accounts, contacts, booked transactions and invoices in one pass.

        Cancelled transactions are left out, so they move no balance.
        """
        snapshot = LedgerSnapshot(
            accounts=tuple(self.db.list_accounts()),
            contacts=tuple(self.db.list_contacts()),
            transactions=booked_transactions(self.db.list_transactions()),
            invoices=tuple(self.db.list_invoices()),
        )
        logger.debug(
            "Loaded ledger snapshot: %d accounts, %d contacts, %d transactions, %d invoices",
            len(snapshot.accounts),
            len(snapshot.contacts),
            len(snapshot.transactions),
            len(snapshot.invoices),
        )
        return snapshot

    def build_report(self, snapshot: Optional[LedgerSnapshot] = None) -> LedgerReport:
        """Compute balances and run every consistency check.

        Args:
            snapshot: Snapshot to evaluate; loaded from the database when None

        Returns:
            LedgerReport with account and contact balances, type summary and checks
        """
        if snapshot is None:
            snapshot = self.load_snapshot()

        account_balances = balance.calculate_all_account_balances(
            snapshot.accounts, snapshot.transactions
        )
        contact_balances = balance.calculate_all_contact_balances(
            snapshot.contacts, snapshot.invoices, snapshot.transactions
        )
        report = LedgerReport(
            account_balances=account_balances,
            contact_balances=contact_balances,
            type_summary=balance.get_account_type_summary(snapshot.accounts, account_balances),
            transaction_check=balance.validate_transaction_balance(snapshot.transactions),
            double_entry_check=balance.check_double_entry(
                snapshot.accounts, snapshot.transactions
            ),
            equation_check=balance.verify_accounting_equation(
                snapshot.accounts, account_balances
            ),
        )

        if not report.double_entry_check.is_valid:
            logger.warning(
                "Debits and credits differ by %s", report.double_entry_check.difference
            )
        if not report.equation_check.is_balanced:
            logger.warning(
                "Accounting equation is off by %s", report.equation_check.difference
            )
        return report

    def account_balances(self) -> dict[str, Decimal]:
        """Derived balance for every account, keyed by account ID."""
        snapshot = self.load_snapshot()
        return balance.calculate_all_account_balances(snapshot.accounts, snapshot.transactions)

    def contact_balances(self) -> dict[str, Decimal]:
        """Derived balance for every contact, keyed by contact ID."""
        snapshot = self.load_snapshot()
        return balance.calculate_all_contact_balances(
            snapshot.contacts, snapshot.invoices, snapshot.transactions
        )

    def refresh_cached_balances(self) -> LedgerReport:
        """Write derived balances to the account and contact balance columns.

        Returns:
            The report the cached values were taken from
        """
        report = self.build_report()
        for account_id, value in report.account_balances.items():
            self.db.update_account_balance(account_id, value)
        for contact_id, value in report.contact_balances.items():
            self.db.update_contact_balance(contact_id, value)

        logger.info(
            "Refreshed cached balances for %d accounts and %d contacts",
            len(report.account_balances),
            len(report.contact_balances),
        )
        return report
