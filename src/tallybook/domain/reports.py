"""Reporting domain service."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from tallybook.database.base import Database
from tallybook.domain import balance
from tallybook.domain.entities import (
    AGING_BUCKETS,
    AccountType,
    BalanceSheet,
    ContactAnalysis,
    Contact,
    ContactsSummary,
    ContactType,
    DashboardSummary,
    Expense,
    ExpenseStatus,
    GroupTotal,
    Invoice,
    InvoiceStatus,
    LedgerSnapshot,
    PeriodTotals,
    ReceivablesAging,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from tallybook.domain.ledger import LedgerService, booked_transactions

ZERO = Decimal("0")


def aging_bucket(days_past_due: int) -> str:
    """Name of the aging bucket for a number of days past due."""
    if days_past_due <= 0:
        return "current"
    if days_past_due <= 30:
        return "1-30"
    if days_past_due <= 60:
        return "31-60"
    if days_past_due <= 90:
        return "61-90"
    return "90+"


def is_receivable(invoice: Invoice) -> bool:
    """Sent or overdue invoices are money owed; drafts and paid ones are not."""
    return invoice.status not in (InvoiceStatus.DRAFT, InvoiceStatus.PAID)


def _grouped_totals(rows: Iterable[tuple[str, Decimal]]) -> tuple[GroupTotal, ...]:
    """Sum and count (key, amount) rows per key, largest amount first."""
    amounts: dict[str, Decimal] = defaultdict(lambda: ZERO)
    counts: dict[str, int] = defaultdict(int)
    for key, amount in rows:
        amounts[key] += amount
        counts[key] += 1
    ordered = sorted(amounts, key=lambda key: (-amounts[key], key))
    return tuple(GroupTotal(key=key, amount=amounts[key], count=counts[key]) for key in ordered)


class ReportService:
    """Service for building financial reports from the ledger."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db
        self.ledger = LedgerService(db)

    def load_snapshot(self) -> LedgerSnapshot:
        """Read the books for reporting."""
        return self.ledger.load_snapshot()

    def filter_transactions_by_date(
        self,
        transactions: Sequence[Transaction],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """Keep transactions dated within an inclusive range."""
        return [
            txn
            for txn in transactions
            if (start_date is None or txn.date >= start_date)
            and (end_date is None or txn.date <= end_date)
        ]

    def group_transactions_by_period(
        self, transactions: Sequence[Transaction], group_by_month: bool
    ) -> dict[str, list[Transaction]]:
        """Group transactions by month or year."""
        period_transactions: dict[str, list[Transaction]] = defaultdict(list)

        for txn in transactions:
            if group_by_month:
                period_key = txn.date.strftime("%Y-%m")
            else:
                period_key = txn.date.strftime("%Y")
            period_transactions[period_key].append(txn)

        return dict(period_transactions)

    def summarize_period(self, period: str, transactions: Sequence[Transaction]) -> PeriodTotals:
        """Total income, expenses and transfers for one period."""
        totals = {kind: ZERO for kind in TransactionType}
        for txn in transactions:
            totals[TransactionType(txn.type)] += txn.amount

        return PeriodTotals(
            period=period,
            income=totals[TransactionType.INCOME],
            expenses=totals[TransactionType.EXPENSE],
            transfers=totals[TransactionType.TRANSFER],
            count=len(transactions),
        )

    def summarize_periods(
        self, transactions: Sequence[Transaction], group_by_month: bool = True
    ) -> list[PeriodTotals]:
        """Period totals in chronological order."""
        grouped = self.group_transactions_by_period(transactions, group_by_month)
        return [self.summarize_period(key, grouped[key]) for key in sorted(grouped)]

    def profit_and_loss(
        self,
        transactions: Sequence[Transaction],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        group_by_month: bool = True,
    ) -> list[PeriodTotals]:
        """Income against expenses per period, ignoring cancelled transactions."""
        in_range = self.filter_transactions_by_date(transactions, start_date, end_date)
        return self.summarize_periods(booked_transactions(in_range), group_by_month)

    def cash_flow(
        self,
        transactions: Sequence[Transaction],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        group_by_month: bool = True,
    ) -> list[PeriodTotals]:
        """Money in and out per period, counting completed transactions only."""
        in_range = self.filter_transactions_by_date(transactions, start_date, end_date)
        settled = [txn for txn in in_range if txn.status == TransactionStatus.COMPLETED]
        return self.summarize_periods(settled, group_by_month)

    def receivables_aging(self, invoices: Sequence[Invoice], as_of: date) -> ReceivablesAging:
        """Bucket unpaid invoice amounts by days past their due date.

        Draft and paid invoices are not receivables and are left out.
        """
        buckets = {name: ZERO for name in AGING_BUCKETS}
        for invoice in invoices:
            if not is_receivable(invoice):
                continue
            days_past_due = (as_of - invoice.due_date).days
            buckets[aging_bucket(days_past_due)] += invoice.amount

        return ReceivablesAging(as_of=as_of, buckets=buckets)

    def contacts_summary(
        self, contacts: Sequence[Contact], contact_balances: dict[str, Decimal]
    ) -> ContactsSummary:
        """Count contacts and total their derived balances per role."""
        customers = [c for c in contacts if c.type == ContactType.CUSTOMER]
        vendors = [c for c in contacts if c.type == ContactType.VENDOR]

        return ContactsSummary(
            total_contacts=len(contacts),
            customers=len(customers),
            vendors=len(vendors),
            total_customer_balance=sum(
                (contact_balances.get(c.id, ZERO) for c in customers), ZERO
            ),
            total_vendor_balance=sum(
                (contact_balances.get(c.id, ZERO) for c in vendors), ZERO
            ),
        )

    def dashboard_summary(
        self,
        snapshot: LedgerSnapshot,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        as_of: Optional[date] = None,
    ) -> DashboardSummary:
        """Headline figures: cash position, period results and invoicing.

        Args:
            snapshot: Books to summarize
            start_date: Optional start of the income/expense period
            end_date: Optional end of the income/expense period
            as_of: Date used to count overdue invoices, defaults to today

        Cancelled transactions count toward neither the asset total nor the
        period figures.

        Returns:
            DashboardSummary
        """
        as_of = as_of or date.today()
        account_balances = balance.calculate_all_account_balances(
            snapshot.accounts, booked_transactions(snapshot.transactions)
        )
        total_balance = sum(
            (
                account_balances[account.id]
                for account in snapshot.accounts
                if account.type == AccountType.ASSET
            ),
            ZERO,
        )

        period = self.profit_and_loss(snapshot.transactions, start_date, end_date)
        income = sum((p.income for p in period), ZERO)
        expenses = sum((p.expenses for p in period), ZERO)

        total_invoiced = sum((inv.amount for inv in snapshot.invoices), ZERO)
        total_paid = sum(
            (inv.amount for inv in snapshot.invoices if inv.status == InvoiceStatus.PAID),
            ZERO,
        )
        overdue = sum(
            1
            for inv in snapshot.invoices
            if inv.status == InvoiceStatus.OVERDUE
            or (inv.status == InvoiceStatus.SENT and inv.due_date < as_of)
        )

        return DashboardSummary(
            start_date=start_date,
            end_date=end_date,
            total_balance=total_balance,
            income=income,
            expenses=expenses,
            total_invoiced=total_invoiced,
            total_paid=total_paid,
            overdue_invoices=overdue,
        )

    def balance_sheet(self, snapshot: LedgerSnapshot) -> BalanceSheet:
        """Derived balances per account type, open receivables and the equation check."""
        report = self.ledger.build_report(
            LedgerSnapshot(
                accounts=snapshot.accounts,
                contacts=snapshot.contacts,
                transactions=booked_transactions(snapshot.transactions),
                invoices=snapshot.invoices,
            )
        )
        receivables = sum(
            (invoice.amount for invoice in snapshot.invoices if is_receivable(invoice)), ZERO
        )
        return BalanceSheet(
            summary=report.type_summary,
            receivables=receivables,
            equation_check=report.equation_check,
        )

    def expense_analysis(
        self,
        expenses: Sequence[Expense],
        contacts: Sequence[Contact],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> ContactAnalysis:
        """Expense totals per vendor and per status within a date range.

        Args:
            expenses: Expenses to analyse
            contacts: Contacts used to name vendors
            start_date: Optional inclusive start of the range
            end_date: Optional inclusive end of the range

        Returns:
            ContactAnalysis keyed by vendor name and by expense status
        """
        names = {contact.id: contact.name for contact in contacts}
        in_range = [
            expense
            for expense in expenses
            if (start_date is None or expense.date >= start_date)
            and (end_date is None or expense.date <= end_date)
        ]
        return ContactAnalysis(
            by_contact=_grouped_totals(
                (names.get(e.vendor_id, "Unknown"), e.amount) for e in in_range
            ),
            by_status=_grouped_totals(
                (ExpenseStatus(e.status).value, e.amount) for e in in_range
            ),
        )

    def revenue_analysis(
        self,
        invoices: Sequence[Invoice],
        contacts: Sequence[Contact],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> ContactAnalysis:
        """Invoice totals per customer and per status within an issue-date range.

        Per customer, the amount is revenue collected (paid invoices) and the
        count covers every invoice issued. Per status, the amount is the
        invoiced total.
        """
        names = {contact.id: contact.name for contact in contacts}
        in_range = [
            invoice
            for invoice in invoices
            if (start_date is None or invoice.date >= start_date)
            and (end_date is None or invoice.date <= end_date)
        ]
        return ContactAnalysis(
            by_contact=_grouped_totals(
                (
                    names.get(inv.customer_id, "Unknown"),
                    inv.amount if inv.status == InvoiceStatus.PAID else ZERO,
                )
                for inv in in_range
            ),
            by_status=_grouped_totals(
                (InvoiceStatus(inv.status).value, inv.amount) for inv in in_range
            ),
        )
