"""Reporting commands."""

from datetime import date

import click
from tallybook.cli.date_filters import (
    parse_date_or_exit,
    period_options,
    pop_period_flags,
    resolve_cli_date_range,
)
from tallybook.cli.formatting import money
from tallybook.domain.expense import ExpenseService
from tallybook.domain.reports import ReportService
from tallybook.utils.date_parser import get_date_range


@click.group("report")
def report_group():
    """Financial reports derived from the ledger."""
    pass


def _echo_period_table(title: str, rows, net_label: str) -> None:
    if not rows:
        click.echo("No transactions found.")
        return

    click.echo(f"\n{title}")
    click.echo("-" * 78)
    click.echo(
        f"{'Period':<10} {'Income':>16} {'Expenses':>16} {'Transfers':>16} {net_label:>16}"
    )
    click.echo("-" * 78)
    for row in rows:
        click.echo(
            f"{row.period:<10} {money(row.income):>16} {money(row.expenses):>16} "
            f"{money(row.transfers):>16} {money(row.net):>16}"
        )
    click.echo("-" * 78)
    income = sum(row.income for row in rows)
    expenses = sum(row.expenses for row in rows)
    transfers = sum(row.transfers for row in rows)
    click.echo(
        f"{'Total':<10} {money(income):>16} {money(expenses):>16} "
        f"{money(transfers):>16} {money(income - expenses):>16}"
    )


@report_group.command("dashboard")
@period_options
@click.option("--as-of", help="Date used to count overdue invoices (defaults to today)")
@click.pass_context
def dashboard(ctx, start_date, end_date, as_of, **period_kwargs):
    """Headline figures for a period (defaults to this month)."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(period_kwargs),
        default_range=get_date_range("this-month"),
    )
    reference = parse_date_or_exit(ctx, as_of, "as-of date") or date.today()

    service = ReportService(ctx.obj["db"])
    summary = service.dashboard_summary(service.load_snapshot(), start, end, reference)

    click.echo(f"\nDashboard ({summary.start_date} to {summary.end_date})")
    click.echo("-" * 40)
    click.echo(f"{'Cash and assets:':<20} {money(summary.total_balance):>18}")
    click.echo(f"{'Income:':<20} {money(summary.income):>18}")
    click.echo(f"{'Expenses:':<20} {money(summary.expenses):>18}")
    click.echo(f"{'Net income:':<20} {money(summary.net_income):>18}")
    click.echo(f"{'Invoiced:':<20} {money(summary.total_invoiced):>18}")
    click.echo(f"{'Paid:':<20} {money(summary.total_paid):>18}")
    click.echo(f"{'Outstanding:':<20} {money(summary.outstanding):>18}")
    click.echo(f"{'Overdue invoices:':<20} {summary.overdue_invoices:>18}")


@report_group.command("pnl")
@period_options
@click.option("--yearly", is_flag=True, help="Group by year instead of month")
@click.pass_context
def profit_and_loss(ctx, start_date, end_date, yearly, **period_kwargs):
    """Profit and loss per period, excluding cancelled transactions."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(period_kwargs),
    )
    service = ReportService(ctx.obj["db"])
    rows = service.profit_and_loss(
        service.load_snapshot().transactions, start, end, group_by_month=not yearly
    )
    _echo_period_table("Profit and loss:", rows, "Net")


@report_group.command("cashflow")
@period_options
@click.option("--yearly", is_flag=True, help="Group by year instead of month")
@click.pass_context
def cash_flow(ctx, start_date, end_date, yearly, **period_kwargs):
    """Cash in and out per period, counting completed transactions only."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(period_kwargs),
    )
    service = ReportService(ctx.obj["db"])
    rows = service.cash_flow(
        service.load_snapshot().transactions, start, end, group_by_month=not yearly
    )
    _echo_period_table("Cash flow:", rows, "Net flow")


@report_group.command("aging")
@click.option("--as-of", help="Aging reference date (defaults to today)")
@click.pass_context
def aging(ctx, as_of):
    """Unpaid invoices bucketed by days past due."""
    reference = parse_date_or_exit(ctx, as_of, "as-of date") or date.today()
    service = ReportService(ctx.obj["db"])
    result = service.receivables_aging(service.load_snapshot().invoices, reference)

    click.echo(f"\nReceivables aging as of {result.as_of}")
    click.echo("-" * 32)
    for bucket, value in result.buckets.items():
        click.echo(f"{bucket:<10} {money(value):>20}")
    click.echo("-" * 32)
    click.echo(f"{'Total':<10} {money(result.total):>20}")


@report_group.command("contacts")
@click.pass_context
def contacts(ctx):
    """Customer and vendor counts with their balance totals."""
    service = ReportService(ctx.obj["db"])
    snapshot = service.load_snapshot()
    balances = service.ledger.build_report(snapshot).contact_balances
    summary = service.contacts_summary(snapshot.contacts, balances)

    click.echo(f"Contacts: {summary.total_contacts}")
    click.echo(
        f"Customers: {summary.customers} "
        f"(owed to you: {money(summary.total_customer_balance)})"
    )
    click.echo(
        f"Vendors: {summary.vendors} (owed by you: {money(summary.total_vendor_balance)})"
    )


@report_group.command("balance-sheet")
@click.pass_context
def balance_sheet(ctx):
    """Balances by account type with open receivables."""
    service = ReportService(ctx.obj["db"])
    sheet = service.balance_sheet(service.load_snapshot())
    summary = sheet.summary

    click.echo("\nBalance sheet")
    click.echo("-" * 40)
    for name, value in [
        ("Assets", summary.asset),
        ("Liabilities", summary.liability),
        ("Equity", summary.equity),
        ("Revenue", summary.revenue),
        ("Expenses", summary.expense),
    ]:
        click.echo(f"{name + ':':<20} {money(value):>18}")
    click.echo("-" * 40)
    click.echo(f"{'Net income:':<20} {money(sheet.net_income):>18}")
    click.echo(f"{'Receivables:':<20} {money(sheet.receivables):>18}")
    status = "OK" if sheet.equation_check.is_balanced else "FAILED"
    click.echo(
        f"{'Equation:':<20} {status} (difference "
        f"{money(sheet.equation_check.difference)})"
    )


def _echo_analysis(title: str, contact_heading: str, analysis) -> None:
    if not analysis.by_status:
        click.echo("Nothing recorded in this period.")
        return

    for heading, rows in [(contact_heading, analysis.by_contact), ("Status", analysis.by_status)]:
        click.echo(f"\n{title} by {heading.lower()}:")
        click.echo("-" * 56)
        click.echo(f"{heading:<28} {'Count':>6} {'Amount':>20}")
        click.echo("-" * 56)
        for row in rows:
            click.echo(f"{row.key[:28]:<28} {row.count:>6} {money(row.amount):>20}")


@report_group.command("expenses")
@period_options
@click.pass_context
def expense_analysis(ctx, start_date, end_date, **period_kwargs):
    """Expense totals per vendor and per status."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(period_kwargs),
    )
    db = ctx.obj["db"]
    service = ReportService(db)
    analysis = service.expense_analysis(
        ExpenseService(db).list_expenses(),
        service.load_snapshot().contacts,
        start_date=start,
        end_date=end,
    )
    _echo_analysis("Expenses", "Vendor", analysis)


@report_group.command("revenue")
@period_options
@click.pass_context
def revenue_analysis(ctx, start_date, end_date, **period_kwargs):
    """Revenue collected per customer and invoiced totals per status."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(period_kwargs),
    )
    service = ReportService(ctx.obj["db"])
    snapshot = service.load_snapshot()
    analysis = service.revenue_analysis(
        snapshot.invoices, snapshot.contacts, start_date=start, end_date=end
    )
    _echo_analysis("Revenue", "Customer", analysis)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group)
