"""Expense commands."""

import click
from tallybook.cli.account_resolution import resolve_account_or_exit, resolve_contact_or_exit
from tallybook.cli.date_filters import (
    parse_date_or_exit,
    period_options,
    pop_period_flags,
    resolve_cli_date_range,
)
from tallybook.cli.error_handling import handle_domain_error
from tallybook.cli.formatting import label, money
from tallybook.domain.account import AccountService
from tallybook.domain.contact import ContactService
from tallybook.domain.entities import ExpenseStatus
from tallybook.domain.expense import ExpenseService
from tallybook.utils.amount_parser import parse_non_negative_amount

EXPENSE_STATUSES = [s.value for s in ExpenseStatus]


@click.group("expense")
def expense_group():
    """Track vendor expense claims."""
    pass


@expense_group.command("create")
@click.option("--vendor", required=True, help="Vendor (ID or name)")
@click.option("--account", required=True, help="Account booked to (ID, code or name)")
@click.option("--amount", required=True, help="Expense amount")
@click.option("--date", "date_str", default="today", show_default=True, help="Expense date")
@click.option(
    "--status",
    default=ExpenseStatus.DRAFT.value,
    show_default=True,
    type=click.Choice(EXPENSE_STATUSES, case_sensitive=False),
)
@click.option("--description", help="Note")
@click.pass_context
def create_expense(
    ctx,
    vendor: str,
    account: str,
    amount: str,
    date_str: str,
    status: str,
    description: str | None,
):
    """Record an expense claim against a vendor.

    Examples:
        tallybook expense create --vendor "Office Supplies Co" --account 5000 --amount 45.50
        tallybook expense create --vendor "Office Supplies Co" --account "Office Supplies" \\
            --amount 120 --status submitted
    """
    db = ctx.obj["db"]
    vendor_id = resolve_contact_or_exit(ctx, ContactService(db), vendor)
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    expense_date = parse_date_or_exit(ctx, date_str, "date")

    try:
        expense_amount = parse_non_negative_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        expense_id = ExpenseService(db).create_expense(
            vendor_id=vendor_id,
            account_id=account_id,
            amount=expense_amount,
            date=expense_date,
            status=status,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created expense {expense_id} for {money(expense_amount)} ({status})")


@expense_group.command("list")
@period_options
@click.option("--vendor", help="Only expenses for this vendor (ID or name)")
@click.option("--status", type=click.Choice(EXPENSE_STATUSES, case_sensitive=False))
@click.pass_context
def list_expenses(ctx, start_date, end_date, vendor, status, **period_kwargs):
    """List expenses, newest first."""
    db = ctx.obj["db"]
    contact_service = ContactService(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(period_kwargs),
    )
    vendor_id = resolve_contact_or_exit(ctx, contact_service, vendor)

    expenses = ExpenseService(db).list_expenses(
        vendor_id=vendor_id, status=status, start_date=start, end_date=end
    )
    if not expenses:
        click.echo("No expenses found.")
        return

    vendors = {c.id: c.name for c in contact_service.list_contacts()}
    accounts = {a.id: a.name for a in AccountService(db).list_accounts()}

    click.echo(f"\nFound {len(expenses)} expense(s):")
    click.echo("-" * 104)
    click.echo(
        f"{'Date':<12} {'Vendor':<22} {'Account':<20} {'Status':<11} {'Amount':>14}  ID"
    )
    click.echo("-" * 104)
    for expense in expenses:
        click.echo(
            f"{str(expense.date):<12} {vendors.get(expense.vendor_id, 'Unknown')[:22]:<22} "
            f"{accounts.get(expense.account_id, 'Unknown')[:20]:<20} "
            f"{label(expense.status):<11} {money(expense.amount):>14}  {expense.id}"
        )
    click.echo("-" * 104)
    click.echo(f"{'Total':<67} {money(sum(e.amount for e in expenses)):>14}")


@expense_group.command("update")
@click.argument("expense_id")
@click.option("--vendor", help="Vendor (ID or name)")
@click.option("--account", help="Account booked to (ID, code or name)")
@click.option("--amount", help="Expense amount")
@click.option("--date", "date_str", help="Expense date")
@click.option("--status", type=click.Choice(EXPENSE_STATUSES, case_sensitive=False))
@click.option("--description", help="Note")
@click.pass_context
def update_expense(
    ctx,
    expense_id: str,
    vendor: str | None,
    account: str | None,
    amount: str | None,
    date_str: str | None,
    status: str | None,
    description: str | None,
):
    """Update an expense.

    Updates only the fields that are provided.

    Examples:
        tallybook expense update <id> --status approved
        tallybook expense update <id> --amount 50 --account 5000
    """
    db = ctx.obj["db"]
    vendor_id = resolve_contact_or_exit(ctx, ContactService(db), vendor)
    account_id = resolve_account_or_exit(ctx, AccountService(db), account) if account else None
    expense_date = parse_date_or_exit(ctx, date_str, "date")

    expense_amount = None
    if amount is not None:
        try:
            expense_amount = parse_non_negative_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    try:
        ExpenseService(db).update_expense(
            expense_id,
            vendor_id=vendor_id,
            account_id=account_id,
            amount=expense_amount,
            status=status,
            date=expense_date,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated expense {expense_id}")


@expense_group.command("delete")
@click.argument("expense_id")
@click.pass_context
def delete_expense(ctx, expense_id: str):
    """Delete an expense."""
    service = ExpenseService(ctx.obj["db"])
    if service.get_expense(expense_id) is None:
        click.echo(f"Error: Expense {expense_id} not found", err=True)
        ctx.exit(1)

    if not click.confirm(f"Are you sure you want to delete expense {expense_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_expense(expense_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted expense {expense_id}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group)
