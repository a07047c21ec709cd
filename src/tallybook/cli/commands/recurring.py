"""Recurring transaction commands."""

from datetime import date

import click
from tallybook.cli.account_resolution import resolve_account_or_exit, resolve_contact_or_exit
from tallybook.cli.date_filters import parse_date_or_exit
from tallybook.cli.error_handling import handle_domain_error
from tallybook.cli.formatting import label, money
from tallybook.domain.account import AccountService
from tallybook.domain.contact import ContactService
from tallybook.domain.entities import RecurringFrequency, TransactionType
from tallybook.domain.recurring import RecurringService
from tallybook.utils.amount_parser import parse_non_negative_amount


@click.group("recurring")
def recurring_group():
    """Manage recurring transactions."""
    pass


@recurring_group.command("create")
@click.argument("name")
@click.option("--amount", required=True, help="Amount of each occurrence")
@click.option(
    "--type",
    "txn_type",
    required=True,
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
)
@click.option(
    "--frequency",
    required=True,
    type=click.Choice([f.value for f in RecurringFrequency], case_sensitive=False),
)
@click.option("--debit", required=True, help="Debited account (ID, code or name)")
@click.option("--credit", required=True, help="Credited account (ID, code or name)")
@click.option("--description", help="Description of each occurrence (defaults to NAME)")
@click.option("--start-date", default="today", show_default=True, help="Schedule start date")
@click.option("--end-date", help="Last date an occurrence may fall on")
@click.option("--contact", help="Customer or vendor (ID or name)")
@click.option(
    "--payment/--no-payment",
    "is_payment",
    default=None,
    help="Tag every occurrence as a vendor payment (or explicitly not one)",
)
@click.pass_context
def create_recurring(
    ctx,
    name: str,
    amount: str,
    txn_type: str,
    frequency: str,
    debit: str,
    credit: str,
    description: str | None,
    start_date: str,
    end_date: str | None,
    contact: str | None,
    is_payment: bool | None,
):
    """Create a recurring transaction.

    The first occurrence falls one period after the start date.

    Examples:
        tallybook recurring create "Office rent" --amount 2500 --type expense \\
            --frequency monthly --debit 5100 --credit 1000 --start-date 2024-01-01
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)

    try:
        recurring_amount = parse_non_negative_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    debit_id = resolve_account_or_exit(ctx, account_service, debit)
    credit_id = resolve_account_or_exit(ctx, account_service, credit)
    contact_id = resolve_contact_or_exit(ctx, ContactService(db), contact)
    start = parse_date_or_exit(ctx, start_date, "start date")
    end = parse_date_or_exit(ctx, end_date, "end date")

    service = RecurringService(db)
    try:
        recurring_id = service.create_recurring(
            name=name,
            type=txn_type,
            amount=recurring_amount,
            description=description or name,
            frequency=frequency,
            start_date=start,
            debit_account=debit_id,
            credit_account=credit_id,
            end_date=end,
            contact=contact_id,
            is_payment=is_payment,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    recurring = service.get_recurring(recurring_id)
    click.echo(f"Created recurring transaction '{name}' (ID: {recurring_id})")
    click.echo(f"  Next occurrence: {recurring.next_date}")


@recurring_group.command("list")
@click.option("--active", "active_only", is_flag=True, help="Only show active schedules")
@click.pass_context
def list_recurring(ctx, active_only: bool):
    """List recurring transactions."""
    items = RecurringService(ctx.obj["db"]).list_recurring(active_only=active_only)
    if not items:
        click.echo("No recurring transactions found.")
        return

    click.echo("\nRecurring transactions:")
    click.echo("-" * 136)
    click.echo(
        f"{'Name':<24} {'Type':<9} {'Every':<8} {'Amount':>14} {'Next':<12} "
        f"{'Ends':<12} {'Active':<7} ID"
    )
    click.echo("-" * 136)
    for item in items:
        click.echo(
            f"{item.name[:24]:<24} {label(item.type):<9} {label(item.frequency):<8} "
            f"{money(item.amount):>14} {str(item.next_date):<12} "
            f"{str(item.end_date or '-'):<12} {'yes' if item.is_active else 'no':<7} {item.id}"
        )


@recurring_group.command("run")
@click.option("--as-of", help="Record occurrences due up to this date (defaults to today)")
@click.pass_context
def run_recurring(ctx, as_of: str | None):
    """Record every recurring occurrence that has come due."""
    reference = parse_date_or_exit(ctx, as_of, "as-of date") or date.today()
    try:
        created = RecurringService(ctx.obj["db"]).run_due(reference)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded {len(created)} transaction(s) due by {reference}")


@recurring_group.command("toggle")
@click.argument("recurring_id")
@click.pass_context
def toggle_recurring(ctx, recurring_id: str):
    """Pause an active recurring transaction or resume a paused one."""
    try:
        is_active = RecurringService(ctx.obj["db"]).toggle_active(recurring_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    state = "active" if is_active else "paused"
    click.echo(f"Recurring transaction {recurring_id} is now {state}")


@recurring_group.command("delete")
@click.argument("recurring_id")
@click.pass_context
def delete_recurring(ctx, recurring_id: str):
    """Delete a recurring transaction; transactions it recorded are kept."""
    service = RecurringService(ctx.obj["db"])
    recurring = service.get_recurring(recurring_id)
    if recurring is None:
        click.echo(f"Error: Recurring transaction {recurring_id} not found", err=True)
        ctx.exit(1)

    if not click.confirm(f"Are you sure you want to delete '{recurring.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_recurring(recurring_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted recurring transaction '{recurring.name}'")


def register_commands(cli):
    """Register recurring commands with main CLI."""
    cli.add_command(recurring_group)
