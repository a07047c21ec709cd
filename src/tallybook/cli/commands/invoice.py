"""Invoice commands."""

from datetime import date, timedelta

import click
from tallybook.cli.account_resolution import resolve_contact_or_exit
from tallybook.cli.date_filters import parse_date_or_exit
from tallybook.cli.error_handling import handle_domain_error
from tallybook.cli.formatting import label, money
from tallybook.domain.contact import ContactService
from tallybook.domain.entities import InvoiceStatus
from tallybook.domain.invoice import InvoiceService
from tallybook.utils.amount_parser import parse_non_negative_amount

INVOICE_STATUSES = [s.value for s in InvoiceStatus]


@click.group("invoice")
def invoice_group():
    """Manage customer invoices."""
    pass


@invoice_group.command("create")
@click.option("--customer", required=True, help="Customer (ID or name)")
@click.option("--amount", required=True, help="Invoice total")
@click.option("--date", "date_str", default="today", show_default=True, help="Issue date")
@click.option("--due-date", help="Due date (defaults to issue date plus --terms days)")
@click.option("--terms", default=30, show_default=True, type=int, help="Payment terms in days")
@click.option(
    "--status",
    default=InvoiceStatus.DRAFT.value,
    show_default=True,
    type=click.Choice(INVOICE_STATUSES, case_sensitive=False),
)
@click.option("--number", "invoice_number", help="Invoice number")
@click.pass_context
def create_invoice(
    ctx,
    customer: str,
    amount: str,
    date_str: str,
    due_date: str | None,
    terms: int,
    status: str,
    invoice_number: str | None,
):
    """Create an invoice for a customer.

    Examples:
        tallybook invoice create --customer "Acme Ltd" --amount 1200 --status sent
        tallybook invoice create --customer "Acme Ltd" --amount 300 --due-date 2024-02-15
    """
    db = ctx.obj["db"]
    customer_id = resolve_contact_or_exit(ctx, ContactService(db), customer)

    issue_date = parse_date_or_exit(ctx, date_str, "date")
    due = parse_date_or_exit(ctx, due_date, "due date")
    if due is None:
        due = issue_date + timedelta(days=terms)

    try:
        invoice_amount = parse_non_negative_amount(amount)
        invoice_id = InvoiceService(db).create_invoice(
            customer_id=customer_id,
            amount=invoice_amount,
            date=issue_date,
            due_date=due,
            status=status,
            invoice_number=invoice_number,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created invoice {invoice_id} for {money(invoice_amount)}, due {due}")


@invoice_group.command("list")
@click.option("--customer", help="Only invoices for this customer (ID or name)")
@click.option("--status", type=click.Choice(INVOICE_STATUSES, case_sensitive=False))
@click.pass_context
def list_invoices(ctx, customer: str | None, status: str | None):
    """List invoices."""
    db = ctx.obj["db"]
    contact_service = ContactService(db)
    customer_id = resolve_contact_or_exit(ctx, contact_service, customer)

    invoices = InvoiceService(db).list_invoices(customer_id=customer_id, status=status)
    if not invoices:
        click.echo("No invoices found.")
        return

    names = {c.id: c.name for c in contact_service.list_contacts()}

    click.echo(f"\nFound {len(invoices)} invoice(s):")
    click.echo("-" * 100)
    click.echo(
        f"{'Number':<12} {'Customer':<24} {'Issued':<12} {'Due':<12} {'Status':<9} {'Amount':>14}  ID"
    )
    click.echo("-" * 100)
    for inv in invoices:
        click.echo(
            f"{(inv.invoice_number or '-'):<12} {names.get(inv.customer_id, 'Unknown')[:24]:<24} "
            f"{str(inv.date):<12} {str(inv.due_date):<12} {label(inv.status):<9} "
            f"{money(inv.amount):>14}  {inv.id}"
        )


@invoice_group.command("status")
@click.argument("invoice_id")
@click.argument("status", type=click.Choice(INVOICE_STATUSES, case_sensitive=False))
@click.pass_context
def set_status(ctx, invoice_id: str, status: str):
    """Change an invoice's status."""
    try:
        InvoiceService(ctx.obj["db"]).update_status(invoice_id, status)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Invoice {invoice_id} is now {status}")


@invoice_group.command("refresh-overdue")
@click.option("--as-of", help="Reference date (defaults to today)")
@click.pass_context
def refresh_overdue(ctx, as_of: str | None):
    """Mark sent invoices past their due date as overdue."""
    reference = parse_date_or_exit(ctx, as_of, "as-of date") or date.today()
    changed = InvoiceService(ctx.obj["db"]).refresh_overdue(reference)
    click.echo(f"Marked {len(changed)} invoice(s) overdue as of {reference}")


@invoice_group.command("delete")
@click.argument("invoice_id")
@click.pass_context
def delete_invoice(ctx, invoice_id: str):
    """Delete an invoice."""
    service = InvoiceService(ctx.obj["db"])
    if service.get_invoice(invoice_id) is None:
        click.echo(f"Error: Invoice {invoice_id} not found", err=True)
        ctx.exit(1)

    if not click.confirm(f"Are you sure you want to delete invoice {invoice_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_invoice(invoice_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted invoice {invoice_id}")


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group)
