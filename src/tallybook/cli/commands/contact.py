"""Contact management commands."""

import click
from tallybook.cli.account_resolution import resolve_contact_or_exit
from tallybook.cli.error_handling import handle_domain_error
from tallybook.cli.formatting import label, money
from tallybook.domain.contact import ContactService
from tallybook.domain.entities import ContactType
from tallybook.domain.ledger import LedgerService

CONTACT_TYPES = [t.value for t in ContactType]


@click.group("contact")
def contact_group():
    """Manage customers and vendors."""
    pass


@contact_group.command("create")
@click.argument("name", metavar="CONTACT_NAME")
@click.option(
    "--type",
    "contact_type",
    required=True,
    type=click.Choice(CONTACT_TYPES, case_sensitive=False),
    help="Contact type",
)
@click.option("--email", help="Email address")
@click.pass_context
def create_contact(ctx, name: str, contact_type: str, email: str | None):
    """Create a customer or vendor.

    Examples:
        tallybook contact create "Acme Ltd" --type customer
        tallybook contact create "Office Supplies Co" --type vendor --email ap@example.com
    """
    service = ContactService(ctx.obj["db"])

    try:
        contact_id = service.create_contact(name=name, type=contact_type, email=email)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {contact_type} '{name}' (ID: {contact_id})")


@contact_group.command("list")
@click.option(
    "--type",
    "contact_type",
    type=click.Choice(CONTACT_TYPES, case_sensitive=False),
    help="Only show customers or vendors",
)
@click.pass_context
def list_contacts(ctx, contact_type: str | None):
    """List contacts with balances derived from invoices and transactions.

    A positive customer balance is owed to you; a positive vendor balance is
    owed by you.
    """
    db = ctx.obj["db"]
    contacts = ContactService(db).list_contacts(type=contact_type)
    if not contacts:
        click.echo("No contacts found.")
        return

    balances = LedgerService(db).contact_balances()

    click.echo("\nContacts:")
    click.echo("-" * 90)
    click.echo(f"{'Name':<28} {'Type':<10} {'Balance':>16}  ID")
    click.echo("-" * 90)
    for contact in contacts:
        click.echo(
            f"{contact.name[:28]:<28} {label(contact.type):<10} "
            f"{money(balances.get(contact.id, 0)):>16}  {contact.id}"
        )


@contact_group.command("update")
@click.argument("contact", metavar="CONTACT")
@click.option("--name", help="New name")
@click.option("--email", help="New email address")
@click.pass_context
def update_contact(ctx, contact: str, name: str | None, email: str | None):
    """Update a contact's name or email.

    CONTACT can be a contact ID or name.
    """
    service = ContactService(ctx.obj["db"])
    contact_id = resolve_contact_or_exit(ctx, service, contact)

    if name is None and email is None:
        click.echo("Error: Nothing to update; pass --name or --email.", err=True)
        ctx.exit(1)

    try:
        service.update_contact(contact_id, name=name, email=email)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated contact {contact_id}")


@contact_group.command("delete")
@click.argument("contact", metavar="CONTACT")
@click.pass_context
def delete_contact(ctx, contact: str):
    """Delete a contact with no transactions, invoices or expenses."""
    service = ContactService(ctx.obj["db"])
    contact_id = resolve_contact_or_exit(ctx, service, contact)
    contact_obj = service.get_contact(contact_id)

    if not click.confirm(f"Are you sure you want to delete contact '{contact_obj.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_contact(contact_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted contact '{contact_obj.name}'")


def register_commands(cli):
    """Register contact commands with main CLI."""
    cli.add_command(contact_group)
