"""Account management commands."""

import click
from tallybook.cli.account_resolution import resolve_account_or_exit
from tallybook.cli.error_handling import handle_domain_error
from tallybook.cli.formatting import label, money
from tallybook.domain.account import AccountService
from tallybook.domain.entities import AccountType
from tallybook.domain.ledger import LedgerService


@click.group("account")
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    required=True,
    type=click.Choice([t.value for t in AccountType], case_sensitive=False),
    help="Account type",
)
@click.option("--code", required=True, help="Chart of accounts code (e.g., 1000)")
@click.pass_context
def create_account(ctx, name: str, account_type: str, code: str):
    """Create a new account.

    Examples:
        tallybook account create "Cash" --type asset --code 1000
        tallybook account create "Sales" --type revenue --code 4000
    """
    service = AccountService(ctx.obj["db"])

    try:
        account_id = service.create_account(name=name, type=account_type, code=code)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{name}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with balances derived from the ledger."""
    db = ctx.obj["db"]
    accounts = AccountService(db).list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    balances = LedgerService(db).account_balances()

    click.echo("\nAccounts:")
    click.echo("-" * 90)
    click.echo(f"{'Code':<8} {'Name':<24} {'Type':<10} {'Balance':>16}  ID")
    click.echo("-" * 90)
    for acc in accounts:
        click.echo(
            f"{acc.code:<8} {acc.name[:24]:<24} {label(acc.type):<10} "
            f"{money(balances.get(acc.id, 0)):>16}  {acc.id}"
        )


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--code", help="New chart of accounts code")
@click.pass_context
def update_account(ctx, account: str, name: str | None, code: str | None):
    """Rename an account or change its code.

    ACCOUNT can be an account ID, code or name.

    Examples:
        tallybook account update 1000 --name "Cash at bank"
        tallybook account update "Sales" --code 4100
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    if name is None and code is None:
        click.echo("Error: Nothing to update; pass --name or --code.", err=True)
        ctx.exit(1)

    try:
        service.update_account(account_id, name=name, code=code)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated account {account_id}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def delete_account(ctx, account: str):
    """Delete an account.

    The account can only be deleted while no transaction, recurring
    transaction or expense uses it.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    if not click.confirm(f"Are you sure you want to delete account '{account_obj.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{account_obj.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group)
