"""Transaction commands."""

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
from tallybook.domain.entities import TransactionStatus, TransactionType
from tallybook.domain.transaction import TransactionService
from tallybook.utils.amount_parser import parse_non_negative_amount


@click.group("transaction")
def transaction_group():
    """Record and view ledger transactions."""
    pass


@transaction_group.command("add")
@click.option(
    "--date",
    "date_str",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", required=True, help="Transaction description")
@click.option("--amount", required=True, help="Transaction amount (e.g., 123.45)")
@click.option(
    "--type",
    "txn_type",
    required=True,
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    help="Transaction type",
)
@click.option("--debit", required=True, help="Debited account (ID, code or name)")
@click.option("--credit", required=True, help="Credited account (ID, code or name)")
@click.option("--category", help="Category label")
@click.option("--contact", help="Customer or vendor (ID or name)")
@click.option(
    "--status",
    default=TransactionStatus.COMPLETED.value,
    show_default=True,
    type=click.Choice([s.value for s in TransactionStatus], case_sensitive=False),
)
@click.option(
    "--payment/--no-payment",
    "is_payment",
    default=None,
    help="Tag as a vendor payment (or explicitly not one); untagged "
    "transactions are treated as payments when the description mentions 'payment'",
)
@click.pass_context
def add_transaction(
    ctx,
    date_str: str,
    description: str,
    amount: str,
    txn_type: str,
    debit: str,
    credit: str,
    category: str | None,
    contact: str | None,
    status: str,
    is_payment: bool | None,
):
    """Record a double-entry transaction.

    Examples:
        tallybook transaction add --amount 500 --type income --debit 1000 --credit 4000 \\
            --description "Consulting" --contact "Acme Ltd"
        tallybook transaction add --amount 120 --type expense --debit 5000 --credit 1000 \\
            --description "Paper" --contact "Office Supplies Co"
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)

    txn_date = parse_date_or_exit(ctx, date_str, "date")
    try:
        txn_amount = parse_non_negative_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    debit_id = resolve_account_or_exit(ctx, account_service, debit)
    credit_id = resolve_account_or_exit(ctx, account_service, credit)
    contact_id = resolve_contact_or_exit(ctx, ContactService(db), contact)

    try:
        transaction_id = TransactionService(db).create_transaction(
            date=txn_date,
            description=description,
            amount=txn_amount,
            type=txn_type,
            debit_account=debit_id,
            credit_account=credit_id,
            category=category,
            contact=contact_id,
            status=status,
            is_payment=is_payment,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Amount: {money(txn_amount)}")
    click.echo(f"  Debit: {debit}  Credit: {credit}")


@transaction_group.command("list")
@period_options
@click.option("--account", help="Only transactions posting to this account")
@click.option("--contact", help="Only transactions with this contact")
@click.pass_context
def list_transactions(ctx, start_date, end_date, account, contact, **period_kwargs):
    """List transactions with optional filters."""
    db = ctx.obj["db"]
    account_service = AccountService(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(period_kwargs),
    )
    account_id = resolve_account_or_exit(ctx, account_service, account) if account else None
    contact_id = resolve_contact_or_exit(ctx, ContactService(db), contact)

    transactions = TransactionService(db).list_transactions(
        start_date=start, end_date=end, account_id=account_id, contact_id=contact_id
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    names = {acc.id: acc.name for acc in account_service.list_accounts()}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 148)
    click.echo(
        f"{'Date':<12} {'Type':<9} {'Status':<10} {'Amount':>14} "
        f"{'Debit':<18} {'Credit':<18} {'Description':<30}  ID"
    )
    click.echo("-" * 148)
    for txn in transactions:
        click.echo(
            f"{str(txn.date):<12} {label(txn.type):<9} {label(txn.status):<10} "
            f"{money(txn.amount):>14} {names.get(txn.debit_account, 'Unknown')[:18]:<18} "
            f"{names.get(txn.credit_account, 'Unknown')[:18]:<18} "
            f"{txn.description[:30]:<30}  {txn.id}"
        )


@transaction_group.command("status")
@click.argument("transaction_id")
@click.argument(
    "status", type=click.Choice([s.value for s in TransactionStatus], case_sensitive=False)
)
@click.pass_context
def set_status(ctx, transaction_id: str, status: str):
    """Change a transaction's status.

    Cancelled transactions no longer count toward any balance.

    Examples:
        tallybook transaction status <id> cancelled
    """
    try:
        TransactionService(ctx.obj["db"]).update_status(transaction_id, status)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Transaction {transaction_id} is now {status}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.pass_context
def delete_transaction(ctx, transaction_id: str):
    """Delete a transaction."""
    service = TransactionService(ctx.obj["db"])
    if service.get_transaction(transaction_id) is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group)
