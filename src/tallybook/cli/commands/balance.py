"""Balance and ledger consistency commands."""

import click
from tallybook.cli.formatting import money
from tallybook.domain.balance import format_currency
from tallybook.domain.entities import AccountType
from tallybook.domain.ledger import LedgerService


@click.group("balance")
def balance_group():
    """Check the books and summarize balances."""
    pass


@balance_group.command("check")
@click.option("--strict", is_flag=True, help="Exit with status 1 when any check fails")
@click.pass_context
def check_balances(ctx, strict: bool):
    """Run the double-entry and accounting equation checks.

    Examples:
        tallybook balance check
        tallybook balance check --strict
    """
    report = LedgerService(ctx.obj["db"]).build_report()

    checks = [
        ("Transaction totals", report.transaction_check),
        ("Double entry", report.double_entry_check),
    ]
    for name, check in checks:
        status = "OK" if check.is_valid else "FAILED"
        click.echo(
            f"{name + ':':<22} {status:<7} debits {money(check.total_debits)}, "
            f"credits {money(check.total_credits)}, difference {money(check.difference)}"
        )

    equation = report.equation_check
    status = "OK" if equation.is_balanced else "FAILED"
    click.echo(
        f"{'Accounting equation:':<22} {status:<7} assets {money(equation.assets)} = "
        f"liabilities {money(equation.liabilities)} + equity {money(equation.equity)}"
        f" (difference {money(equation.difference)})"
    )

    failed = not (
        report.transaction_check.is_valid
        and report.double_entry_check.is_valid
        and equation.is_balanced
    )
    if failed and strict:
        ctx.exit(1)


@balance_group.command("summary")
@click.pass_context
def summarize_balances(ctx):
    """Show derived balances summed by account type."""
    summary = LedgerService(ctx.obj["db"]).build_report().type_summary

    click.echo("\nBalances by account type:")
    click.echo("-" * 40)
    for account_type in AccountType:
        value = getattr(summary, account_type.value)
        sign = "-" if value < 0 else ""
        click.echo(f"{account_type.value.capitalize():<12} {sign + format_currency(value):>20}")


@balance_group.command("refresh")
@click.pass_context
def refresh_balances(ctx):
    """Store derived balances on accounts and contacts."""
    report = LedgerService(ctx.obj["db"]).refresh_cached_balances()
    click.echo(
        f"Refreshed {len(report.account_balances)} account balance(s) and "
        f"{len(report.contact_balances)} contact balance(s)"
    )


def register_commands(cli):
    """Register balance commands with main CLI."""
    cli.add_command(balance_group)
