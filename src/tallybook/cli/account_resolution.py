"""CLI helpers for account and contact resolution."""

from __future__ import annotations

import click
from tallybook.cli.error_handling import handle_domain_error
from tallybook.domain.account import AccountService
from tallybook.domain.contact import ContactService
from tallybook.utils.account_resolver import resolve_account, resolve_contact


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str
) -> str:
    """Resolve account ID, code or name, or exit with a CLI error."""
    try:
        return resolve_account(account_service, account)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_contact_or_exit(
    ctx: click.Context, contact_service: ContactService, contact: str | None
) -> str | None:
    """Resolve an optional contact ID or name, or exit with a CLI error."""
    if contact is None:
        return None
    try:
        return resolve_contact(contact_service, contact)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
