"""Utility functions for tallybook."""

from tallybook.utils.date_parser import parse_date
from tallybook.utils.amount_parser import parse_amount
from tallybook.utils.account_resolver import resolve_account, resolve_contact

__all__ = ["parse_date", "parse_amount", "resolve_account", "resolve_contact"]
