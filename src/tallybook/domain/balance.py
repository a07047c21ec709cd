"""Balance engine.

Derives account and contact balances from the transaction ledger and checks
double-entry consistency. Every function is pure: inputs are treated as
immutable snapshots and results are recomputed in full on each call. Cached
``balance`` fields on accounts and contacts are never read.

Double-entry sign conventions:
- Assets/Expenses: debit increases, credit decreases
- Liabilities/Equity/Revenue: credit increases, debit decreases
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Mapping, Optional, Sequence

from tallybook.domain.entities import (
    DEBIT_NORMAL_TYPES,
    Account,
    AccountingEquationCheck,
    AccountType,
    AccountTypeSummary,
    Contact,
    ContactType,
    Invoice,
    InvoiceStatus,
    Transaction,
    TransactionBalanceCheck,
    TransactionType,
)

# Absolute tolerance for equality of monetary totals
TOLERANCE = Decimal("0.01")

CURRENCY_SYMBOL = "K"

ZERO = Decimal("0")


def _total(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


def calculate_account_balance(
    account_id: str, account_type: AccountType, transactions: Sequence[Transaction]
) -> Decimal:
    """Calculate an account balance from transaction history.

    A transaction that debits and credits the same account contributes
    nothing, since the two adjustments cancel.

    Args:
        account_id: Account to compute the balance for
        account_type: Type of the account, which selects the sign convention
        transactions: Full ledger

    Returns:
        Balance in the account's natural sign
    """
    debit_normal = account_type in DEBIT_NORMAL_TYPES
    balance = ZERO

    for txn in transactions:
        if txn.debit_account == account_id:
            balance += txn.amount if debit_normal else -txn.amount
        if txn.credit_account == account_id:
            balance += -txn.amount if debit_normal else txn.amount

    return balance


def calculate_customer_balance(
    customer_id: str, invoices: Sequence[Invoice], transactions: Sequence[Transaction]
) -> Decimal:
    """Calculate accounts receivable for a customer.

    Unpaid invoice amounts minus income received from the customer. A positive
    result means the customer owes money; a negative one is a credit from
    overpayment and is not clamped.
    """
    invoiced = _total(
        inv.amount
        for inv in invoices
        if inv.customer_id == customer_id and inv.status != InvoiceStatus.PAID
    )
    received = _total(
        txn.amount
        for txn in transactions
        if txn.contact == customer_id
        and txn.contact_type == ContactType.CUSTOMER
        and txn.type == TransactionType.INCOME
    )
    return invoiced - received


def is_vendor_payment(txn: Transaction) -> bool:
    """Return True if a transaction settles an amount owed to a vendor.

    The explicit ``is_payment`` tag wins. Untagged transactions fall back to a
    case-insensitive match of "payment" in the description.
    """
    if txn.is_payment is not None:
        return txn.is_payment
    return "payment" in (txn.description or "").lower()


def calculate_vendor_balance(vendor_id: str, transactions: Sequence[Transaction]) -> Decimal:
    """Calculate accounts payable for a vendor.

    Expenses incurred with the vendor minus payments made to the vendor. A
    positive result means money is owed to the vendor.
    """
    vendor_transactions = [
        txn
        for txn in transactions
        if txn.contact == vendor_id and txn.contact_type == ContactType.VENDOR
    ]
    incurred = _total(
        txn.amount for txn in vendor_transactions if txn.type == TransactionType.EXPENSE
    )
    paid = _total(txn.amount for txn in vendor_transactions if is_vendor_payment(txn))
    return incurred - paid


def validate_transaction_balance(
    transactions: Sequence[Transaction],
) -> TransactionBalanceCheck:
    """Compare total debits against total credits across the ledger.

    Both totals are the plain sum of transaction amounts, so the difference is
    always zero and the ledger always validates. Use ``check_double_entry``
    for a check that separates the two sides.
    """
    total_debits = _total(txn.amount for txn in transactions)
    total_credits = _total(txn.amount for txn in transactions)
    difference = abs(total_debits - total_credits)

    return TransactionBalanceCheck(
        is_valid=difference < TOLERANCE,
        total_debits=total_debits,
        total_credits=total_credits,
        difference=difference,
    )


def check_double_entry(
    accounts: Sequence[Account], transactions: Sequence[Transaction]
) -> TransactionBalanceCheck:
    """Check that every amount is posted to both a debit and a credit account.

    Debits count the amounts whose debit side names an account in the chart,
    credits count the amounts whose credit side does. A posting with one side
    outside the chart leaves the totals apart by its amount.
    """
    known = {account.id for account in accounts}
    total_debits = _total(txn.amount for txn in transactions if txn.debit_account in known)
    total_credits = _total(txn.amount for txn in transactions if txn.credit_account in known)
    difference = abs(total_debits - total_credits)

    return TransactionBalanceCheck(
        is_valid=difference < TOLERANCE,
        total_debits=total_debits,
        total_credits=total_credits,
        difference=difference,
    )


def calculate_all_account_balances(
    accounts: Sequence[Account], transactions: Sequence[Transaction]
) -> dict[str, Decimal]:
    """Calculate every account balance at once."""
    return {
        account.id: calculate_account_balance(account.id, account.type, transactions)
        for account in accounts
    }


def calculate_all_contact_balances(
    contacts: Sequence[Contact],
    invoices: Sequence[Invoice],
    transactions: Sequence[Transaction],
) -> dict[str, Decimal]:
    """Calculate every contact balance at once.

    Contacts that are neither customers nor vendors get a zero balance.
    """
    balances: dict[str, Decimal] = {}

    for contact in contacts:
        if contact.type == ContactType.CUSTOMER:
            balance = calculate_customer_balance(contact.id, invoices, transactions)
        elif contact.type == ContactType.VENDOR:
            balance = calculate_vendor_balance(contact.id, transactions)
        else:
            balance = ZERO
        balances[contact.id] = balance

    return balances


def get_account_type_summary(
    accounts: Sequence[Account], balances: Mapping[str, Decimal]
) -> AccountTypeSummary:
    """Sum derived balances by account type.

    Accounts missing from ``balances`` contribute zero.
    """
    totals = {account_type.value: ZERO for account_type in AccountType}

    for account in accounts:
        totals[AccountType(account.type).value] += balances.get(account.id, ZERO)

    return AccountTypeSummary(**totals)


def verify_accounting_equation(
    accounts: Sequence[Account], balances: Mapping[str, Decimal]
) -> AccountingEquationCheck:
    """Verify Assets = Liabilities + Equity within ``TOLERANCE``."""
    summary = get_account_type_summary(accounts, balances)
    difference = abs(summary.asset - (summary.liability + summary.equity))

    return AccountingEquationCheck(
        is_balanced=difference < TOLERANCE,
        assets=summary.asset,
        liabilities=summary.liability,
        equity=summary.equity,
        difference=difference,
    )


def format_currency(amount) -> str:
    """Format an amount for display as whole currency units.

    The sign is dropped: K1,235 for both 1234.5 and -1234.5.
    """
    value = abs(Decimal(str(amount))).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{CURRENCY_SYMBOL}{value:,.0f}"


def get_balance_color_class(balance, account_type: Optional[AccountType] = None) -> str:
    """Get the CSS color class for a balance.

    Balances are reported in each type's natural sign, so a non-negative
    balance is normal for every account type and ``account_type`` does not
    change the result.
    """
    return "text-green-600" if balance >= 0 else "text-red-600"
