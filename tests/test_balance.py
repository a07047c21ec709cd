"""Tests for the balance engine."""

from datetime import date
from decimal import Decimal

import pytest

from tallybook.domain.balance import (
    calculate_account_balance,
    calculate_all_account_balances,
    calculate_all_contact_balances,
    calculate_customer_balance,
    calculate_vendor_balance,
    check_double_entry,
    format_currency,
    get_account_type_summary,
    get_balance_color_class,
    is_vendor_payment,
    validate_transaction_balance,
    verify_accounting_equation,
)
from tallybook.domain.entities import (
    Account,
    AccountType,
    Contact,
    ContactType,
    Invoice,
    InvoiceStatus,
    Transaction,
    TransactionType,
)


def _txn(debit, credit, amount, **kwargs):
    fields = {
        "id": kwargs.pop("id", f"{debit}-{credit}-{amount}"),
        "date": date(2024, 1, 1),
        "description": "",
        "amount": Decimal(str(amount)),
        "type": TransactionType.TRANSFER,
        "debit_account": debit,
        "credit_account": credit,
    }
    fields.update(kwargs)
    return Transaction(**fields)


def _invoice(customer, amount, status=InvoiceStatus.SENT, invoice_id="inv"):
    return Invoice(
        id=invoice_id,
        customer_id=customer,
        amount=Decimal(str(amount)),
        status=status,
        date=date(2024, 1, 1),
        due_date=date(2024, 1, 31),
    )


def _account(account_id, account_type, code="1000"):
    return Account(id=account_id, name=account_id.title(), type=account_type, code=code)


class TestAccountBalance:
    """Tests for calculate_account_balance."""

    def test_cash_sale_example(self):
        transactions = [_txn("cash", "revenue", 500)]

        assert calculate_account_balance("cash", AccountType.ASSET, transactions) == Decimal("500")
        assert calculate_account_balance(
            "revenue", AccountType.REVENUE, transactions
        ) == Decimal("500")

    @pytest.mark.parametrize("account_type", [AccountType.ASSET, AccountType.EXPENSE])
    def test_debit_normal_types(self, account_type):
        base = [_txn("acct", "other", 100, id="t1")]
        before = calculate_account_balance("acct", account_type, base)

        debited = calculate_account_balance(
            "acct", account_type, base + [_txn("acct", "other", 40, id="t2")]
        )
        credited = calculate_account_balance(
            "acct", account_type, base + [_txn("other", "acct", 40, id="t3")]
        )

        assert debited - before == Decimal("40")
        assert credited - before == Decimal("-40")

    @pytest.mark.parametrize(
        "account_type", [AccountType.LIABILITY, AccountType.EQUITY, AccountType.REVENUE]
    )
    def test_credit_normal_types(self, account_type):
        base = [_txn("other", "acct", 100, id="t1")]
        before = calculate_account_balance("acct", account_type, base)

        debited = calculate_account_balance(
            "acct", account_type, base + [_txn("acct", "other", 40, id="t2")]
        )
        credited = calculate_account_balance(
            "acct", account_type, base + [_txn("other", "acct", 40, id="t3")]
        )

        assert debited - before == Decimal("-40")
        assert credited - before == Decimal("40")

    @pytest.mark.parametrize("account_type", list(AccountType))
    def test_self_posting_nets_to_zero(self, account_type):
        transactions = [_txn("acct", "acct", 250)]

        assert calculate_account_balance("acct", account_type, transactions) == 0

    def test_accepts_plain_string_type(self):
        transactions = [_txn("cash", "revenue", 75)]

        assert calculate_account_balance("cash", "asset", transactions) == Decimal("75")

    def test_unknown_account_is_zero(self):
        assert calculate_account_balance("missing", AccountType.ASSET, [_txn("a", "b", 5)]) == 0

    def test_empty_ledger(self):
        assert calculate_account_balance("cash", AccountType.ASSET, []) == 0


class TestCustomerBalance:
    """Tests for calculate_customer_balance."""

    def test_no_invoices_or_payments(self):
        assert calculate_customer_balance("c1", [], []) == 0

    def test_unpaid_invoice_then_payment(self):
        invoices = [_invoice("c1", 200)]

        assert calculate_customer_balance("c1", invoices, []) == Decimal("200")

        payment = _txn(
            "cash",
            "revenue",
            200,
            type=TransactionType.INCOME,
            contact="c1",
            contact_type=ContactType.CUSTOMER,
        )
        assert calculate_customer_balance("c1", invoices, [payment]) == 0

    def test_paid_invoices_are_excluded(self):
        invoices = [
            _invoice("c1", 200, InvoiceStatus.PAID, "i1"),
            _invoice("c1", 50, InvoiceStatus.DRAFT, "i2"),
            _invoice("c1", 25, InvoiceStatus.OVERDUE, "i3"),
        ]

        assert calculate_customer_balance("c1", invoices, []) == Decimal("75")

    def test_other_customers_ignored(self):
        invoices = [_invoice("c2", 300)]
        income = _txn(
            "cash",
            "revenue",
            100,
            type=TransactionType.INCOME,
            contact="c2",
            contact_type=ContactType.CUSTOMER,
        )

        assert calculate_customer_balance("c1", invoices, [income]) == 0

    def test_only_customer_income_counts(self):
        invoices = [_invoice("c1", 300)]
        transactions = [
            _txn(
                "cash",
                "revenue",
                100,
                id="t1",
                type=TransactionType.EXPENSE,
                contact="c1",
                contact_type=ContactType.CUSTOMER,
            ),
            _txn(
                "cash",
                "revenue",
                100,
                id="t2",
                type=TransactionType.INCOME,
                contact="c1",
                contact_type=ContactType.VENDOR,
            ),
        ]

        assert calculate_customer_balance("c1", invoices, transactions) == Decimal("300")

    def test_overpayment_goes_negative(self):
        income = _txn(
            "cash",
            "revenue",
            150,
            type=TransactionType.INCOME,
            contact="c1",
            contact_type=ContactType.CUSTOMER,
        )

        assert calculate_customer_balance("c1", [_invoice("c1", 100)], [income]) == Decimal("-50")


class TestVendorBalance:
    """Tests for vendor balances and payment detection."""

    def _vendor_txn(self, amount, description="", txn_type=TransactionType.EXPENSE, **kwargs):
        return _txn(
            "supplies",
            "payables",
            amount,
            id=kwargs.pop("id", f"v-{description}-{amount}"),
            description=description,
            type=txn_type,
            contact="v1",
            contact_type=ContactType.VENDOR,
            **kwargs,
        )

    def test_no_transactions(self):
        assert calculate_vendor_balance("v1", []) == 0

    def test_expenses_are_owed(self):
        transactions = [self._vendor_txn(100, "Paper"), self._vendor_txn(50, "Toner")]

        assert calculate_vendor_balance("v1", transactions) == Decimal("150")

    def test_payment_description_fallback(self):
        transactions = [
            self._vendor_txn(100, "Paper"),
            self._vendor_txn(60, "PAYMENT for paper", TransactionType.TRANSFER),
        ]

        assert calculate_vendor_balance("v1", transactions) == Decimal("40")

    def test_payment_tag_without_description(self):
        transactions = [
            self._vendor_txn(100, "Paper"),
            self._vendor_txn(100, "Bank transfer", TransactionType.TRANSFER, is_payment=True),
        ]

        assert calculate_vendor_balance("v1", transactions) == 0

    def test_payment_tag_false_overrides_description(self):
        txn = self._vendor_txn(100, "Late payment fee", is_payment=False)

        assert not is_vendor_payment(txn)
        assert calculate_vendor_balance("v1", [txn]) == Decimal("100")

    def test_expense_payment_counts_both_ways(self):
        # An expense that is also a payment is added and subtracted
        txn = self._vendor_txn(80, "Payment on delivery")

        assert calculate_vendor_balance("v1", [txn]) == 0

    def test_customer_transactions_ignored(self):
        txn = _txn(
            "supplies",
            "payables",
            90,
            type=TransactionType.EXPENSE,
            contact="v1",
            contact_type=ContactType.CUSTOMER,
        )

        assert calculate_vendor_balance("v1", [txn]) == 0


class TestDoubleEntry:
    """Tests for double-entry validation."""

    def test_empty_ledger_balances(self):
        check = validate_transaction_balance([])

        assert check.is_valid
        assert check.total_debits == 0
        assert check.total_credits == 0
        assert check.difference == 0

    def test_totals_match_by_construction(self):
        transactions = [_txn("a", "b", 100, id="t1"), _txn("c", "d", "23.45", id="t2")]

        check = validate_transaction_balance(transactions)

        assert check.is_valid
        assert check.total_debits == Decimal("123.45")
        assert check.total_credits == Decimal("123.45")

    def test_check_double_entry_with_known_accounts(self):
        accounts = [_account("cash", AccountType.ASSET), _account("sales", AccountType.REVENUE)]

        check = check_double_entry(accounts, [_txn("cash", "sales", 500)])

        assert check.is_valid
        assert check.total_debits == Decimal("500")
        assert check.difference == 0

    def test_check_double_entry_detects_orphaned_side(self):
        accounts = [_account("cash", AccountType.ASSET), _account("sales", AccountType.REVENUE)]
        transactions = [
            _txn("cash", "sales", 500, id="t1"),
            _txn("cash", "deleted", 75, id="t2"),
        ]

        check = check_double_entry(accounts, transactions)

        assert not check.is_valid
        assert check.total_debits == Decimal("575")
        assert check.total_credits == Decimal("500")
        assert check.difference == Decimal("75")


class TestAllBalances:
    """Tests for batch calculations."""

    def test_all_account_balances_is_repeatable(self):
        accounts = [_account("cash", AccountType.ASSET), _account("sales", AccountType.REVENUE)]
        transactions = [_txn("cash", "sales", 500)]

        first = calculate_all_account_balances(accounts, transactions)
        second = calculate_all_account_balances(accounts, transactions)

        assert first == second
        assert first is not second
        assert first == {"cash": Decimal("500"), "sales": Decimal("500")}

    def test_cached_balance_is_ignored(self):
        account = Account(
            id="cash", name="Cash", type=AccountType.ASSET, code="1000", balance=Decimal("999")
        )

        assert calculate_all_account_balances([account], []) == {"cash": 0}

    def test_all_contact_balances_dispatch_on_type(self):
        contacts = [
            Contact(id="c1", name="Acme", type=ContactType.CUSTOMER),
            Contact(id="v1", name="Supplies", type=ContactType.VENDOR),
        ]
        invoices = [_invoice("c1", 200)]
        transactions = [
            _txn(
                "supplies",
                "payables",
                70,
                type=TransactionType.EXPENSE,
                contact="v1",
                contact_type=ContactType.VENDOR,
            )
        ]

        balances = calculate_all_contact_balances(contacts, invoices, transactions)

        assert balances == {"c1": Decimal("200"), "v1": Decimal("70")}


class TestAccountingEquation:
    """Tests for the type summary and equation check."""

    @pytest.fixture
    def accounts(self):
        return [
            _account("assets", AccountType.ASSET, "1000"),
            _account("loans", AccountType.LIABILITY, "2000"),
            _account("capital", AccountType.EQUITY, "3000"),
        ]

    def test_balanced(self, accounts):
        balances = {
            "assets": Decimal("1000"),
            "loans": Decimal("400"),
            "capital": Decimal("600"),
        }

        check = verify_accounting_equation(accounts, balances)

        assert check.is_balanced
        assert check.difference < Decimal("0.01")

    def test_unbalanced(self, accounts):
        balances = {
            "assets": Decimal("1000"),
            "loans": Decimal("400"),
            "capital": Decimal("500"),
        }

        check = verify_accounting_equation(accounts, balances)

        assert not check.is_balanced
        assert check.difference == Decimal("100")
        assert check.assets == Decimal("1000")
        assert check.liabilities == Decimal("400")
        assert check.equity == Decimal("500")

    def test_within_tolerance(self, accounts):
        balances = {
            "assets": Decimal("1000.004"),
            "loans": Decimal("400"),
            "capital": Decimal("600"),
        }

        assert verify_accounting_equation(accounts, balances).is_balanced

    def test_type_summary(self, accounts):
        accounts = accounts + [
            _account("more-assets", AccountType.ASSET, "1100"),
            _account("sales", AccountType.REVENUE, "4000"),
        ]
        balances = {
            "assets": Decimal("10"),
            "more-assets": Decimal("5"),
            "loans": Decimal("3"),
            "sales": Decimal("7"),
        }

        summary = get_account_type_summary(accounts, balances)

        assert summary.asset == Decimal("15")
        assert summary.liability == Decimal("3")
        assert summary.equity == 0
        assert summary.revenue == Decimal("7")
        assert summary.expense == 0


class TestPresentation:
    """Tests for display helpers."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (Decimal("0"), "K0"),
            (Decimal("1234.5"), "K1,235"),
            (Decimal("-1234.5"), "K1,235"),
            (Decimal("999.49"), "K999"),
            (1500000, "K1,500,000"),
            (12.5, "K13"),
        ],
    )
    def test_format_currency(self, amount, expected):
        assert format_currency(amount) == expected

    def test_balance_color_class(self):
        assert get_balance_color_class(Decimal("0")) == "text-green-600"
        assert get_balance_color_class(Decimal("10")) == "text-green-600"
        assert get_balance_color_class(Decimal("-0.01")) == "text-red-600"

    @pytest.mark.parametrize("account_type", list(AccountType))
    def test_balance_color_ignores_account_type(self, account_type):
        assert get_balance_color_class(Decimal("-5"), account_type) == "text-red-600"
        assert get_balance_color_class(Decimal("5"), account_type) == "text-green-600"
