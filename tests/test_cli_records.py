"""Tests for expense commands and record update, delete and toggle commands."""

from tallybook.cli.main import cli


def _invoke(cli_runner, temp_db, *args, answer=None):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], input=answer)


def _created_expense_id(output):
    # "Created expense <id> for K45.50 (draft)"
    return output.split("Created expense ")[1].split(" ")[0]


def test_expense_create_list_and_delete(cli_runner, temp_db, chart_of_accounts, sample_contacts):
    result = _invoke(
        cli_runner, temp_db, "expense", "create", "--vendor", "Office Supplies Co",
        "--account", "5000", "--amount", "45.50", "--date", "2024-01-08",
        "--description", "Printer paper",
    )
    assert result.exit_code == 0, result.output
    assert "for K45.50 (draft)" in result.output
    expense_id = _created_expense_id(result.output)

    result = _invoke(cli_runner, temp_db, "expense", "list", "--start-date", "2024-01-01")
    assert "Found 1 expense(s)" in result.output
    assert "Office Supplies Co" in result.output
    assert "K45.50" in result.output

    result = _invoke(cli_runner, temp_db, "expense", "delete", expense_id, answer="n\n")
    assert "Deletion cancelled." in result.output

    result = _invoke(cli_runner, temp_db, "expense", "delete", expense_id, answer="y\n")
    assert result.exit_code == 0, result.output
    assert f"Deleted expense {expense_id}" in result.output

    result = _invoke(cli_runner, temp_db, "expense", "list")
    assert "No expenses found." in result.output


def test_expense_update_status(cli_runner, temp_db, chart_of_accounts, sample_contacts):
    result = _invoke(
        cli_runner, temp_db, "expense", "create", "--vendor", "Office Supplies Co",
        "--account", "Office Supplies", "--amount", "120", "--status", "submitted",
    )
    expense_id = _created_expense_id(result.output)

    result = _invoke(cli_runner, temp_db, "expense", "update", expense_id, "--status", "approved")
    assert result.exit_code == 0, result.output

    result = _invoke(cli_runner, temp_db, "expense", "list", "--status", "approved")
    assert "Found 1 expense(s)" in result.output
    assert "approved" in result.output


def test_expense_for_customer_rejected(cli_runner, temp_db, chart_of_accounts, sample_contacts):
    result = _invoke(
        cli_runner, temp_db, "expense", "create", "--vendor", "Acme Ltd",
        "--account", "5000", "--amount", "10",
    )

    assert result.exit_code == 1
    assert "is a customer, not a vendor" in result.output


def test_expense_invalid_amount(cli_runner, temp_db, chart_of_accounts, sample_contacts):
    result = _invoke(
        cli_runner, temp_db, "expense", "create", "--vendor", "Office Supplies Co",
        "--account", "5000", "--amount", "lots",
    )

    assert result.exit_code == 1
    assert "Invalid amount format" in result.output


def test_account_update_and_delete(cli_runner, temp_db, chart_of_accounts):
    result = _invoke(cli_runner, temp_db, "account", "update", "1100", "--name", "Debtors")
    assert result.exit_code == 0, result.output

    result = _invoke(cli_runner, temp_db, "account", "list")
    assert "Debtors" in result.output

    result = _invoke(cli_runner, temp_db, "account", "delete", "Debtors", answer="y\n")
    assert result.exit_code == 0, result.output
    assert "Deleted account 'Debtors'" in result.output


def test_account_update_needs_a_field(cli_runner, temp_db, chart_of_accounts):
    result = _invoke(cli_runner, temp_db, "account", "update", "1000")

    assert result.exit_code == 1
    assert "Nothing to update" in result.output


def test_account_delete_in_use(cli_runner, temp_db, sample_ledger):
    result = _invoke(cli_runner, temp_db, "account", "delete", "1000", answer="y\n")

    assert result.exit_code == 1
    assert "Cannot delete account 'Cash'" in result.output


def test_contact_update_and_delete(cli_runner, temp_db, sample_contacts):
    result = _invoke(
        cli_runner, temp_db, "contact", "update", "Office Supplies Co", "--name", "Paper Co"
    )
    assert result.exit_code == 0, result.output

    result = _invoke(cli_runner, temp_db, "contact", "delete", "Paper Co", answer="y\n")
    assert "Deleted contact 'Paper Co'" in result.output

    result = _invoke(cli_runner, temp_db, "contact", "list", "--type", "vendor")
    assert "No contacts found" in result.output


def test_transaction_cancel_moves_balances(cli_runner, temp_db, sample_ledger):
    [sale] = [t for t in temp_db.list_transactions() if t.description == "Consulting"]

    result = _invoke(cli_runner, temp_db, "transaction", "status", sale.id, "cancelled")
    assert result.exit_code == 0, result.output
    assert f"Transaction {sale.id} is now cancelled" in result.output

    result = _invoke(cli_runner, temp_db, "account", "list")
    assert "K880.00" in result.output


def test_transaction_delete_missing(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "transaction", "delete", "nope", answer="y\n")

    assert result.exit_code == 1
    assert "Transaction nope not found" in result.output


def test_invoice_delete(cli_runner, temp_db, sample_ledger):
    [sent] = temp_db.list_invoices(status="sent")

    result = _invoke(cli_runner, temp_db, "invoice", "delete", sent.id, answer="y\n")

    assert result.exit_code == 0, result.output
    assert f"Deleted invoice {sent.id}" in result.output


def test_recurring_toggle_and_delete(cli_runner, temp_db, chart_of_accounts):
    result = _invoke(
        cli_runner, temp_db, "recurring", "create", "Supplies box", "--amount", "40",
        "--type", "expense", "--frequency", "monthly", "--debit", "5000", "--credit", "1000",
        "--start-date", "2024-01-10",
    )
    assert result.exit_code == 0, result.output
    [recurring] = temp_db.list_recurring()

    result = _invoke(cli_runner, temp_db, "recurring", "toggle", recurring.id)
    assert f"Recurring transaction {recurring.id} is now paused" in result.output

    result = _invoke(cli_runner, temp_db, "recurring", "run", "--as-of", "2024-03-15")
    assert "Recorded 0 transaction(s)" in result.output

    result = _invoke(cli_runner, temp_db, "recurring", "toggle", recurring.id)
    assert "is now active" in result.output

    result = _invoke(cli_runner, temp_db, "recurring", "run", "--as-of", "2024-03-15")
    assert "Recorded 2 transaction(s)" in result.output

    result = _invoke(cli_runner, temp_db, "recurring", "delete", recurring.id, answer="y\n")
    assert "Deleted recurring transaction 'Supplies box'" in result.output


def test_report_balance_sheet(cli_runner, temp_db, sample_ledger):
    result = _invoke(cli_runner, temp_db, "report", "balance-sheet")

    assert result.exit_code == 0, result.output
    assert "K1,380.00" in result.output
    assert "Receivables:" in result.output
    assert "K800.00" in result.output
    assert "Net income:" in result.output


def test_report_expenses(cli_runner, temp_db, chart_of_accounts, sample_contacts):
    _invoke(
        cli_runner, temp_db, "expense", "create", "--vendor", "Office Supplies Co",
        "--account", "5000", "--amount", "60", "--date", "2024-01-08", "--status", "approved",
    )

    result = _invoke(cli_runner, temp_db, "report", "expenses", "--start-date", "2024-01-01")

    assert result.exit_code == 0, result.output
    assert "Expenses by vendor:" in result.output
    assert "Office Supplies Co" in result.output
    assert "approved" in result.output
    assert "K60.00" in result.output


def test_report_expenses_empty(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "report", "expenses")

    assert result.exit_code == 0, result.output
    assert "Nothing recorded in this period." in result.output


def test_report_revenue(cli_runner, temp_db, sample_ledger):
    result = _invoke(
        cli_runner, temp_db, "report", "revenue",
        "--start-date", "2024-01-01", "--end-date", "2024-01-31",
    )

    assert result.exit_code == 0, result.output
    assert "Revenue by customer:" in result.output
    assert "Acme Ltd" in result.output
    assert "K250.00" in result.output
    assert "K800.00" in result.output
