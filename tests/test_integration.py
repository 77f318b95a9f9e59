"""Integration tests for end-to-end workflows."""

import json
import re

from ledgerbook.cli.main import cli

CHART = [
    ("1100", "HDFC Bank", "ASSET", ["--bank"]),
    ("1200", "Accounts Receivable", "ASSET", []),
    ("3000", "Owner's Capital", "EQUITY", []),
    ("4000", "Sales", "INCOME", []),
]


def invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


def create_chart(cli_runner, temp_db):
    for code, name, account_type, extra in CHART:
        result = invoke(
            cli_runner, temp_db, "account", "create", code, name, "--type", account_type, *extra
        )
        assert result.exit_code == 0
        assert f"Created account {code}" in result.output


def record_month(cli_runner, temp_db):
    """Capital brought into the bank and one credit sale, both posted."""
    result = invoke(
        cli_runner, temp_db,
        "transaction", "add",
        "--date", "2024-04-02",
        "--debit", "1100:1,00,000",
        "--credit", "3000:100000",
        "--description", "Capital introduced",
        "--post",
    )
    assert result.exit_code == 0
    assert "Posted transaction" in result.output

    result = invoke(
        cli_runner, temp_db,
        "transaction", "add",
        "--type", "CUSTOMER_INVOICE",
        "--date", "2024-04-15",
        "--debit", "1200:50000",
        "--credit", "4000:50000",
        "--number", "INV-2024-001",
        "--post",
    )
    assert result.exit_code == 0


def test_full_workflow(cli_runner, temp_db):
    """Test complete workflow: create accounts -> post -> reports."""
    create_chart(cli_runner, temp_db)

    result = invoke(cli_runner, temp_db, "account", "list")
    assert result.exit_code == 0
    assert "HDFC Bank" in result.output
    assert "[bank]" in result.output

    record_month(cli_runner, temp_db)

    result = invoke(cli_runner, temp_db, "report", "balance-sheet", "--as-of", "2024-04-30")
    assert result.exit_code == 0
    assert "Balance Sheet as of 2024-04-30" in result.output
    assert "150,000.00" in result.output
    assert "Balance sheet is balanced" in result.output

    result = invoke(
        cli_runner, temp_db,
        "report", "profit-loss", "--start-date", "2024-04-01", "--end-date", "2024-04-30",
    )
    assert result.exit_code == 0
    assert "Net Profit" in result.output
    assert "50,000.00" in result.output

    result = invoke(
        cli_runner, temp_db,
        "report", "cash-flow", "--start-date", "2024-04-01", "--end-date", "2024-04-30",
    )
    assert result.exit_code == 0
    assert "Cash Flow Statement, 2024-04-01 to 2024-04-30" in result.output
    assert "Closing cash" in result.output


def test_reports_as_json(cli_runner, temp_db):
    create_chart(cli_runner, temp_db)
    record_month(cli_runner, temp_db)

    result = invoke(
        cli_runner, temp_db, "report", "balance-sheet", "--as-of", "2024-04-30", "--json"
    )
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["total_assets"] == "150000.00"
    assert data["equity"]["current_year_profit"] == "50000.00"
    assert data["balanced"] is True

    result = invoke(
        cli_runner, temp_db,
        "report", "cash-flow", "--start-date", "2024-04-01", "--end-date", "2024-04-30", "--json",
    )
    assert result.exit_code == 0
    data = json.loads(result.output)
    # Invoices do not move cash; the capital journal does
    assert data["net_cash_flow"] == "100000.00"
    assert data["opening_cash"] == "0.00"
    assert data["closing_cash"] == "100000.00"


def test_unbalanced_transaction_is_not_posted(cli_runner, temp_db):
    create_chart(cli_runner, temp_db)

    result = invoke(
        cli_runner, temp_db,
        "transaction", "add",
        "--debit", "1100:100",
        "--credit", "4000:90",
        "--post",
    )
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "difference is 10.00" in result.output

    transaction_id = re.search(r"Recorded draft transaction (\S+)", result.output).group(1)
    result = invoke(cli_runner, temp_db, "transaction", "show", transaction_id)
    assert result.exit_code == 0
    assert "DRAFT" in result.output

    result = invoke(cli_runner, temp_db, "transaction", "void", transaction_id)
    assert result.exit_code == 0
    assert f"Voided transaction {transaction_id}" in result.output

    result = invoke(cli_runner, temp_db, "transaction", "post", transaction_id)
    assert result.exit_code == 1
    assert "cannot move from VOID to POSTED" in result.output


def test_unknown_account_code(cli_runner, temp_db):
    create_chart(cli_runner, temp_db)

    result = invoke(
        cli_runner, temp_db, "transaction", "add", "--debit", "9999:100", "--credit", "4000:100"
    )
    assert result.exit_code == 1
    assert "Account with code '9999' not found" in result.output


def test_duplicate_account_code(cli_runner, temp_db):
    create_chart(cli_runner, temp_db)

    result = invoke(cli_runner, temp_db, "account", "create", "1100", "Other Bank", "--type", "ASSET")
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_period_conflicts_with_explicit_dates(cli_runner, temp_db):
    result = invoke(
        cli_runner, temp_db,
        "report", "profit-loss", "--period", "this-fy", "--start-date", "2024-04-01",
    )
    assert result.exit_code == 1
    assert "--period cannot be combined" in result.output


def test_tax_calculators(cli_runner):
    """Tax commands run without touching the database."""
    result = cli_runner.invoke(
        cli, ["tax", "gst", "10000", "--rate", "18", "--source-state", "27", "--destination-state", "27"]
    )
    assert result.exit_code == 0
    assert "CGST_SGST" in result.output
    assert "900.00" in result.output
    assert "11,800.00" in result.output

    result = cli_runner.invoke(
        cli, ["tax", "gst", "10000", "--rate", "18", "--source-state", "27", "--destination-state", "29"]
    )
    assert result.exit_code == 0
    assert "IGST" in result.output
    assert "1,800.00" in result.output

    result = cli_runner.invoke(cli, ["tax", "tds", "50000", "--section", "194C", "--pan", "ABCDE1234F"])
    assert result.exit_code == 0
    assert "500.00" in result.output
    assert "49,500.00" in result.output

    result = cli_runner.invoke(cli, ["tax", "tds", "50000", "--section", "194J"])
    assert result.exit_code == 0
    assert "(no PAN)" in result.output
    assert "10,000.00" in result.output

    result = cli_runner.invoke(cli, ["tax", "tds", "50000", "--section", "999X"])
    assert result.exit_code == 1
    assert "Invalid TDS section" in result.output

    result = cli_runner.invoke(cli, ["tax", "sections"])
    assert result.exit_code == 0
    assert "194C" in result.output


def test_report_store_failure(cli_runner, temp_db, monkeypatch):
    from ledgerbook.database.sqlalchemy_db import SQLAlchemyDatabase
    from ledgerbook.domain.errors import StoreReadError

    def failing_list_accounts(self):
        raise StoreReadError("Failed to read accounts: disk I/O error")

    monkeypatch.setattr(SQLAlchemyDatabase, "list_accounts", failing_list_accounts)

    result = invoke(cli_runner, temp_db, "report", "balance-sheet", "--as-of", "2024-04-30")
    assert result.exit_code == 1
    assert "Error: Failed to generate balance sheet" in result.output
