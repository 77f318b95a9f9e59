"""Chart of accounts commands."""

import click
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import AccountType
from ledgerbook.domain.errors import DomainError
from ledgerbook.utils.amount_parser import parse_amount

ACCOUNT_TYPE_CHOICE = click.Choice([t.value for t in AccountType], case_sensitive=False)


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--type", "account_type", type=ACCOUNT_TYPE_CHOICE, required=True, help="Account type")
@click.option("--bank", is_flag=True, help="Mark the account as a bank account")
@click.option("--opening-balance", default="0", help="Opening balance (e.g., 1,00,000)")
@click.option("--group", "is_group", is_flag=True, help="Group account that only holds other accounts")
@click.pass_context
def create_account(
    ctx,
    code: str,
    name: str,
    account_type: str,
    bank: bool,
    opening_balance: str,
    is_group: bool,
):
    """Create a new account.

    Examples:
        ledgerbook account create 1101 "HDFC Current Account" --type ASSET --bank
        ledgerbook account create 3000 "Share Capital" --type EQUITY
        ledgerbook account create 4000 "Sales" --type INCOME
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        balance = parse_amount(opening_balance)
    except ValueError as e:
        click.echo(f"Error: Invalid opening balance: {e}", err=True)
        ctx.exit(1)

    try:
        account_id = service.create_account(
            code=code,
            name=name,
            account_type=AccountType(account_type.upper()),
            is_bank_account=bank,
            opening_balance=balance,
            is_group=is_group,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account {code} '{name}' (ID: {account_id})")


@account_group.command("list")
@click.option("--type", "account_type", type=ACCOUNT_TYPE_CHOICE, help="Only list this type")
@click.pass_context
def list_accounts(ctx, account_type: str | None):
    """List the chart of accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts(
        AccountType(account_type.upper()) if account_type else None
    )
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        flags = []
        if acc.is_bank_account:
            flags.append("bank")
        if acc.is_group:
            flags.append("group")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        click.echo(
            f"{acc.code:8s} | {acc.name:30s} | {acc.account_type.value:9s} | "
            f"Opening: {acc.opening_balance:>12,.2f}{suffix}"
        )


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
