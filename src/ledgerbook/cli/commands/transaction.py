"""Transaction recording and posting commands."""

import click
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import Entry, TransactionType
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.gst import GSTCalculator
from ledgerbook.domain.tds import TDSCalculator
from ledgerbook.domain.transaction import TransactionService
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import parse_date

TRANSACTION_TYPE_CHOICE = click.Choice(
    [t.value for t in TransactionType if t is not TransactionType.OTHER], case_sensitive=False
)


def parse_entry_spec(account_service: AccountService, spec: str, is_debit: bool) -> Entry:
    """Turn "CODE:AMOUNT" into an Entry against the account with that code.

    Raises:
        ValueError: If the entry is malformed or the amount cannot be parsed
        NotFoundError: If no account has the code
    """
    code, sep, amount_str = spec.partition(":")
    if not sep or not code.strip():
        raise ValueError(f"Entry must look like CODE:AMOUNT, got '{spec}'")
    amount = parse_amount(amount_str)
    account = account_service.get_account_by_code(code.strip())
    if is_debit:
        return Entry(account_id=account.id, debit=amount)
    return Entry(account_id=account.id, credit=amount)


@click.group()
def transaction_group():
    """Record, post and void transactions."""
    pass


@transaction_group.command("add")
@click.option("--type", "transaction_type", type=TRANSACTION_TYPE_CHOICE, default="JOURNAL_ENTRY", show_default=True)
@click.option("--date", "txn_date", default="today", help="Transaction date (YYYY-MM-DD, DD/MM/YYYY or 'today')")
@click.option("--debit", "debits", multiple=True, help="Debit entry as CODE:AMOUNT (repeatable)")
@click.option("--credit", "credits", multiple=True, help="Credit entry as CODE:AMOUNT (repeatable)")
@click.option("--description", help="Transaction description")
@click.option("--number", help="Document number (e.g., INV-2024-001)")
@click.option("--gst-rate", help="GST rate in percent; records a GST split")
@click.option("--taxable-amount", help="Taxable amount for GST (defaults to total debits)")
@click.option("--source-state", help="Supplier GST state code")
@click.option("--destination-state", help="Recipient GST state code")
@click.option("--tds-section", help="TDS section (e.g., 194C); records a TDS deduction")
@click.option("--tds-amount", "tds_base", help="Amount TDS applies to (defaults to total debits)")
@click.option("--pan", help="Deductee PAN for TDS")
@click.option("--post", "post_now", is_flag=True, help="Post the transaction right away")
@click.pass_context
def add_transaction(
    ctx,
    transaction_type: str,
    txn_date: str,
    debits: tuple[str, ...],
    credits: tuple[str, ...],
    description: str | None,
    number: str | None,
    gst_rate: str | None,
    taxable_amount: str | None,
    source_state: str | None,
    destination_state: str | None,
    tds_section: str | None,
    tds_base: str | None,
    pan: str | None,
    post_now: bool,
) -> None:
    """Record a draft transaction.

    Examples:
        ledgerbook transaction add --type CUSTOMER_PAYMENT --debit 1101:50000 --credit 1200:50000
        ledgerbook transaction add --debit 1500:20000 --credit 1101:20000 --post
        ledgerbook transaction add --type VENDOR_BILL --debit 6100:10000 --credit 2100:10000 \\
            --gst-rate 18 --source-state 27 --destination-state 29
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    service = TransactionService(db)

    try:
        parsed_date = parse_date(txn_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        entries = [parse_entry_spec(account_service, spec, True) for spec in debits]
        entries += [parse_entry_spec(account_service, spec, False) for spec in credits]
    except ValueError as e:
        handle_domain_error(ctx, e)
    if not entries:
        click.echo("Error: At least one --debit or --credit entry is required", err=True)
        ctx.exit(1)

    total_debit, _ = service.poster.totals(entries)
    try:
        gst_details = None
        if gst_rate is not None:
            base = parse_amount(taxable_amount) if taxable_amount else total_debit
            gst_details = GSTCalculator().calculate_gst(
                base, parse_amount(gst_rate), source_state, destination_state
            )
        tds_details = None
        if tds_section is not None:
            base = parse_amount(tds_base) if tds_base else total_debit
            tds_details = TDSCalculator().calculate_tds(base, tds_section.upper(), pan)

        transaction_id = service.create_transaction(
            transaction_type=TransactionType(transaction_type.upper()),
            date=parsed_date,
            entries=entries,
            description=description,
            transaction_number=number,
            gst_details=gst_details,
            tds_details=tds_details,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded draft transaction {transaction_id}")

    validation = service.poster.validate_entries(entries)
    for warning in validation.warnings:
        click.echo(f"Warning: {warning}", err=True)

    if post_now:
        try:
            service.post_transaction(transaction_id)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Posted transaction {transaction_id}")


@transaction_group.command("post")
@click.argument("transaction_id")
@click.pass_context
def post_transaction(ctx, transaction_id: str) -> None:
    """Post a draft transaction once its debits equal its credits."""
    service = TransactionService(ctx.obj["db"])
    try:
        service.post_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Posted transaction {transaction_id}")


@transaction_group.command("void")
@click.argument("transaction_id")
@click.pass_context
def void_transaction(ctx, transaction_id: str) -> None:
    """Void a draft transaction."""
    service = TransactionService(ctx.obj["db"])
    try:
        service.void_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Voided transaction {transaction_id}")


@transaction_group.command("show")
@click.argument("transaction_id")
@click.pass_context
def show_transaction(ctx, transaction_id: str) -> None:
    """Show a transaction with its entries and any validation problems."""
    db = ctx.obj["db"]
    service = TransactionService(db)
    account_service = AccountService(db)

    txn = service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    click.echo(f"Transaction {txn.id} ({txn.type.value}, {txn.status.value})")
    click.echo(f"Date: {txn.date}")
    if txn.transaction_number:
        click.echo(f"Number: {txn.transaction_number}")
    if txn.description:
        click.echo(f"Description: {txn.description}")
    click.echo("-" * 72)
    for entry in txn.entries:
        account = account_service.get_account(entry.account_id)
        label = f"{account.code} {account.name}" if account else entry.account_id
        click.echo(f"{label:40s} Dr {entry.debit:>12,.2f}  Cr {entry.credit:>12,.2f}")

    balance = service.poster.calculate_balance(txn.entries)
    click.echo("-" * 72)
    click.echo(f"{'Totals':40s} Dr {balance.total_debit:>12,.2f}  Cr {balance.total_credit:>12,.2f}")

    if txn.gst_details is not None:
        gst = txn.gst_details
        click.echo(f"GST ({gst.gst_type.value} @ {gst.gst_rate}%): {gst.total_gst:,.2f}")
    if txn.tds_details is not None:
        tds = txn.tds_details
        click.echo(
            f"TDS {tds.section} @ {tds.rate}%: {tds.tds_amount:,.2f} "
            f"(net payable {tds.net_payable:,.2f})"
        )

    validation = service.poster.validate_entries(txn.entries)
    for error in validation.errors:
        click.echo(f"Error: {error}")
    for warning in validation.warnings:
        click.echo(f"Warning: {warning}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
