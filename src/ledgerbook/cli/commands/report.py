"""Financial report commands."""

import json
from datetime import date

import click
from ledgerbook.cli.date_filters import period_option, resolve_cli_date_range
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.balance_sheet import validate_accounting_equation
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.report import ReportAssembler, report_to_dict
from ledgerbook.domain.reporting import ReportService
from ledgerbook.utils.date_parser import parse_date

WIDTH = 64


def echo_section(section) -> None:
    """Print a report section with indented lines and its subtotal."""
    click.echo(section.title)
    for line in section.lines:
        if line.is_subtotal:
            click.echo(f"  {'-' * (WIDTH - 2)}")
        label = "  " * (line.indent + 1) + line.description
        click.echo(f"{label:<{WIDTH - 16}}{line.amount:>16,.2f}")
    click.echo()


def echo_total(label: str, amount) -> None:
    click.echo(f"{label:<{WIDTH - 16}}{amount:>16,.2f}")


def echo_json(report) -> None:
    click.echo(json.dumps(report_to_dict(report), indent=2))


def describe_range(start: date | None, end: date | None) -> str:
    if start and end:
        return f"{start} to {end}"
    if start:
        return f"from {start}"
    if end:
        return f"up to {end}"
    return "all dates"


@click.group()
def report_group():
    """Generate financial statements."""
    pass


@report_group.command("balance-sheet")
@click.option("--as-of", help="Statement date (defaults to today)")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.pass_context
def balance_sheet(ctx, as_of: str | None, as_json: bool) -> None:
    """Balance sheet of posted transactions up to a date."""
    try:
        as_of_date = parse_date(as_of) if as_of else date.today()
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)

    service = ReportService(ctx.obj["db"])
    try:
        report = service.generate_balance_sheet(as_of_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if as_json:
        echo_json(report)
        return

    click.echo(f"\nBalance Sheet as of {report.as_of_date}\n")
    for section in ReportAssembler().balance_sheet_sections(report):
        echo_section(section)
    echo_total("Total Assets", report.total_assets)
    echo_total("Total Liabilities and Equity", report.total_liabilities + report.total_equity)
    check = validate_accounting_equation(report)
    click.echo(f"\n{check.message}")


@report_group.command("cash-flow")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_option
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.pass_context
def cash_flow(
    ctx, start_date: str | None, end_date: str | None, period: str | None, as_json: bool
) -> None:
    """Cash flow statement for a period."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    service = ReportService(ctx.obj["db"])
    try:
        statement = service.generate_cash_flow(start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if as_json:
        echo_json(statement)
        return

    click.echo(f"\nCash Flow Statement, {describe_range(start, end)}\n")
    for section in (statement.operating, statement.investing, statement.financing):
        echo_section(section)
    echo_total("Net change in cash", statement.net_cash_flow)
    echo_total("Opening cash", statement.opening_cash)
    echo_total("Closing cash", statement.closing_cash)


@report_group.command("profit-loss")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_option
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.pass_context
def profit_loss(
    ctx, start_date: str | None, end_date: str | None, period: str | None, as_json: bool
) -> None:
    """Profit and loss statement for a period."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    service = ReportService(ctx.obj["db"])
    try:
        report = service.generate_profit_loss(start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if as_json:
        echo_json(report)
        return

    click.echo(f"\nProfit and Loss, {describe_range(start, end)}\n")
    for section in ReportAssembler().profit_loss_sections(report):
        echo_section(section)
    echo_total("Gross Profit", report.gross_profit)
    echo_total("Operating Profit", report.operating_profit)
    echo_total("Net Profit", report.net_profit)
    click.echo(f"Profit margin: {report.profit_margin}%")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
