"""GST and TDS calculator commands."""

import click
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.gst import GSTCalculator
from ledgerbook.domain.tds import TDSCalculator, is_valid_pan
from ledgerbook.utils.amount_parser import parse_amount


@click.group()
def tax_group():
    """Calculate GST and TDS."""
    pass


@tax_group.command("gst")
@click.argument("amount")
@click.option("--rate", required=True, help="GST rate in percent (e.g., 18)")
@click.option("--source-state", help="Supplier state code (e.g., 27)")
@click.option("--destination-state", help="Recipient state code (e.g., 29)")
@click.pass_context
def gst(ctx, amount: str, rate: str, source_state: str | None, destination_state: str | None):
    """Split GST on a taxable AMOUNT.

    Same source and destination state gives CGST + SGST, otherwise IGST.

    Examples:
        ledgerbook tax gst 10000 --rate 18 --source-state 27 --destination-state 27
        ledgerbook tax gst 10000 --rate 18 --source-state 27 --destination-state 29
    """
    calculator = GSTCalculator()
    try:
        details = calculator.calculate_gst(
            parse_amount(amount), parse_amount(rate), source_state, destination_state
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Taxable amount: {details.taxable_amount:>14,.2f}")
    click.echo(f"GST type:       {details.gst_type.value} @ {details.gst_rate}%")
    if details.cgst_amount is not None:
        click.echo(f"CGST:           {details.cgst_amount:>14,.2f}")
        click.echo(f"SGST:           {details.sgst_amount:>14,.2f}")
    if details.igst_amount is not None:
        click.echo(f"IGST:           {details.igst_amount:>14,.2f}")
    click.echo(f"Total GST:      {details.total_gst:>14,.2f}")
    click.echo(f"Grand total:    {calculator.grand_total(details):>14,.2f}")


@tax_group.command("tds")
@click.argument("amount")
@click.option("--section", required=True, help="TDS section (e.g., 194C)")
@click.option("--pan", help="Deductee PAN; without it the penalty rate applies")
@click.option("--rate", help="Override the section rate (percent)")
@click.option("--senior-citizen", is_flag=True, help="Deductee is a senior citizen")
@click.pass_context
def tds(ctx, amount: str, section: str, pan: str | None, rate: str | None, senior_citizen: bool):
    """Calculate TDS on a payment AMOUNT.

    Examples:
        ledgerbook tax tds 50000 --section 194C --pan ABCDE1234F
        ledgerbook tax tds 50000 --section 194J
    """
    calculator = TDSCalculator()
    section = section.upper()
    try:
        details = calculator.calculate_tds(
            parse_amount(amount),
            section,
            pan_number=pan,
            rate_override=parse_amount(rate) if rate else None,
            senior_citizen=senior_citizen,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    if pan and not is_valid_pan(pan.strip().upper()):
        click.echo(f"Warning: PAN '{pan}' does not match the format AAAAA9999A", err=True)
    if not calculator.is_tds_applicable(section, details.amount):
        threshold = calculator.section_info(section).threshold
        click.echo(f"Note: amount is below the {section} threshold of {threshold:,.2f}")

    info = calculator.section_info(section)
    click.echo(f"Section:     {section} ({info.description})")
    click.echo(f"Rate:        {details.rate}%{'' if details.pan_provided else ' (no PAN)'}")
    click.echo(f"Amount:      {details.amount:>14,.2f}")
    click.echo(f"TDS:         {details.tds_amount:>14,.2f}")
    click.echo(f"Net payable: {details.net_payable:>14,.2f}")


@tax_group.command("sections")
@click.option("--all", "show_all", is_flag=True, help="List every section, not only common ones")
def sections(show_all: bool):
    """List TDS sections with rates and thresholds."""
    calculator = TDSCalculator()
    codes = (
        [code for code, _ in calculator.all_sections()]
        if show_all
        else calculator.common_sections()
    )
    for code in codes:
        info = calculator.section_info(code)
        click.echo(
            f"{code:6s} {info.rate:>6}%  threshold {info.threshold:>14,.2f}  {info.description}"
        )


def register_commands(cli):
    """Register tax commands with main CLI."""
    cli.add_command(tax_group, name="tax")
