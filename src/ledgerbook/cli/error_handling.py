"""Rendering of ledger and report errors on the command line."""

import logging

import click

from ledgerbook.domain.errors import DomainError, ReportGenerationError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print ``Error: <message>`` to stderr and exit with status 1.

    With ``--verbose`` the underlying store failure of a report error is
    logged with its traceback.
    """
    if isinstance(error, ReportGenerationError) and error.__cause__ is not None:
        logger.debug("Caused by", exc_info=error.__cause__)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
