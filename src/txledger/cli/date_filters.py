"""CLI helpers for the statement cutoff date."""

from datetime import date

import click

from txledger.utils.date_parser import parse_date


def resolve_cli_cutoff(ctx, until: str | None) -> date | None:
    """Resolve the --until option into a date, exiting on bad input."""
    if not until:
        return None
    try:
        return parse_date(until)
    except ValueError as e:
        click.echo(f"Error: Invalid until date: {e}", err=True)
        ctx.exit(1)
