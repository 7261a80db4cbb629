"""File validation command."""

import click

from txledger.cli.error_handling import abort_on_unreadable_source
from txledger.cli.processing_report import display_processing_report
from txledger.cli.schema_options import amount_column_option, resolve_amount_column


@click.command("check")
@click.argument("transaction_file", type=click.Path())
@amount_column_option
@click.pass_context
def check(ctx, transaction_file: str, amount_column: str):
    """Validate a transaction file without printing balances.

    Exits with status 1 when any line fails validation.
    """
    pipeline = ctx.obj["pipeline"]

    with abort_on_unreadable_source(ctx):
        run = pipeline.run(transaction_file, has_amount=resolve_amount_column(amount_column))

    display_processing_report(run)
    if run.load.errors:
        ctx.exit(1)


def register_commands(cli):
    """Register check command with main CLI."""
    cli.add_command(check)
