"""Main CLI entry point."""

import click

from txledger import __version__
from txledger.domain.pipeline import LedgerPipeline
from txledger.logging_config import LOG_LEVELS, configure_logging

# Import and register all commands at module level
from txledger.cli.commands import check, statement


@click.group()
@click.version_option(__version__, prog_name="txledger")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="TXLEDGER_LOG_LEVEL",
    help="Log level for diagnostics written to stderr",
)
@click.pass_context
def cli(ctx, log_level: str):
    """txledger - Bank transaction ledger.

    Reads a comma-separated file of deposits and withdrawals, replays every
    account in chronological order and reports balances together with the
    withdrawals rejected for insufficient funds.
    """
    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is not None:
        configure_logging(log_level)
        ctx.obj["pipeline"] = LedgerPipeline()


# Register all commands
statement.register_commands(cli)
check.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
