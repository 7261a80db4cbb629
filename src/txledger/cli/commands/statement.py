"""Statement commands."""

import click

from txledger.cli.date_filters import resolve_cli_cutoff
from txledger.cli.error_handling import abort_on_unreadable_source
from txledger.cli.processing_report import display_processing_report
from txledger.cli.schema_options import amount_column_option, resolve_amount_column
from txledger.domain.statement import StatementReport, build_statement
from txledger.utils.amount_parser import format_amount
from txledger.utils.date_parser import format_timestamp

WIDTH = 80


def _display_rejection_alerts(report: StatementReport) -> None:
    """List rejected withdrawals grouped by account."""
    if not report.rejection_count:
        return
    click.echo("\n" + "!" * WIDTH)
    click.echo("REJECTED OPERATION ALERTS")
    click.echo("!" * WIDTH)
    for account in report.accounts:
        if not account.has_rejections:
            continue
        click.echo(f"Account: {account.key}")
        for rejection in account.rejections:
            click.echo(
                f"  - WITHDRAWAL of {format_amount(rejection.amount)} at "
                f"{format_timestamp(rejection.timestamp)} rejected - insufficient balance"
            )


def _display_full_statement(report: StatementReport) -> None:
    click.echo("\n" + "=" * WIDTH)
    click.echo("BANK STATEMENT - FINAL ACCOUNT BALANCES")
    click.echo("=" * WIDTH)

    for account in report.accounts:
        click.echo("\n" + "=" * WIDTH)
        click.echo(f"Holder: {account.holder}")
        click.echo(
            f"Branch: {account.key.branch} | Account: {account.key.account} | Bank: {account.key.bank}"
        )
        click.echo("-" * WIDTH)

        click.echo("Operation history:")
        for line in account.lines:
            click.echo(
                f" {format_timestamp(line.timestamp)} | {line.kind.value:<10} | "
                f"{format_amount(line.amount):>12} | Balance: {format_amount(line.balance):>12} | "
                f"({line.sign})"
            )

        if account.has_rejections:
            click.echo("\n REJECTED OPERATIONS (insufficient balance):")
            for rejection in account.rejections:
                click.echo(f" - {rejection.description}")

        click.echo(f"\nFINAL BALANCE: {format_amount(account.final_balance)}")

    click.echo("\n" + "=" * WIDTH)
    click.echo("FINAL SUMMARY:")
    click.echo(f"  Grand total balance: {format_amount(report.grand_total)}")
    click.echo(f"  Total rejected operations: {report.rejection_count}")
    click.echo("=" * WIDTH)


def _display_summary(report: StatementReport) -> None:
    click.echo("\n" + "=" * WIDTH)
    click.echo("FINAL BALANCES BY ACCOUNT")
    click.echo("=" * WIDTH)

    for account in report.accounts:
        marker = " !" if account.has_rejections else ""
        click.echo(
            f"{account.holder:<20} | Br: {account.key.branch:<6} | Account: {account.key.account:<8} | "
            f"Bank: {account.key.bank:<10} | Balance: {format_amount(account.final_balance):>12}{marker}"
        )

    click.echo("=" * WIDTH)
    click.echo(f"GRAND TOTAL BALANCE: {format_amount(report.grand_total)}")
    if report.accounts_with_rejections:
        click.echo(
            f"! {report.accounts_with_rejections} account(s) had withdrawals "
            "rejected for insufficient balance"
        )


@click.command("statement")
@click.argument("transaction_file", type=click.Path())
@amount_column_option
@click.option("--until", help="Last day of operations to include (YYYY-MM-DD or relative like 'last month')")
@click.option("--summary", "summary_only", is_flag=True, help="Show only the final balance of each account")
@click.pass_context
def statement(ctx, transaction_file: str, amount_column: str, until: str | None, summary_only: bool):
    """Compute account balances and print a statement."""
    pipeline = ctx.obj["pipeline"]
    cutoff = resolve_cli_cutoff(ctx, until)

    with abort_on_unreadable_source(ctx):
        run = pipeline.run(
            transaction_file,
            has_amount=resolve_amount_column(amount_column),
            until=cutoff,
        )

    display_processing_report(run)

    if not run.ledgers:
        click.echo("\nNo valid operations found.")
        return

    report = build_statement(run.ledgers)
    _display_rejection_alerts(report)
    if summary_only:
        _display_summary(report)
    else:
        _display_full_statement(report)


def register_commands(cli):
    """Register statement command with main CLI."""
    cli.add_command(statement)
