"""Rendering of file processing statistics."""

import click

from txledger.domain.pipeline import LedgerRun


def display_processing_report(run: LedgerRun) -> None:
    """Print line counts and per-line errors of a pipeline run."""
    load = run.load
    click.echo("\n=== PROCESSING REPORT ===")
    click.echo(f"Amount column       : {'yes' if load.has_amount else 'no'}")
    click.echo(f"Lines processed     : {load.lines_processed}")
    click.echo(f"Lines with errors   : {load.error_count}")
    click.echo(f"Duplicates removed  : {run.duplicates_removed}")
    click.echo(f"Valid operations    : {run.valid_count}")
    if run.excluded_after_cutoff:
        click.echo(f"After cutoff        : {run.excluded_after_cutoff}")

    if load.errors:
        click.echo("\nErrors found:", err=True)
        for error in load.errors:
            click.echo(f"  {error}", err=True)
