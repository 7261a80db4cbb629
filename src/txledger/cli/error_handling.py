"""CLI error handling helpers."""

from contextlib import contextmanager
from typing import Iterator

import click

from txledger.domain.errors import SourceReadError


@contextmanager
def abort_on_unreadable_source(ctx: click.Context) -> Iterator[None]:
    """Turn a fatal SourceReadError into an error message and exit status 1.

    Per-line parse errors never reach this point; they are part of the
    processing report.
    """
    try:
        yield
    except SourceReadError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
