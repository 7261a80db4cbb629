"""CLI helpers for the input file schema."""

import click

AMOUNT_COLUMN_MODES = {"auto": None, "yes": True, "no": False}

amount_column_option = click.option(
    "--amount-column",
    type=click.Choice(list(AMOUNT_COLUMN_MODES), case_sensitive=False),
    default="auto",
    show_default=True,
    envvar="TXLEDGER_AMOUNT_COLUMN",
    help="Whether the file has an amount column; 'auto' detects it from the first line",
)


def resolve_amount_column(mode: str) -> bool | None:
    """Map an --amount-column choice to the loader's has_amount flag."""
    return AMOUNT_COLUMN_MODES[mode.lower()]
