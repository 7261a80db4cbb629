"""Shared pytest fixtures for txledger tests."""

from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest

from txledger.domain.csv_import import TransactionFileService
from txledger.domain.entities import OperationKind, Transaction
from txledger.domain.pipeline import LedgerPipeline
from txledger.logging_config import reset_logging


def make_transaction(
    kind="DEPOSIT",
    amount="100.00",
    timestamp="2024-01-15T10:00:00",
    branch="0001",
    account="12345",
    bank="BANCO_A",
    holder="Alice",
):
    """Build a Transaction with sensible defaults."""
    return Transaction(
        branch=branch,
        account=account,
        bank=bank,
        holder=holder,
        kind=OperationKind(kind),
        timestamp=datetime.fromisoformat(timestamp),
        amount=Decimal(amount),
    )


@pytest.fixture
def txn():
    """Return the transaction factory."""
    return make_transaction


@pytest.fixture
def file_service():
    """Create a TransactionFileService."""
    return TransactionFileService()


@pytest.fixture
def pipeline():
    """Create a LedgerPipeline."""
    return LedgerPipeline()


@pytest.fixture
def write_csv(tmp_path):
    """Write lines to a temporary transaction file and return its path."""

    def _write(*lines, name="operations.csv"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    yield CliRunner()
    reset_logging()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
