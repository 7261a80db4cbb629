"""Batch pipeline: load, deduplicate and replay a transaction file."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from txledger.domain.csv_import import TransactionFileService
from txledger.domain.dedup import count_duplicates, deduplicate
from txledger.domain.entities import AccountKey, LoadResult, Transaction
from txledger.domain.ledger import AccountLedger, compute_ledgers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerRun:
    """Everything produced by one pipeline run."""

    ledgers: dict[AccountKey, AccountLedger]
    load: LoadResult
    duplicates_removed: int
    excluded_after_cutoff: int = 0

    @property
    def valid_count(self) -> int:
        """Lines that produced a distinct transaction."""
        return self.load.lines_processed - self.load.error_count - self.duplicates_removed

    @property
    def rejection_count(self) -> int:
        return sum(len(ledger.rejections) for ledger in self.ledgers.values())


def apply_cutoff(
    transactions: Iterable[Transaction], until: date
) -> tuple[list[Transaction], int]:
    """Keep transactions dated on or before ``until``.

    Returns:
        Tuple of (kept transactions, number excluded)
    """
    kept = []
    excluded = 0
    for txn in transactions:
        if txn.timestamp.date() <= until:
            kept.append(txn)
        else:
            excluded += 1
    return kept, excluded


class LedgerPipeline:
    """Runs the full ledger computation over one batch of records."""

    def __init__(self, file_service: Optional[TransactionFileService] = None):
        """Initialize pipeline.

        Args:
            file_service: Loader to use; a default one is created when None
        """
        self.file_service = file_service or TransactionFileService()

    def run(
        self,
        file_path: str,
        has_amount: Optional[bool] = None,
        until: Optional[date] = None,
    ) -> LedgerRun:
        """Compute ledgers from a transaction file.

        Args:
            file_path: Path to the transaction file
            has_amount: Force the amount column on or off (None detects it)
            until: Optional last day of operations to include

        Returns:
            LedgerRun with final ledgers and processing statistics

        Raises:
            SourceReadError: If the file cannot be read
        """
        load = self.file_service.load(file_path, has_amount=has_amount)
        return self._compute(load, until)

    def run_lines(
        self,
        lines: Iterable[str],
        has_amount: Optional[bool] = None,
        until: Optional[date] = None,
    ) -> LedgerRun:
        """Compute ledgers from in-memory lines."""
        load = self.file_service.load_lines(lines, has_amount=has_amount)
        return self._compute(load, until)

    def _compute(self, load: LoadResult, until: Optional[date]) -> LedgerRun:
        unique = deduplicate(load.transactions)
        duplicates = count_duplicates(load.transactions)
        if duplicates:
            logger.info("%s: removed %d duplicate(s)", load.source, duplicates)

        excluded = 0
        if until is not None:
            unique, excluded = apply_cutoff(unique, until)
            logger.info(
                "%s: %d operation(s) after %s excluded", load.source, excluded, until
            )

        return LedgerRun(
            ledgers=compute_ledgers(unique),
            load=load,
            duplicates_removed=duplicates,
            excluded_after_cutoff=excluded,
        )
