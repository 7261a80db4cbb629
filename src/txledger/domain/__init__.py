"""Domain layer for txledger application."""

from txledger.domain.csv_import import TransactionFileService
from txledger.domain.dedup import deduplicate
from txledger.domain.ledger import AccountLedger, compute_ledgers
from txledger.domain.pipeline import LedgerPipeline
from txledger.domain.record_parser import parse_record

__all__ = [
    "TransactionFileService",
    "LedgerPipeline",
    "AccountLedger",
    "compute_ledgers",
    "deduplicate",
    "parse_record",
]
