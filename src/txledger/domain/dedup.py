"""Removal of exact duplicate transactions."""

from typing import Iterable

from txledger.domain.entities import Transaction


def deduplicate(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Keep the first occurrence of each distinct transaction.

    Relative order of first occurrences is preserved; input order matters
    downstream, so this never sorts.
    """
    seen: dict[Transaction, None] = {}
    for txn in transactions:
        seen.setdefault(txn, None)
    return list(seen)


def count_duplicates(transactions: Iterable[Transaction]) -> int:
    """Return how many transactions ``deduplicate`` would remove."""
    transactions = list(transactions)
    return len(transactions) - len(set(transactions))
