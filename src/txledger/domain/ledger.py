"""Per-account balance replay.

Transactions are replayed in chronological order. Every account keeps a
running balance that starts at zero; deposits always apply, withdrawals
apply only when the balance covers them and are otherwise recorded as
rejections. Rejection is an expected outcome, not an error.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Union

from txledger.domain.entities import (
    AccountKey,
    OperationKind,
    Rejection,
    Transaction,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Accepted:
    """Transaction applied; ``balance`` is the balance afterwards."""

    balance: Decimal


@dataclass(frozen=True)
class Rejected:
    """Withdrawal refused; the balance did not change."""

    rejection: Rejection


Outcome = Union[Accepted, Rejected]


class AccountLedger:
    """Running state of one account during a replay."""

    def __init__(self, branch: str, account: str, bank: str, holder: str):
        self.branch = branch
        self.account = account
        self.bank = bank
        self.holder = holder
        self._balance = Decimal("0")
        self._accepted: list[Transaction] = []
        self._rejections: list[Rejection] = []

    @classmethod
    def open_for(cls, txn: Transaction) -> "AccountLedger":
        """Create the ledger seeded with a transaction's account fields."""
        return cls(txn.branch, txn.account, txn.bank, txn.holder)

    @property
    def key(self) -> AccountKey:
        return AccountKey(self.branch, self.account, self.bank)

    @property
    def balance(self) -> Decimal:
        return self._balance

    @property
    def accepted(self) -> tuple[Transaction, ...]:
        """Accepted transactions in the order they were applied."""
        return tuple(self._accepted)

    @property
    def rejections(self) -> tuple[Rejection, ...]:
        return tuple(self._rejections)

    @property
    def has_rejections(self) -> bool:
        return bool(self._rejections)

    def apply(self, txn: Transaction) -> Outcome:
        """Apply one transaction to the balance.

        Args:
            txn: Transaction belonging to this account

        Returns:
            Accepted with the new balance, or Rejected with the rejection
            record when a withdrawal exceeds the balance

        Raises:
            ValueError: If the transaction belongs to another account
        """
        if txn.account_key != self.key:
            raise ValueError(
                f"Transaction for account {txn.account_key} applied to ledger {self.key}"
            )

        if txn.kind == OperationKind.DEPOSIT:
            self._balance += txn.amount
            self._accepted.append(txn)
            return Accepted(self._balance)

        if self._balance >= txn.amount:
            self._balance -= txn.amount
            self._accepted.append(txn)
            return Accepted(self._balance)

        rejection = Rejection(
            amount=txn.amount, timestamp=txn.timestamp, balance=self._balance
        )
        self._rejections.append(rejection)
        return Rejected(rejection)

    def __repr__(self) -> str:
        return (
            f"AccountLedger({self.key}, holder={self.holder!r}, "
            f"balance={self._balance}, rejections={len(self._rejections)})"
        )


def chronological(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Sort by timestamp; equal timestamps keep their input order."""
    return sorted(transactions, key=lambda txn: txn.timestamp)


def replay(transactions: Iterable[Transaction]) -> dict[AccountKey, AccountLedger]:
    """Apply transactions in exactly the given order.

    Most callers want ``compute_ledgers``, which sorts first. Withdrawal
    acceptance depends on order, so feeding unsorted input here can give a
    different result.
    """
    ledgers: dict[AccountKey, AccountLedger] = {}
    for txn in transactions:
        key = txn.account_key
        ledger = ledgers.get(key)
        if ledger is None:
            ledger = AccountLedger.open_for(txn)
            ledgers[key] = ledger

        outcome = ledger.apply(txn)
        if isinstance(outcome, Rejected):
            logger.info(
                "Account %s: %s", key, outcome.rejection.description
            )
    return ledgers


def compute_ledgers(
    transactions: Iterable[Transaction],
) -> dict[AccountKey, AccountLedger]:
    """Compute the final ledger of every account.

    Args:
        transactions: Validated, deduplicated transactions in any order

    Returns:
        Mapping of account key to its final ledger, ordered by the first
        chronological appearance of each account
    """
    ledgers = replay(chronological(transactions))
    logger.debug("Computed %d account ledger(s)", len(ledgers))
    return ledgers
