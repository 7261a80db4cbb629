"""Domain model entities for txledger.

These are pure data classes representing the values that flow through the
ledger pipeline: parsed transactions, account identities, rejection records
and the results of loading a transaction file.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import NamedTuple

from txledger.utils.amount_parser import format_amount
from txledger.utils.date_parser import format_timestamp


class OperationKind(str, Enum):
    """Kind of a bank operation as written in transaction files."""

    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"


class AccountKey(NamedTuple):
    """Identity of a bank account. The holder name is not part of it."""

    branch: str
    account: str
    bank: str

    def __str__(self) -> str:
        return f"{self.branch}-{self.account}-{self.bank}"


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    Two transactions are equal when every field, amount included, is equal.
    """

    branch: str
    account: str
    bank: str
    holder: str
    kind: OperationKind
    timestamp: datetime
    amount: Decimal

    @property
    def account_key(self) -> AccountKey:
        return AccountKey(self.branch, self.account, self.bank)


@dataclass(frozen=True)
class Rejection:
    """A withdrawal refused for insufficient balance."""

    amount: Decimal
    timestamp: datetime
    balance: Decimal

    @property
    def description(self) -> str:
        return (
            f"WITHDRAWAL REJECTED: {format_amount(self.amount)} at "
            f"{format_timestamp(self.timestamp)} - available balance: "
            f"{format_amount(self.balance)}"
        )

    def __str__(self) -> str:
        return self.description


@dataclass(frozen=True)
class ParseFailure:
    """A line that was skipped because it failed validation."""

    line_number: int
    code: str
    message: str

    def __str__(self) -> str:
        return f"Line {self.line_number}: {self.message}"


@dataclass(frozen=True)
class LoadResult:
    """Outcome of reading a transaction file."""

    source: str
    transactions: tuple[Transaction, ...]
    errors: tuple[ParseFailure, ...]
    lines_processed: int
    has_header: bool
    has_amount: bool

    @property
    def error_count(self) -> int:
        return len(self.errors)
