"""Statement building from computed ledgers."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Mapping

from txledger.domain.entities import AccountKey, OperationKind, Rejection
from txledger.domain.ledger import AccountLedger


@dataclass(frozen=True)
class StatementLine:
    """One accepted operation with the balance right after it."""

    timestamp: datetime
    kind: OperationKind
    amount: Decimal
    balance: Decimal

    @property
    def sign(self) -> str:
        return "+" if self.kind == OperationKind.DEPOSIT else "-"


@dataclass(frozen=True)
class AccountStatement:
    """Statement of a single account."""

    key: AccountKey
    holder: str
    lines: tuple[StatementLine, ...]
    rejections: tuple[Rejection, ...]
    final_balance: Decimal

    @property
    def has_rejections(self) -> bool:
        return bool(self.rejections)


@dataclass(frozen=True)
class StatementReport:
    """Statements of all accounts plus overall totals."""

    accounts: tuple[AccountStatement, ...]
    grand_total: Decimal
    rejection_count: int
    accounts_with_rejections: int


def build_account_statement(ledger: AccountLedger) -> AccountStatement:
    """Build the statement of one ledger.

    Accepted operations are listed in applied (chronological) order, each
    with the running balance after it.
    """
    balance = Decimal("0")
    lines = []
    for txn in ledger.accepted:
        if txn.kind == OperationKind.DEPOSIT:
            balance += txn.amount
        else:
            balance -= txn.amount
        lines.append(
            StatementLine(
                timestamp=txn.timestamp,
                kind=txn.kind,
                amount=txn.amount,
                balance=balance,
            )
        )
    return AccountStatement(
        key=ledger.key,
        holder=ledger.holder,
        lines=tuple(lines),
        rejections=ledger.rejections,
        final_balance=ledger.balance,
    )


def build_statement(ledgers: Mapping[AccountKey, AccountLedger]) -> StatementReport:
    """Build a statement report, accounts ordered by holder name."""
    ordered = sorted(ledgers.values(), key=lambda ledger: (ledger.holder, ledger.key))
    accounts = tuple(build_account_statement(ledger) for ledger in ordered)
    return StatementReport(
        accounts=accounts,
        grand_total=sum((a.final_balance for a in accounts), Decimal("0")),
        rejection_count=sum(len(a.rejections) for a in accounts),
        accounts_with_rejections=sum(1 for a in accounts if a.has_rejections),
    )
