"""Tests for the per-account balance replay."""

import random
from datetime import datetime
from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from txledger.domain.dedup import deduplicate
from txledger.domain.entities import AccountKey, OperationKind, Rejection, Transaction
from txledger.domain.ledger import (
    Accepted,
    AccountLedger,
    Rejected,
    chronological,
    compute_ledgers,
    replay,
)

KEY = AccountKey("0001", "12345", "BANCO_A")


def _transaction(kind, amount, timestamp, account):
    return Transaction(
        branch="0001",
        account=account,
        bank="BANCO_A",
        holder="Holder",
        kind=OperationKind(kind),
        timestamp=datetime.fromisoformat(timestamp),
        amount=Decimal(amount),
    )


class TestAccountLedger:
    """Tests for the balance state machine of one account."""

    def test_starts_empty(self):
        ledger = AccountLedger("0001", "12345", "BANCO_A", "Alice")

        assert ledger.balance == Decimal("0")
        assert ledger.accepted == ()
        assert ledger.rejections == ()
        assert ledger.has_rejections is False
        assert ledger.key == KEY

    def test_deposit_always_accepted(self, txn):
        ledger = AccountLedger.open_for(txn())
        outcome = ledger.apply(txn("DEPOSIT", "100.00"))

        assert outcome == Accepted(Decimal("100.00"))
        assert ledger.balance == Decimal("100.00")
        assert len(ledger.accepted) == 1

    def test_withdrawal_within_balance(self, txn):
        ledger = AccountLedger.open_for(txn())
        ledger.apply(txn("DEPOSIT", "100.00", "2024-01-15T09:00:00"))
        outcome = ledger.apply(txn("WITHDRAWAL", "30.00", "2024-01-15T10:00:00"))

        assert outcome == Accepted(Decimal("70.00"))
        assert ledger.balance == Decimal("70.00")

    def test_withdrawal_draining_to_zero_is_accepted(self, txn):
        """The balance check is inclusive."""
        ledger = AccountLedger.open_for(txn())
        ledger.apply(txn("DEPOSIT", "50.00", "2024-01-15T09:00:00"))
        outcome = ledger.apply(txn("WITHDRAWAL", "50.00", "2024-01-15T10:00:00"))

        assert isinstance(outcome, Accepted)
        assert ledger.balance == Decimal("0")
        assert not ledger.has_rejections

    def test_overdraft_rejected(self, txn):
        ledger = AccountLedger.open_for(txn())
        ledger.apply(txn("DEPOSIT", "20.00", "2024-01-15T09:00:00"))
        withdrawal = txn("WITHDRAWAL", "20.01", "2024-01-15T10:00:00")

        outcome = ledger.apply(withdrawal)

        assert isinstance(outcome, Rejected)
        assert outcome.rejection == Rejection(
            amount=Decimal("20.01"),
            timestamp=withdrawal.timestamp,
            balance=Decimal("20.00"),
        )
        assert ledger.balance == Decimal("20.00")
        assert withdrawal not in ledger.accepted
        assert ledger.rejections == (outcome.rejection,)
        assert ledger.has_rejections

    def test_rejection_description(self, txn):
        ledger = AccountLedger.open_for(txn())
        outcome = ledger.apply(txn("WITHDRAWAL", "1500.00", "2024-01-15T10:00:00"))

        assert outcome.rejection.description == (
            "WITHDRAWAL REJECTED: 1,500.00 at 15/01/2024 10:00:00 - "
            "available balance: 0.00"
        )

    def test_views_are_read_only(self, txn):
        ledger = AccountLedger.open_for(txn())
        ledger.apply(txn())

        assert isinstance(ledger.accepted, tuple)
        assert isinstance(ledger.rejections, tuple)
        with pytest.raises(AttributeError):
            ledger.balance = Decimal("1000")

    def test_foreign_transaction_refused(self, txn):
        ledger = AccountLedger.open_for(txn())
        with pytest.raises(ValueError):
            ledger.apply(txn(account="99999"))


class TestComputeLedgers:
    """Scenario tests for the full replay."""

    def test_deposit_then_withdrawal(self, txn):
        """Deposit 100.00 then withdraw 30.00 leaves 70.00."""
        ledgers = compute_ledgers([
            txn("DEPOSIT", "100.00", "2024-01-15T09:00:00"),
            txn("WITHDRAWAL", "30.00", "2024-01-15T10:00:00"),
        ])

        ledger = ledgers[KEY]
        assert ledger.balance == Decimal("70.00")
        assert ledger.rejections == ()

    def test_withdrawal_without_funds(self, txn):
        """A first withdrawal with no deposit is rejected."""
        ledgers = compute_ledgers([txn("WITHDRAWAL", "50.00")])

        ledger = ledgers[KEY]
        assert ledger.balance == Decimal("0.00")
        assert len(ledger.rejections) == 1
        assert ledger.accepted == ()

    def test_out_of_order_input_is_sorted(self, txn):
        """Lines given out of order are replayed chronologically."""
        deposit = txn("DEPOSIT", "100.00", "2024-01-15T12:00:00")
        withdrawal = txn("WITHDRAWAL", "100.00", "2024-01-15T08:00:00")

        ledgers = compute_ledgers([deposit, withdrawal])

        ledger = ledgers[KEY]
        assert ledger.balance == Decimal("100.00")
        assert len(ledger.rejections) == 1
        assert ledger.rejections[0].balance == Decimal("0")
        assert ledger.accepted == (deposit,)

    def test_sort_step_matters(self, txn):
        """Replaying without sorting gives a different (wrong) result."""
        deposit = txn("DEPOSIT", "100.00", "2024-01-15T08:00:00")
        withdrawal = txn("WITHDRAWAL", "100.00", "2024-01-15T12:00:00")
        out_of_order = [withdrawal, deposit]

        unsorted = replay(out_of_order)[KEY]
        sorted_ = compute_ledgers(out_of_order)[KEY]

        assert unsorted.balance == Decimal("100.00")
        assert unsorted.has_rejections
        assert sorted_.balance == Decimal("0")
        assert not sorted_.has_rejections

    def test_duplicates_processed_once(self, txn):
        """Two identical lines are deduplicated to a single deposit."""
        line = txn("DEPOSIT", "100.00")
        ledgers = compute_ledgers(deduplicate([line, line]))

        assert ledgers[KEY].balance == Decimal("100.00")
        assert len(ledgers[KEY].accepted) == 1

    def test_accounts_are_independent(self, txn):
        ledgers = compute_ledgers([
            txn("DEPOSIT", "10.00", "2024-01-15T08:00:00", account="1"),
            txn("WITHDRAWAL", "10.00", "2024-01-15T09:00:00", account="2"),
            txn("DEPOSIT", "5.00", "2024-01-15T09:00:00", bank="OTHER", account="1"),
        ])

        assert ledgers[AccountKey("0001", "1", "BANCO_A")].balance == Decimal("10.00")
        assert ledgers[AccountKey("0001", "2", "BANCO_A")].has_rejections
        assert ledgers[AccountKey("0001", "1", "OTHER")].balance == Decimal("5.00")

    def test_holder_from_first_chronological_transaction(self, txn):
        """The holder name comes from the transaction that opened the ledger."""
        ledgers = compute_ledgers([
            txn("DEPOSIT", "1", "2024-01-15T12:00:00", holder="A. Silva"),
            txn("DEPOSIT", "1", "2024-01-15T08:00:00", holder="Ana Silva"),
        ])

        assert ledgers[KEY].holder == "Ana Silva"
        assert ledgers[KEY].balance == Decimal("2")

    def test_equal_timestamps_keep_input_order(self, txn):
        """Ties are resolved by input order."""
        withdrawal = txn("WITHDRAWAL", "50.00", "2024-01-15T10:00:00")
        deposit = txn("DEPOSIT", "50.00", "2024-01-15T10:00:00")

        first = compute_ledgers([withdrawal, deposit])[KEY]
        second = compute_ledgers([deposit, withdrawal])[KEY]

        assert first.has_rejections and first.balance == Decimal("50.00")
        assert not second.has_rejections and second.balance == Decimal("0")

    def test_chronological_is_stable(self, txn):
        a = txn("DEPOSIT", "1", "2024-01-15T10:00:00")
        b = txn("DEPOSIT", "2", "2024-01-15T10:00:00")
        c = txn("DEPOSIT", "3", "2024-01-14T10:00:00")

        assert chronological([a, b, c]) == [c, a, b]

    def test_empty_input(self):
        assert compute_ledgers([]) == {}

    def test_input_not_mutated(self, txn):
        items = [
            txn("DEPOSIT", "1", "2024-01-15T12:00:00"),
            txn("DEPOSIT", "1", "2024-01-15T08:00:00"),
        ]
        snapshot = list(items)
        compute_ledgers(items)
        assert items == snapshot


_transactions = st.lists(
    st.builds(
        _transaction,
        kind=st.sampled_from(["DEPOSIT", "WITHDRAWAL"]),
        amount=st.integers(min_value=1, max_value=500).map(lambda n: f"{n}.00"),
        timestamp=st.integers(min_value=0, max_value=23).map(
            lambda h: f"2024-01-15T{h:02d}:00:00"
        ),
        account=st.sampled_from(["1", "2", "3"]),
    ),
    max_size=30,
)


def _balances(ledgers):
    return {key: ledger.balance for key, ledger in ledgers.items()}


class TestLedgerProperties:
    """Property-based invariants of the replay."""

    @given(_transactions)
    @settings(max_examples=100)
    def test_balance_matches_accepted_history(self, transactions):
        """PROPERTY: balance is accepted deposits minus accepted withdrawals."""
        for ledger in compute_ledgers(transactions).values():
            expected = sum(
                (
                    t.amount if t.kind == OperationKind.DEPOSIT else -t.amount
                    for t in ledger.accepted
                ),
                Decimal("0"),
            )
            assert ledger.balance == expected

    @given(_transactions)
    @settings(max_examples=100)
    def test_running_balance_never_negative(self, transactions):
        """PROPERTY: the balance after each accepted operation is >= 0."""
        for ledger in compute_ledgers(transactions).values():
            running = Decimal("0")
            for t in ledger.accepted:
                running += t.amount if t.kind == OperationKind.DEPOSIT else -t.amount
                assert running >= 0

    @given(_transactions)
    @settings(max_examples=100)
    def test_every_transaction_accounted_for(self, transactions):
        """PROPERTY: each transaction is accepted or rejected, never lost."""
        ledgers = compute_ledgers(transactions)
        handled = sum(len(l.accepted) + len(l.rejections) for l in ledgers.values())
        assert handled == len(transactions)

    @given(_transactions, st.randoms(use_true_random=False))
    @settings(max_examples=100)
    def test_interleaving_of_accounts_does_not_matter(self, transactions, rnd):
        """PROPERTY: shuffling across accounts, keeping each account's order,
        leaves every balance unchanged."""
        by_account = {}
        for t in transactions:
            by_account.setdefault(t.account_key, []).append(t)

        queues = [list(q) for q in by_account.values()]
        interleaved = []
        while queues:
            queue = rnd.choice(queues)
            interleaved.append(queue.pop(0))
            if not queue:
                queues.remove(queue)

        assert _balances(replay(interleaved)) == _balances(replay(transactions))

    @given(_transactions, st.randoms(use_true_random=False))
    @settings(max_examples=100)
    def test_input_order_with_distinct_timestamps_does_not_matter(self, transactions, rnd):
        """PROPERTY: with distinct timestamps any permutation of the input
        yields the same ledgers, because the engine re-sorts."""
        distinct = list({t.timestamp: t for t in transactions}.values())
        shuffled = list(distinct)
        rnd.shuffle(shuffled)

        assert _balances(compute_ledgers(shuffled)) == _balances(compute_ledgers(distinct))

    def test_seeded_shuffles_of_fixture_batch(self, txn):
        """Reordering a realistic batch never changes the outcome."""
        batch = [
            txn("DEPOSIT", "100.00", "2024-01-15T09:00:00"),
            txn("WITHDRAWAL", "30.00", "2024-01-15T10:00:00"),
            txn("WITHDRAWAL", "80.00", "2024-01-15T11:00:00"),
            txn("DEPOSIT", "10.00", "2024-01-15T12:00:00", account="2"),
            txn("WITHDRAWAL", "10.00", "2024-01-15T13:00:00", account="2"),
        ]
        expected = compute_ledgers(batch)
        rnd = random.Random(1234)
        for _ in range(20):
            shuffled = list(batch)
            rnd.shuffle(shuffled)
            result = compute_ledgers(shuffled)
            assert _balances(result) == _balances(expected)
            assert result[KEY].rejections == expected[KEY].rejections
