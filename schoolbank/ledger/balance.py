"""
Running-balance calculation for one account's ledger.
"""

from typing import Any, Iterable, List, NamedTuple, Tuple

from schoolbank.models.transaction import TransactionKind


class LedgerEntry(NamedTuple):
    """One step of the running balance: the transaction and the balance after it."""
    transaction: Any
    balance: int


class BalanceDrift(NamedTuple):
    """A transaction whose stored `total_amount` disagrees with the ledger."""
    transaction: Any
    stored: int
    expected: int


def _order_key(position: int, transaction):
    # Records not yet persisted have no id and fall back to input position
    has_no_id = transaction.id is None
    return (transaction.date, has_no_id, 0 if has_no_id else transaction.id, position)


def order_transactions(transactions: Iterable) -> List:
    """Sort by date ascending, ties broken by id and then by input position."""
    indexed = sorted(enumerate(transactions), key=lambda pair: _order_key(*pair))
    return [transaction for _, transaction in indexed]


def next_total_amount(current_balance: int, kind, amount: int) -> int:
    """
    Balance after applying one transaction, clamped at zero.

    This is the value stored as `total_amount` when a transaction is appended.
    """
    if kind == TransactionKind.DEPOSIT:
        return max(0, current_balance + amount)
    return max(0, current_balance - amount)


def running_balances(initial_amount: int, transactions: Iterable) -> List[LedgerEntry]:
    """
    Fold the ledger from `initial_amount`, one entry per transaction.

    Deposits add, withdrawals subtract, and the balance is clamped at zero
    after every step, so an overdrawing withdrawal leaves 0 rather than a
    negative balance.
    """
    balance = initial_amount
    entries = []
    for transaction in order_transactions(transactions):
        balance = next_total_amount(balance, transaction.transaction_type, transaction.amount)
        entries.append(LedgerEntry(transaction, balance))
    return entries


def compute_balance(initial_amount: int, transactions: Iterable) -> int:
    """Current balance of an account. An empty ledger returns `initial_amount`."""
    entries = running_balances(initial_amount, transactions)
    if not entries:
        return initial_amount
    return entries[-1].balance


def find_balance_drift(initial_amount: int, transactions: Iterable) -> List[BalanceDrift]:
    """
    Transactions whose stored `total_amount` no longer matches the running balance.

    Stored totals are snapshots; editing or deleting an earlier transaction
    leaves later snapshots stale. This reports them without fixing them.
    """
    return [
        BalanceDrift(entry.transaction, entry.transaction.total_amount, entry.balance)
        for entry in running_balances(initial_amount, transactions)
        if entry.transaction.total_amount != entry.balance
    ]


def balance_window(initial_amount: int, transactions: Iterable, date: int) -> Tuple[int, int]:
    """
    Balances seen by a new entry dated `date`.

    Returns the balance just before it and the lowest balance from there on.
    A new entry lands after every existing entry with the same date. A
    withdrawal larger than the lowest balance would clamp somewhere.
    """
    prior = initial_amount
    lowest = None
    for entry in running_balances(initial_amount, transactions):
        if entry.transaction.date <= date:
            prior = entry.balance
        elif lowest is None or entry.balance < lowest:
            lowest = entry.balance
    if lowest is None:
        return prior, prior
    return prior, min(prior, lowest)
