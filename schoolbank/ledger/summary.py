"""
Organisation-wide totals across every account and transaction.
"""

from typing import Iterable, NamedTuple

from schoolbank.models.transaction import TransactionKind


class Summary(NamedTuple):
    total_initial: int
    total_deposits: int
    total_withdrawals: int
    net_balance: int


def compute_summary(accounts: Iterable, transactions: Iterable) -> Summary:
    """
    Sum opening amounts, deposits and withdrawals.

    `net_balance` is not clamped: inconsistent data can make it negative,
    which is what a diagnostic total should show.
    """
    total_initial = sum(account.initial_amount for account in accounts)
    total_deposits = 0
    total_withdrawals = 0
    for transaction in transactions:
        if transaction.transaction_type == TransactionKind.DEPOSIT:
            total_deposits += transaction.amount
        else:
            total_withdrawals += transaction.amount
    return Summary(
        total_initial=total_initial,
        total_deposits=total_deposits,
        total_withdrawals=total_withdrawals,
        net_balance=total_initial + total_deposits - total_withdrawals,
    )
