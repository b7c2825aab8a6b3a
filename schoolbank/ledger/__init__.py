"""
Ledger computations over in-memory record snapshots.

Every function here is pure: it reads the collections it is given and
returns new values. Records can be ORM rows, pydantic schemas or any
object with the same attribute names.
"""

from schoolbank.ledger.balance import (
    BalanceDrift,
    LedgerEntry,
    balance_window,
    compute_balance,
    find_balance_drift,
    next_total_amount,
    order_transactions,
    running_balances,
)
from schoolbank.ledger.history import filter_history
from schoolbank.ledger.passbook import Passbook, assemble_passbook, find_account
from schoolbank.ledger.summary import Summary, compute_summary

__all__ = [
    "BalanceDrift",
    "LedgerEntry",
    "Passbook",
    "Summary",
    "assemble_passbook",
    "balance_window",
    "compute_balance",
    "compute_summary",
    "filter_history",
    "find_account",
    "find_balance_drift",
    "next_total_amount",
    "order_transactions",
    "running_balances",
]
