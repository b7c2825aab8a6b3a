"""
Date-range statement history for one account.
"""

from typing import List

from schoolbank.ledger.passbook import find_account


def filter_history(account_number: str, accounts, transactions, date_from: int, date_to: int) -> List:
    """
    Transactions of `account_number` dated within [date_from, date_to].

    Both bounds are inclusive ticks. The result is sorted by date and keeps
    input order for equal dates. An inverted range gives an empty list;
    an unknown account raises NotFound.
    """
    account = find_account(account_number, accounts)
    selected = [
        t for t in transactions
        if t.account_id == account.id and date_from <= t.date <= date_to
    ]
    return sorted(selected, key=lambda t: t.date)
