"""
Passbook assembly: one account joined with its student, branch and ledger.
"""

from typing import Any, Iterable, List, NamedTuple, Optional

from schoolbank.core.exceptions import NotFound


class Passbook(NamedTuple):
    account: Any
    student: Optional[Any]
    bank_branch: Optional[Any]
    transactions: List[Any]


def find_account(account_number: str, accounts: Iterable):
    """
    Exact, case-sensitive lookup by account number.

    The first match in input order wins when a number repeats across
    branches. Raises NotFound when nothing matches.
    """
    for account in accounts:
        if account.account_number == account_number:
            return account
    raise NotFound("Account", account_number)


def _find_by_id(records: Iterable, record_id):
    return next((record for record in records if record.id == record_id), None)


def assemble_passbook(account_number: str, accounts, students, banks, transactions) -> Passbook:
    """
    Build the consolidated passbook view for `account_number`.

    A missing student or bank branch is left as None so orphaned accounts
    still render. Transactions keep the order they were given in.
    """
    account = find_account(account_number, accounts)
    return Passbook(
        account=account,
        student=_find_by_id(students, account.student_id),
        bank_branch=_find_by_id(banks, account.bank_id),
        transactions=[t for t in transactions if t.account_id == account.id],
    )
