"""
Database models package.
"""

from schoolbank.models.student import Student
from schoolbank.models.bank import BankBranch
from schoolbank.models.account import Account
from schoolbank.models.transaction import Transaction, TransactionKind

__all__ = ["Student", "BankBranch", "Account", "Transaction", "TransactionKind"]
