"""
Pydantic schemas package.
"""

from schoolbank.schemas.student import StudentCreate, StudentResponse
from schoolbank.schemas.bank import BankBranchCreate, BankBranchResponse
from schoolbank.schemas.account import AccountCreate, AccountResponse, AccountBalance
from schoolbank.schemas.transaction import TransactionCreate, TransactionUpdate, TransactionResponse
from schoolbank.schemas.ledger import (
    LedgerEntryResponse,
    BalanceDriftResponse,
    LedgerResponse,
    PassbookResponse,
    SummaryResponse,
)

__all__ = [
    "StudentCreate",
    "StudentResponse",
    "BankBranchCreate",
    "BankBranchResponse",
    "AccountCreate",
    "AccountResponse",
    "AccountBalance",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionResponse",
    "LedgerEntryResponse",
    "BalanceDriftResponse",
    "LedgerResponse",
    "PassbookResponse",
    "SummaryResponse",
]
