"""
Response schemas for computed ledger views.
"""

from pydantic import BaseModel, ConfigDict
from typing import List, Optional

from schoolbank.schemas.account import AccountResponse
from schoolbank.schemas.bank import BankBranchResponse
from schoolbank.schemas.student import StudentResponse
from schoolbank.schemas.transaction import TransactionResponse


class LedgerEntryResponse(BaseModel):
    transaction: TransactionResponse
    balance: int

    model_config = ConfigDict(from_attributes=True)


class BalanceDriftResponse(BaseModel):
    transaction: TransactionResponse
    stored: int
    expected: int

    model_config = ConfigDict(from_attributes=True)


class LedgerResponse(BaseModel):
    """Running balance sequence for one account, with stale snapshots flagged."""
    account_number: str
    initial_amount: int
    balance: int
    entries: List[LedgerEntryResponse]
    drift: List[BalanceDriftResponse]


class PassbookResponse(BaseModel):
    """Consolidated passbook view."""
    account: AccountResponse
    student: Optional[StudentResponse] = None
    bank_branch: Optional[BankBranchResponse] = None
    transactions: List[TransactionResponse]
    balance: int

    model_config = ConfigDict(from_attributes=True)


class SummaryResponse(BaseModel):
    """Organisation-wide totals."""
    total_students: int
    total_accounts: int
    total_initial: int
    total_deposits: int
    total_withdrawals: int
    net_balance: int
