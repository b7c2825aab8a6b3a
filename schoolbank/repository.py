"""
Read access to the stored records, shaped for the ledger functions.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from schoolbank.models import Account, BankBranch, Student, Transaction


class LedgerRepository:
    """
    Wraps a database session and returns full record lists in insertion order.
    """

    def __init__(self, db: Session):
        self.db = db

    def list_students(self) -> List[Student]:
        return self.db.query(Student).order_by(Student.id).all()

    def list_accounts(self) -> List[Account]:
        return self.db.query(Account).order_by(Account.id).all()

    def list_bank_branches(self) -> List[BankBranch]:
        return self.db.query(BankBranch).order_by(BankBranch.id).all()

    def list_transactions(self) -> List[Transaction]:
        return self.db.query(Transaction).order_by(Transaction.id).all()

    def list_account_transactions(self, account_id: int) -> List[Transaction]:
        return self.db.query(Transaction).filter(
            Transaction.account_id == account_id
        ).order_by(Transaction.id).all()

    def find_account_by_number(self, account_number: str) -> Optional[Account]:
        return self.db.query(Account).filter(
            Account.account_number == account_number
        ).order_by(Account.id).first()
