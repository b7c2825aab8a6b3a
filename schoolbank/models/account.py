"""
Account database model.
Represents student bank accounts in the program.
"""

from sqlalchemy import Column, String, Integer, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from schoolbank.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Account(Base):
    """
    Account table - stores student bank accounts.

    `student_id` and `bank_id` are plain references with no foreign key, so
    an account survives the deletion of its student or branch.
    `ifsc_code` is a snapshot of the branch routing code taken when the
    account was created or last edited; branch edits do not update it.
    """
    __tablename__ = "accounts"
    __table_args__ = (
        UniqueConstraint("bank_id", "account_number", name="uq_account_number_per_bank"),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, index=True, nullable=False)
    bank_id = Column(Integer, index=True, nullable=False)
    account_number = Column(String(50), index=True, nullable=False)
    initial_amount = Column(Integer, nullable=False, default=0)
    ifsc_code = Column(String(20), nullable=False, default="")
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Transactions have no meaning without their account
    transactions = relationship(
        "Transaction",
        back_populates="account",
        cascade="all, delete-orphan",
        order_by="Transaction.id",
    )

    def __repr__(self):
        return f"<Account(account_number={self.account_number}, student={self.student_id}, initial={self.initial_amount})>"
