"""
Transaction database model.
Represents deposits and withdrawals against one account.
"""

from sqlalchemy import Column, String, BigInteger, Integer, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from schoolbank.database import Base
import enum


class TransactionKind(str, enum.Enum):
    """Transaction kinds."""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class Transaction(Base):
    """
    Transaction table - stores ledger entries.

    `date` is nanosecond ticks. `total_amount` is the balance snapshot right
    after this entry, computed by the caller when the entry is appended and
    never recomputed afterwards.
    """
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id", ondelete="CASCADE"), index=True, nullable=False)
    transaction_type = Column(SQLEnum(TransactionKind), nullable=False)
    date = Column(BigInteger, index=True, nullable=False)
    amount = Column(Integer, nullable=False)
    reason = Column(String(500), nullable=False)
    total_amount = Column(Integer, nullable=False, default=0)

    account = relationship("Account", back_populates="transactions")

    def __repr__(self):
        return f"<Transaction(id={self.id}, account={self.account_id}, type={self.transaction_type}, amount={self.amount})>"
