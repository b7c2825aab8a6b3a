"""
Pydantic schemas for Transaction API requests and responses.
"""

from pydantic import BaseModel, Field, ConfigDict
from schoolbank.models.transaction import TransactionKind


class TransactionCreate(BaseModel):
    """Schema for appending a transaction."""
    account_id: int = Field(..., description="Account the transaction belongs to")
    transaction_type: TransactionKind
    date: int = Field(..., description="Nanosecond ticks since the Unix epoch")
    amount: int = Field(..., gt=0, description="Amount (must be positive)")
    reason: str = Field(..., min_length=1, max_length=500)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "account_id": 1,
                "transaction_type": "deposit",
                "date": 1717200000000000000,
                "amount": 200,
                "reason": "Pocket money"
            }
        }
    )


class TransactionUpdate(TransactionCreate):
    """
    Schema for replacing a stored transaction.

    `total_amount` is stored as given; later snapshots are not recomputed.
    """
    total_amount: int = Field(..., ge=0)


class TransactionResponse(BaseModel):
    """Schema for transaction response."""
    id: int
    account_id: int
    transaction_type: TransactionKind
    date: int
    amount: int
    reason: str
    total_amount: int

    model_config = ConfigDict(from_attributes=True)
