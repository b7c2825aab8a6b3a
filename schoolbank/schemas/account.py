"""
Pydantic schemas for Account API requests and responses.
"""

from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import Optional


class AccountCreate(BaseModel):
    """Schema for creating or replacing an account."""
    student_id: int = Field(..., description="Owning student")
    bank_id: int = Field(..., description="Bank branch holding the account")
    account_number: str = Field(..., min_length=1, max_length=50, description="Account number, unique per branch")
    initial_amount: int = Field(default=0, ge=0, description="Opening amount in the smallest currency unit")
    ifsc_code: Optional[str] = Field(None, max_length=20, description="Routing code; copied from the branch when omitted")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "student_id": 1,
                "bank_id": 1,
                "account_number": "ACC001",
                "initial_amount": 500
            }
        }
    )


class AccountResponse(BaseModel):
    """Schema for account response."""
    id: int
    student_id: int
    bank_id: int
    account_number: str
    initial_amount: int
    ifsc_code: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AccountBalance(BaseModel):
    """Schema for account balance response."""
    account_number: str
    initial_amount: int
    balance: int
