"""
Pydantic schemas for bank branch requests and responses.
"""

from pydantic import BaseModel, Field, ConfigDict


class BankBranchCreate(BaseModel):
    """Schema for creating or replacing a bank branch."""
    name: str = Field(..., min_length=1, max_length=200)
    ifsc_code: str = Field(..., min_length=1, max_length=20, description="Branch routing code")
    taluka: str = Field(default="", max_length=100)
    district: str = Field(default="", max_length=100)


class BankBranchResponse(BaseModel):
    """Schema for bank branch response."""
    id: int
    name: str
    ifsc_code: str
    taluka: str
    district: str

    model_config = ConfigDict(from_attributes=True)
