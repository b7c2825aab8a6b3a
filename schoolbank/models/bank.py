"""
Bank branch database model.
"""

from sqlalchemy import Column, String, Integer
from schoolbank.database import Base


class BankBranch(Base):
    """
    Bank branch master data, referenced by accounts.
    """
    __tablename__ = "bank_branches"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    ifsc_code = Column(String(20), nullable=False, index=True)
    taluka = Column(String(100), nullable=False, default="")
    district = Column(String(100), nullable=False, default="")

    def __repr__(self):
        return f"<BankBranch(id={self.id}, name={self.name}, ifsc={self.ifsc_code})>"
