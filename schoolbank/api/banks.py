"""
Bank branch API endpoints.
Admin-only branch master data.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from schoolbank.core.config import settings
from schoolbank.core.session import require_admin
from schoolbank.database import get_db
from schoolbank.models.account import Account
from schoolbank.models.bank import BankBranch
from schoolbank.schemas.bank import BankBranchCreate, BankBranchResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/banks", tags=["Banks"], dependencies=[Depends(require_admin)])


def get_bank_or_404(db: Session, bank_id: int) -> BankBranch:
    bank = db.query(BankBranch).filter(BankBranch.id == bank_id).first()
    if not bank:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Bank {bank_id} not found"
        )
    return bank


@router.post("/", response_model=BankBranchResponse, status_code=status.HTTP_201_CREATED)
def create_bank(
    bank_data: BankBranchCreate,
    db: Session = Depends(get_db)
):
    bank = BankBranch(**bank_data.model_dump())
    db.add(bank)
    db.commit()
    db.refresh(bank)

    logger.info("Created bank branch %s (%s)", bank.id, bank.ifsc_code)
    return bank


@router.get("/", response_model=List[BankBranchResponse])
def list_banks(
    skip: int = 0,
    limit: int = settings.DEFAULT_PAGE_LIMIT,
    db: Session = Depends(get_db)
):
    return db.query(BankBranch).order_by(BankBranch.id).offset(skip).limit(limit).all()


@router.get("/{bank_id}", response_model=BankBranchResponse)
def get_bank(
    bank_id: int,
    db: Session = Depends(get_db)
):
    return get_bank_or_404(db, bank_id)


@router.put("/{bank_id}", response_model=BankBranchResponse)
def update_bank(
    bank_id: int,
    bank_data: BankBranchCreate,
    db: Session = Depends(get_db)
):
    """
    Replace a branch's details.

    Accounts keep the routing code they were saved with.
    """
    bank = get_bank_or_404(db, bank_id)
    for field, value in bank_data.model_dump().items():
        setattr(bank, field, value)
    db.commit()
    db.refresh(bank)

    logger.info("Updated bank branch %s", bank_id)
    return bank


@router.delete("/{bank_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_bank(
    bank_id: int,
    db: Session = Depends(get_db)
):
    """
    Delete a bank branch. Accounts at the branch are kept.
    """
    bank = get_bank_or_404(db, bank_id)
    orphaned = [
        account.account_number
        for account in db.query(Account).filter(Account.bank_id == bank_id).all()
    ]

    db.delete(bank)
    db.commit()

    if orphaned:
        logger.warning("Deleted bank branch %s; accounts left without a branch: %s", bank_id, orphaned)
    else:
        logger.info("Deleted bank branch %s", bank_id)
    return None
