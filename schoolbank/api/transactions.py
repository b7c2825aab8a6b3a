"""
Transaction API endpoints.
Appends deposits and withdrawals and exposes the stored ledger.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional

from schoolbank.api.accounts import get_account_or_404
from schoolbank.core.config import settings
from schoolbank.core.session import require_admin
from schoolbank.database import get_db
from schoolbank.ledger import balance_window, find_balance_drift, next_total_amount
from schoolbank.models.transaction import Transaction, TransactionKind
from schoolbank.repository import LedgerRepository
from schoolbank.schemas.transaction import TransactionCreate, TransactionResponse, TransactionUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["Transactions"], dependencies=[Depends(require_admin)])


def get_transaction_or_404(db: Session, transaction_id: int) -> Transaction:
    transaction = db.query(Transaction).filter(Transaction.id == transaction_id).first()
    if not transaction:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Transaction {transaction_id} not found"
        )
    return transaction


@router.post("/", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(
    transaction_data: TransactionCreate,
    db: Session = Depends(get_db)
):
    """
    Append a deposit or withdrawal to an account's ledger.

    The entry may be backdated. Its `total_amount` is the balance just
    before its own date plus or minus the amount, and stored totals of
    later entries are restamped to the new running balance. A withdrawal
    is rejected when it exceeds the balance at its date or at any later
    entry.
    """
    account = get_account_or_404(db, transaction_data.account_id)
    ledger = LedgerRepository(db).list_account_transactions(account.id)
    prior_balance, lowest_balance = balance_window(
        account.initial_amount, ledger, transaction_data.date
    )

    if (transaction_data.transaction_type == TransactionKind.WITHDRAWAL
            and transaction_data.amount > lowest_balance):
        logger.warning(
            "Rejected withdrawal of %s from account %s with available balance %s",
            transaction_data.amount, account.account_number, lowest_balance
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Insufficient balance for withdrawal"
        )

    transaction = Transaction(
        **transaction_data.model_dump(),
        total_amount=next_total_amount(
            prior_balance, transaction_data.transaction_type, transaction_data.amount
        ),
    )
    db.add(transaction)
    db.flush()

    restamped = 0
    for item in find_balance_drift(account.initial_amount, ledger + [transaction]):
        if item.transaction.date > transaction.date:
            item.transaction.total_amount = item.expected
            restamped += 1

    db.commit()
    db.refresh(transaction)

    logger.info(
        "Recorded %s of %s on account %s, total %s, %d later totals restamped",
        transaction.transaction_type.value, transaction.amount,
        account.account_number, transaction.total_amount, restamped
    )
    return transaction


@router.get("/", response_model=List[TransactionResponse])
def list_transactions(
    account_id: Optional[int] = None,
    skip: int = 0,
    limit: int = settings.DEFAULT_PAGE_LIMIT,
    db: Session = Depends(get_db)
):
    """
    List transactions in insertion order, optionally for one account.

    - **account_id**: Restrict to one account
    - **skip**: Number of records to skip (default: 0)
    - **limit**: Maximum number of records to return
    """
    query = db.query(Transaction)
    if account_id is not None:
        query = query.filter(Transaction.account_id == account_id)
    return query.order_by(Transaction.id).offset(skip).limit(limit).all()


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: int,
    db: Session = Depends(get_db)
):
    return get_transaction_or_404(db, transaction_id)


@router.put("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: int,
    transaction_data: TransactionUpdate,
    db: Session = Depends(get_db)
):
    """
    Replace a stored transaction as given.

    Later transactions keep their stored totals; use the account ledger
    view to find the drift this leaves behind.
    """
    transaction = get_transaction_or_404(db, transaction_id)
    get_account_or_404(db, transaction_data.account_id)
    for field, value in transaction_data.model_dump().items():
        setattr(transaction, field, value)
    db.commit()
    db.refresh(transaction)

    logger.info("Updated transaction %s; later totals not recomputed", transaction_id)
    return transaction


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: int,
    db: Session = Depends(get_db)
):
    transaction = get_transaction_or_404(db, transaction_id)
    db.delete(transaction)
    db.commit()

    logger.info("Deleted transaction %s; later totals not recomputed", transaction_id)
    return None
