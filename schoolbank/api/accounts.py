"""
Account API endpoints.
Handles account management and running-balance queries.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from schoolbank.api.banks import get_bank_or_404
from schoolbank.api.students import get_student_or_404
from schoolbank.core.config import settings
from schoolbank.core.exceptions import NotFound
from schoolbank.core.session import CallerSession, ensure_account_access, get_caller_session, require_admin
from schoolbank.database import get_db
from schoolbank.ledger import compute_balance, find_balance_drift, running_balances
from schoolbank.models.account import Account
from schoolbank.repository import LedgerRepository
from schoolbank.schemas.account import AccountCreate, AccountResponse, AccountBalance
from schoolbank.schemas.ledger import BalanceDriftResponse, LedgerEntryResponse, LedgerResponse
from schoolbank.schemas.transaction import TransactionResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/accounts", tags=["Accounts"])


def get_account_or_404(db: Session, account_id: int) -> Account:
    account = db.query(Account).filter(Account.id == account_id).first()
    if not account:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Account {account_id} not found"
        )
    return account


def load_account_ledger(db: Session, account_number: str, session: CallerSession):
    """Resolve an account by number for a caller allowed to see it."""
    ensure_account_access(session, account_number)
    repository = LedgerRepository(db)
    account = repository.find_account_by_number(account_number)
    if account is None:
        raise NotFound("Account", account_number)
    return account, repository.list_account_transactions(account.id)


def _apply_account_data(db: Session, account: Account, account_data: AccountCreate, account_id: int = None):
    get_student_or_404(db, account_data.student_id)
    bank = get_bank_or_404(db, account_data.bank_id)

    duplicate = db.query(Account).filter(
        Account.bank_id == account_data.bank_id,
        Account.account_number == account_data.account_number,
    )
    if account_id is not None:
        duplicate = duplicate.filter(Account.id != account_id)
    if duplicate.first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Account {account_data.account_number} already exists at bank {account_data.bank_id}"
        )

    account.student_id = account_data.student_id
    account.bank_id = account_data.bank_id
    account.account_number = account_data.account_number
    account.initial_amount = account_data.initial_amount
    # Snapshot of the branch code; later branch edits do not reach it
    account.ifsc_code = account_data.ifsc_code or bank.ifsc_code


@router.post("/", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_account(
    account_data: AccountCreate,
    db: Session = Depends(get_db),
    session: CallerSession = Depends(require_admin)
):
    """
    Open an account for a student.

    - **student_id**: Owning student
    - **bank_id**: Bank branch
    - **account_number**: Unique within the branch
    - **initial_amount**: Opening amount (default: 0)
    - **ifsc_code**: Routing code, copied from the branch when omitted
    """
    account = Account()
    _apply_account_data(db, account, account_data)

    db.add(account)
    db.commit()
    db.refresh(account)

    logger.info("Created account %s for student %s", account.account_number, account.student_id)
    return account


@router.get("/", response_model=List[AccountResponse])
def list_accounts(
    skip: int = 0,
    limit: int = settings.DEFAULT_PAGE_LIMIT,
    db: Session = Depends(get_db),
    session: CallerSession = Depends(require_admin)
):
    """
    List all accounts with pagination.
    """
    return db.query(Account).order_by(Account.id).offset(skip).limit(limit).all()


@router.get("/by-number/{account_number}/balance", response_model=AccountBalance)
def get_account_balance(
    account_number: str,
    db: Session = Depends(get_db),
    session: CallerSession = Depends(get_caller_session)
):
    """
    Current running balance, recomputed from the opening amount and the ledger.
    """
    account, transactions = load_account_ledger(db, account_number, session)
    return AccountBalance(
        account_number=account.account_number,
        initial_amount=account.initial_amount,
        balance=compute_balance(account.initial_amount, transactions),
    )


@router.get("/by-number/{account_number}/ledger", response_model=LedgerResponse)
def get_account_ledger(
    account_number: str,
    db: Session = Depends(get_db),
    session: CallerSession = Depends(get_caller_session)
):
    """
    Running balance after every transaction, in date order.

    `drift` lists transactions whose stored total no longer matches.
    """
    account, transactions = load_account_ledger(db, account_number, session)
    entries = running_balances(account.initial_amount, transactions)
    drift = find_balance_drift(account.initial_amount, transactions)
    if drift:
        logger.warning(
            "Account %s has %d transactions with stale stored totals",
            account_number, len(drift)
        )

    return LedgerResponse(
        account_number=account.account_number,
        initial_amount=account.initial_amount,
        balance=entries[-1].balance if entries else account.initial_amount,
        entries=[
            LedgerEntryResponse(
                transaction=TransactionResponse.model_validate(entry.transaction),
                balance=entry.balance,
            )
            for entry in entries
        ],
        drift=[
            BalanceDriftResponse(
                transaction=TransactionResponse.model_validate(item.transaction),
                stored=item.stored,
                expected=item.expected,
            )
            for item in drift
        ],
    )


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    db: Session = Depends(get_db),
    session: CallerSession = Depends(require_admin)
):
    return get_account_or_404(db, account_id)


@router.put("/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: int,
    account_data: AccountCreate,
    db: Session = Depends(get_db),
    session: CallerSession = Depends(require_admin)
):
    """
    Replace an account's details. The routing code snapshot is retaken.
    """
    account = get_account_or_404(db, account_id)
    _apply_account_data(db, account, account_data, account_id=account_id)
    db.commit()
    db.refresh(account)

    logger.info("Updated account %s", account_id)
    return account


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    account_id: int,
    db: Session = Depends(get_db),
    session: CallerSession = Depends(require_admin)
):
    """
    Delete an account together with its transactions.
    """
    account = get_account_or_404(db, account_id)
    removed = len(account.transactions)

    db.delete(account)
    db.commit()

    logger.info("Deleted account %s and %d transactions", account_id, removed)
    return None
