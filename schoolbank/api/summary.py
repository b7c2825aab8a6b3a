"""
Organisation-wide summary endpoint.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from schoolbank.core.session import require_admin
from schoolbank.database import get_db
from schoolbank.ledger import compute_summary
from schoolbank.repository import LedgerRepository
from schoolbank.schemas.ledger import SummaryResponse

router = APIRouter(prefix="/summary", tags=["Summary"], dependencies=[Depends(require_admin)])


@router.get("/", response_model=SummaryResponse)
def get_summary(db: Session = Depends(get_db)):
    """
    Totals across all accounts and transactions, with record counts.

    `net_balance` is not clamped and can be negative for inconsistent data.
    """
    repository = LedgerRepository(db)
    accounts = repository.list_accounts()
    summary = compute_summary(accounts, repository.list_transactions())
    return SummaryResponse(
        total_students=len(repository.list_students()),
        total_accounts=len(accounts),
        **summary._asdict(),
    )
