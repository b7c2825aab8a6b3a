"""
Passbook and statement history endpoints.
Available to admins and to account holders for their own account.
"""

import csv
import io
import logging
from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from typing import List

from schoolbank.core.session import CallerSession, ensure_account_access, get_caller_session
from schoolbank.core.timeutils import day_range, format_nanos_date
from schoolbank.database import get_db
from schoolbank.ledger import assemble_passbook, compute_balance, filter_history, order_transactions
from schoolbank.repository import LedgerRepository
from schoolbank.schemas.account import AccountResponse
from schoolbank.schemas.bank import BankBranchResponse
from schoolbank.schemas.ledger import PassbookResponse
from schoolbank.schemas.student import StudentResponse
from schoolbank.schemas.transaction import TransactionResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Passbook"])

HISTORY_CSV_COLUMNS = ["Account Number", "Student Name", "Date", "Type", "Amount", "Reason", "Balance"]


@router.get("/passbook/{account_number}", response_model=PassbookResponse)
def get_passbook(
    account_number: str,
    db: Session = Depends(get_db),
    session: CallerSession = Depends(get_caller_session)
):
    """
    Consolidated passbook: account, student, bank branch and transactions,
    oldest first.
    """
    ensure_account_access(session, account_number)
    repository = LedgerRepository(db)
    passbook = assemble_passbook(
        account_number,
        repository.list_accounts(),
        repository.list_students(),
        repository.list_bank_branches(),
        repository.list_transactions(),
    )
    return PassbookResponse(
        account=AccountResponse.model_validate(passbook.account),
        student=StudentResponse.model_validate(passbook.student) if passbook.student else None,
        bank_branch=BankBranchResponse.model_validate(passbook.bank_branch) if passbook.bank_branch else None,
        transactions=[TransactionResponse.model_validate(t) for t in order_transactions(passbook.transactions)],
        balance=compute_balance(passbook.account.initial_amount, passbook.transactions),
    )


def _load_history(db: Session, account_number: str, date_from: date, date_to: date):
    repository = LedgerRepository(db)
    start, end = day_range(date_from, date_to)
    return filter_history(
        account_number,
        repository.list_accounts(),
        repository.list_transactions(),
        start,
        end,
    )


@router.get("/history/{account_number}", response_model=List[TransactionResponse])
def get_history(
    account_number: str,
    date_from: date = Query(..., description="First day, from 00:00:00"),
    date_to: date = Query(..., description="Last day, until 23:59:59"),
    db: Session = Depends(get_db),
    session: CallerSession = Depends(get_caller_session)
):
    """
    Transactions of one account within a calendar-date range, oldest first.

    An inverted range returns an empty list.
    """
    ensure_account_access(session, account_number)
    return _load_history(db, account_number, date_from, date_to)


def write_history_csv(account_number: str, student_name: str, transactions) -> str:
    """Render history rows as CSV with every value quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(HISTORY_CSV_COLUMNS)
    for transaction in transactions:
        writer.writerow([
            account_number,
            student_name,
            format_nanos_date(transaction.date),
            transaction.transaction_type.value,
            transaction.amount,
            transaction.reason,
            transaction.total_amount,
        ])
    return buffer.getvalue()


@router.get("/history/{account_number}/export")
def export_history(
    account_number: str,
    date_from: date = Query(...),
    date_to: date = Query(...),
    db: Session = Depends(get_db),
    session: CallerSession = Depends(get_caller_session)
):
    """
    Download the same history as CSV.
    """
    ensure_account_access(session, account_number)
    transactions = _load_history(db, account_number, date_from, date_to)

    repository = LedgerRepository(db)
    account = repository.find_account_by_number(account_number)
    student = next(
        (s for s in repository.list_students() if s.id == account.student_id), None
    )
    content = write_history_csv(account_number, student.name if student else "", transactions)

    logger.info("Exported %d history rows for account %s", len(transactions), account_number)
    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename=history_{account_number}.csv"
        }
    )
