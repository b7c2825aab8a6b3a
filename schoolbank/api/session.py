"""
Caller session endpoint.
"""

from fastapi import APIRouter, Depends

from schoolbank.core.session import CallerSession, get_caller_session

router = APIRouter(prefix="/session", tags=["Session"])


@router.get("/", response_model=CallerSession)
def get_session(session: CallerSession = Depends(get_caller_session)):
    """
    The role and account number resolved for this caller.
    """
    return session
