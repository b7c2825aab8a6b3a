"""
Caller session: the resolved role and, for account holders, their account.

Identity is resolved upstream. The fronting layer forwards the role in
`X-User-Role` and the bound account in `X-Account-Number`; handlers receive
a CallerSession through dependency injection.
"""

import enum
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"
    GUEST = "guest"


class CallerSession(BaseModel):
    role: UserRole = UserRole.GUEST
    account_number: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def can_view(self, account_number: str) -> bool:
        if self.is_admin:
            return True
        return self.role == UserRole.USER and self.account_number == account_number


def resolve_session(role: Optional[str], account_number: Optional[str]) -> CallerSession:
    """
    Build a session from forwarded identity values.

    Unknown roles, and `user` without an account number, resolve to guest.
    """
    try:
        resolved = UserRole((role or "").strip().lower())
    except ValueError:
        return CallerSession()
    if resolved == UserRole.USER:
        if not account_number:
            return CallerSession()
        return CallerSession(role=resolved, account_number=account_number)
    return CallerSession(role=resolved)


def get_caller_session(
    x_user_role: Optional[str] = Header(None),
    x_account_number: Optional[str] = Header(None),
) -> CallerSession:
    """Dependency resolving the caller session from request headers."""
    return resolve_session(x_user_role, x_account_number)


def require_admin(session: CallerSession = Depends(get_caller_session)) -> CallerSession:
    """Dependency rejecting every caller but an admin."""
    if not session.is_admin:
        logger.warning("Admin access denied for role %s", session.role.value)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return session


def ensure_account_access(session: CallerSession, account_number: str) -> None:
    """Allow admins, and users on their own account number only."""
    if not session.can_view(account_number):
        logger.warning("Access to account %s denied for role %s", account_number, session.role.value)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Not allowed to view account {account_number}"
        )
