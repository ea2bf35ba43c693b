"""
FastAPI dependencies for the auth routers.

Provides the account store/service for a request and resolves the
authenticated subject from the session token.
"""

from typing import Optional

from fastapi import Depends, Header
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from jobboard.core.config import settings
from jobboard.core.errors import AuthenticationError
from jobboard.core.security import decode_access_token
from jobboard.db.session import get_db
from jobboard.services import AccountService, AccountStore, InMemoryAccountStore, SqlAccountStore

# Bearer tokens are accepted alongside the x-auth-token header
bearer_scheme = HTTPBearer(auto_error=False)

# Shared by every request when ACCOUNT_STORE=memory
memory_store = InMemoryAccountStore()


def get_account_store(db: Session = Depends(get_db)) -> AccountStore:
    """Account store selected by the ``ACCOUNT_STORE`` setting."""
    if settings.ACCOUNT_STORE == "memory":
        return memory_store
    return SqlAccountStore(db)


def get_account_service(store: AccountStore = Depends(get_account_store)) -> AccountService:
    return AccountService(store)


def get_request_token(
    x_auth_token: Optional[str] = Header(None),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Raw session token from ``x-auth-token`` or ``Authorization: Bearer``."""
    if x_auth_token:
        return x_auth_token
    if credentials is not None:
        return credentials.credentials
    return None


def get_token_subject(token: Optional[str] = Depends(get_request_token)) -> Optional[int]:
    """
    Verify the session token and return its subject account id.

    Raises AuthenticationError (401) if the token is missing, badly signed or
    expired. A valid token without a numeric ``sub`` claim yields None, which
    the profile operations reject as a bad request.
    """
    if not token:
        raise AuthenticationError("No token, authorization denied")

    payload = decode_access_token(token)
    if payload is None:
        raise AuthenticationError("Token verification failed, authorization denied")

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return None
