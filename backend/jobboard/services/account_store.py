"""
Account persistence.

One ``AccountStore`` interface with two implementations, picked at
deployment time by the ``ACCOUNT_STORE`` setting:

- ``SqlAccountStore``: SQLAlchemy session, email uniqueness enforced by the
  unique index on ``accounts.email``.
- ``InMemoryAccountStore``: process-local document store, email uniqueness
  enforced under a lock. Useful for development and tests.

Both raise ``ConflictError`` when a write would duplicate an email, so a
concurrent registration that slips past the service's pre-check is still
rejected.
"""

import itertools
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import ObjectDeletedError, StaleDataError

from jobboard.core.errors import ConflictError, InternalError, NotFoundError
from jobboard.models import Account
from jobboard.models.account import utcnow

logger = logging.getLogger(__name__)


class AccountStore(ABC):
    """Repository interface used by the account service."""

    @abstractmethod
    def get(self, account_id: int) -> Optional[Account]:
        ...

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Account]:
        ...

    @abstractmethod
    def get_by_verify_token(self, token: str) -> Optional[Account]:
        ...

    @abstractmethod
    def add(self, account: Account) -> Account:
        """Insert a new account and return it with its id assigned."""

    @abstractmethod
    def save(self, account: Account) -> Account:
        """Persist changes made to an account returned by this store."""

    @abstractmethod
    def delete(self, account_id: int) -> bool:
        """Remove an account. Returns False if it did not exist."""


# ============== SQLAlchemy ==============


class SqlAccountStore(AccountStore):
    """Account store backed by a SQLAlchemy session. Commits per write."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _translate_errors(self) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            self.db.rollback()
            logger.info("Rejected duplicate account write: %s", exc.orig)
            raise ConflictError() from exc
        except (StaleDataError, ObjectDeletedError) as exc:
            # Row deleted by another session since it was loaded
            self.db.rollback()
            raise NotFoundError() from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Account store failure")
            raise InternalError() from exc

    def get(self, account_id: int) -> Optional[Account]:
        with self._translate_errors():
            return self.db.query(Account).filter(Account.id == account_id).first()

    def get_by_email(self, email: str) -> Optional[Account]:
        with self._translate_errors():
            return self.db.query(Account).filter(Account.email == email).first()

    def get_by_verify_token(self, token: str) -> Optional[Account]:
        with self._translate_errors():
            return (
                self.db.query(Account)
                .filter(Account.verify_token == token)
                .first()
            )

    def add(self, account: Account) -> Account:
        with self._translate_errors():
            self.db.add(account)
            self.db.commit()
            self.db.refresh(account)
        return account

    def save(self, account: Account) -> Account:
        with self._translate_errors():
            self.db.add(account)
            self.db.commit()
            self.db.refresh(account)
        return account

    def delete(self, account_id: int) -> bool:
        with self._translate_errors():
            deleted = (
                self.db.query(Account)
                .filter(Account.id == account_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        return deleted > 0


# ============== In-memory ==============


def _copy(account: Account) -> Account:
    """Detached copy so callers never mutate stored documents in place."""
    return Account(
        **{column.key: getattr(account, column.key) for column in Account.__table__.columns}
    )


class InMemoryAccountStore(AccountStore):
    """Dict-backed account store, safe to share across worker threads."""

    def __init__(self):
        self._accounts: Dict[int, Account] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _find(self, **criteria) -> Optional[Account]:
        with self._lock:
            for account in self._accounts.values():
                if all(getattr(account, key) == value for key, value in criteria.items()):
                    return _copy(account)
        return None

    def _email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        return any(
            other.email == email and other.id != exclude_id
            for other in self._accounts.values()
        )

    def get(self, account_id: int) -> Optional[Account]:
        with self._lock:
            account = self._accounts.get(account_id)
            return _copy(account) if account is not None else None

    def get_by_email(self, email: str) -> Optional[Account]:
        return self._find(email=email)

    def get_by_verify_token(self, token: str) -> Optional[Account]:
        return self._find(verify_token=token)

    def add(self, account: Account) -> Account:
        with self._lock:
            if self._email_taken(account.email):
                raise ConflictError()
            account.id = next(self._ids)
            account.created_at = account.updated_at = utcnow()
            if account.is_verified is None:
                account.is_verified = False
            self._accounts[account.id] = _copy(account)
        return account

    def save(self, account: Account) -> Account:
        with self._lock:
            if account.id not in self._accounts:
                raise NotFoundError()
            if self._email_taken(account.email, exclude_id=account.id):
                raise ConflictError()
            account.updated_at = utcnow()
            self._accounts[account.id] = _copy(account)
        return account

    def delete(self, account_id: int) -> bool:
        with self._lock:
            return self._accounts.pop(account_id, None) is not None

    def __len__(self) -> int:
        return len(self._accounts)
