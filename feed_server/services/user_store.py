"""
User store: accounts for the auth collaborator (email + password hash).
Persistence in memory or in the `users` table depending on DATABASE_URL.
Only the id and email ever leave this module.
"""

import threading
from typing import Dict, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from ..errors import EmailTakenError
from .sql_models import UserRow


def _normalize_email(email: str) -> str:
    return email.strip()


class UserStore(Protocol):
    """Protocol for user persistence. Implement for in-memory or SQL."""

    def create_user(self, email: str, password_hash: str) -> Dict:
        """Create a user. Returns {id, email}. Raises EmailTakenError on duplicates."""
        ...

    def get_user_by_email(self, email: str) -> Optional[Dict]:
        """Return {id, email, password_hash} if the email is registered, else None."""
        ...


class InMemoryUserStore:
    """User store kept in process memory (local runs, tests)."""

    def __init__(self):
        self._lock = threading.Lock()
        self._users: Dict[str, Dict] = {}
        self._next_id = 1

    def create_user(self, email: str, password_hash: str) -> Dict:
        key = _normalize_email(email)
        with self._lock:
            if key in self._users:
                raise EmailTakenError(key)
            user = {"id": self._next_id, "email": key, "password_hash": password_hash}
            self._next_id += 1
            self._users[key] = user
            return {"id": user["id"], "email": user["email"]}

    def get_user_by_email(self, email: str) -> Optional[Dict]:
        with self._lock:
            user = self._users.get(_normalize_email(email))
            return dict(user) if user else None


class SqlUserStore:
    """User store backed by the `users` table."""

    def __init__(self, session_factory: sessionmaker):
        self._sessions = session_factory

    def create_user(self, email: str, password_hash: str) -> Dict:
        row = UserRow(email=_normalize_email(email), password_hash=password_hash)
        with self._sessions() as session:
            session.add(row)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                raise EmailTakenError(row.email) from e
            return {"id": row.id, "email": row.email}

    def get_user_by_email(self, email: str) -> Optional[Dict]:
        stmt = select(UserRow).where(UserRow.email == _normalize_email(email))
        with self._sessions() as session:
            row = session.execute(stmt).scalar_one_or_none()
            if row is None:
                return None
            return {"id": row.id, "email": row.email, "password_hash": row.password_hash}
