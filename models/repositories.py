"""
SQL-backed implementations of the persistence contracts the auth services need.

Each call is a single-row read or write committed on its own; no
cross-row transaction is ever held open.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from models.db_storage import DBStorage
from models.refresh_token import RefreshToken
from models.user import User
from services.refresh_tokens import RefreshTokenRecord


class SQLUserRepository:
    def __init__(self, storage: DBStorage):
        self._storage = storage

    def find_by_email(self, email: str) -> Optional[User]:
        session = self._storage.get_session()
        return session.query(User).filter(User.email == email).first()


class SQLRefreshTokenRepository:
    def __init__(self, storage: DBStorage):
        self._storage = storage

    def insert(self, token: str, user_id: uuid.UUID, expires_at: datetime, created_at: datetime) -> None:
        self._storage.new(
            RefreshToken(
                token=token,
                user_id=str(user_id),
                created_at=created_at,
                updated_at=created_at,
                expires_at=expires_at,
            )
        )
        self._storage.save()

    def find_by_token(self, token: str) -> Optional[RefreshTokenRecord]:
        row = self._storage.get(RefreshToken, token)
        if row is None:
            return None
        return RefreshTokenRecord(
            token=row.token,
            user_id=uuid.UUID(row.user_id),
            created_at=row.created_at,
            expires_at=row.expires_at,
            revoked_at=row.revoked_at,
        )

    def mark_revoked(self, token: str, revoked_at: datetime) -> bool:
        row = self._storage.get(RefreshToken, token)
        if row is None:
            return False
        if row.revoked_at is None:
            row.revoked_at = revoked_at
            row.updated_at = revoked_at
            self._storage.save()
        return True
