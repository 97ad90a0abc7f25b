"""Test doubles: in-memory repositories, a settable clock and header helpers."""
from __future__ import annotations

import dataclasses
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from services.refresh_tokens import RefreshTokenRecord

TEST_SECRET = "Test-Secret-Key_for-Automation-Only-987654321!"
TEST_PASSWORD = "04234"


class DuplicateToken(Exception):
    pass


class StorageDown(Exception):
    pass


class MemoryRefreshTokenRepository:
    def __init__(self):
        self._rows: Dict[str, RefreshTokenRecord] = {}
        self._lock = threading.Lock()

    def insert(self, token, user_id, expires_at, created_at):
        with self._lock:
            if token in self._rows:
                raise DuplicateToken(token)
            self._rows[token] = RefreshTokenRecord(token, user_id, created_at, expires_at)

    def find_by_token(self, token) -> Optional[RefreshTokenRecord]:
        with self._lock:
            return self._rows.get(token)

    def mark_revoked(self, token, revoked_at) -> bool:
        with self._lock:
            record = self._rows.get(token)
            if record is None:
                return False
            if record.revoked_at is None:
                self._rows[token] = dataclasses.replace(record, revoked_at=revoked_at)
            return True

    def __len__(self):
        return len(self._rows)


class FailingRefreshTokenRepository(MemoryRefreshTokenRepository):
    def insert(self, token, user_id, expires_at, created_at):
        raise StorageDown("refresh_tokens table unavailable")


@dataclasses.dataclass
class FakeUser:
    email: str
    hashed_password: str
    id: str = dataclasses.field(default_factory=lambda: str(uuid.uuid4()))


class MemoryUserRepository:
    def __init__(self, *users: FakeUser):
        self._by_email = {u.email: u for u in users}

    def add(self, user: FakeUser) -> FakeUser:
        self._by_email[user.email] = user
        return user

    def find_by_email(self, email):
        return self._by_email.get(email)


class Clock:
    """Settable clock for RefreshTokenStore."""

    def __init__(self, now: datetime | None = None):
        self.now = now or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
