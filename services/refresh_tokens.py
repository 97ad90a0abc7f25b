"""
RefreshTokenStore: opaque, long-lived refresh tokens kept in a persistent mapping.

A token is valid while it exists, is not revoked and has not reached its
expiry. Revocation is permanent. Records are never deleted here.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Protocol

from utils.exceptions import RefreshTokenExpired, RefreshTokenNotFound, RefreshTokenRevoked
from utils.security import make_refresh_token

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_TOKEN_TTL = timedelta(hours=1440)


@dataclass(frozen=True)
class RefreshTokenRecord:
    token: str
    user_id: uuid.UUID
    created_at: datetime
    expires_at: datetime
    revoked_at: Optional[datetime] = None

    @property
    def revoked(self) -> bool:
        return self.revoked_at is not None


class RefreshTokenRepository(Protocol):
    def insert(self, token: str, user_id: uuid.UUID, expires_at: datetime, created_at: datetime) -> None: ...

    def find_by_token(self, token: str) -> Optional[RefreshTokenRecord]: ...

    def mark_revoked(self, token: str, revoked_at: datetime) -> bool: ...


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RefreshTokenStore:
    def __init__(
        self,
        repository: RefreshTokenRepository,
        ttl: timedelta = DEFAULT_REFRESH_TOKEN_TTL,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._repo = repository
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user_id: uuid.UUID) -> str:
        """Create and persist a new refresh token for user_id.

        Storage errors (including a duplicate token) propagate unchanged.
        """
        token = make_refresh_token()
        now = self._clock()
        self._repo.insert(token, user_id, expires_at=now + self._ttl, created_at=now)
        logger.debug("issued refresh token for user %s", user_id)
        return token

    def validate(self, token: str) -> uuid.UUID:
        record = self._repo.find_by_token(token)
        if record is None:
            raise RefreshTokenNotFound()
        if self._clock() >= record.expires_at:
            raise RefreshTokenExpired()
        if record.revoked:
            raise RefreshTokenRevoked()
        return record.user_id

    def revoke(self, token: str) -> None:
        if not self._repo.mark_revoked(token, self._clock()):
            raise RefreshTokenNotFound()
        logger.info("refresh token revoked")
