"""
SessionCoordinator: login, refresh and revoke on top of the credential primitives.

    Anonymous --login--> Authenticated (access + refresh token)
              --refresh--> Refreshed (new access token, same refresh token)
              --revoke--> Revoked (refresh token dead; issued access tokens live until exp)

Nothing here retries or downgrades a failure: every error is raised to the
caller as-is (AuthError subclasses, or the storage layer's own exceptions).
"""
from __future__ import annotations

import hmac
import logging
import uuid
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Mapping, Optional, Protocol

from services.refresh_tokens import DEFAULT_REFRESH_TOKEN_TTL, RefreshTokenStore
from utils.exceptions import (
    CredentialMismatch,
    InvalidAPIKey,
    InvalidCredentials,
    MalformedDigest,
    UserNotFound,
)
from utils.headers import get_api_key, get_bearer_token
from utils.security import TOKEN_ISSUER, make_access_token, validate_access_token, verify_password

logger = logging.getLogger(__name__)

DEFAULT_ACCESS_TOKEN_TTL = timedelta(seconds=360)


@dataclass(frozen=True)
class AuthSettings:
    """Process-wide auth configuration, read once when the app is created."""

    jwt_secret: str = field(repr=False)
    polka_key: str = field(default="", repr=False)
    issuer: str = TOKEN_ISSUER
    access_token_ttl: timedelta = DEFAULT_ACCESS_TOKEN_TTL
    refresh_token_ttl: timedelta = DEFAULT_REFRESH_TOKEN_TTL

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "AuthSettings":
        return cls(
            jwt_secret=config["JWT_SECRET"],
            polka_key=config.get("POLKA_KEY", ""),
            issuer=config.get("JWT_ISSUER", TOKEN_ISSUER),
            access_token_ttl=config.get("ACCESS_TOKEN_EXPIRES", DEFAULT_ACCESS_TOKEN_TTL),
            refresh_token_ttl=config.get("REFRESH_TOKEN_EXPIRES", DEFAULT_REFRESH_TOKEN_TTL),
        )


class UserRecord(Protocol):
    id: Any
    hashed_password: str


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> Optional[UserRecord]: ...


@dataclass
class SessionTokens:
    user: Any
    access_token: str
    refresh_token: str

    @property
    def user_id(self) -> uuid.UUID:
        return uuid.UUID(str(self.user.id))


class SessionCoordinator:
    def __init__(self, settings: AuthSettings, users: UserRepository, refresh_tokens: RefreshTokenStore) -> None:
        self.settings = settings
        self._users = users
        self._refresh_tokens = refresh_tokens

    def access_ttl(self, expires_in_seconds: Optional[int] = None) -> timedelta:
        """Requested lifetime, never longer than the default; unset/non-positive means default."""
        default = self.settings.access_token_ttl
        if not expires_in_seconds or expires_in_seconds <= 0:
            return default
        return min(timedelta(seconds=expires_in_seconds), default)

    def _issue_access_token(self, user_id: uuid.UUID, ttl: Optional[timedelta] = None) -> str:
        return make_access_token(
            user_id, self.settings.jwt_secret, ttl or self.settings.access_token_ttl, issuer=self.settings.issuer
        )

    def login(self, email: str, password: str, expires_in_seconds: Optional[int] = None) -> SessionTokens:
        user = self._users.find_by_email(email)
        if user is None:
            logger.info("login failed: unknown email")
            raise UserNotFound()

        try:
            verify_password(password, user.hashed_password)
        except CredentialMismatch:
            logger.info("login failed: wrong password for user %s", user.id)
            raise InvalidCredentials()
        except MalformedDigest:
            logger.error("stored password hash for user %s is malformed", user.id)
            raise InvalidCredentials()

        user_id = uuid.UUID(str(user.id))
        access_token = self._issue_access_token(user_id, self.access_ttl(expires_in_seconds))
        # if this raises, the caller gets no tokens at all
        refresh_token = self._refresh_tokens.issue(user_id)
        logger.info("user %s logged in", user_id)
        return SessionTokens(user=user, access_token=access_token, refresh_token=refresh_token)

    def refresh(self, headers: Mapping[str, str]) -> str:
        """Mint a new access token from the bearer refresh token. The refresh token stays valid."""
        token = get_bearer_token(headers)
        user_id = self._refresh_tokens.validate(token)
        return self._issue_access_token(user_id)

    def revoke_session(self, headers: Mapping[str, str]) -> None:
        token = get_bearer_token(headers)
        self._refresh_tokens.revoke(token)

    def authenticate(self, headers: Mapping[str, str]) -> uuid.UUID:
        """Return the user id carried by the bearer access token."""
        token = get_bearer_token(headers)
        return validate_access_token(token, self.settings.jwt_secret, issuer=self.settings.issuer)

    def authenticate_webhook(self, headers: Mapping[str, str]) -> None:
        key = get_api_key(headers)
        if not self.settings.polka_key or not hmac.compare_digest(key.encode(), self.settings.polka_key.encode()):
            logger.warning("webhook call rejected: API key mismatch")
            raise InvalidAPIKey()
