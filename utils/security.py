"""
security helpers:
- Argon2 password hashing via argon2-cffi
- stateless access tokens (JWT, HS256) via PyJWT
- opaque refresh token values
"""
from __future__ import annotations

import secrets
import uuid
from datetime import datetime, timedelta, timezone

import jwt
from jwt.exceptions import InvalidSubjectError
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from utils.exceptions import (
    CredentialMismatch,
    EmptyInput,
    InvalidClaims,
    InvalidSignature,
    MalformedDigest,
    MalformedSubject,
    TokenExpired,
)

TOKEN_ISSUER = "chirpy"
JWT_ALGORITHM = "HS256"
REFRESH_TOKEN_BYTES = 32

# Fixed work factor; the encoded hash carries it, so verification never depends on it.
ph = PasswordHasher(time_cost=3, memory_cost=65536, parallelism=4)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2
    """
    if password == "":
        raise EmptyInput()
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a plaintext password against an encoded Argon2 hash.

    Returns True or raises CredentialMismatch / MalformedDigest.
    """
    try:
        return ph.verify(password_hash, password)
    except VerifyMismatchError:
        raise CredentialMismatch()
    except (InvalidHashError, VerificationError):
        # argon2 prefix present but the encoding does not decode
        raise MalformedDigest()


def make_access_token(user_id: uuid.UUID, secret: str, ttl: timedelta, issuer: str = TOKEN_ISSUER) -> str:
    """Mint a signed access token for user_id that expires after ttl."""
    issued_at = _now()
    payload = {
        "iss": issuer,
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def validate_access_token(token: str, secret: str, issuer: str = TOKEN_ISSUER) -> uuid.UUID:
    """
    Verify signature and expiry of an access token and return its subject.
    Purely computational: no store lookup is involved.
    """
    try:
        decoded = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            issuer=issuer,
            options={"require": ["iss", "sub", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpired()
    except jwt.DecodeError as exc:
        # covers InvalidSignatureError and undecodable structures
        raise InvalidSignature(f"Invalid token: {exc}")
    except InvalidSubjectError:
        # a sub that is not even a string
        raise MalformedSubject()
    except jwt.InvalidTokenError as exc:
        raise InvalidClaims(f"Invalid token: {exc}")

    try:
        return uuid.UUID(decoded["sub"])
    except (TypeError, ValueError, AttributeError):
        raise MalformedSubject()


def make_refresh_token() -> str:
    """Return 32 random bytes, hex encoded (64 lowercase characters)."""
    return secrets.token_hex(REFRESH_TOKEN_BYTES)
