"""
Typed failures raised by the authentication core.

Each class carries the HTTP status and error code the API layer answers
with, so handlers only need to let them propagate (see api/errors.py).
"""
from __future__ import annotations


class AuthError(Exception):
    status_code = 401
    error = "UNAUTHORIZED"
    message = "Unauthorized"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


# passwords
class EmptyInput(AuthError):
    status_code = 422
    error = "VALIDATION_ERROR"
    message = "Password must not be empty"


class MalformedDigest(AuthError):
    error = "MALFORMED_DIGEST"
    message = "Stored password hash is not a valid encoding"


class CredentialMismatch(AuthError):
    error = "CREDENTIAL_MISMATCH"
    message = "Password does not match"


# access tokens
class InvalidSignature(AuthError):
    error = "INVALID_SIGNATURE"
    message = "Invalid token signature"


class TokenExpired(AuthError):
    error = "TOKEN_EXPIRED"
    message = "Token expired"


class MalformedSubject(AuthError):
    error = "MALFORMED_SUBJECT"
    message = "Token subject is not a valid user id"


class InvalidClaims(AuthError):
    error = "INVALID_CLAIMS"
    message = "Token claims are invalid"


# refresh tokens
class RefreshTokenNotFound(AuthError):
    error = "REFRESH_TOKEN_NOT_FOUND"
    message = "Refresh token not found"


class RefreshTokenExpired(AuthError):
    error = "REFRESH_TOKEN_EXPIRED"
    message = "Refresh token expired"


class RefreshTokenRevoked(AuthError):
    error = "REFRESH_TOKEN_REVOKED"
    message = "Refresh token revoked"


# headers
class MissingHeader(AuthError):
    error = "MISSING_HEADER"
    message = "Authorization header is missing"


class MalformedHeader(AuthError):
    error = "MALFORMED_HEADER"
    scheme = ""

    def __init__(self, message: str | None = None):
        super().__init__(message or f"Authorization header must be '{self.scheme} <value>'")


class MalformedBearerHeader(MalformedHeader):
    scheme = "Bearer"


class MalformedAPIKeyHeader(MalformedHeader):
    scheme = "ApiKey"


# sessions
class InvalidCredentials(AuthError):
    error = "INVALID_CREDENTIALS"
    message = "Incorrect email or password"


class UserNotFound(InvalidCredentials):
    """Unknown email. Answers exactly like a wrong password."""


class InvalidAPIKey(AuthError):
    error = "INVALID_API_KEY"
    message = "API key invalid"
