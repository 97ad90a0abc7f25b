"""
Authorization header parsing.

    Authorization: Bearer <token>   -> session callers
    Authorization: ApiKey <key>     -> webhook callers
"""
from __future__ import annotations

from typing import Mapping, Type

from utils.exceptions import (
    MalformedAPIKeyHeader,
    MalformedBearerHeader,
    MalformedHeader,
    MissingHeader,
)


def _credential(headers: Mapping[str, str], error: Type[MalformedHeader]) -> str:
    auth = (headers.get("Authorization") or "").strip()
    if not auth:
        raise MissingHeader()

    # "<scheme> <value>": a bare value, another scheme or a scheme alone are all malformed
    parts = auth.split(None, 1)
    if len(parts) < 2 or parts[0].lower() != error.scheme.lower():
        raise error()
    return parts[1]


def get_bearer_token(headers: Mapping[str, str]) -> str:
    return _credential(headers, MalformedBearerHeader)


def get_api_key(headers: Mapping[str, str]) -> str:
    return _credential(headers, MalformedAPIKeyHeader)
