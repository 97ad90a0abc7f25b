#!/usr/bin/env python3
"""
Shared SQLAlchemy base and mixins for the Chirpy API.

- UUID primary key (String(36)) with defaults
- created_at / updated_at timestamps, set from Python in UTC and read back
  timezone-aware on every backend
- save() and delete() that use the DBStorage singleton
"""

from __future__ import annotations

from datetime import datetime, timezone
import uuid

# Importing 'models' gives access to the global 'storage' instance (DBStorage)
import models

from sqlalchemy import Column, String, DateTime
from sqlalchemy.types import TypeDecorator
from sqlalchemy.orm import declarative_base

# Declarative base for all models
Base = declarative_base()


def _uuid_str() -> str:
    """Return a canonical UUIDv4 string (36 chars, with hyphens)."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; treat them as the UTC they were written in."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetimes on every backend, SQLite included."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        return as_utc(value)


class TimestampMixin:
    created_at = Column(UTCDateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class BaseModel(TimestampMixin):
    """
    Base mixin for persistent entities keyed by a UUID string.
    """

    id = Column(String(36), primary_key=True, default=_uuid_str, nullable=False)

    def __init__(self, *args, **kwargs):
        """
        Allow attribute initialization via kwargs without requiring a session here.
        """
        for key, value in kwargs.items():
            setattr(self, key, value)
        # Ensure an id exists if user passed none
        if getattr(self, "id", None) is None:
            self.id = _uuid_str()

    def __str__(self) -> str:
        return f"[{self.__class__.__name__}] ({self.id})"

    def save(self):
        """Touch updated_at and commit the instance through DBStorage."""
        self.updated_at = utcnow()
        models.storage.new(self)
        models.storage.save()

    def delete(self):
        """Hard delete and commit."""
        models.storage.delete(self)
        models.storage.save()
