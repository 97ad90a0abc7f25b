import re
import uuid
from datetime import timedelta

import pytest

from services.refresh_tokens import RefreshTokenStore
from tests.fakes import DuplicateToken
from utils.exceptions import RefreshTokenExpired, RefreshTokenNotFound, RefreshTokenRevoked


def test_issue_persists_a_record(refresh_store, refresh_repo, clock):
    user_id = uuid.uuid4()
    token = refresh_store.issue(user_id)

    assert re.fullmatch(r"[0-9a-f]{64}", token)
    record = refresh_repo.find_by_token(token)
    assert record.user_id == user_id
    assert record.created_at == clock.now
    assert record.expires_at == clock.now + timedelta(hours=1440)
    assert record.revoked_at is None


def test_validate_returns_owner(refresh_store):
    user_id = uuid.uuid4()
    token = refresh_store.issue(user_id)
    assert refresh_store.validate(token) == user_id
    # not consumed by validation
    assert refresh_store.validate(token) == user_id


def test_unknown_token(refresh_store):
    with pytest.raises(RefreshTokenNotFound):
        refresh_store.validate("0" * 64)


def test_expiry_boundary(refresh_store, clock):
    token = refresh_store.issue(uuid.uuid4())

    clock.advance(hours=1440, seconds=-1)
    refresh_store.validate(token)

    clock.advance(seconds=1)
    with pytest.raises(RefreshTokenExpired):
        refresh_store.validate(token)


def test_revoked_before_expiry(refresh_store):
    token = refresh_store.issue(uuid.uuid4())
    refresh_store.revoke(token)
    with pytest.raises(RefreshTokenRevoked):
        refresh_store.validate(token)


def test_expiry_is_reported_ahead_of_revocation(refresh_store, clock):
    token = refresh_store.issue(uuid.uuid4())
    refresh_store.revoke(token)
    clock.advance(days=365)
    with pytest.raises(RefreshTokenExpired):
        refresh_store.validate(token)


def test_revoke_is_idempotent_and_keeps_first_time(refresh_store, refresh_repo, clock):
    token = refresh_store.issue(uuid.uuid4())
    refresh_store.revoke(token)
    first = refresh_repo.find_by_token(token).revoked_at

    clock.advance(minutes=5)
    refresh_store.revoke(token)
    assert refresh_repo.find_by_token(token).revoked_at == first


def test_revoke_unknown_token(refresh_store):
    with pytest.raises(RefreshTokenNotFound):
        refresh_store.revoke("f" * 64)


def test_revoking_one_token_leaves_others(refresh_store):
    user_id = uuid.uuid4()
    first, second = refresh_store.issue(user_id), refresh_store.issue(user_id)
    refresh_store.revoke(first)
    assert refresh_store.validate(second) == user_id


def test_custom_ttl(refresh_repo, clock):
    store = RefreshTokenStore(refresh_repo, ttl=timedelta(minutes=1), clock=clock)
    token = store.issue(uuid.uuid4())
    clock.advance(minutes=1)
    with pytest.raises(RefreshTokenExpired):
        store.validate(token)


def test_duplicate_insert_is_not_retried(refresh_store, refresh_repo, monkeypatch):
    monkeypatch.setattr("services.refresh_tokens.make_refresh_token", lambda: "a" * 64)
    refresh_store.issue(uuid.uuid4())
    with pytest.raises(DuplicateToken):
        refresh_store.issue(uuid.uuid4())
    assert len(refresh_repo) == 1
