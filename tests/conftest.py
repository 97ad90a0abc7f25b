import pytest

from api import create_app
from models import storage
from services.refresh_tokens import RefreshTokenStore
from services.sessions import AuthSettings, SessionCoordinator
from tests.fakes import (
    TEST_PASSWORD,
    TEST_SECRET,
    Clock,
    FakeUser,
    MemoryRefreshTokenRepository,
    MemoryUserRepository,
)
from utils.security import hash_password


@pytest.fixture
def app():
    app = create_app("testing")
    yield app
    storage.close()
    storage.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user_payload():
    return {"email": "walt@breakingbad.com", "password": TEST_PASSWORD}


@pytest.fixture
def registered_user(client, user_payload):
    resp = client.post("/api/users", json=user_payload)
    assert resp.status_code == 201
    return resp.get_json()


@pytest.fixture
def logged_in(client, registered_user, user_payload):
    resp = client.post("/api/login", json=user_payload)
    assert resp.status_code == 200
    return resp.get_json()


# service-level fixtures (no Flask, no database)

@pytest.fixture
def settings():
    return AuthSettings(jwt_secret=TEST_SECRET, polka_key="f271c81ff7084ee5b99a5091b42d486e")


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def refresh_repo():
    return MemoryRefreshTokenRepository()


@pytest.fixture
def refresh_store(refresh_repo, clock):
    return RefreshTokenStore(refresh_repo, clock=clock)


@pytest.fixture(scope="session")
def fake_user():
    # hashed once: Argon2 is deliberately slow
    return FakeUser(email="saul@bettercall.com", hashed_password=hash_password(TEST_PASSWORD))


@pytest.fixture
def users(fake_user):
    return MemoryUserRepository(fake_user)


@pytest.fixture
def sessions(settings, users, refresh_store):
    return SessionCoordinator(settings, users, refresh_store)
