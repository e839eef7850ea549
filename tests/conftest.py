import os

# feedback_api.main builds an app from the environment at import time
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from feedback_api.core.config import Settings
from feedback_api.db.base import Base
from feedback_api.main import create_app

TEST_SECRET = "feedback-test-secret-0123456789abcdef-0123456789abcdef-0123456789"


@pytest.fixture()
def settings():
    return Settings(
        _env_file=None,
        ENV="test",
        LOG_LEVEL="WARNING",
        DATABASE_URL="sqlite://",
        JWT_SECRET=TEST_SECRET,
        JWT_LEEWAY_SECONDS=0,
        BCRYPT_ROUNDS=4,  # bcrypt minimum, keeps the suite fast
    )


@pytest.fixture()
def app(settings):
    app = create_app(settings)
    Base.metadata.create_all(app.state.engine)
    yield app
    app.state.engine.dispose()


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def signup(client):
    """Registers a user and returns (token, user dict)."""
    def _signup(email="owner@example.com", name="Owner", password="secret123"):
        r = client.post("/api/auth/signup", json={"name": name, "email": email, "password": password})
        assert r.status_code == 201, r.text
        body = r.json()
        return body["token"], body["user"]
    return _signup


@pytest.fixture()
def owner(signup):
    return signup("owner@example.com", "Owner")


@pytest.fixture()
def intruder(signup):
    return signup("intruder@example.com", "Intruder")
