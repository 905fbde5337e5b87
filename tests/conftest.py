import os
import sys

# Force the seeded in-memory backend for every test
os.environ["EDUMANAGE_BACKEND"] = "memory"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["EDUMANAGE_LOCALE"] = "en"
os.environ.pop("SUPABASE_URL", None)
os.environ.pop("SUPABASE_KEY", None)

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest
from fastapi.testclient import TestClient

from edumanage.config import Settings
from edumanage.main import create_app
from edumanage.services.memory_store import MemoryStore
from edumanage.services.mutations import MutationHandlers
from edumanage.services.seed import SEED_CREDENTIALS, SEED_DATA
from edumanage.services.store import load_snapshot

TEST_SETTINGS = Settings(backend="memory", jwt_secret="test-secret")

ROLE_LOGINS = {
    "admin": ("admin@edumanage.com", "admin123"),
    "teacher": ("sophie.leroy@edumanage.com", "teacher123"),
    "teacher2": ("marc.petit@edumanage.com", "teacher123"),
    "parent": ("marie.martin@email.com", "parent123"),
    "parent2": ("pierre.dubois@email.com", "parent123"),
    "student": ("alice.martin@email.com", "student123"),
}


@pytest.fixture
def store():
    """A fresh seeded store per test, so mutations never leak between tests."""
    return MemoryStore(seed=SEED_DATA, credentials=SEED_CREDENTIALS, jwt_secret="test-secret")


@pytest.fixture
def handlers(store):
    return MutationHandlers(store)


@pytest.fixture
def snapshot(store):
    return load_snapshot(store)


@pytest.fixture
def app(store):
    return create_app(TEST_SETTINGS, store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers(client):
    """Log in as one of the seeded accounts and return its bearer header."""
    def _login(role):
        email, password = ROLE_LOGINS[role]
        response = client.post("/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _login
