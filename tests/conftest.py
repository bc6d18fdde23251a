import os

# Settings are read at import time, so these must be set before the app is imported.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("SEED_DEMO_DATA", "false")

import pytest
from fastapi.testclient import TestClient

from inventory_api.core.security import Identity
from inventory_api.db.store import InMemoryItemStore, InMemoryUserStore
from inventory_api.main import create_app
from inventory_api.services.auth_service import AuthService
from inventory_api.services.item_service import ItemService


@pytest.fixture
def user_store():
	return InMemoryUserStore()


@pytest.fixture
def item_store():
	return InMemoryItemStore()


@pytest.fixture
def auth_service(user_store):
	return AuthService(user_store)


@pytest.fixture
def item_service(item_store):
	return ItemService(item_store)


@pytest.fixture
def alice():
	return Identity(id="u-alice", username="alice", role="user")


@pytest.fixture
def bob():
	return Identity(id="u-bob", username="bob", role="user")


@pytest.fixture
def admin():
	return Identity(id="u-admin", username="root", role="admin")


@pytest.fixture
def client():
	with TestClient(create_app(seed_demo_data=False)) as c:
		yield c


@pytest.fixture
def seeded_client():
	with TestClient(create_app(seed_demo_data=True)) as c:
		yield c


@pytest.fixture
def register(client):
	"""Register a user over HTTP and return its bearer headers."""

	def _register(username: str, email: str = None, password: str = "Abcdef12") -> dict:
		res = client.post(
			"/api/auth/register",
			json={"username": username, "email": email or f"{username}@x.com", "password": password},
		)
		assert res.status_code == 201, res.text
		return {"Authorization": f"Bearer {res.json()['token']}"}

	return _register
