import uuid
from datetime import datetime, timezone

from inventory_api.core.config import settings
from inventory_api.core.security import hash_password
from inventory_api.db.models import Role, User
from inventory_api.db.store import ItemStore, UserStore


def _ts(value: str) -> datetime:
	return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


DEMO_ITEMS = [
	{
		"name": "Laptop Dell XPS 15",
		"description": "High-performance laptop with Intel i7 processor and 16GB RAM",
		"category": "electronics",
		"price": 1299.99,
		"stock": 15,
		"created_by": "admin",
		"created_at": _ts("2024-01-15T10:30:00"),
		"updated_at": _ts("2024-01-15T10:30:00"),
	},
	{
		"name": "Wireless Mouse Logitech",
		"description": "Ergonomic wireless mouse with precision tracking",
		"category": "electronics",
		"price": 29.99,
		"stock": 50,
		"created_by": "admin",
		"created_at": _ts("2024-01-16T14:20:00"),
		"updated_at": _ts("2024-01-16T14:20:00"),
	},
	{
		"name": "Programming Book: Clean Code",
		"description": "Essential reading for software developers",
		"category": "books",
		"price": 39.99,
		"stock": 30,
		"created_by": "testuser",
		"created_at": _ts("2024-01-17T09:15:00"),
		"updated_at": _ts("2024-01-17T09:15:00"),
	},
]


def seed_users(users: UserStore) -> int:
	if users.count():
		return 0
	accounts = [
		(settings.ADMIN_USERNAME, settings.ADMIN_EMAIL.lower(), settings.ADMIN_PASSWORD, Role.ADMIN.value),
		("testuser", "test@example.com", "Test123!", Role.USER.value),
	]
	for username, email, password, role in accounts:
		users.insert(User(
			id=str(uuid.uuid4()),
			username=username,
			email=email,
			password_hash=hash_password(password),
			role=role,
		))
	return len(accounts)


def seed_items(items: ItemStore) -> int:
	if items.count():
		return 0
	for values in DEMO_ITEMS:
		items.create(values)
	return len(DEMO_ITEMS)
