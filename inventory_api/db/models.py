from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


def utcnow() -> datetime:
	return datetime.now(timezone.utc)


class Role(str, Enum):
	ADMIN = "admin"
	USER = "user"


class Category(str, Enum):
	ELECTRONICS = "electronics"
	CLOTHING = "clothing"
	FOOD = "food"
	BOOKS = "books"
	OTHER = "other"


@dataclass(frozen=True)
class User:
	id: str
	username: str
	email: str
	password_hash: str
	role: str = Role.USER.value
	created_at: datetime = field(default_factory=utcnow)

	def __repr__(self):
		return f"<User(id={self.id}, username={self.username}, role={self.role})>"


@dataclass(frozen=True)
class Item:
	id: int
	name: str
	description: str
	category: str = Category.OTHER.value
	price: float = 0.0
	stock: int = 0
	created_by: str = ""
	created_at: datetime = field(default_factory=utcnow)
	updated_at: datetime = field(default_factory=utcnow)
