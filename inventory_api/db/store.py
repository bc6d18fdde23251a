"""In-memory storage for users and items.

Both stores keep records in insertion order for the life of the process.
Every mutation runs under the store's own lock so request handlers running
in the threadpool never interleave partial writes.
"""

from dataclasses import replace
from threading import Lock
from typing import Any, Mapping, Optional, Protocol

from inventory_api.core.errors import Conflict
from inventory_api.db.models import Item, User


class UserStore(Protocol):
	def find_by_username_or_email(self, value: str) -> Optional[User]:
		...

	def find_by_username(self, username: str) -> Optional[User]:
		...

	def find_by_id(self, user_id: str) -> Optional[User]:
		...

	def conflicting_field(self, username: str, email: str) -> Optional[str]:
		...

	def insert(self, user: User) -> User:
		...

	def count(self) -> int:
		...


class ItemStore(Protocol):
	def list_items(self) -> list[Item]:
		...

	def get(self, item_id: int) -> Optional[Item]:
		...

	def create(self, values: Mapping[str, Any]) -> Item:
		...

	def update(self, item_id: int, changes: Mapping[str, Any]) -> Optional[Item]:
		...

	def delete(self, item_id: int) -> Optional[Item]:
		...

	def count(self) -> int:
		...


class InMemoryUserStore:
	def __init__(self):
		self._users: list[User] = []
		self._lock = Lock()

	def find_by_username_or_email(self, value: str) -> Optional[User]:
		return next((u for u in self._users if u.username == value or u.email == value), None)

	def find_by_username(self, username: str) -> Optional[User]:
		return next((u for u in self._users if u.username == username), None)

	def find_by_id(self, user_id: str) -> Optional[User]:
		return next((u for u in self._users if u.id == user_id), None)

	def conflicting_field(self, username: str, email: str) -> Optional[str]:
		# The first clashing record decides; on that record username wins over email.
		for user in self._users:
			if user.username == username:
				return "username"
			if user.email == email:
				return "email"
		return None

	def insert(self, user: User) -> User:
		with self._lock:
			field = self.conflicting_field(user.username, user.email)
			if field:
				raise Conflict(field)
			self._users.append(user)
		return user

	def count(self) -> int:
		return len(self._users)


class InMemoryItemStore:
	def __init__(self, first_id: int = 1):
		self._items: list[Item] = []
		self._next_id = first_id
		self._lock = Lock()

	def list_items(self) -> list[Item]:
		with self._lock:
			return list(self._items)

	def get(self, item_id: int) -> Optional[Item]:
		return next((i for i in self._items if i.id == item_id), None)

	def create(self, values: Mapping[str, Any]) -> Item:
		with self._lock:
			item = Item(id=self._next_id, **values)
			self._next_id += 1
			self._items.append(item)
		return item

	def update(self, item_id: int, changes: Mapping[str, Any]) -> Optional[Item]:
		with self._lock:
			index = self._index_of(item_id)
			if index is None:
				return None
			self._items[index] = replace(self._items[index], **changes)
			return self._items[index]

	def delete(self, item_id: int) -> Optional[Item]:
		with self._lock:
			index = self._index_of(item_id)
			if index is None:
				return None
			return self._items.pop(index)

	def count(self) -> int:
		return len(self._items)

	def _index_of(self, item_id: int) -> Optional[int]:
		for index, item in enumerate(self._items):
			if item.id == item_id:
				return index
		return None
