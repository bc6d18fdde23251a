import uuid
from typing import Any, Union

from inventory_api.core.errors import Conflict, InvalidCredentials, NotFound
from inventory_api.core.security import Identity, create_access_token, hash_password, verify_password
from inventory_api.core.validation import LOGIN, REGISTRATION, validate
from inventory_api.db.models import Role, User
from inventory_api.db.store import UserStore
from inventory_api.schemas.auth import LoginRequest, PublicUser, RegisterRequest


class AuthService:
	"""Registration, login and current-user lookup over a ``UserStore``."""

	def __init__(self, users: UserStore):
		self.users = users

	def register(self, payload: Union[RegisterRequest, dict[str, Any]]) -> dict:
		data = validate(REGISTRATION, payload)
		# insert() repeats this check under the store lock.
		field = self.users.conflicting_field(data.username, data.email)
		if field:
			raise Conflict(field)

		user = User(
			id=str(uuid.uuid4()),
			username=data.username,
			email=data.email,
			password_hash=hash_password(data.password),
			role=Role.USER.value,
		)
		self.users.insert(user)
		return self._issue(user)

	def login(self, payload: Union[LoginRequest, dict[str, Any]]) -> dict:
		data = validate(LOGIN, payload)
		user = self.users.find_by_username(data.username)
		if not user or not verify_password(data.password, user.password_hash):
			raise InvalidCredentials()
		return self._issue(user)

	def who_am_i(self, identity: Identity) -> PublicUser:
		user = self.users.find_by_id(identity.id)
		if not user:
			raise NotFound("User not found")
		return PublicUser.model_validate(user)

	@staticmethod
	def _issue(user: User) -> dict:
		token = create_access_token(Identity(id=user.id, username=user.username, role=user.role))
		return {"token": token, "user": PublicUser.model_validate(user)}
