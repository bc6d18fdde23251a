from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from inventory_api.core.config import settings
from inventory_api.core.errors import InvalidToken, Unauthorized

# Missing credentials are reported by the dependencies below, not by HTTPBearer.
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
	id: str
	username: str
	role: str

	@property
	def is_admin(self) -> bool:
		return self.role == "admin"


def _normalize_password(password: str) -> bytes:
	# bcrypt only considers the first 72 bytes; truncate consistently to avoid errors.
	return password.encode("utf-8")[:72]

def hash_password(password: str, rounds: Optional[int] = None) -> str:
	salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
	return bcrypt.hashpw(_normalize_password(password), salt).decode("utf-8")

def verify_password(password: str, password_hash: str) -> bool:
	try:
		return bcrypt.checkpw(_normalize_password(password), password_hash.encode("utf-8"))
	except ValueError:
		# Malformed stored hash.
		return False

def create_access_token(identity: Identity, expires_delta: Optional[timedelta] = None) -> str:
	now = datetime.now(timezone.utc)
	expires = now + (expires_delta or timedelta(hours=settings.JWT_EXPIRES_HOURS))
	payload = {
		"sub": identity.id,
		"id": identity.id,
		"username": identity.username,
		"role": identity.role,
		"iat": int(now.timestamp()),
		"exp": int(expires.timestamp()),
	}
	return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)

def verify_token(token: str) -> Identity:
	"""Return the identity carried by ``token`` or raise ``InvalidToken``.

	Signature, structure and expiry failures are not distinguished.
	"""
	try:
		payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
	except JWTError:
		raise InvalidToken()
	claims = (payload.get("id"), payload.get("username"), payload.get("role"))
	if not all(isinstance(value, str) and value for value in claims):
		raise InvalidToken()
	return Identity(*claims)

def get_current_identity(
	creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
	if not creds or not creds.credentials:
		raise Unauthorized()
	return verify_token(creds.credentials)

def get_optional_identity(
	creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Identity]:
	if not creds or not creds.credentials:
		return None
	try:
		return verify_token(creds.credentials)
	except InvalidToken:
		return None
