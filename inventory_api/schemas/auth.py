import re
from datetime import datetime

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

from inventory_api.core.sanitizers import normalize_email
from inventory_api.schemas.fields import camel_field

USERNAME_RE = re.compile(r"^[A-Za-z0-9_]+$")
PASSWORD_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")

class RegisterRequest(BaseModel):
	# Absent fields validate as "" so they report the same message as empty ones.
	model_config = ConfigDict(validate_default=True)

	username: str = ""
	email: str = ""
	password: str = ""

	@field_validator("username")
	@classmethod
	def username_rules(cls, v: str) -> str:
		v = v.strip()
		if not 3 <= len(v) <= 30:
			raise PydanticCustomError("username_length", "Username must be between 3 and 30 characters")
		if not USERNAME_RE.match(v):
			raise PydanticCustomError(
				"username_charset", "Username can only contain letters, numbers, and underscores"
			)
		return v

	@field_validator("email")
	@classmethod
	def email_rules(cls, v: str) -> str:
		try:
			checked = validate_email(v.strip(), check_deliverability=False)
		except EmailNotValidError:
			raise PydanticCustomError("email_invalid", "Must be a valid email address")
		return normalize_email(checked.normalized)

	@field_validator("password")
	@classmethod
	def password_complexity(cls, v: str) -> str:
		if len(v) < 8:
			raise PydanticCustomError("password_length", "Password must be at least 8 characters")
		if not PASSWORD_RE.match(v):
			raise PydanticCustomError(
				"password_complexity",
				"Password must contain at least one uppercase letter, one lowercase letter, and one number",
			)
		return v

class LoginRequest(BaseModel):
	model_config = ConfigDict(validate_default=True)

	username: str = ""
	password: str = ""

	@field_validator("username")
	@classmethod
	def username_required(cls, v: str) -> str:
		v = v.strip()
		if not v:
			raise PydanticCustomError("username_required", "Username is required")
		return v

	@field_validator("password")
	@classmethod
	def password_required(cls, v: str) -> str:
		if not v:
			raise PydanticCustomError("password_required", "Password is required")
		return v

class PublicUser(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: str
	username: str
	email: str
	role: str
	created_at: datetime = camel_field("created_at", "createdAt")

class AuthResponse(BaseModel):
	message: str
	token: str
	user: PublicUser
