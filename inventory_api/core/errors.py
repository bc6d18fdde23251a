import logging
from typing import Any, Iterable, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory_api.core.logging import log_event


class ApiError(Exception):
	"""Base for every failure a service can report to a caller.

	Services raise these; the handlers below turn them into JSON responses.
	"""

	status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
	message = "Internal server error"

	def __init__(self, message: Optional[str] = None):
		super().__init__(message or self.message)
		self.message = message or self.message

	def body(self) -> dict:
		return {"error": self.message}


class ValidationFailed(ApiError):
	status_code = status.HTTP_400_BAD_REQUEST
	message = "Validation failed"

	def __init__(self, details: list[dict], message: Optional[str] = None):
		super().__init__(message)
		self.details = details

	def body(self) -> dict:
		return {"error": self.message, "details": self.details}


class Unauthorized(ApiError):
	status_code = status.HTTP_401_UNAUTHORIZED
	message = "Access token required"


class InvalidCredentials(Unauthorized):
	message = "Invalid credentials"


class Forbidden(ApiError):
	status_code = status.HTTP_403_FORBIDDEN
	message = "Forbidden"


class InvalidToken(Forbidden):
	# Bad signature, malformed token and expiry all report this one message.
	message = "Invalid or expired token"


class NotFound(ApiError):
	status_code = status.HTTP_404_NOT_FOUND
	message = "Not found"


class Conflict(ApiError):
	status_code = status.HTTP_409_CONFLICT
	message = "User already exists"

	def __init__(self, field: str, message: Optional[str] = None):
		super().__init__(message)
		self.field = field

	def body(self) -> dict:
		return {"error": self.message, "field": self.field}


def format_errors(errors: Iterable[dict[str, Any]], location: Optional[str] = None) -> list[dict]:
	"""Flatten pydantic error dicts into ``{field, message, location}`` entries.

	Without an explicit ``location`` the first element of each ``loc`` is taken
	as the location (FastAPI prefixes ``body``/``query``/``path``).
	"""
	details = []
	for err in errors:
		loc = list(err.get("loc", ()))
		where = location
		if where is None and loc:
			where = str(loc.pop(0))
		if where == "path":
			where = "params"
		# A leading integer is a character offset into an undecodable body.
		if loc and isinstance(loc[0], int):
			loc = []
		field = ".".join(str(part) for part in loc) or where or "body"
		details.append({"field": field, "message": err.get("msg", "Invalid value"), "location": where or "body"})
	return details


def error_response(request: Request, status_code: int, content: dict, headers=None):
	content = dict(content)
	content["request_id"] = getattr(request.state, "request_id", None)
	return JSONResponse(status_code=status_code, content=content, headers=headers)


async def api_error_handler(request: Request, exc: ApiError):
	return error_response(request, exc.status_code, exc.body())


async def validation_exception_handler(request: Request, exc: RequestValidationError):
	return error_response(
		request,
		status.HTTP_400_BAD_REQUEST,
		{"error": ValidationFailed.message, "details": format_errors(exc.errors())},
	)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
	if exc.status_code == status.HTTP_404_NOT_FOUND:
		content = {"error": "Not Found", "message": f"Cannot {request.method} {request.url.path}"}
	else:
		content = {"error": str(exc.detail)}
	return error_response(request, exc.status_code, content, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception):
	log_event(
		"unhandled_error",
		level=logging.ERROR,
		error_type=type(exc).__name__,
		path=request.url.path,
		request_id=getattr(request.state, "request_id", None),
	)
	return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": ApiError.message})
