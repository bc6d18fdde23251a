"""Per-client request budget for the API routes."""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette import status

from inventory_api.core.config import settings
from inventory_api.core.errors import error_response
from inventory_api.core.logging import log_event

TOO_MANY_REQUESTS = "Too many requests, please try again later."


def api_rate_limit() -> str:
	return f"{settings.RATE_LIMIT_MAX}/{settings.RATE_LIMIT_WINDOW_MINUTES} minutes"


def create_limiter() -> Limiter:
	# Application limits share one counter per client across every route.
	return Limiter(
		key_func=get_remote_address,
		application_limits=[api_rate_limit()],
		enabled=settings.RATE_LIMIT_ENABLED,
	)


# Not a coroutine: SlowAPIMiddleware calls it directly for sync endpoints.
def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
	log_event(
		"rate_limited",
		level=logging.WARNING,
		client=get_remote_address(request),
		path=request.url.path,
		request_id=getattr(request.state, "request_id", None),
	)
	return error_response(request, status.HTTP_429_TOO_MANY_REQUESTS, {"error": TOO_MANY_REQUESTS})
