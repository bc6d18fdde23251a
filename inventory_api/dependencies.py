import json
from typing import Any

from fastapi import Request

from inventory_api.services.auth_service import AuthService
from inventory_api.services.item_service import ItemService


def get_auth_service(request: Request) -> AuthService:
	return request.app.state.auth_service


def get_item_service(request: Request) -> ItemService:
	return request.app.state.item_service


async def get_json_body(request: Request) -> Any:
	"""Decoded request body, or None when it is empty or not JSON.

	Nothing is rejected here; the service validates the value once it has
	decided the caller may act at all.
	"""
	raw = await request.body()
	if not raw:
		return None
	try:
		return json.loads(raw)
	except ValueError:
		return None
