from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request
from starlette import status

from inventory_api.core.logging import log_event
from inventory_api.core.security import Identity, get_current_identity, get_optional_identity
from inventory_api.core.validation import parse_item_id, query_int, query_number
from inventory_api.dependencies import get_item_service, get_json_body
from inventory_api.schemas.items import (
	ItemEnvelope, ItemFilters, ItemListResponse, ItemOut, ItemPayload, ItemSummary,
)
from inventory_api.services.item_service import ItemService

router = APIRouter(prefix="/api/items", tags=["items"])

@router.get("", response_model=ItemListResponse, dependencies=[Depends(get_optional_identity)])
def list_items(
	category: Optional[str] = None,
	min_price: Optional[str] = Query(None, alias="minPrice"),
	max_price: Optional[str] = Query(None, alias="maxPrice"),
	search: Optional[str] = None,
	page: Optional[str] = None,
	limit: Optional[str] = None,
	items: ItemService = Depends(get_item_service),
):
	# Listing never fails: unusable numbers fall back to their defaults.
	filters = ItemFilters(
		category=category,
		min_price=query_number(min_price),
		max_price=query_number(max_price),
		search=search,
	)
	result = items.list_items(filters, page=query_int(page, 1), limit=query_int(limit, 10))
	return ItemListResponse(
		items=[ItemOut.model_validate(item) for item in result["items"]],
		pagination=result["pagination"],
	)

# Registered before "/{item_id}" so the literal path wins.
@router.get("/stats/summary", response_model=ItemSummary, dependencies=[Depends(get_current_identity)])
def summary(items: ItemService = Depends(get_item_service)):
	return items.summary()

@router.get("/{item_id}", response_model=ItemOut, dependencies=[Depends(get_optional_identity)])
def get_item(item_id: str, items: ItemService = Depends(get_item_service)):
	return ItemOut.model_validate(items.get_item(parse_item_id(item_id)))

@router.post("", response_model=ItemEnvelope, status_code=status.HTTP_201_CREATED)
def create_item(
	request: Request,
	payload: ItemPayload,
	identity: Identity = Depends(get_current_identity),
	items: ItemService = Depends(get_item_service),
):
	item = items.create_item(identity, payload)
	log_event("item_created", item_id=item.id, owner=identity.username, request_id=request.state.request_id)
	return ItemEnvelope(message="Item created successfully", item=ItemOut.model_validate(item))

@router.put("/{item_id}", response_model=ItemEnvelope)
def update_item(
	request: Request,
	item_id: str,
	payload: Any = Depends(get_json_body),
	identity: Identity = Depends(get_current_identity),
	items: ItemService = Depends(get_item_service),
):
	# The body is validated by the service, after the ownership check.
	item = items.update_item(identity, parse_item_id(item_id), payload)
	log_event("item_updated", item_id=item.id, actor=identity.username, request_id=request.state.request_id)
	return ItemEnvelope(message="Item updated successfully", item=ItemOut.model_validate(item))

@router.delete("/{item_id}", response_model=ItemEnvelope)
def delete_item(
	request: Request,
	item_id: str,
	identity: Identity = Depends(get_current_identity),
	items: ItemService = Depends(get_item_service),
):
	item = items.delete_item(identity, parse_item_id(item_id))
	log_event("item_deleted", item_id=item.id, actor=identity.username, request_id=request.state.request_id)
	return ItemEnvelope(message="Item deleted successfully", item=ItemOut.model_validate(item))
