import math
from typing import Any, Mapping, Optional, Union

from inventory_api.core.errors import Forbidden, NotFound
from inventory_api.core.security import Identity
from inventory_api.core.validation import ITEM, validate
from inventory_api.db.models import Item, utcnow
from inventory_api.db.store import ItemStore
from inventory_api.schemas.items import ItemFilters, ItemPayload, ItemSummary, Pagination


class ItemService:
	def __init__(self, items: ItemStore):
		self.items = items

	def list_items(self, filters: Optional[ItemFilters] = None, page: int = 1, limit: int = 10) -> dict:
		"""Filter the collection, then slice out one 1-based page.

		Filters apply in a fixed order: category, minimum price, maximum price,
		then a case-insensitive search over name or description.
		"""
		filters = filters or ItemFilters()
		rows = self.items.list_items()

		if filters.category:
			rows = [i for i in rows if i.category == filters.category]
		if filters.min_price is not None:
			rows = [i for i in rows if i.price >= filters.min_price]
		if filters.max_price is not None:
			rows = [i for i in rows if i.price <= filters.max_price]
		if filters.search:
			needle = filters.search.lower()
			rows = [i for i in rows if needle in i.name.lower() or needle in i.description.lower()]

		# Pages before the first, and a non-positive limit, select nothing.
		total = len(rows)
		page_rows = []
		if page >= 1 and limit >= 1:
			start = (page - 1) * limit
			page_rows = rows[start:start + limit]
		return {
			"items": page_rows,
			"pagination": Pagination(
				total=total,
				page=page,
				limit=limit,
				total_pages=math.ceil(total / limit) if limit >= 1 else 0,
			),
		}

	def get_item(self, item_id: int) -> Item:
		item = self.items.get(item_id)
		if item is None:
			raise NotFound("Item not found")
		return item

	def create_item(self, identity: Identity, fields: Union[ItemPayload, Mapping[str, Any]]) -> Item:
		data = validate(ITEM, fields)
		now = utcnow()
		return self.items.create({
			**data.model_dump(),
			"created_by": identity.username,
			"created_at": now,
			"updated_at": now,
		})

	def update_item(self, identity: Identity, item_id: int, fields: Any) -> Item:
		"""Merge the supplied fields into an item the caller may modify.

		Existence and ownership are settled before ``fields`` is validated, so
		a caller without rights gets ``Forbidden`` whatever the body holds.
		"""
		self._authorize(identity, self.get_item(item_id), "update")
		data = validate(ITEM, fields)
		changes = data.model_dump(include=data.model_fields_set)
		changes["updated_at"] = utcnow()
		item = self.items.update(item_id, changes)
		if item is None:
			raise NotFound("Item not found")
		return item

	def delete_item(self, identity: Identity, item_id: int) -> Item:
		self._authorize(identity, self.get_item(item_id), "delete")
		item = self.items.delete(item_id)
		if item is None:
			raise NotFound("Item not found")
		return item

	def summary(self) -> ItemSummary:
		rows = self.items.list_items()
		counts: dict[str, int] = {}
		for item in rows:
			counts[item.category] = counts.get(item.category, 0) + 1
		return ItemSummary(
			total_items=len(rows),
			category_counts=counts,
			average_price=sum(i.price for i in rows) / len(rows) if rows else 0.0,
			total_value=sum(i.price * i.stock for i in rows),
		)

	@staticmethod
	def _authorize(identity: Identity, item: Item, action: str) -> None:
		if item.created_by != identity.username and not identity.is_admin:
			raise Forbidden(f"You do not have permission to {action} this item")
