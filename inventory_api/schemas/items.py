import math
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

from inventory_api.core.sanitizers import escape_html
from inventory_api.schemas.fields import camel_field
from inventory_api.db.models import Category

CATEGORIES = tuple(c.value for c in Category)

def _as_number(v: Any) -> Optional[float]:
	if isinstance(v, bool):
		return None
	if isinstance(v, (int, float)):
		return float(v)
	if isinstance(v, str) and v.strip():
		try:
			return float(v.strip())
		except ValueError:
			return None
	return None

class ItemPayload(BaseModel):
	"""Body accepted by item create and update."""

	model_config = ConfigDict(validate_default=True)

	name: str = ""
	description: str = ""
	category: str = Category.OTHER.value
	price: float = 0.0
	stock: int = 0

	@field_validator("name")
	@classmethod
	def name_rules(cls, v: str) -> str:
		v = v.strip()
		if not v:
			raise PydanticCustomError("name_required", "Name is required")
		if len(v) > 100:
			raise PydanticCustomError("name_length", "Name must be less than 100 characters")
		return escape_html(v)

	@field_validator("description")
	@classmethod
	def description_rules(cls, v: str) -> str:
		v = v.strip()
		if not v:
			raise PydanticCustomError("description_required", "Description is required")
		if len(v) > 500:
			raise PydanticCustomError("description_length", "Description must be less than 500 characters")
		return escape_html(v)

	@field_validator("category", mode="before")
	@classmethod
	def category_rules(cls, v: Any) -> str:
		if isinstance(v, str) and v.strip() in CATEGORIES:
			return v.strip()
		raise PydanticCustomError("category_invalid", "Invalid category")

	@field_validator("price", mode="before")
	@classmethod
	def price_rules(cls, v: Any) -> float:
		number = _as_number(v)
		if number is None or not math.isfinite(number) or number < 0:
			raise PydanticCustomError("price_invalid", "Price must be a positive number")
		return number

	@field_validator("stock", mode="before")
	@classmethod
	def stock_rules(cls, v: Any) -> int:
		number = _as_number(v)
		if number is None or not math.isfinite(number) or number < 0 or not number.is_integer():
			raise PydanticCustomError("stock_invalid", "Stock must be a non-negative integer")
		return int(number)

class ItemFilters(BaseModel):
	category: Optional[str] = None
	min_price: Optional[float] = None
	max_price: Optional[float] = None
	search: Optional[str] = None

class ItemOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: int
	name: str
	description: str
	category: str
	price: float
	stock: int
	created_by: str = camel_field("created_by", "createdBy")
	created_at: datetime = camel_field("created_at", "createdAt")
	updated_at: datetime = camel_field("updated_at", "updatedAt")

class Pagination(BaseModel):
	total: int
	page: int
	limit: int
	total_pages: int = camel_field("total_pages", "totalPages")

class ItemListResponse(BaseModel):
	items: list[ItemOut]
	pagination: Pagination

class ItemEnvelope(BaseModel):
	message: str
	item: ItemOut

class ItemSummary(BaseModel):
	total_items: int = camel_field("total_items", "totalItems")
	category_counts: dict[str, int] = camel_field("category_counts", "categoryCounts")
	average_price: float = camel_field("average_price", "averagePrice")
	total_value: float = camel_field("total_value", "totalValue")
