"""Named rule sets applied to raw input before any handler logic runs.

Each rule set is a pydantic model; validation reports every violated field
at once rather than stopping at the first.
"""

import math
import re
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ValidationError

from inventory_api.core.errors import ValidationFailed, format_errors
from inventory_api.schemas.auth import LoginRequest, RegisterRequest
from inventory_api.schemas.items import ItemPayload

REGISTRATION = "registration"
LOGIN = "login"
ITEM = "item"

RULE_SETS: dict[str, type[BaseModel]] = {
	REGISTRATION: RegisterRequest,
	LOGIN: LoginRequest,
	ITEM: ItemPayload,
}

_INT_RE = re.compile(r"^[-+]?[0-9]+$")


def validate(rule_set: str, raw: Any) -> BaseModel:
	model = RULE_SETS[rule_set]
	if isinstance(raw, model):
		return raw
	if not isinstance(raw, Mapping):
		raise ValidationFailed([{"field": "body", "message": "Request body must be a JSON object", "location": "body"}])
	try:
		return model.model_validate(dict(raw))
	except ValidationError as exc:
		raise ValidationFailed(format_errors(exc.errors(), location="body"))


def parse_item_id(raw: Any) -> int:
	text = str(raw)
	if _INT_RE.match(text) and int(text) >= 1:
		return int(text)
	raise ValidationFailed([{"field": "id", "message": "Invalid item ID", "location": "params"}])


def query_int(raw: Optional[str], default: int) -> int:
	"""Integer query value; anything that is not a plain integer counts as absent."""
	if raw is None or not _INT_RE.match(raw.strip()):
		return default
	return int(raw)


def query_number(raw: Optional[str]) -> Optional[float]:
	if raw is None:
		return None
	try:
		value = float(raw)
	except ValueError:
		return None
	return value if math.isfinite(value) else None
