import math
from typing import Any, Dict, Optional

from .errors import authentication_error, validation_error

# Field rules shared by create and update. Pure functions, no store access.

_TEXT_FIELDS = {
    "name": "Name is required and must be a non-empty string",
    "description": "Description is required and must be a non-empty string",
}


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _is_price(value: Any) -> bool:
    # bool is an int subclass but not a price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # ints too large for a float
        finite = False
    return finite and value >= 0


def validate_product(payload: Any) -> Dict[str, Any]:
    """Check a create/update payload and return its cleaned fields.

    Rules run in a fixed order and the first failure wins; nothing is
    aggregated. Strings come back stripped and unknown keys are dropped.
    """
    if not isinstance(payload, dict):
        raise validation_error("Request body must be a JSON object")

    for field, message in _TEXT_FIELDS.items():
        if _is_blank(payload.get(field)):
            raise validation_error(message)

    price = payload.get("price")
    if not _is_price(price):
        raise validation_error("Price is required and must be a non-negative number")

    if _is_blank(payload.get("category")):
        raise validation_error("Category is required and must be a non-empty string")

    if not isinstance(payload.get("inStock"), bool):
        raise validation_error("inStock is required and must be a boolean")

    return {
        "name": payload["name"].strip(),
        "description": payload["description"].strip(),
        "price": price,
        "category": payload["category"].strip(),
        "in_stock": payload["inStock"],
    }


def check_api_key(supplied: Optional[str], secret: str) -> None:
    if supplied is None or supplied != secret:
        raise authentication_error(
            "Invalid or missing API key. Please provide a valid x-api-key header."
        )
