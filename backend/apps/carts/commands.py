import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .exceptions import InvalidCartRequestError, InvalidQuantityError

# Upper bound of PositiveIntegerField on every supported backend
MAX_QUANTITY = 2147483647
# Largest value a BigAutoField primary key can hold
MAX_PRODUCT_ID = 9223372036854775807
VARIANT_MAX_LENGTH = 64


def parse_quantity(raw: Any) -> int:
    """
    Accept an int or an integer-looking string in ``1..MAX_QUANTITY``.
    Booleans, floats with a fraction and anything non-numeric are rejected.
    """
    if isinstance(raw, bool) or raw is None:
        raise InvalidQuantityError(details={"quantity": raw})
    if isinstance(raw, float):
        if not raw.is_integer():
            raise InvalidQuantityError(details={"quantity": raw})
        value = int(raw)
    else:
        try:
            value = int(str(raw).strip())
        except (TypeError, ValueError):
            raise InvalidQuantityError(details={"quantity": raw})
    if value < 1 or value > MAX_QUANTITY:
        raise InvalidQuantityError(details={"quantity": raw})
    return value


def parse_product_id(raw: Any) -> Optional[int]:
    """
    Catalog id for an int, an integral float or an integer string. Anything
    else, including ids outside the primary key range, cannot match a row and
    yields None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, float):
        if not raw.is_integer():
            return None
        value = int(raw)
    else:
        try:
            value = int(str(raw).strip())
        except (TypeError, ValueError):
            return None
    if value < 1 or value > MAX_PRODUCT_ID:
        return None
    return value


def parse_item_id(raw: Any) -> Optional[uuid.UUID]:
    """Line handle from a URL segment; malformed values yield None."""
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except (TypeError, ValueError, AttributeError):
        return None


def normalize_variant(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    value = str(raw).strip()
    return value or None


def _variant(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = normalize_variant(payload.get(key))
    if value is not None and len(value) > VARIANT_MAX_LENGTH:
        raise InvalidCartRequestError(
            f"{key} must be at most {VARIANT_MAX_LENGTH} characters",
            details={key: f"Ensure this field has no more than {VARIANT_MAX_LENGTH} characters."},
        )
    return value


@dataclass
class CartAddItemCommand:
    product_id: Optional[int]
    raw_product_id: str
    quantity: int
    size: Optional[str] = None
    scent: Optional[str] = None

    @staticmethod
    def from_raw(payload: Dict[str, Any]):
        if not isinstance(payload, dict):
            raise InvalidCartRequestError("Request body must be a JSON object")
        raw_pid = payload.get("productId", payload.get("product_id"))
        if raw_pid is None or (isinstance(raw_pid, str) and not raw_pid.strip()):
            raise InvalidCartRequestError(
                "productId is required", details={"productId": None}
            )
        quantity = parse_quantity(payload.get("quantity"))
        return CartAddItemCommand(
            # Unparseable references resolve to "not found"
            product_id=parse_product_id(raw_pid),
            raw_product_id=str(raw_pid),
            quantity=quantity,
            size=_variant(payload, "size"),
            scent=_variant(payload, "scent"),
        )
