from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from apps.carts.commands import normalize_variant, parse_product_id, parse_quantity
from apps.carts.exceptions import InvalidQuantityError
from apps.carts.totals import fits_money, to_money
from .exceptions import InvalidCheckoutError
from .models import Order, OrderItem


def _max_length(model, name: str) -> int:
    return model._meta.get_field(name).max_length


def _max_digits(model, name: str) -> int:
    return model._meta.get_field(name).max_digits


SHIPPING_NAME_MAX_LENGTH = _max_length(Order, "shipping_name")
SHIPPING_PHONE_MAX_LENGTH = _max_length(Order, "shipping_phone")
TOTAL_MAX_DIGITS = _max_digits(Order, "total_amount")
PRODUCT_REF_MAX_LENGTH = _max_length(OrderItem, "product_ref")
LINE_NAME_MAX_LENGTH = _max_length(OrderItem, "name")
VARIANT_MAX_LENGTH = _max_length(OrderItem, "size")
PRICE_MAX_DIGITS = _max_digits(OrderItem, "price")


def parse_amount(raw: Any) -> Optional[Decimal]:
    """Decimal for numbers and numeric strings that round to cents, None otherwise."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = Decimal(str(raw).strip())
        if not value.is_finite():
            return None
        to_money(value)
    except (InvalidOperation, ValueError):
        return None
    return value


def _text(raw: Any) -> str:
    if raw is None:
        return ""
    return str(raw).strip()


def _too_long(value: Optional[str], limit: int) -> bool:
    return value is not None and len(value) > limit


@dataclass
class OrderLineCommand:
    product_ref: str
    product_id: Optional[int]
    name: Optional[str]
    price: Optional[Decimal]
    quantity: int
    size: Optional[str] = None
    scent: Optional[str] = None

    @staticmethod
    def from_raw(raw: Any, index: int) -> "OrderLineCommand":
        """
        Accepts either the flat form ``{productId, name, price, quantity}`` or
        the enriched cart line ``{product: {id, name, price}, quantity}``.
        Name and price may be absent; the checkout fills them from the catalog.
        """
        def reject(message: str, reason: str):
            return InvalidCheckoutError(message, details={"cartItems": {str(index): reason}})

        if not isinstance(raw, dict):
            raise reject("Each cart item must be an object", "Expected an object")
        nested = raw.get("product")
        if isinstance(nested, dict):
            source = nested
            raw_ref = nested.get("id", nested.get("productId"))
        else:
            source = raw
            raw_ref = raw.get("productId", raw.get("product_id"))
            if raw_ref is None and nested is not None:
                raw_ref = nested
        ref = _text(raw_ref)
        if not ref:
            raise reject("Each cart item needs a product reference", "productId is required")
        if len(ref) > PRODUCT_REF_MAX_LENGTH:
            raise reject("Cart item product reference is too long", "Invalid productId")
        try:
            quantity = parse_quantity(raw.get("quantity"))
        except InvalidQuantityError:
            raise reject("Cart item quantity must be a positive integer", "Invalid quantity")
        price = None
        if source.get("price") is not None:
            price = parse_amount(source.get("price"))
            if price is None or price < 0 or not fits_money(price, PRICE_MAX_DIGITS):
                raise reject("Cart item price must be a non-negative number", "Invalid price")
        name = _text(source.get("name")) or None
        if _too_long(name, LINE_NAME_MAX_LENGTH):
            raise reject("Cart item name is too long", "Invalid name")
        size = normalize_variant(raw.get("size"))
        scent = normalize_variant(raw.get("scent"))
        if _too_long(size, VARIANT_MAX_LENGTH) or _too_long(scent, VARIANT_MAX_LENGTH):
            raise reject("Cart item size or scent is too long", "Invalid variant")
        return OrderLineCommand(
            product_ref=ref,
            product_id=parse_product_id(raw_ref),
            name=name,
            price=price,
            quantity=quantity,
            size=size,
            scent=scent,
        )


@dataclass
class CheckoutCommand:
    name: str
    phone: str
    total_amount: Decimal
    lines: List[OrderLineCommand] = field(default_factory=list)

    @staticmethod
    def from_raw(payload: Dict[str, Any]) -> "CheckoutCommand":
        if not isinstance(payload, dict):
            raise InvalidCheckoutError("Request body must be a JSON object")
        name = _text(payload.get("name"))
        phone = _text(payload.get("phone"))
        cart_items = payload.get("cartItems")
        raw_total = payload.get("totalAmount")

        problems: Dict[str, str] = {}
        if not name:
            problems["name"] = "This field is required."
        elif len(name) > SHIPPING_NAME_MAX_LENGTH:
            problems["name"] = f"Ensure this field has no more than {SHIPPING_NAME_MAX_LENGTH} characters."
        if not phone:
            problems["phone"] = "This field is required."
        elif len(phone) > SHIPPING_PHONE_MAX_LENGTH:
            problems["phone"] = f"Ensure this field has no more than {SHIPPING_PHONE_MAX_LENGTH} characters."
        if not isinstance(cart_items, list) or not cart_items:
            problems["cartItems"] = "At least one cart item is required."
        if raw_total is None:
            problems["totalAmount"] = "This field is required."
        if problems:
            raise InvalidCheckoutError(details=problems)

        total = parse_amount(raw_total)
        if total is None or total < 0 or not fits_money(total, TOTAL_MAX_DIGITS):
            raise InvalidCheckoutError(
                "totalAmount must be a non-negative number within the supported range",
                details={"totalAmount": raw_total},
            )
        lines = [OrderLineCommand.from_raw(item, i) for i, item in enumerate(cart_items)]
        return CheckoutCommand(name=name, phone=phone, total_amount=total, lines=lines)
