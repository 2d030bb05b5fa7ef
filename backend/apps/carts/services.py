from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List

from django.db import transaction

from apps.common import get_logger
from .commands import MAX_QUANTITY, CartAddItemCommand, parse_item_id, parse_quantity
from .dtos import CartDTO
from .exceptions import (
    CartConflictError,
    CartItemNotFoundError,
    CartNotFoundError,
    CartOwnerNotFoundError,
    InvalidCartRequestError,
    InvalidQuantityError,
    ProductNotFoundError,
)
from .models import Cart, CartItem
from .protocols import (
    CartItemRepositoryProtocol,
    CartMapperProtocol,
    CartRepositoryProtocol,
    ProductRepositoryProtocol,
    UserRepositoryProtocol,
)
from .totals import compute_total, fits_money

logger = get_logger(__name__).bind(component="carts", layer="service")

CART_TOTAL_MAX_DIGITS = Cart._meta.get_field("total").max_digits

__all__ = [
    "CartService",
    "CartConflictError",
    "CartItemNotFoundError",
    "CartNotFoundError",
    "CartOwnerNotFoundError",
    "InvalidCartRequestError",
    "InvalidQuantityError",
    "ProductNotFoundError",
]


class CartService:
    """
    The only entry point that mutates carts. Every operation returns the
    cart enriched with live catalog data and a total recomputed from the
    current product prices.
    """

    def __init__(
        self,
        carts: CartRepositoryProtocol,
        cart_items: CartItemRepositoryProtocol,
        products: ProductRepositoryProtocol,
        users: UserRepositoryProtocol,
        cart_mapper: CartMapperProtocol,
    ):
        self.carts = carts
        self.cart_items = cart_items
        self.products = products
        self.users = users
        self.cart_mapper = cart_mapper
        self.logger = logger.bind(service="CartService")

    # -- helpers ---------------------------------------------------------

    def _ensure_owner(self, user_id: int) -> None:
        if not self.users.exists(id=user_id):
            self.logger.warning("Cart owner does not exist", user_id=user_id)
            raise CartOwnerNotFoundError(details={"userId": str(user_id)})

    def _lock_or_create(self, user_id: int) -> Cart:
        cart = self.carts.lock_for_user(user_id)
        if cart is None:
            self._ensure_owner(user_id)
            _, created = self.carts.get_or_create_for_user(user_id)
            if created:
                self.logger.info("Cart created", user_id=user_id)
            cart = self.carts.lock_for_user(user_id)
        return cart

    def _items(self, cart: Cart) -> List[CartItem]:
        return list(self.cart_items.list_for_cart(cart.id))

    @staticmethod
    def _total(items: List[CartItem]) -> Decimal:
        return compute_total((item.product.price, item.quantity) for item in items)

    def _persist_total(self, cart: Cart, total: Decimal) -> None:
        if not self.carts.save_total(cart, total):
            self.logger.warning(
                "Cart write lost optimistic version check",
                cart_id=cart.id,
                version=cart.version,
            )
            raise CartConflictError(details={"cartId": str(cart.id)})

    def _finish_mutation(self, cart: Cart) -> CartDTO:
        items = self._items(cart)
        total = self._total(items)
        if not fits_money(total, CART_TOTAL_MAX_DIGITS):
            self.logger.warning(
                "Cart mutation rejected: total out of range", cart_id=cart.id, total=total
            )
            raise InvalidQuantityError(
                "Cart total exceeds the largest supported amount",
                details={"total": str(total)},
            )
        self._persist_total(cart, total)
        return self.cart_mapper.to_dto(cart, items)

    # -- operations ------------------------------------------------------

    def get_or_create_cart(self, user_id: int) -> CartDTO:
        """
        Load the user's cart, creating an empty one on first touch. The stored
        total is healed in place when catalog prices moved since the last write.
        """
        self.logger.debug("Ensuring cart exists", user_id=user_id)
        cart = self.carts.get_for_user(user_id)
        if cart is None:
            self._ensure_owner(user_id)
            cart, created = self.carts.get_or_create_for_user(user_id)
            if created:
                self.logger.info("Cart created", user_id=user_id, cart_id=cart.id)
        items = self._items(cart)
        total = self._total(items)
        if total != cart.total:
            self.logger.info(
                "Healing stale cart total",
                cart_id=cart.id,
                stored=cart.total,
                computed=total,
            )
            with transaction.atomic():
                healed = self.carts.save_total(cart, total)
            if not healed:
                # A concurrent writer already stored a fresher state; serve that
                self.logger.debug("Cart changed while healing, re-reading", cart_id=cart.id)
                cart = self.carts.get_for_user(user_id)
                items = self._items(cart)
        return self.cart_mapper.to_dto(cart, items)

    def add_item(self, user_id: int, payload: Dict[str, Any]) -> CartDTO:
        command = CartAddItemCommand.from_raw(payload)
        product = (
            self.products.get(id=command.product_id)
            if command.product_id is not None
            else None
        )
        if not product:
            self.logger.info(
                "Add to cart rejected: product missing",
                user_id=user_id,
                product_id=command.raw_product_id,
            )
            raise ProductNotFoundError(details={"productId": command.raw_product_id})
        size = command.size or ""
        scent = command.scent or ""
        with transaction.atomic():
            cart = self._lock_or_create(user_id)
            line = self.cart_items.find_line(cart.id, product.id, size, scent)
            if line is not None:
                if line.quantity + command.quantity > MAX_QUANTITY:
                    self.logger.info(
                        "Add to cart rejected: merged quantity out of range",
                        user_id=user_id,
                        item_id=line.id,
                        quantity=line.quantity,
                    )
                    raise InvalidQuantityError(
                        f"Quantity cannot exceed {MAX_QUANTITY}",
                        details={"quantity": command.quantity},
                    )
                self.cart_items.increment(line, command.quantity)
                merged = True
            else:
                self.cart_items.create(
                    cart=cart,
                    product=product,
                    quantity=command.quantity,
                    size=size,
                    scent=scent,
                )
                merged = False
            dto = self._finish_mutation(cart)
        self.logger.info(
            "Item added to cart",
            user_id=user_id,
            cart_id=cart.id,
            product_id=product.id,
            quantity=command.quantity,
            merged=merged,
            total=dto.total,
        )
        return dto

    def update_item_quantity(self, user_id: int, item_id: Any, quantity: Any) -> CartDTO:
        new_quantity = parse_quantity(quantity)
        line_id = parse_item_id(item_id)
        with transaction.atomic():
            cart = self.carts.lock_for_user(user_id)
            if cart is None:
                self.logger.info("Quantity update rejected: no cart", user_id=user_id)
                raise CartNotFoundError(details={"userId": str(user_id)})
            line = (
                self.cart_items.get_for_cart(cart.id, line_id)
                if line_id is not None
                else None
            )
            if line is None:
                self.logger.info(
                    "Quantity update rejected: item not in cart",
                    user_id=user_id,
                    item_id=item_id,
                )
                raise CartItemNotFoundError(details={"itemId": str(item_id)})
            self.cart_items.set_quantity(line, new_quantity)
            dto = self._finish_mutation(cart)
        self.logger.info(
            "Cart item quantity set",
            user_id=user_id,
            item_id=item_id,
            quantity=new_quantity,
            total=dto.total,
        )
        return dto

    def remove_item(self, user_id: int, item_id: Any) -> CartDTO:
        line_id = parse_item_id(item_id)
        with transaction.atomic():
            cart = self.carts.lock_for_user(user_id)
            if cart is None:
                self.logger.info("Item removal rejected: no cart", user_id=user_id)
                raise CartNotFoundError(details={"userId": str(user_id)})
            deleted = (
                self.cart_items.delete_line(cart.id, line_id)
                if line_id is not None
                else 0
            )
            if not deleted:
                self.logger.info(
                    "Item removal rejected: item not in cart",
                    user_id=user_id,
                    item_id=item_id,
                )
                raise CartItemNotFoundError(details={"itemId": str(item_id)})
            dto = self._finish_mutation(cart)
        self.logger.info(
            "Item removed from cart", user_id=user_id, item_id=item_id, total=dto.total
        )
        return dto

    def clear_cart(self, user_id: int) -> CartDTO:
        """Empty the cart in place; clearing an empty or missing cart is not an error."""
        with transaction.atomic():
            cart = self._lock_or_create(user_id)
            removed = self.cart_items.delete_for_cart(cart.id)
            self._persist_total(cart, Decimal("0.00"))
        self.logger.info("Cart cleared", user_id=user_id, cart_id=cart.id, removed=removed)
        return self.cart_mapper.to_dto(cart, [])

    def cart_total(self, user_id: int) -> Decimal:
        cart = self.carts.get_for_user(user_id)
        if cart is None:
            return Decimal("0.00")
        return self._total(self._items(cart))
