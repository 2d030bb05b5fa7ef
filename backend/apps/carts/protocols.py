from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional, Protocol, Tuple, TYPE_CHECKING
from uuid import UUID

from apps.users.protocols import UserRepositoryProtocol

from .models import Cart, CartItem

if TYPE_CHECKING:
    from apps.carts.dtos import CartDTO
    from apps.catalog.models import Product


class CartRepositoryProtocol(Protocol):
    def get_for_user(self, user_id: int) -> Optional[Cart]:
        ...

    def get_or_create_for_user(self, user_id: int) -> Tuple[Cart, bool]:
        ...

    def lock_for_user(self, user_id: int) -> Optional[Cart]:
        ...

    def save_total(self, cart: Cart, total: Decimal) -> bool:
        ...


class CartItemRepositoryProtocol(Protocol):
    def create(self, **data) -> CartItem:
        ...

    def list_for_cart(self, cart_id: int) -> Iterable[CartItem]:
        ...

    def find_line(
        self, cart_id: int, product_id: int, size: str, scent: str
    ) -> Optional[CartItem]:
        ...

    def get_for_cart(self, cart_id: int, item_id: UUID) -> Optional[CartItem]:
        ...

    def increment(self, item: CartItem, quantity: int) -> CartItem:
        ...

    def set_quantity(self, item: CartItem, quantity: int) -> CartItem:
        ...

    def delete_line(self, cart_id: int, item_id: UUID) -> int:
        ...

    def delete_for_cart(self, cart_id: int) -> int:
        ...


class ProductRepositoryProtocol(Protocol):
    def get(self, **filters) -> Optional["Product"]:
        ...


class CartMapperProtocol(Protocol):
    def to_dto(self, cart: Cart, items: Iterable[CartItem]) -> "CartDTO":
        ...
