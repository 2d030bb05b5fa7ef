from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Protocol, Tuple, TYPE_CHECKING

from .models import Order, OrderItem

if TYPE_CHECKING:
    from apps.catalog.models import Product
    from .dtos import OrderDTO
    from .payments import PaymentResult


class OrderRepositoryProtocol(Protocol):
    def create_with_items(
        self, order_data: Dict[str, Any], items: Iterable[Dict[str, Any]]
    ) -> Tuple[Order, List[OrderItem]]:
        ...


class ProductLookupProtocol(Protocol):
    def in_bulk(self, product_ids: Iterable[int]) -> Mapping[int, "Product"]:
        ...


class PaymentGatewayProtocol(Protocol):
    def charge(self, amount: Decimal, *, reference: str) -> "PaymentResult":
        ...


class CartGatewayProtocol(Protocol):
    def cart_total(self, user_id: int) -> Decimal:
        ...

    def clear_cart(self, user_id: int) -> Any:
        ...


class OrderMapperProtocol(Protocol):
    def to_dto(self, order: Order, items: Iterable[OrderItem]) -> "OrderDTO":
        ...
