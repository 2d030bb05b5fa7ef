from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List

from django.db import transaction

from apps.carts.totals import compute_total, to_money
from apps.common import get_logger
from .commands import CheckoutCommand, OrderLineCommand
from .dtos import CheckoutResultDTO
from .exceptions import InvalidCheckoutError, PaymentDeclinedError
from .models import OrderStatus, PaymentStatus
from .protocols import (
    CartGatewayProtocol,
    OrderMapperProtocol,
    OrderRepositoryProtocol,
    PaymentGatewayProtocol,
    ProductLookupProtocol,
)

logger = get_logger(__name__).bind(component="orders", layer="service")

__all__ = ["CheckoutService", "InvalidCheckoutError", "PaymentDeclinedError"]


class CheckoutService:
    """
    Turns a submitted cart snapshot into a paid, immutable order.

    The order is written in its own transaction after the simulated charge
    succeeds; the cart is cleared afterwards through the cart service. A
    failed clear is logged and the order stands.
    """

    def __init__(
        self,
        orders: OrderRepositoryProtocol,
        products: ProductLookupProtocol,
        carts: CartGatewayProtocol,
        gateway: PaymentGatewayProtocol,
        order_mapper: OrderMapperProtocol,
    ):
        self.orders = orders
        self.products = products
        self.carts = carts
        self.gateway = gateway
        self.order_mapper = order_mapper
        self.logger = logger.bind(service="CheckoutService")

    def _snapshot_lines(self, lines: List[OrderLineCommand]) -> List[Dict[str, Any]]:
        ids = {line.product_id for line in lines if line.product_id is not None}
        catalog = self.products.in_bulk(ids) if ids else {}
        snapshot = []
        for index, line in enumerate(lines):
            product = catalog.get(line.product_id) if line.product_id is not None else None
            name = line.name or (product.name if product else None)
            price = line.price if line.price is not None else (product.price if product else None)
            if name is None or price is None:
                self.logger.info(
                    "Checkout rejected: cart item cannot be resolved",
                    product_ref=line.product_ref,
                )
                raise InvalidCheckoutError(
                    "Cart item references an unknown product",
                    details={"cartItems": {str(index): f"Unknown product {line.product_ref}"}},
                )
            snapshot.append(
                {
                    "product": product,
                    "product_ref": line.product_ref,
                    "name": name,
                    "price": to_money(price),
                    "quantity": line.quantity,
                    "size": line.size or "",
                    "scent": line.scent or "",
                }
            )
        return snapshot

    def _log_total_mismatch(
        self, user_id: int, claimed: Decimal, snapshot: List[Dict[str, Any]]
    ) -> None:
        snapshot_total = compute_total((line["price"], line["quantity"]) for line in snapshot)
        cart_total = self.carts.cart_total(user_id)
        if to_money(claimed) != snapshot_total or snapshot_total != cart_total:
            self.logger.warning(
                "Checkout total mismatch",
                user_id=user_id,
                claimed=to_money(claimed),
                snapshot_total=snapshot_total,
                cart_total=cart_total,
            )

    def checkout(self, user_id: int, payload: Dict[str, Any]) -> CheckoutResultDTO:
        command = CheckoutCommand.from_raw(payload)
        snapshot = self._snapshot_lines(command.lines)
        self._log_total_mismatch(user_id, command.total_amount, snapshot)

        self.logger.info(
            "Charging checkout",
            user_id=user_id,
            amount=to_money(command.total_amount),
            lines=len(snapshot),
        )
        result = self.gateway.charge(
            to_money(command.total_amount), reference=f"user:{user_id}"
        )
        if not result.success:
            self.logger.warning("Payment declined", user_id=user_id)
            raise PaymentDeclinedError(result.message)

        with transaction.atomic():
            order, items = self.orders.create_with_items(
                {
                    "user_id": user_id,
                    "total_amount": to_money(command.total_amount),
                    "shipping_name": command.name,
                    "shipping_phone": command.phone,
                    "transaction_id": result.transaction_id,
                    "payment_status": PaymentStatus.PAID,
                    "order_status": OrderStatus.PROCESSING,
                },
                snapshot,
            )
        self.logger.info(
            "Order placed",
            user_id=user_id,
            order_id=order.id,
            transaction_id=result.transaction_id,
            total=order.total_amount,
        )

        try:
            self.carts.clear_cart(user_id)
        except Exception:
            self.logger.exception(
                "Cart clear after checkout failed; order kept",
                user_id=user_id,
                order_id=order.id,
            )

        return CheckoutResultDTO(
            success=True,
            message=f"Payment successful! Order {order.id} placed.",
            transaction_id=result.transaction_id,
            order=self.order_mapper.to_dto(order, items),
        )
