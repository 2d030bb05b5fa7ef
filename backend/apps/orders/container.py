from __future__ import annotations

from typing import Optional

from apps.carts.container import build_cart_service
from apps.catalog.repositories import ProductRepository

from .mappers import OrderMapper
from .payments import MockPaymentGateway
from .protocols import PaymentGatewayProtocol
from .repositories import OrderRepository
from .services import CheckoutService


def build_checkout_service(
    gateway: Optional[PaymentGatewayProtocol] = None,
) -> CheckoutService:
    return CheckoutService(
        orders=OrderRepository(),
        products=ProductRepository(),
        carts=build_cart_service(),
        gateway=gateway or MockPaymentGateway(),
        order_mapper=OrderMapper(),
    )
