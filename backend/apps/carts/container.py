from __future__ import annotations

from apps.catalog.mappers import ProductMapper
from apps.catalog.repositories import ProductRepository
from apps.users.repositories import UserRepository

from .mappers import CartItemMapper, CartMapper
from .repositories import CartItemRepository, CartRepository
from .services import CartService


def build_cart_service() -> CartService:
    product_mapper = ProductMapper()
    cart_item_mapper = CartItemMapper(product_mapper)
    cart_mapper = CartMapper(cart_item_mapper)
    return CartService(
        carts=CartRepository(),
        cart_items=CartItemRepository(),
        products=ProductRepository(),
        users=UserRepository(),
        cart_mapper=cart_mapper,
    )
