from typing import Iterable, List, Optional
from .models import Cart, CartItem
from .dtos import CartDTO, CartItemDTO
from .totals import line_subtotal, to_money
from apps.catalog.mappers import ProductMapper


class CartItemMapper:
    def __init__(self, product_mapper: Optional[ProductMapper] = None) -> None:
        self.product_mapper = product_mapper or ProductMapper()

    def to_dto(self, item: CartItem) -> CartItemDTO:
        product = item.product
        return CartItemDTO(
            id=str(item.id),
            product=self.product_mapper.to_summary(product),
            quantity=item.quantity,
            size=item.size or None,
            scent=item.scent or None,
            subtotal=str(line_subtotal(product.price, item.quantity)),
        )

    def many_to_dto(self, items: Iterable[CartItem]) -> List[CartItemDTO]:
        return [self.to_dto(i) for i in items]


class CartMapper:
    def __init__(self, cart_item_mapper: Optional[CartItemMapper] = None) -> None:
        self.cart_item_mapper = cart_item_mapper or CartItemMapper()

    def to_dto(self, cart: Cart, items: Iterable[CartItem]) -> CartDTO:
        updated = getattr(cart, "updated_at", None)
        return CartDTO(
            id=cart.id,
            user_id=cart.user_id,
            items=self.cart_item_mapper.many_to_dto(items),
            total=str(to_money(cart.total)),
            updated_at=updated.isoformat() if updated is not None else None,
        )
