from typing import Iterable, List

from .dtos import OrderDTO, OrderItemDTO
from .models import Order, OrderItem


class OrderItemMapper:
    @staticmethod
    def to_dto(item: OrderItem) -> OrderItemDTO:
        return OrderItemDTO(
            product_id=item.product_ref,
            name=item.name,
            price=str(item.price),
            quantity=item.quantity,
            size=item.size or None,
            scent=item.scent or None,
        )

    @staticmethod
    def many_to_dto(items: Iterable[OrderItem]) -> List[OrderItemDTO]:
        return [OrderItemMapper.to_dto(i) for i in items]


class OrderMapper:
    @staticmethod
    def to_dto(order: Order, items: Iterable[OrderItem]) -> OrderDTO:
        created = getattr(order, "created_at", None)
        return OrderDTO(
            id=order.id,
            user_id=order.user_id,
            items=OrderItemMapper.many_to_dto(items),
            total_amount=str(order.total_amount),
            shipping_address={"name": order.shipping_name, "phone": order.shipping_phone},
            transaction_id=order.transaction_id,
            payment_status=order.payment_status,
            order_status=order.order_status,
            created_at=created.isoformat() if created is not None else None,
        )
