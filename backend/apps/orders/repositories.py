from typing import Any, Dict, Iterable, List, Tuple

from apps.common.repository import GenericRepository
from .models import Order, OrderItem


class OrderRepository(GenericRepository[Order]):
    def __init__(self):
        super().__init__(Order)

    def create_with_items(
        self, order_data: Dict[str, Any], items: Iterable[Dict[str, Any]]
    ) -> Tuple[Order, List[OrderItem]]:
        """Caller owns the transaction; order and lines are written together."""
        order = self.model.objects.create(**order_data)
        lines = OrderItem.objects.bulk_create(
            [OrderItem(order=order, **item) for item in items]
        )
        return order, lines
