from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass
class OrderItemDTO:
    product_id: str
    name: str
    price: str
    quantity: int
    size: Optional[str]
    scent: Optional[str]


@dataclass
class OrderDTO:
    id: int
    user_id: int
    items: List[OrderItemDTO]
    total_amount: str
    shipping_address: Dict[str, str]
    transaction_id: str
    payment_status: str
    order_status: str
    created_at: Optional[str]


@dataclass
class CheckoutResultDTO:
    success: bool
    message: str
    transaction_id: str
    order: OrderDTO
