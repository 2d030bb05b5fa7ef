from dataclasses import dataclass
from typing import List, Optional
from apps.catalog.dtos import ProductSummaryDTO


@dataclass
class CartItemDTO:
    id: str
    product: ProductSummaryDTO
    quantity: int
    size: Optional[str]
    scent: Optional[str]
    subtotal: str


@dataclass
class CartDTO:
    id: int
    user_id: int
    items: List[CartItemDTO]
    total: str
    updated_at: Optional[str]
