from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class ProductDTO:
    id: int
    name: str
    price: str
    description: str
    image: str
    category: str
    stock_count: int
    options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ProductSummaryDTO:
    """Display fields a cart line shows for its product."""

    id: int
    name: str
    price: str
    image: str
    category: str


"""DTO dataclasses only. Mapping logic lives in mappers.py."""
