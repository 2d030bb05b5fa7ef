from typing import Iterable, List

from .dtos import ProductDTO, ProductSummaryDTO
from .models import Product


class ProductMapper:
    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            price=str(product.price),
            description=product.description,
            image=product.image,
            category=product.category,
            stock_count=product.stock_count,
            options=dict(product.options or {}),
        )

    @staticmethod
    def to_summary(product: Product) -> ProductSummaryDTO:
        return ProductSummaryDTO(
            id=product.id,
            name=product.name,
            price=str(product.price),
            image=product.image,
            category=product.category,
        )

    @staticmethod
    def many_to_dto(products: Iterable[Product]) -> List[ProductDTO]:
        return [ProductMapper.to_dto(p) for p in products]
