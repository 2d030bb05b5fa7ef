from apps.common.repository import GenericRepository
from .models import Product


class ProductRepository(GenericRepository[Product]):
    def __init__(self):
        super().__init__(Product)

    def list_by_category(self, category: str):
        return self.model.objects.filter(category__iexact=category)

    def in_bulk(self, product_ids):
        """Map of id -> product for the given ids; unknown ids are absent."""
        return self.model.objects.in_bulk(list(product_ids))

    def upsert(self, name: str, **fields):
        product, created = self.model.objects.update_or_create(
            name=name, defaults=fields
        )
        return product, created

    def delete_all(self) -> int:
        deleted, _ = self.model.objects.all().delete()
        return deleted
