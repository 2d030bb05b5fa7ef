from __future__ import annotations

from typing import List, Optional

from apps.common import get_logger
from .dtos import ProductDTO
from .mappers import ProductMapper
from .protocols import CacheBackendProtocol, ProductRepositoryProtocol

logger = get_logger(__name__).bind(component="catalog", layer="service")


class ProductService:
    def __init__(
        self,
        products: ProductRepositoryProtocol,
        cache_backend: CacheBackendProtocol,
        disable_cache: bool = False,
    ):
        self.products = products
        self.cache = cache_backend
        self.disable_cache = disable_cache
        self.logger = logger.bind(service="ProductService")
        # Caching keys
        self._cache_prefix = "products:list"
        self._cache_version_key = f"{self._cache_prefix}:version"
        self._default_version = 1

    def _get_cache_version(self) -> int:
        v = self.cache.get(self._cache_version_key)
        return v or self._default_version

    def _bump_cache_version(self) -> None:
        v = self._get_cache_version()
        # Version key should not expire
        self.cache.set(self._cache_version_key, v + 1, timeout=None)
        self.logger.debug("Bumped product cache version", new_version=v + 1)

    def _cache_key(self, category: Optional[str]) -> str:
        version = self._get_cache_version()
        cat = (category or "all").strip().lower()
        return f"{self._cache_prefix}:v{version}:{cat}"

    def _query(self, category: Optional[str]) -> List[ProductDTO]:
        qs = (
            self.products.list_by_category(category)
            if category
            else self.products.list()
        )
        return ProductMapper.many_to_dto(qs)

    def list_products(self, category: Optional[str] = None) -> List[ProductDTO]:
        self.logger.debug(
            "Listing products",
            category=category,
            cache_enabled=not self.disable_cache,
        )
        if self.disable_cache:
            return self._query(category)
        # Read-through cache per category filter
        key = self._cache_key(category)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Product list cache hit", cache_key=key)
            return cached
        self.logger.debug("Product list cache miss", cache_key=key)
        data = self._query(category)
        self.cache.set(key, data)
        return data

    def get_product(self, product_id: int) -> Optional[ProductDTO]:
        self.logger.debug("Fetching product", product_id=product_id)
        p = self.products.get(id=product_id)
        if not p:
            self.logger.info("Product not found", product_id=product_id)
        return ProductMapper.to_dto(p) if p else None

    def invalidate_cache(self) -> None:
        """Drop every cached product list by moving to a new key version."""
        self.logger.info("Invalidating product list cache")
        self._bump_cache_version()
