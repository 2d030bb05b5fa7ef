from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Protocol, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from apps.catalog.models import Product


class ProductRepositoryProtocol(Protocol):
    def list(self, **filters) -> Iterable["Product"]: ...

    def list_by_category(self, category: str) -> Iterable["Product"]: ...

    def get(self, **filters) -> Optional["Product"]: ...

    def in_bulk(self, product_ids: Iterable[int]) -> Dict[int, "Product"]: ...

    def upsert(self, name: str, **fields: Any) -> Tuple["Product", bool]: ...

    def delete_all(self) -> int: ...


class CacheBackendProtocol(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None: ...
