from decimal import Decimal
from typing import Optional, Tuple
from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from apps.common.repository import GenericRepository
from .models import Cart, CartItem


class CartRepository(GenericRepository[Cart]):
    def __init__(self):
        super().__init__(Cart)

    def get_for_user(self, user_id: int) -> Optional[Cart]:
        return self.model.objects.filter(user_id=user_id).first()

    def get_or_create_for_user(self, user_id: int) -> Tuple[Cart, bool]:
        existing = self.get_for_user(user_id)
        if existing is not None:
            return existing, False
        try:
            with transaction.atomic():
                return self.model.objects.create(user_id=user_id), True
        except IntegrityError:
            # A concurrent request created the cart between our read and insert
            return self.model.objects.get(user_id=user_id), False

    def lock_for_user(self, user_id: int) -> Optional[Cart]:
        """Fetch the cart holding its row lock; call inside ``transaction.atomic``."""
        return self.model.objects.select_for_update().filter(user_id=user_id).first()

    def save_total(self, cart: Cart, total: Decimal) -> bool:
        """
        Persist ``total`` only if nobody bumped the version since ``cart`` was
        read. Returns False when the optimistic check fails.
        """
        now = timezone.now()
        updated = self.model.objects.filter(pk=cart.pk, version=cart.version).update(
            total=total, version=F("version") + 1, updated_at=now
        )
        if not updated:
            return False
        cart.total = total
        cart.version += 1
        cart.updated_at = now
        return True


class CartItemRepository(GenericRepository[CartItem]):
    def __init__(self):
        super().__init__(CartItem)

    def list_for_cart(self, cart_id: int):
        return (
            self.model.objects.filter(cart_id=cart_id)
            .select_related("product")
            .order_by("created_at")
        )

    def find_line(
        self, cart_id: int, product_id: int, size: str, scent: str
    ) -> Optional[CartItem]:
        return self.model.objects.filter(
            cart_id=cart_id, product_id=product_id, size=size, scent=scent
        ).first()

    def get_for_cart(self, cart_id: int, item_id: UUID) -> Optional[CartItem]:
        return self.model.objects.filter(cart_id=cart_id, id=item_id).first()

    def increment(self, item: CartItem, quantity: int) -> CartItem:
        self.model.objects.filter(pk=item.pk).update(quantity=F("quantity") + quantity)
        item.refresh_from_db(fields=["quantity"])
        return item

    def set_quantity(self, item: CartItem, quantity: int) -> CartItem:
        return self.update(item, quantity=quantity)

    def delete_line(self, cart_id: int, item_id: UUID) -> int:
        deleted, _ = self.model.objects.filter(cart_id=cart_id, id=item_id).delete()
        return deleted

    def delete_for_cart(self, cart_id: int) -> int:
        deleted, _ = self.model.objects.filter(cart_id=cart_id).delete()
        return deleted
