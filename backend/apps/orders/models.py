from django.conf import settings
from django.db import models

from apps.catalog.models import Product


class PaymentStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    PAID = "Paid", "Paid"
    FAILED = "Failed", "Failed"


class OrderStatus(models.TextChoices):
    PROCESSING = "Processing", "Processing"
    SHIPPED = "Shipped", "Shipped"
    DELIVERED = "Delivered", "Delivered"
    CANCELLED = "Cancelled", "Cancelled"


class Order(models.Model):
    # Only these columns may change after the order row exists
    MUTABLE_FIELDS = frozenset({"payment_status", "order_status", "updated_at"})

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="orders"
    )
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    shipping_name = models.CharField(max_length=150)
    shipping_phone = models.CharField(max_length=32)
    transaction_id = models.CharField(max_length=64, unique=True)
    payment_status = models.CharField(
        max_length=16, choices=PaymentStatus.choices, default=PaymentStatus.PENDING
    )
    order_status = models.CharField(
        max_length=16, choices=OrderStatus.choices, default=OrderStatus.PROCESSING
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            update_fields = kwargs.get("update_fields")
            if update_fields is None or set(update_fields) - self.MUTABLE_FIELDS:
                raise ValueError(
                    "Orders are immutable; only payment_status and order_status may change"
                )
        super().save(*args, **kwargs)

    def __str__(self):
        return f"Order {self.id} ({self.transaction_id})"


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    # Kept when the product is later removed from the catalog
    product = models.ForeignKey(
        Product, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    product_ref = models.CharField(max_length=64)
    name = models.CharField(max_length=255)
    # Price captured at purchase time
    price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField()
    size = models.CharField(max_length=64, blank=True, default="")
    scent = models.CharField(max_length=64, blank=True, default="")

    class Meta:
        db_table = "order_items"
        ordering = ["id"]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Order items are immutable")
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.quantity} x {self.name}"
