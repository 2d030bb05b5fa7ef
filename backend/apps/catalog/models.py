from django.core.validators import MinValueValidator
from django.db import models


class Product(models.Model):
    name = models.CharField(max_length=255, unique=True)
    price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(0)]
    )
    description = models.TextField()
    image = models.CharField(max_length=255, default="placeholder.jpg")
    # Variant choices, e.g. {"size": ["Small", "Large"], "scent": ["Lavender"]}
    options = models.JSONField(default=dict, blank=True)
    category = models.CharField(max_length=100)
    stock_count = models.PositiveIntegerField(default=10)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        ordering = ["id"]
        indexes = [
            models.Index(fields=["category"], name="product_category_idx"),
        ]
