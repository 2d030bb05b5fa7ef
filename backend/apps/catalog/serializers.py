from rest_framework import serializers


class ProductReadSerializer(serializers.Serializer):
    # Matches ProductDTO shapes used for responses
    id = serializers.IntegerField()
    name = serializers.CharField()
    price = serializers.CharField()
    description = serializers.CharField()
    image = serializers.CharField()
    category = serializers.CharField()
    stockCount = serializers.IntegerField(source="stock_count")
    options = serializers.DictField()

    def to_representation(self, instance):
        if instance is None:
            return None
        # If it's already a dataclass DTO, extract attributes directly for speed
        if hasattr(instance, "__dataclass_fields__"):
            return {
                "id": instance.id,
                "name": instance.name,
                "price": instance.price,
                "description": instance.description,
                "image": instance.image,
                "category": instance.category,
                "stockCount": instance.stock_count,
                "options": dict(instance.options or {}),
            }
        return super().to_representation(instance)


class ProductSummarySerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    price = serializers.CharField()
    image = serializers.CharField()
    category = serializers.CharField()
