from rest_framework import serializers
from apps.catalog.serializers import ProductSummarySerializer


class CartItemReadSerializer(serializers.Serializer):
    id = serializers.CharField()
    product = ProductSummarySerializer()
    quantity = serializers.IntegerField()
    size = serializers.CharField(allow_null=True)
    scent = serializers.CharField(allow_null=True)
    subtotal = serializers.CharField()


class CartReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    userId = serializers.IntegerField(source="user_id")
    items = CartItemReadSerializer(many=True)
    total = serializers.CharField()
    updatedAt = serializers.CharField(source="updated_at", allow_null=True)


# Request shapes below document the API; the service layer parses the raw payloads.
class CartAddItemRequestSerializer(serializers.Serializer):
    productId = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)
    size = serializers.CharField(required=False, allow_null=True)
    scent = serializers.CharField(required=False, allow_null=True)


class CartQuantityRequestSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
