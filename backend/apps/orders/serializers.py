from rest_framework import serializers


class OrderItemReadSerializer(serializers.Serializer):
    productId = serializers.CharField(source="product_id")
    name = serializers.CharField()
    price = serializers.CharField()
    quantity = serializers.IntegerField()
    size = serializers.CharField(allow_null=True)
    scent = serializers.CharField(allow_null=True)


class ShippingAddressSerializer(serializers.Serializer):
    name = serializers.CharField()
    phone = serializers.CharField()


class OrderReadSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    userId = serializers.IntegerField(source="user_id")
    items = OrderItemReadSerializer(many=True)
    totalAmount = serializers.CharField(source="total_amount")
    shippingAddress = ShippingAddressSerializer(source="shipping_address")
    transactionId = serializers.CharField(source="transaction_id")
    paymentStatus = serializers.CharField(source="payment_status")
    orderStatus = serializers.CharField(source="order_status")
    createdAt = serializers.CharField(source="created_at", allow_null=True)


class CheckoutResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    transactionId = serializers.CharField(source="transaction_id")
    order = OrderReadSerializer()


# Request shape for the schema only; CheckoutCommand parses the raw payload.
class CheckoutLineRequestSerializer(serializers.Serializer):
    productId = serializers.CharField()
    name = serializers.CharField(required=False)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    quantity = serializers.IntegerField(min_value=1)
    size = serializers.CharField(required=False, allow_null=True)
    scent = serializers.CharField(required=False, allow_null=True)


class CheckoutRequestSerializer(serializers.Serializer):
    name = serializers.CharField()
    phone = serializers.CharField()
    cartItems = CheckoutLineRequestSerializer(many=True)
    totalAmount = serializers.DecimalField(max_digits=12, decimal_places=2)
