import types
import unittest
from unittest.mock import Mock, patch

from rest_framework import status
from rest_framework.test import APIRequestFactory, force_authenticate

from apps.api.validation import validate_request_context
from apps.orders.dtos import CheckoutResultDTO, OrderDTO, OrderItemDTO
from apps.orders.exceptions import InvalidCheckoutError, PaymentDeclinedError
from apps.orders.views import CheckoutView


def make_result():
    order = OrderDTO(
        id=5,
        user_id=10,
        items=[
            OrderItemDTO(product_id="1", name="Velvet Pillow", price="10.00", quantity=3, size=None, scent=None)
        ],
        total_amount="30.00",
        shipping_address={"name": "Jane Doe", "phone": "0712345678"},
        transaction_id="MPESA12345678ABCD",
        payment_status="Paid",
        order_status="Processing",
        created_at="2025-01-01T00:00:00+00:00",
    )
    return CheckoutResultDTO(
        success=True,
        message="Payment successful! Order 5 placed.",
        transaction_id="MPESA12345678ABCD",
        order=order,
    )


class CheckoutViewUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.user = types.SimpleNamespace(id=10, is_authenticated=True)
        self.payload = {
            "name": "Jane Doe",
            "phone": "0712345678",
            "cartItems": [{"productId": 1, "quantity": 3}],
            "totalAmount": 30,
        }

    def dispatch(self, request):
        pre_response = validate_request_context(request, CheckoutView, {})
        if pre_response is not None:
            return pre_response
        return CheckoutView.as_view()(request)

    def post(self, authenticated=True):
        request = self.factory.post("/api/checkout", self.payload, format="json")
        if authenticated:
            request.user = self.user
            force_authenticate(request, user=self.user)
        return request

    def test_success_response_shape(self):
        service = Mock()
        service.checkout.return_value = make_result()
        with patch.object(CheckoutView, "service", service):
            response = self.dispatch(self.post())
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["transactionId"], "MPESA12345678ABCD")
        order = response.data["order"]
        self.assertEqual(order["totalAmount"], "30.00")
        self.assertEqual(order["shippingAddress"], {"name": "Jane Doe", "phone": "0712345678"})
        self.assertEqual(order["paymentStatus"], "Paid")
        self.assertEqual(order["items"][0]["productId"], "1")
        actor_id, data = service.checkout.call_args[0]
        self.assertEqual(actor_id, 10)
        self.assertEqual(dict(data)["totalAmount"], 30)

    def test_requires_authentication(self):
        service = Mock()
        with patch.object(CheckoutView, "service", service):
            response = self.dispatch(self.post(authenticated=False))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        service.checkout.assert_not_called()

    def test_declined_payment_envelope(self):
        service = Mock()
        service.checkout.side_effect = PaymentDeclinedError()
        with patch.object(CheckoutView, "service", service):
            response = self.dispatch(self.post())
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        error = response.data["error"]
        self.assertEqual(error["code"], "PAYMENT_DECLINED")
        self.assertEqual(error["extra"], {"retryable": True, "transactionId": None})

    def test_invalid_checkout_envelope(self):
        service = Mock()
        service.checkout.side_effect = InvalidCheckoutError(details={"phone": "This field is required."})
        with patch.object(CheckoutView, "service", service):
            response = self.dispatch(self.post())
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")
        self.assertIn("phone", response.data["error"]["details"])
