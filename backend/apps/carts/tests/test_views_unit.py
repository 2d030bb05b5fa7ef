import types
import unittest
from unittest.mock import Mock, patch

from rest_framework import status
from rest_framework.test import APIRequestFactory, force_authenticate

from apps.api.validation import validate_request_context
from apps.carts.dtos import CartDTO, CartItemDTO
from apps.carts.exceptions import (
    CartItemNotFoundError,
    InvalidQuantityError,
    ProductNotFoundError,
)
from apps.carts.views import CartClearView, CartItemRemoveView, CartItemUpdateView, CartView
from apps.catalog.dtos import ProductSummaryDTO


def make_cart_dto(cart_id=1, user_id=10, quantity=2):
    item = CartItemDTO(
        id="0b0c6f1e-8a55-4b4e-9a5a-3f1f8f6f0c11",
        product=ProductSummaryDTO(
            id=1, name="Velvet Pillow", price="10.00", image="placeholder.jpg", category="pillows"
        ),
        quantity=quantity,
        size="Large",
        scent=None,
        subtotal=f"{10 * quantity}.00",
    )
    return CartDTO(
        id=cart_id,
        user_id=user_id,
        items=[item],
        total=f"{10 * quantity}.00",
        updated_at="2025-01-01T00:00:00+00:00",
    )


class CartViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.user = types.SimpleNamespace(id=10, is_authenticated=True)

    def dispatch(self, request, view_cls, **kwargs):
        pre_response = validate_request_context(request, view_cls, kwargs)
        if pre_response is not None:
            return pre_response
        view = view_cls.as_view()
        return view(request, **kwargs)

    def authenticate(self, request, user):
        request.user = user
        force_authenticate(request, user=user)

    def test_get_cart_uses_authenticated_actor(self):
        service = Mock()
        service.get_or_create_cart.return_value = make_cart_dto()
        request = self.factory.get("/api/cart")
        self.authenticate(request, self.user)
        with patch.object(CartView, "service", service):
            response = self.dispatch(request, CartView)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        service.get_or_create_cart.assert_called_once_with(10)
        self.assertEqual(response.data["userId"], 10)
        self.assertEqual(response.data["total"], "20.00")
        item = response.data["items"][0]
        self.assertEqual(item["product"]["name"], "Velvet Pillow")
        self.assertEqual(item["size"], "Large")
        self.assertIsNone(item["scent"])

    def test_get_cart_requires_authentication(self):
        service = Mock()
        request = self.factory.get("/api/cart")
        with patch.object(CartView, "service", service):
            response = self.dispatch(request, CartView)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["error"]["code"], "UNAUTHORIZED")
        service.get_or_create_cart.assert_not_called()

    def test_add_item_passes_raw_payload(self):
        service = Mock()
        service.add_item.return_value = make_cart_dto(quantity=3)
        payload = {"productId": 1, "quantity": 1, "size": "Large"}
        request = self.factory.post("/api/cart", payload, format="json")
        self.authenticate(request, self.user)
        with patch.object(CartView, "service", service):
            response = self.dispatch(request, CartView)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        actor_id, data = service.add_item.call_args[0]
        self.assertEqual(actor_id, 10)
        self.assertEqual(dict(data), payload)
        self.assertEqual(response.data["items"][0]["quantity"], 3)

    def test_add_item_unknown_product_maps_to_404(self):
        service = Mock()
        service.add_item.side_effect = ProductNotFoundError(details={"productId": "9"})
        request = self.factory.post("/api/cart", {"productId": 9, "quantity": 1}, format="json")
        self.authenticate(request, self.user)
        with patch.object(CartView, "service", service):
            response = self.dispatch(request, CartView)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"]["message"], "Product not found")

    def test_update_quantity_invalid_maps_to_400(self):
        service = Mock()
        service.update_item_quantity.side_effect = InvalidQuantityError(details={"quantity": 0})
        request = self.factory.put("/api/cart/update/abc", {"quantity": 0}, format="json")
        self.authenticate(request, self.user)
        with patch.object(CartItemUpdateView, "service", service):
            response = self.dispatch(request, CartItemUpdateView, item_id="abc")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")
        service.update_item_quantity.assert_called_once_with(10, "abc", 0)

    def test_remove_missing_item_maps_to_404(self):
        service = Mock()
        service.remove_item.side_effect = CartItemNotFoundError(details={"itemId": "x"})
        request = self.factory.delete("/api/cart/remove/x")
        self.authenticate(request, self.user)
        with patch.object(CartItemRemoveView, "service", service):
            response = self.dispatch(request, CartItemRemoveView, item_id="x")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"]["details"], {"itemId": "x"})

    def test_clear_cart(self):
        service = Mock()
        service.clear_cart.return_value = CartDTO(
            id=1, user_id=10, items=[], total="0.00", updated_at=None
        )
        request = self.factory.delete("/api/cart/clear")
        self.authenticate(request, self.user)
        with patch.object(CartClearView, "service", service):
            response = self.dispatch(request, CartClearView)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["items"], [])
        self.assertEqual(response.data["total"], "0.00")
