import random
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from unittest.mock import Mock, patch

from apps.carts.models import Cart, CartItem
from apps.catalog.models import Product
from apps.orders.models import Order, OrderItem, OrderStatus
from apps.orders.payments import MockPaymentGateway
from apps.orders.views import CheckoutView
from apps.users.models import User


class TestCheckout(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(
            username='buyer@example.com', email='buyer@example.com', password='secret1', name='Buyer'
        )
        self.p1 = Product.objects.create(name='Velvet Pillow', price=Decimal('10.00'), description='p', category='pillows')
        self.p2 = Product.objects.create(name='Cedar Candle', price=Decimal('5.00'), description='c', category='candles')
        self.checkout_url = '/api/checkout'
        login = self.client.post(
            reverse('auth-login'), {'email': 'buyer@example.com', 'password': 'secret1'}, format='json'
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")

    def gateway(self, success_rate):
        return patch.object(
            CheckoutView.service, 'gateway', MockPaymentGateway(success_rate=success_rate, rng=random.Random(1))
        )

    def fill_cart(self):
        self.client.post('/api/cart', {'productId': self.p1.id, 'quantity': 3}, format='json')
        return self.client.post('/api/cart', {'productId': self.p2.id, 'quantity': 1}, format='json')

    def checkout_payload(self, cart):
        return {
            'name': 'Jane Doe',
            'phone': '0712345678',
            'cartItems': cart['items'],
            'totalAmount': cart['total'],
        }

    def test_checkout_places_order_and_clears_cart(self):
        cart = self.fill_cart().json()
        self.assertEqual(cart['total'], '35.00')
        with self.gateway(1.0):
            response = self.client.post(self.checkout_url, self.checkout_payload(cart), format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertTrue(body['success'])
        self.assertRegex(body['transactionId'], r'^MPESA\d{8}[0-9A-F]{4}$')
        self.assertEqual(body['order']['totalAmount'], '35.00')
        self.assertEqual(body['order']['paymentStatus'], 'Paid')
        self.assertEqual(body['order']['orderStatus'], 'Processing')

        order = Order.objects.get(user=self.user)
        self.assertEqual(order.transaction_id, body['transactionId'])
        self.assertEqual(order.items.count(), 2)
        self.assertEqual(order.items.get(product=self.p1).quantity, 3)

        after = self.client.get('/api/cart').json()
        self.assertEqual(after['items'], [])
        self.assertEqual(after['total'], '0.00')
        self.assertEqual(after['id'], cart['id'])

    def test_order_prices_are_frozen(self):
        cart = self.fill_cart().json()
        with self.gateway(1.0):
            self.client.post(self.checkout_url, self.checkout_payload(cart), format='json')
        Product.objects.filter(pk=self.p1.pk).update(price=Decimal('99.00'))
        line = OrderItem.objects.get(product=self.p1)
        self.assertEqual(line.price, Decimal('10.00'))
        self.assertEqual(Order.objects.get().total_amount, Decimal('35.00'))

    def test_declined_payment_leaves_cart_untouched(self):
        cart = self.fill_cart().json()
        with self.gateway(0.0):
            response = self.client.post(self.checkout_url, self.checkout_payload(cart), format='json')
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        error = response.json()['error']
        self.assertEqual(error['code'], 'PAYMENT_DECLINED')
        self.assertTrue(error['extra']['retryable'])
        self.assertIsNone(error['extra']['transactionId'])
        self.assertFalse(Order.objects.exists())
        self.assertEqual(CartItem.objects.filter(cart__user=self.user).count(), 2)
        self.assertEqual(Cart.objects.get(user=self.user).total, Decimal('35.00'))

    def test_missing_fields_are_rejected(self):
        response = self.client.post(self.checkout_url, {'cartItems': []}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()['error']['code'], 'VALIDATION_ERROR')
        self.assertFalse(Order.objects.exists())

    def test_requires_authentication(self):
        self.client.credentials()
        response = self.client.post(self.checkout_url, {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_orders_are_immutable_except_status(self):
        cart = self.fill_cart().json()
        with self.gateway(1.0):
            self.client.post(self.checkout_url, self.checkout_payload(cart), format='json')
        order = Order.objects.get()
        order.total_amount = Decimal('1.00')
        with self.assertRaises(ValueError):
            order.save()
        with self.assertRaises(ValueError):
            order.save(update_fields=['total_amount'])
        order.order_status = OrderStatus.SHIPPED
        order.save(update_fields=['order_status'])
        order.refresh_from_db()
        self.assertEqual(order.order_status, 'Shipped')
        self.assertEqual(order.total_amount, Decimal('35.00'))
        item = order.items.first()
        item.quantity = 50
        with self.assertRaises(ValueError):
            item.save()

    def test_oversized_payload_is_rejected_before_charging(self):
        cart = self.fill_cart().json()
        oversized_quantity = self.checkout_payload(cart)
        oversized_quantity['cartItems'][0]['quantity'] = 10**20
        oversized_total = dict(self.checkout_payload(cart), totalAmount='1e30')
        gateway = Mock()
        with patch.object(CheckoutView.service, 'gateway', gateway):
            for payload in (oversized_quantity, oversized_total):
                response = self.client.post(self.checkout_url, payload, format='json')
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertEqual(response.json()['error']['code'], 'VALIDATION_ERROR')
        gateway.charge.assert_not_called()
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(CartItem.objects.count(), 2)
