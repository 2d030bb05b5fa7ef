import unittest
from unittest.mock import Mock, patch
from rest_framework import status
from rest_framework.test import APIRequestFactory
from apps.catalog.views import ProductListView, ProductDetailView
from apps.catalog.dtos import ProductDTO


def make_product_dto(product_id=1, name="Velvet Pillow"):
    return ProductDTO(
        id=product_id,
        name=name,
        price="19.99",
        description="A pillow",
        image="placeholder.jpg",
        category="pillows",
        stock_count=10,
        options={"size": ["Small", "Large"]},
    )


class CatalogViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()

    def test_product_list_passes_category_filter(self):
        service_mock = Mock()
        service_mock.list_products.return_value = [make_product_dto()]
        with patch.object(ProductListView, "service", service_mock):
            request = self.factory.get("/api/products/", {"category": "pillows"})
            response = ProductListView.as_view()(request)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        service_mock.list_products.assert_called_once_with("pillows")
        self.assertEqual(response.data[0]["name"], "Velvet Pillow")
        self.assertEqual(response.data[0]["stockCount"], 10)
        self.assertEqual(response.data[0]["options"], {"size": ["Small", "Large"]})

    def test_product_list_without_category(self):
        service_mock = Mock()
        service_mock.list_products.return_value = []
        with patch.object(ProductListView, "service", service_mock):
            response = ProductListView.as_view()(self.factory.get("/api/products/"))
        self.assertEqual(response.data, [])
        service_mock.list_products.assert_called_once_with(None)

    def test_product_detail_found(self):
        service_mock = Mock()
        service_mock.get_product.return_value = make_product_dto(5, "Cedar Candle")
        with patch.object(ProductDetailView, "service", service_mock):
            request = self.factory.get("/api/products/5/")
            response = ProductDetailView.as_view()(request, product_id=5)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], 5)
        self.assertEqual(response.data["price"], "19.99")

    def test_product_detail_not_found(self):
        service_mock = Mock()
        service_mock.get_product.return_value = None
        with patch.object(ProductDetailView, "service", service_mock):
            request = self.factory.get("/api/products/404/")
            response = ProductDetailView.as_view()(request, product_id=404)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"]["code"], "NOT_FOUND")
        self.assertEqual(response.data["error"]["details"], {"id": "404"})
