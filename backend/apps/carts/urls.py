from django.urls import re_path
from .views import CartView, CartItemUpdateView, CartItemRemoveView, CartClearView

urlpatterns = [
    # Patterns accept an optional trailing slash
    re_path(r"^cart/?$", CartView.as_view(), name="api-cart"),
    re_path(r"^cart/clear/?$", CartClearView.as_view(), name="api-cart-clear"),
    re_path(
        r"^cart/update/(?P<item_id>[^/]+)/?$",
        CartItemUpdateView.as_view(),
        name="api-cart-update",
    ),
    re_path(
        r"^cart/remove/(?P<item_id>[^/]+)/?$",
        CartItemRemoveView.as_view(),
        name="api-cart-remove",
    ),
]
