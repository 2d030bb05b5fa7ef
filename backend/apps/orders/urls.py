from django.urls import re_path
from .views import CheckoutView

urlpatterns = [
    re_path(r"^checkout/?$", CheckoutView.as_view(), name="api-checkout"),
]
