from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema
from .container import build_checkout_service
from .serializers import CheckoutRequestSerializer, CheckoutResponseSerializer
from apps.api.schemas import error_responses
from apps.api.utils import resolve_actor_id
from apps.common import get_logger

logger = get_logger(__name__).bind(component="orders", layer="view")


@extend_schema(tags=["Checkout"])
class CheckoutView(APIView):
    permission_classes = [IsAuthenticated]
    requires_actor = True
    service = build_checkout_service()
    log = logger.bind(view="CheckoutView")

    @extend_schema(
        summary="Pay for the cart and place an order",
        description=(
            "Simulates a mobile-money payment for the submitted cart snapshot. "
            "On success an order is created and the cart is emptied. A declined "
            "payment returns PAYMENT_DECLINED and leaves the cart untouched."
        ),
        request=CheckoutRequestSerializer,
        responses={200: CheckoutResponseSerializer, **error_responses(400, 401, 500)},
    )
    def post(self, request):
        actor_id = resolve_actor_id(request)
        self.log.info("Checkout requested via API", actor_id=actor_id)
        result = self.service.checkout(actor_id, request.data)
        return Response(CheckoutResponseSerializer(result).data)
