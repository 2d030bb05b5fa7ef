from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter
from .container import build_cart_service
from .serializers import (
    CartAddItemRequestSerializer,
    CartQuantityRequestSerializer,
    CartReadSerializer,
)
from apps.api.schemas import error_responses
from apps.api.utils import resolve_actor_id
from apps.common import get_logger

logger = get_logger(__name__).bind(component="carts", layer="view")

ITEM_ID_PARAMETER = OpenApiParameter(
    "item_id", str, OpenApiParameter.PATH, description="Cart line id"
)


@extend_schema(tags=["Cart"])
class CartView(APIView):
    permission_classes = [IsAuthenticated]
    requires_actor = True
    service = build_cart_service()
    log = logger.bind(view="CartView")

    @extend_schema(
        summary="Get my cart",
        description="Returns the caller's cart, creating an empty one on first access.",
        responses={200: CartReadSerializer, **error_responses(401)},
    )
    def get(self, request):
        actor_id = resolve_actor_id(request)
        self.log.debug("Fetching cart", actor_id=actor_id)
        dto = self.service.get_or_create_cart(actor_id)
        return Response(CartReadSerializer(dto).data)

    @extend_schema(
        summary="Add item to cart",
        description=(
            "Adds a product line. Adding the same product with the same size and "
            "scent again increments the existing line's quantity."
        ),
        request=CartAddItemRequestSerializer,
        responses={200: CartReadSerializer, **error_responses(400, 401, 404, 409)},
    )
    def post(self, request):
        actor_id = resolve_actor_id(request)
        self.log.info("Adding item to cart via API", actor_id=actor_id)
        dto = self.service.add_item(actor_id, request.data)
        return Response(CartReadSerializer(dto).data)


@extend_schema(tags=["Cart"])
class CartItemUpdateView(APIView):
    permission_classes = [IsAuthenticated]
    requires_actor = True
    service = build_cart_service()
    log = logger.bind(view="CartItemUpdateView")

    @extend_schema(
        summary="Set cart line quantity",
        parameters=[ITEM_ID_PARAMETER],
        request=CartQuantityRequestSerializer,
        responses={200: CartReadSerializer, **error_responses(400, 401, 404, 409)},
    )
    def put(self, request, item_id: str):
        actor_id = resolve_actor_id(request)
        quantity = request.data.get("quantity") if hasattr(request.data, "get") else None
        self.log.info(
            "Updating cart item via API",
            actor_id=actor_id,
            item_id=item_id,
            quantity=quantity,
        )
        dto = self.service.update_item_quantity(actor_id, item_id, quantity)
        return Response(CartReadSerializer(dto).data)


@extend_schema(tags=["Cart"])
class CartItemRemoveView(APIView):
    permission_classes = [IsAuthenticated]
    requires_actor = True
    service = build_cart_service()
    log = logger.bind(view="CartItemRemoveView")

    @extend_schema(
        summary="Remove cart line",
        parameters=[ITEM_ID_PARAMETER],
        responses={200: CartReadSerializer, **error_responses(401, 404, 409)},
    )
    def delete(self, request, item_id: str):
        actor_id = resolve_actor_id(request)
        self.log.info("Removing cart item via API", actor_id=actor_id, item_id=item_id)
        dto = self.service.remove_item(actor_id, item_id)
        return Response(CartReadSerializer(dto).data)


@extend_schema(tags=["Cart"])
class CartClearView(APIView):
    permission_classes = [IsAuthenticated]
    requires_actor = True
    service = build_cart_service()
    log = logger.bind(view="CartClearView")

    @extend_schema(
        summary="Clear cart",
        responses={200: CartReadSerializer, **error_responses(401)},
    )
    def delete(self, request):
        actor_id = resolve_actor_id(request)
        self.log.info("Clearing cart via API", actor_id=actor_id)
        dto = self.service.clear_cart(actor_id)
        return Response(CartReadSerializer(dto).data)
