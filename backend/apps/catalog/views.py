from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny
from .container import build_product_service
from .serializers import ProductReadSerializer
from apps.api.utils import error_response
from apps.api.schemas import error_responses
from apps.common import get_logger
from drf_spectacular.utils import extend_schema, OpenApiParameter

logger = get_logger(__name__).bind(component="catalog", layer="view")


@extend_schema(tags=["Catalog"])
class ProductListView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description="Cached results may be served.",
        parameters=[
            OpenApiParameter(
                name="category",
                description="Filter by category name (case insensitive)",
                required=False,
                type=str,
            )
        ],
        responses={200: ProductReadSerializer(many=True)},
    )
    def get(self, request):
        category = request.query_params.get("category") or None
        self.log.debug("Handling product list request", category=category)
        dtos = self.service.list_products(category)
        return Response(ProductReadSerializer(dtos, many=True).data)


@extend_schema(tags=["Catalog"])
class ProductDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={200: ProductReadSerializer, **error_responses(404)},
    )
    def get(self, request, product_id: int):
        self.log.debug("Fetching product detail", product_id=product_id)
        dto = self.service.get_product(product_id)
        if not dto:
            self.log.info("Product not found", product_id=product_id)
            return error_response(
                "NOT_FOUND", "Product not found", {"id": str(product_id)}
            )
        return Response(ProductReadSerializer(dto).data)
