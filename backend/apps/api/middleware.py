from django.utils.deprecation import MiddlewareMixin
from rest_framework.renderers import JSONRenderer

from apps.api.validation import requires_actor, validate_request_context
from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="middleware")


class RequestValidationMiddleware(MiddlewareMixin):
    """
    Resolves the calling customer before the view runs so cart and checkout
    routes fail closed on missing or invalid bearer tokens.
    """

    def process_view(self, request, view_func, view_args, view_kwargs):
        view_class = getattr(view_func, "view_class", None)
        if view_class is None or not requires_actor(view_class):
            return None
        response = validate_request_context(request, view_class, view_kwargs)
        if response is not None:
            # DRF never finalizes responses returned from middleware
            response.accepted_renderer = JSONRenderer()
            response.accepted_media_type = "application/json"
            response.renderer_context = {}
            response.render()
            logger.info(
                "Request blocked by validation",
                view=view_class.__name__,
                method=getattr(request, "method", None),
                status=response.status_code,
            )
        return response
