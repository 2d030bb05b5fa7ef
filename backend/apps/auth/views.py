from dataclasses import asdict

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from apps.api.utils import error_response
from apps.common import get_logger
from drf_spectacular.utils import extend_schema
from apps.api.schemas import error_responses
from apps.users.dtos import user_to_dto
from .serializers import (
    RegisterRequestSerializer,
    RegisterResponseSerializer,
    MeResponseSerializer,
    LogoutRequestSerializer,
    DetailResponseSerializer,
)
from .container import build_registration_service, build_session_service

logger = get_logger(__name__).bind(component="auth", layer="view")


@extend_schema(tags=["Auth"])
class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    service = build_registration_service()
    log = logger.bind(view="RegisterView")

    @extend_schema(
        summary="Register user",
        request=RegisterRequestSerializer,
        responses={201: RegisterResponseSerializer, **error_responses(400)},
    )
    def post(self, request):
        serializer = RegisterRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info(
            "Processing registration request",
            email=serializer.validated_data.get("email"),
        )
        result = self.service.register(serializer.validated_data)
        if isinstance(result, tuple):
            code, message, details = result
            self.log.warning(
                "Registration failed", code=code, detail=message, details=details
            )
            return error_response(code, message, details)
        user = result["user"]
        self.log.info("Registration completed", user_id=user.id)
        payload = {
            "message": "User registered successfully",
            "user": {"id": user.id, "name": user.name, "email": user.email},
            "access": result["access"],
            "refresh": result["refresh"],
        }
        return Response(
            RegisterResponseSerializer(payload).data, status=status.HTTP_201_CREATED
        )


@extend_schema(tags=["Auth"], summary="Login (JWT obtain pair)")
class LoginView(TokenObtainPairView):
    permission_classes = [AllowAny]


@extend_schema(tags=["Auth"], summary="Refresh JWT")
class RefreshView(TokenRefreshView):
    permission_classes = [AllowAny]


@extend_schema(
    tags=["Auth"],
    summary="Get current user",
    responses={200: MeResponseSerializer, **error_responses(401)},
)
class MeView(APIView):
    permission_classes = [IsAuthenticated]
    log = logger.bind(view="MeView")

    def get(self, request):
        user = request.user
        self.log.debug("Returning current user profile", user_id=user.id)
        return Response(MeResponseSerializer(asdict(user_to_dto(user))).data)


@extend_schema(tags=["Auth"])
class LogoutView(APIView):
    permission_classes = [IsAuthenticated]
    service = build_session_service()
    log = logger.bind(view="LogoutView")

    @extend_schema(
        summary="Logout (blacklist refresh)",
        request=LogoutRequestSerializer,
        responses={200: DetailResponseSerializer, **error_responses(400, 401)},
    )
    def post(self, request):
        actor_id = getattr(request.user, "id", None)
        error = self.service.logout(request.data.get("refresh"), actor_id)
        if error:
            code, message, details = error
            return error_response(code, message, details)
        self.log.info("Logout completed", user_id=actor_id)
        return Response({"detail": "Logged out"}, status=status.HTTP_200_OK)
