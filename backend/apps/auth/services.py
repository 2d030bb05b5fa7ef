from __future__ import annotations

from typing import Dict, Any, Optional, Tuple

from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from apps.common import get_logger
from apps.users.dtos import user_to_dto
from .protocols import TokenIssuerProtocol, UserRegistrationRepositoryProtocol

logger = get_logger(__name__).bind(component="auth", service="RegistrationService")


class RegistrationService:
    def __init__(
        self,
        users: UserRegistrationRepositoryProtocol,
        tokens: TokenIssuerProtocol,
    ):
        self.users = users
        self.tokens = tokens
        self.logger = logger

    def _build_payload(self, data: Dict[str, Any]) -> Dict[str, Any]:
        email = data["email"].strip().lower()
        return {
            # The username column stays unique; mirror the email into it
            "username": email,
            "email": email,
            "password": data["password"],
            "name": data["name"].strip(),
        }

    def _check_uniqueness(self, email: str) -> Optional[tuple]:
        if self.users.email_exists(email):
            self.logger.info("Registration rejected: email already exists", email=email)
            return (
                "VALIDATION_ERROR",
                "User already exists with this email address",
                {"email": email},
            )
        return None

    def register(self, data: Dict[str, Any]):
        """
        Create the account and issue a token pair so the client is signed in
        right away. Returns an ``(code, message, details)`` tuple on conflict.
        """
        payload = self._build_payload(data)
        self.logger.debug("Received registration request", email=payload["email"])
        conflict = self._check_uniqueness(payload["email"])
        if conflict:
            return conflict
        user = self.users.create_user(**payload)
        tokens = self.tokens.issue(user)
        self.logger.info(
            "User registered successfully", user_id=user.id, email=user.email
        )
        return {
            "user": user_to_dto(user),
            "access": tokens["access"],
            "refresh": tokens["refresh"],
        }


class SessionService:
    def __init__(self):
        self.logger = get_logger(__name__).bind(component="auth", service="SessionService")

    def logout(
        self, refresh_token: Optional[str], actor_id: Optional[int]
    ) -> Optional[Tuple[str, str, Optional[Dict[str, Any]]]]:
        if not refresh_token:
            self.logger.warning("Logout rejected: missing refresh token", actor_id=actor_id)
            return ("VALIDATION_ERROR", "Invalid token", {"refresh": None})
        try:
            token = RefreshToken(refresh_token)
            token.blacklist()
        except TokenError as exc:
            self.logger.warning(
                "Logout failed: token error",
                actor_id=actor_id,
                error=str(exc),
            )
            return ("VALIDATION_ERROR", "Invalid token", {"error": str(exc)})
        self.logger.info("User logged out", actor_id=actor_id)
        return None
