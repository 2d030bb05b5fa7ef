import types
import unittest
from rest_framework import status
from apps.api.utils import error_response, resolve_actor_id


class ErrorResponseTests(unittest.TestCase):
    def test_default_status_mapping_and_details(self):
        resp = error_response("NOT_FOUND", "missing", {"id": 1})
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["code"], "NOT_FOUND")
        self.assertEqual(resp.data["error"]["status"], status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["details"], {"id": 1})

    def test_custom_status_override(self):
        resp = error_response("UNKNOWN", "oops", http_status=status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.data["error"]["message"], "oops")

    def test_error_response_supports_hint_and_extra(self):
        resp = error_response(
            "VALIDATION_ERROR",
            "Invalid value",
            hint="Use digits only",
            extra={"field": "sku"},
        )
        payload = resp.data["error"]
        self.assertEqual(payload["hint"], "Use digits only")
        self.assertEqual(payload["extra"], {"field": "sku"})

    def test_payment_declined_maps_to_server_error(self):
        resp = error_response("PAYMENT_DECLINED", "declined", extra={"retryable": True})
        self.assertEqual(resp.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(resp.data["error"]["extra"], {"retryable": True})

    def test_blank_message_is_rejected(self):
        with self.assertRaises(ValueError):
            error_response("NOT_FOUND", "  ")


class ResolveActorIdTests(unittest.TestCase):
    def test_prefers_validated_user_id(self):
        request = types.SimpleNamespace(
            validated_user_id="5", user=types.SimpleNamespace(id=9, is_authenticated=True)
        )
        self.assertEqual(resolve_actor_id(request), 5)

    def test_falls_back_to_authenticated_user(self):
        request = types.SimpleNamespace(user=types.SimpleNamespace(id=9, is_authenticated=True))
        self.assertEqual(resolve_actor_id(request), 9)

    def test_anonymous_request_has_no_actor(self):
        request = types.SimpleNamespace(user=types.SimpleNamespace(id=None, is_authenticated=False))
        self.assertIsNone(resolve_actor_id(request))
