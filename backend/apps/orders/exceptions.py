from rest_framework import status

from apps.api.exceptions import DomainError


class InvalidCheckoutError(DomainError):
    error_code = "VALIDATION_ERROR"
    default_message = "Missing required customer info or empty cart data."


class PaymentDeclinedError(DomainError):
    """Simulated gateway decline. Safe to retry by resubmitting the checkout."""

    error_code = "PAYMENT_DECLINED"
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Payment failed due to a mock error."

    def __init__(self, message=None, *, details=None, hint=None, extra=None):
        super().__init__(
            message,
            details=details,
            hint=hint or "Resubmit the checkout to try the payment again.",
            extra={"retryable": True, "transactionId": None, **(extra or {})},
        )
