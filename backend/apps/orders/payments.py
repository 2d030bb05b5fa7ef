from __future__ import annotations

import random
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional

from django.conf import settings

from apps.common import get_logger

logger = get_logger(__name__).bind(component="orders", layer="payments")

DEFAULT_SUCCESS_RATE = 0.8
DEFAULT_TRANSACTION_PREFIX = "MPESA"


@dataclass(frozen=True)
class PaymentResult:
    success: bool
    transaction_id: Optional[str]
    message: str


class MockPaymentGateway:
    """
    Stand-in for a mobile-money gateway. Each charge is approved with
    probability ``success_rate``; declined charges carry no transaction id.
    ``rng`` and ``clock`` are injectable so tests can force an outcome.
    """

    def __init__(
        self,
        success_rate: Optional[float] = None,
        prefix: Optional[str] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        if success_rate is None:
            success_rate = getattr(settings, "PAYMENT_SUCCESS_RATE", DEFAULT_SUCCESS_RATE)
        if not 0.0 <= float(success_rate) <= 1.0:
            raise ValueError("success_rate must be between 0 and 1")
        self.success_rate = float(success_rate)
        self.prefix = prefix or getattr(
            settings, "PAYMENT_TRANSACTION_PREFIX", DEFAULT_TRANSACTION_PREFIX
        )
        self.rng = rng or random.Random()
        self.clock = clock or time.time
        self.logger = logger.bind(gateway="MockPaymentGateway")

    def new_transaction_id(self) -> str:
        millis = str(int(self.clock() * 1000))
        return f"{self.prefix}{millis[-8:]}{self.rng.getrandbits(16):04X}"

    def charge(self, amount: Decimal, *, reference: str) -> PaymentResult:
        transaction_id = self.new_transaction_id()
        approved = self.rng.random() < self.success_rate
        self.logger.info(
            "Simulated payment processed",
            reference=reference,
            amount=amount,
            approved=approved,
            transaction_id=transaction_id,
        )
        if not approved:
            return PaymentResult(
                success=False,
                transaction_id=None,
                message="Payment failed due to a mock error.",
            )
        return PaymentResult(
            success=True,
            transaction_id=transaction_id,
            message="Payment successful",
        )
