"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement, so
checkout can run against FakeGateway (dev/test) or StripeGateway (production)
without changes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ChargeResult:
    """Result of a charge attempt.

    ``amount`` is what the gateway reports as actually charged, in minor
    currency units. It can differ from the requested amount.
    """

    success: bool
    charge_id: str | None = None
    amount: int | None = None
    currency: str | None = None
    gateway_status: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_charge(
        self,
        amount: int,
        currency: str,
        source: str,
    ) -> ChargeResult:
        """Charge ``amount`` minor units to the payment ``source`` token.

        A declined charge is reported through ``ChargeResult.success``;
        transport errors may raise.
        """
        ...
