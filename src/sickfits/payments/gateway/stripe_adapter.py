"""Stripe payment gateway adapter.

Turns a client-side card token into money with the Charges API. Declines and
API errors come back as an unsuccessful ChargeResult carrying Stripe's
user-facing message.
"""

import stripe

from sickfits.payments.gateway.port import ChargeResult, PaymentGateway
from sickfits.utils.logging import get_logger

logger = get_logger(__name__)


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    def create_charge(
        self,
        amount: int,
        currency: str,
        source: str,
    ) -> ChargeResult:
        try:
            charge = stripe.Charge.create(
                amount=amount,
                currency=currency,
                source=source,
                api_key=self.api_key,
            )
        except stripe.CardError as exc:
            return ChargeResult(
                success=False,
                currency=currency,
                gateway_status="declined",
                failure_reason=exc.user_message or str(exc),
            )
        except stripe.StripeError as exc:
            logger.error("Stripe charge request failed", error=str(exc), http_status=exc.http_status)
            return ChargeResult(
                success=False,
                currency=currency,
                gateway_status="error",
                failure_reason=exc.user_message or "Payment provider error",
            )

        if charge.status == "failed":
            return ChargeResult(
                success=False,
                charge_id=charge.id,
                currency=charge.currency,
                gateway_status=charge.status,
                failure_reason=charge.failure_message or "Charge failed",
            )

        return ChargeResult(
            success=True,
            charge_id=charge.id,
            amount=charge.amount,
            currency=charge.currency,
            gateway_status=charge.status,
        )
