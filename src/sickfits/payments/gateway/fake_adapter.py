"""Configurable fake payment gateway for development and testing.

Simulates a gateway without any external calls. It can be configured to
decline charges or to settle a different amount than requested (the way a
real gateway may round or convert), and it records every call.
"""

from uuid import uuid4

from sickfits.payments.gateway.port import ChargeResult, PaymentGateway


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.settled_amount: int | None = None
        self.calls: list[dict] = []

    def configure(
        self,
        should_succeed: bool,
        failure_reason: str = "Card declined",
        settled_amount: int | None = None,
    ) -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.settled_amount = settled_amount

    def create_charge(
        self,
        amount: int,
        currency: str,
        source: str,
    ) -> ChargeResult:
        self.calls.append(
            {
                "method": "create_charge",
                "amount": amount,
                "currency": currency,
                "source": source,
            }
        )

        if self.should_succeed:
            return ChargeResult(
                success=True,
                charge_id=f"ch_fake_{uuid4().hex[:16]}",
                amount=amount if self.settled_amount is None else self.settled_amount,
                currency=currency,
                gateway_status="succeeded",
            )
        return ChargeResult(
            success=False,
            currency=currency,
            gateway_status="failed",
            failure_reason=self.failure_reason,
        )
