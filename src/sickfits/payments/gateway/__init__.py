"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeGateway for development and testing
- StripeGateway when STRIPE_SECRET_KEY is configured
"""

from sickfits.payments.gateway.fake_adapter import FakeGateway
from sickfits.payments.gateway.port import PaymentGateway
from sickfits.utils.settings import get_settings

_current_gateway: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway."""
    global _current_gateway
    if _current_gateway is None:
        secret_key = get_settings().stripe_secret_key
        if secret_key:
            from sickfits.payments.gateway.stripe_adapter import StripeGateway

            _current_gateway = StripeGateway(api_key=secret_key)
        else:
            _current_gateway = FakeGateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
