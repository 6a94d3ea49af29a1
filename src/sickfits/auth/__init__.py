"""Token issuer factory.

Provides get_token_issuer() / set_token_issuer() so the signing secret is
loaded once and handed to the issuer explicitly:
- default issuer is built from APP_SECRET at first use
- tests install an issuer with a known secret
"""

from sickfits.auth.tokens import TokenIssuer
from sickfits.utils.settings import get_settings

_current_issuer: TokenIssuer | None = None


def get_token_issuer() -> TokenIssuer:
    """Return the active token issuer, building it from settings if needed."""
    global _current_issuer
    if _current_issuer is None:
        _current_issuer = TokenIssuer(secret=get_settings().app_secret)
    return _current_issuer


def set_token_issuer(issuer: TokenIssuer) -> None:
    """Override the active token issuer (useful for tests)."""
    global _current_issuer
    _current_issuer = issuer


def reset_token_issuer() -> None:
    """Reset to the settings-derived issuer."""
    global _current_issuer
    _current_issuer = None
