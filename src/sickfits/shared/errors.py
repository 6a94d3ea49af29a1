"""Error kinds raised by the storefront core.

Input violations use ``protean.exceptions.ValidationError`` and missing
entities use ``protean.exceptions.ObjectNotFoundError``; the kinds below cover
authentication, authorization, tokens and payment. The HTTP layer maps each
kind to a status code.
"""


class StorefrontError(Exception):
    """Base class for storefront error kinds."""

    default_message = "Storefront error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(StorefrontError):
    default_message = "You must be logged in to do that!"


class Forbidden(StorefrontError):
    default_message = "You don't have permission to do that"


class InvalidCredentials(StorefrontError):
    default_message = "Invalid email or password"


class InvalidToken(StorefrontError):
    """A session token failed signature or payload verification."""

    default_message = "Invalid session token"


class InvalidOrExpiredToken(StorefrontError):
    """A password reset token is unknown, already used, or past its expiry."""

    default_message = "This token is either invalid or expired"


class PaymentFailed(StorefrontError):
    default_message = "Payment was declined"


class CheckoutInconsistent(StorefrontError):
    """The charge succeeded but the order could not be recorded.

    Carries the gateway charge id so operators can reconcile the payment.
    """

    default_message = "Payment was taken but the order could not be recorded"

    def __init__(self, message: str | None = None, *, charge_id: str | None = None, user_id: str | None = None):
        super().__init__(message)
        self.charge_id = charge_id
        self.user_id = user_id
