"""Map storefront error kinds onto HTTP responses.

Protean's own exceptions (ValidationError, ObjectNotFoundError, ...) are
handled by ``protean.integrations.fastapi``; this module adds the kinds
defined in ``sickfits.shared.errors``.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers as register_protean_handlers

from sickfits.shared.errors import (
    CheckoutInconsistent,
    Forbidden,
    InvalidCredentials,
    InvalidOrExpiredToken,
    InvalidToken,
    PaymentFailed,
    StorefrontError,
    Unauthenticated,
)

STATUS_CODES = {
    Unauthenticated: 401,
    InvalidCredentials: 401,
    InvalidToken: 401,
    Forbidden: 403,
    InvalidOrExpiredToken: 400,
    PaymentFailed: 402,
    CheckoutInconsistent: 500,
}


def status_code_for(exc: StorefrontError) -> int:
    for error_kind in type(exc).__mro__:
        if error_kind in STATUS_CODES:
            return STATUS_CODES[error_kind]
    return 500


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    content = {"error": exc.message}
    if isinstance(exc, CheckoutInconsistent) and exc.charge_id:
        content["charge_id"] = exc.charge_id
    return JSONResponse(status_code=status_code_for(exc), content=content)


def register_exception_handlers(app: FastAPI) -> None:
    register_protean_handlers(app)
    app.add_exception_handler(StorefrontError, storefront_error_handler)
