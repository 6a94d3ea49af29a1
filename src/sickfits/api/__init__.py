"""Storefront API package."""

from sickfits.api.errors import register_exception_handlers
from sickfits.api.routes import auth_router, cart_router, item_router, order_router, user_router

__all__ = [
    "auth_router",
    "item_router",
    "cart_router",
    "order_router",
    "user_router",
    "register_exception_handlers",
]
