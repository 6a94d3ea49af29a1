"""SickFits storefront domain — accounts, permissions, catalogue items, cart and checkout.

Single bounded context hosting the User, Item, CartItem and Order aggregates.
Commands are processed synchronously; the checkout saga talks to the
repositories directly so each step is persisted on its own.
"""

from protean.domain import Domain

from sickfits.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
sickfits = Domain(name="sickfits")
