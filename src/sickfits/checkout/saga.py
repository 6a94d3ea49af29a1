"""Checkout Saga — turns a shopper's cart into a paid Order.

Steps:
    1. INITIATED       → caller identity required
    2. CART_LOADED     → cart rows joined with current item data (the snapshot)
    3. CHARGED         → gateway charged Σ price × quantity over the snapshot
    4. ORDER_PERSISTED → Order + OrderItems written with the charged amount
    5. CART_CLEARED    → exactly the snapshot rows deleted

Failures before CHARGED leave nothing behind and are safe to retry with a new
payment token. A failure while persisting the order, after money was taken, is
raised as CheckoutInconsistent carrying the charge id. A failure while clearing
the cart never fails the checkout: the order is valid, so the leftover rows are
retried a few times and then logged for cleanup.

The charge is never retried here; charging twice is worse than failing once.
"""

from dataclasses import dataclass
from enum import Enum

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from tenacity import RetryError, Retrying, stop_after_attempt, wait_exponential

from sickfits.auth.guard import require_authenticated
from sickfits.cart.cart_item import CartItem
from sickfits.catalogue.item import Item
from sickfits.order.order import Order
from sickfits.payments.gateway import get_gateway
from sickfits.payments.gateway.port import PaymentGateway
from sickfits.shared.errors import CheckoutInconsistent, PaymentFailed
from sickfits.utils.logging import get_logger
from sickfits.utils.settings import get_settings

logger = get_logger(__name__)

# Cart cleanup runs after the order exists, so it may be retried safely
CLEANUP_ATTEMPTS = 3


class CheckoutStep(Enum):
    INITIATED = "initiated"
    CART_LOADED = "cart_loaded"
    CHARGED = "charged"
    ORDER_PERSISTED = "order_persisted"
    CART_CLEARED = "cart_cleared"


@dataclass(frozen=True)
class CartLine:
    """One cart row joined with the item it referenced when checkout began."""

    cart_item_id: str
    item_id: str
    quantity: int
    title: str
    description: str | None
    image: str | None
    large_image: str | None
    price: int

    @property
    def line_total(self) -> int:
        return self.price * self.quantity


class CheckoutSaga:
    """Runs one checkout for one user. Instances are not reused."""

    def __init__(
        self,
        gateway: PaymentGateway | None = None,
        currency: str | None = None,
        cleanup_wait_seconds: float = 0.2,
    ) -> None:
        self.gateway = gateway or get_gateway()
        self.currency = currency or get_settings().currency
        self.cleanup_wait_seconds = cleanup_wait_seconds
        self.state: CheckoutStep | None = None
        self.lines: list[CartLine] = []

    def run(self, user_id: str | None, payment_token: str) -> Order:
        self.state = CheckoutStep.INITIATED
        user_id = require_authenticated(user_id)

        self.lines = self._load_cart(user_id)
        if not self.lines:
            raise ValidationError({"cart": ["Your cart is empty"]})
        self.state = CheckoutStep.CART_LOADED

        amount = sum(line.line_total for line in self.lines)
        try:
            charge = self.gateway.create_charge(amount=amount, currency=self.currency, source=payment_token)
        except Exception as exc:
            logger.error("Checkout charge request failed", user_id=user_id, amount=amount, error=str(exc))
            raise PaymentFailed(str(exc)) from exc
        if not charge.success:
            logger.warning("Checkout charge declined", user_id=user_id, amount=amount, reason=charge.failure_reason)
            raise PaymentFailed(charge.failure_reason)
        self.state = CheckoutStep.CHARGED
        logger.info("Checkout charge succeeded", user_id=user_id, charge_id=charge.charge_id, amount=charge.amount)

        order = self._persist_order(user_id, charge.charge_id, charge.amount)
        self.state = CheckoutStep.ORDER_PERSISTED

        if self._clear_cart(user_id, order):
            self.state = CheckoutStep.CART_CLEARED
        return order

    # -------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------
    def _load_cart(self, user_id: str) -> list[CartLine]:
        cart_repo = current_domain.repository_for(CartItem)
        item_repo = current_domain.repository_for(Item)

        lines = []
        for cart_item in cart_repo.find_for_user(user_id):
            try:
                item = item_repo.get(cart_item.item_id)
            except ObjectNotFoundError:
                # The item was deleted after it went into the cart
                logger.warning(
                    "Skipping cart row for missing item",
                    user_id=user_id,
                    cart_item_id=str(cart_item.id),
                    item_id=str(cart_item.item_id),
                )
                continue

            lines.append(
                CartLine(
                    cart_item_id=str(cart_item.id),
                    item_id=str(item.id),
                    quantity=cart_item.quantity,
                    **item.snapshot(),
                )
            )
        return lines

    def _persist_order(self, user_id: str, charge_id: str, charged_amount: int) -> Order:
        try:
            order = Order.place(
                user_id=user_id,
                charge_id=charge_id,
                total=charged_amount,
                lines=self.lines,
            )
            current_domain.repository_for(Order).add(order)
        except Exception as exc:
            logger.critical(
                "Order could not be recorded after a successful charge",
                user_id=user_id,
                charge_id=charge_id,
                amount=charged_amount,
                error=str(exc),
            )
            raise CheckoutInconsistent(charge_id=charge_id, user_id=user_id) from exc

        logger.info("Order placed", order_id=str(order.id), user_id=user_id, total=order.total)
        return order

    def _clear_cart(self, user_id: str, order: Order) -> bool:
        cart_item_ids = [line.cart_item_id for line in self.lines]
        cart_repo = current_domain.repository_for(CartItem)

        retrying = Retrying(
            stop=stop_after_attempt(CLEANUP_ATTEMPTS),
            wait=wait_exponential(multiplier=self.cleanup_wait_seconds, max=2),
        )
        try:
            deleted = retrying(cart_repo.delete_rows, cart_item_ids)
        except RetryError as exc:
            logger.error(
                "Cart cleanup failed after checkout",
                user_id=user_id,
                order_id=str(order.id),
                cart_item_ids=cart_item_ids,
                error=str(exc.last_attempt.exception()),
            )
            return False

        logger.info("Cart cleared", user_id=user_id, order_id=str(order.id), rows=deleted)
        return True
