"""Cart item management — commands and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from sickfits.auth.guard import require_authenticated
from sickfits.cart.cart_item import CartItem
from sickfits.catalogue.item import Item
from sickfits.domain import sickfits
from sickfits.shared.errors import Forbidden
from sickfits.utils.logging import get_logger

logger = get_logger(__name__)


@sickfits.command(part_of="CartItem")
class AddToCart:
    user_id = Identifier()  # Resolved session identity; empty when anonymous
    item_id = Identifier(required=True)


@sickfits.command(part_of="CartItem")
class RemoveFromCart:
    user_id = Identifier()
    cart_item_id = Identifier(required=True)


@sickfits.command_handler(part_of=CartItem)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        user_id = require_authenticated(command.user_id)

        # Raises ObjectNotFoundError for unknown items
        current_domain.repository_for(Item).get(command.item_id)

        repo = current_domain.repository_for(CartItem)
        cart_item = repo.find_line(user_id, command.item_id)
        if cart_item is not None:
            cart_item.increment()
            logger.info(
                "Item already in cart, quantity increased",
                cart_item_id=str(cart_item.id),
                quantity=cart_item.quantity,
            )
        else:
            cart_item = CartItem.start(user_id=user_id, item_id=command.item_id)
            logger.info("Item added to cart", cart_item_id=str(cart_item.id), item_id=str(command.item_id))

        repo.add(cart_item)
        return cart_item

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        user_id = require_authenticated(command.user_id)

        repo = current_domain.repository_for(CartItem)
        cart_item = repo.get(command.cart_item_id)
        if not cart_item.is_owned_by(user_id):
            raise Forbidden("You can only remove items from your own cart")

        repo._dao.delete(cart_item)

        logger.info("Item removed from cart", cart_item_id=str(cart_item.id), user_id=user_id)
        return cart_item
