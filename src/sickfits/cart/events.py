"""Domain events for the CartItem aggregate."""

from protean.fields import Identifier, Integer

from sickfits.domain import sickfits


@sickfits.event(part_of="CartItem")
class CartItemAdded:
    """An item was put in a cart for the first time."""

    __version__ = 1

    cart_item_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@sickfits.event(part_of="CartItem")
class CartQuantityIncreased:
    """An item already in the cart was added again."""

    __version__ = 1

    cart_item_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
