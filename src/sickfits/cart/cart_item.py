"""CartItem aggregate — one row per (user, item) with an accumulated quantity.

Each row is its own aggregate so checkout can snapshot, charge and then delete
exactly the rows it saw, leaving anything added in the meantime untouched.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer

from sickfits.cart.events import CartItemAdded, CartQuantityIncreased
from sickfits.domain import sickfits


@sickfits.aggregate
class CartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(min_value=1, default=1)
    added_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def start(cls, user_id, item_id):
        now = datetime.now(UTC)
        cart_item = cls(
            user_id=user_id,
            item_id=item_id,
            quantity=1,
            added_at=now,
            updated_at=now,
        )
        cart_item.raise_(
            CartItemAdded(
                cart_item_id=cart_item.id,
                user_id=user_id,
                item_id=item_id,
            )
        )
        return cart_item

    def increment(self):
        """Add one more of the same item."""
        previous_quantity = self.quantity
        self.quantity = previous_quantity + 1
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityIncreased(
                cart_item_id=self.id,
                user_id=self.user_id,
                item_id=self.item_id,
                previous_quantity=previous_quantity,
                new_quantity=self.quantity,
            )
        )

    def is_owned_by(self, user_id) -> bool:
        return user_id is not None and str(self.user_id) == str(user_id)
