"""Repository for the CartItem aggregate."""

from datetime import UTC, datetime

from sickfits.cart.cart_item import CartItem
from sickfits.domain import sickfits

_EPOCH = datetime.fromtimestamp(0, UTC)


def _added_order(cart_item: CartItem) -> datetime:
    added_at = cart_item.added_at or _EPOCH
    return added_at if added_at.tzinfo else added_at.replace(tzinfo=UTC)


@sickfits.repository(part_of=CartItem)
class CartItemRepository:
    def find_for_user(self, user_id) -> list[CartItem]:
        """All rows in a user's cart, oldest first."""
        items = self._dao.query.filter(user_id=str(user_id)).all().items
        return sorted(items, key=_added_order)

    def find_line(self, user_id, item_id) -> CartItem | None:
        """The row for (user, item), if the item is already in the cart."""
        rows = self._dao.query.filter(user_id=str(user_id), item_id=str(item_id)).all().items
        if not rows:
            return None
        # Concurrent first-adds can leave duplicates; keep accumulating on the oldest
        return min(rows, key=_added_order)

    def delete_rows(self, cart_item_ids) -> int:
        """Delete the given rows one by one and return how many existed."""
        deleted = 0
        for cart_item_id in cart_item_ids:
            rows = self._dao.query.filter(id=str(cart_item_id)).all().items
            for row in rows:
                self._dao.delete(row)
                deleted += 1
        return deleted
