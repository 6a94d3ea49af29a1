"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from sickfits.domain import sickfits


@sickfits.event(part_of="Order")
class OrderPlaced:
    """A paid order was recorded at checkout."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    total = Integer(required=True)
    charge = String(required=True, max_length=255)
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)
