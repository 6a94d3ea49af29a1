"""Order aggregate with OrderItem entities.

An order is written once, by checkout, and never changed afterwards. Its total
is whatever the gateway reports as charged. Each OrderItem is a copy of the
catalogue item as it looked at checkout, with its own identity.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from sickfits.domain import sickfits
from sickfits.order.events import OrderPlaced


@sickfits.entity(part_of="Order")
class OrderItem:
    title = String(required=True, max_length=255)
    description = Text()
    image = String(max_length=1000)
    large_image = String(max_length=1000)
    price = Integer(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self) -> int:
        return self.price * self.quantity


@sickfits.aggregate
class Order:
    user_id = Identifier(required=True)
    total = Integer(required=True, min_value=0)
    charge = String(required=True, max_length=255)
    items = HasMany(OrderItem)
    created_at = DateTime()

    @classmethod
    def place(cls, user_id, charge_id, total, lines):
        """Build an order from checkout lines.

        Args:
            lines: objects exposing title, description, image, large_image,
                price and quantity (the checkout snapshot).
        """
        if not lines:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            total=total,
            charge=charge_id,
            created_at=now,
            items=[
                OrderItem(
                    title=line.title,
                    description=line.description,
                    image=line.image,
                    large_image=line.large_image,
                    price=line.price,
                    quantity=line.quantity,
                )
                for line in lines
            ],
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                user_id=user_id,
                total=total,
                charge=charge_id,
                item_count=len(order.items),
                placed_at=now,
            )
        )
        return order
