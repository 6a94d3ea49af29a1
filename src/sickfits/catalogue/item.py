"""Item aggregate — a product listed in the shop.

Prices are integer minor currency units (pence). Carts and orders reference
items; orders copy the fields they need at checkout so later edits never
rewrite history.
"""

import json

from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text

from sickfits.catalogue.events import ItemCreated, ItemUpdated
from sickfits.domain import sickfits

# Fields an update may touch
EDITABLE_FIELDS = ("title", "description", "price", "image", "large_image")


@sickfits.aggregate
class Item:
    title = String(required=True, max_length=255)
    description = Text(required=True)
    image = String(max_length=1000)
    large_image = String(max_length=1000)
    price = Integer(required=True, min_value=0)
    user_id = Identifier(required=True)

    @classmethod
    def create(cls, user_id, title, description, price, image=None, large_image=None):
        item = cls(
            user_id=user_id,
            title=title,
            description=description,
            price=price,
            image=image,
            large_image=large_image,
        )
        item.raise_(
            ItemCreated(
                item_id=item.id,
                user_id=user_id,
                title=title,
                price=price,
            )
        )
        return item

    def update(self, **changes):
        """Apply the provided field changes; unknown fields are rejected."""
        unknown = sorted(set(changes) - set(EDITABLE_FIELDS))
        if unknown:
            raise ValidationError({"item": [f"Cannot update field(s): {', '.join(unknown)}"]})

        applied = {k: v for k, v in changes.items() if v is not None}
        if not applied:
            return

        for field_name, value in applied.items():
            setattr(self, field_name, value)

        self.raise_(
            ItemUpdated(
                item_id=self.id,
                changes=json.dumps(applied),
            )
        )

    def snapshot(self) -> dict:
        """The fields an order line copies at checkout."""
        return {
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "large_image": self.large_image,
            "price": self.price,
        }
