"""Domain events for the Item aggregate."""

from protean.fields import Identifier, Integer, String, Text

from sickfits.domain import sickfits


@sickfits.event(part_of="Item")
class ItemCreated:
    __version__ = 1

    item_id = Identifier(required=True)
    user_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    price = Integer(required=True)


@sickfits.event(part_of="Item")
class ItemUpdated:
    __version__ = 1

    item_id = Identifier(required=True)
    changes = Text(required=True)  # JSON object of changed fields

