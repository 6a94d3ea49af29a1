"""Item management — commands and handler.

Any signed-in user may list an item. Updating or deleting it requires owning
it or holding the matching staff permission.
"""

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from sickfits.auth.guard import require_authenticated, require_owner_or_permission
from sickfits.auth.permissions import Permission
from sickfits.catalogue.item import Item
from sickfits.domain import sickfits
from sickfits.user.user import User
from sickfits.utils.logging import get_logger

logger = get_logger(__name__)

UPDATE_PERMISSIONS = (Permission.ADMIN, Permission.ITEMUPDATE)
DELETE_PERMISSIONS = (Permission.ADMIN, Permission.ITEMDELETE)


@sickfits.command(part_of="Item")
class CreateItem:
    user_id = Identifier()  # Resolved session identity; empty when anonymous
    title = String(required=True, max_length=255)
    description = Text(required=True)
    price = Integer(required=True, min_value=0)
    image = String(max_length=1000)
    large_image = String(max_length=1000)


@sickfits.command(part_of="Item")
class UpdateItem:
    user_id = Identifier()
    item_id = Identifier(required=True)
    title = String(max_length=255)
    description = Text()
    price = Integer(min_value=0)
    image = String(max_length=1000)
    large_image = String(max_length=1000)


@sickfits.command(part_of="Item")
class DeleteItem:
    user_id = Identifier()
    item_id = Identifier(required=True)


@sickfits.command_handler(part_of=Item)
class ManageItemsHandler:
    @handle(CreateItem)
    def create_item(self, command):
        user_id = require_authenticated(command.user_id)

        item = Item.create(
            user_id=user_id,
            title=command.title,
            description=command.description,
            price=command.price,
            image=command.image,
            large_image=command.large_image,
        )
        current_domain.repository_for(Item).add(item)

        logger.info("Item created", item_id=str(item.id), user_id=user_id)
        return item

    @handle(UpdateItem)
    def update_item(self, command):
        user_id = require_authenticated(command.user_id)

        repo = current_domain.repository_for(Item)
        item = repo.get(command.item_id)
        user = current_domain.repository_for(User).get(user_id)
        require_owner_or_permission(user, item.user_id, UPDATE_PERMISSIONS)

        item.update(
            title=command.title,
            description=command.description,
            price=command.price,
            image=command.image,
            large_image=command.large_image,
        )
        repo.add(item)
        return item

    @handle(DeleteItem)
    def delete_item(self, command):
        user_id = require_authenticated(command.user_id)

        repo = current_domain.repository_for(Item)
        item = repo.get(command.item_id)
        user = current_domain.repository_for(User).get(user_id)
        require_owner_or_permission(user, item.user_id, DELETE_PERMISSIONS)

        repo._dao.delete(item)

        logger.info("Item deleted", item_id=str(item.id), user_id=user_id)
        return item
