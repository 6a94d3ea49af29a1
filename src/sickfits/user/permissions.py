"""Permission management — staff replace another user's permission set."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from sickfits.auth.guard import require_authenticated, require_permission
from sickfits.auth.permissions import Permission
from sickfits.domain import sickfits
from sickfits.user.user import User
from sickfits.utils.logging import get_logger

logger = get_logger(__name__)

MANAGE_PERMISSIONS = (Permission.ADMIN, Permission.PERMISSIONUPDATE)


@sickfits.command(part_of="User")
class UpdatePermissions:
    user_id = Identifier()  # Resolved session identity; empty when anonymous
    target_user_id = Identifier(required=True)
    permissions = Text(required=True)  # JSON array of tag names


@sickfits.command_handler(part_of=User)
class ManagePermissionsHandler:
    @handle(UpdatePermissions)
    def update_permissions(self, command):
        user_id = require_authenticated(command.user_id)

        repo = current_domain.repository_for(User)
        actor = repo.get(user_id)
        require_permission(actor, MANAGE_PERMISSIONS)

        try:
            requested = json.loads(command.permissions)
        except ValueError:
            raise ValidationError({"permissions": ["Permissions must be a JSON array"]}) from None
        if not isinstance(requested, list):
            raise ValidationError({"permissions": ["Permissions must be a JSON array"]})

        target = actor if str(command.target_user_id) == user_id else repo.get(command.target_user_id)
        target.replace_permissions(requested, updated_by=user_id)
        repo.add(target)

        logger.info(
            "Permissions updated",
            user_id=str(target.id),
            permissions=target.permissions,
            updated_by=user_id,
        )
        return target
