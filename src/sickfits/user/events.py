"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String, Text

from sickfits.domain import sickfits


@sickfits.event(part_of="User")
class UserSignedUp:
    """A new account was created."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    name = String(max_length=255)
    signed_up_at = DateTime(required=True)


@sickfits.event(part_of="User")
class PasswordResetRequested:
    """A reset token was issued. The token value itself is never part of the event."""

    __version__ = 1

    user_id = Identifier(required=True)
    expires_at = DateTime(required=True)


@sickfits.event(part_of="User")
class PasswordChanged:
    """The password was replaced through a reset token."""

    __version__ = 1

    user_id = Identifier(required=True)
    changed_at = DateTime(required=True)


@sickfits.event(part_of="User")
class PermissionsUpdated:
    __version__ = 1

    user_id = Identifier(required=True)
    previous_permissions = Text(required=True)  # JSON array of tag names
    new_permissions = Text(required=True)  # JSON array of tag names
    updated_by = Identifier(required=True)
