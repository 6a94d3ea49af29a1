"""User aggregate — account credentials, permissions and the embedded reset token.

The password field always holds a bcrypt hash; hashing happens in the session
and reset services before the aggregate sees the value. Permissions are stored as a JSON
array of ``Permission`` tag names and are never empty.
"""

from datetime import UTC, datetime, timedelta

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from sickfits.auth.credentials import generate_reset_token
from sickfits.auth.permissions import (
    DEFAULT_PERMISSIONS,
    Permission,
    dump_permissions,
    load_permissions,
    parse_permissions,
)
from sickfits.domain import sickfits
from sickfits.user.events import (
    PasswordChanged,
    PasswordResetRequested,
    PermissionsUpdated,
    UserSignedUp,
)

# How long a password reset token stays usable after issuance
RESET_TOKEN_TTL = timedelta(hours=1)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _as_utc(value: datetime) -> datetime:
    # Relational providers may hand back naive timestamps
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


@sickfits.aggregate
class User:
    """A registered shopper or staff member."""

    name = String(max_length=255)
    email = String(required=True, max_length=254, unique=True)
    password = String(required=True, max_length=255)
    permissions = Text(required=True)  # JSON array of Permission values
    reset_token = String(max_length=255)
    reset_token_expiry = DateTime()
    created_at = DateTime()

    @invariant.post
    def must_hold_at_least_one_permission(self):
        if not load_permissions(self.permissions):
            raise ValidationError({"permissions": ["A user must hold at least one permission"]})

    @invariant.post
    def email_must_be_lowercase(self):
        if self.email and self.email != self.email.lower():
            raise ValidationError({"email": ["Email must be stored in lowercase"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def sign_up(cls, email, password_hash, name=None):
        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=normalize_email(email),
            password=password_hash,
            permissions=dump_permissions(DEFAULT_PERMISSIONS),
            created_at=now,
        )
        user.raise_(
            UserSignedUp(
                user_id=user.id,
                email=user.email,
                name=name,
                signed_up_at=now,
            )
        )
        return user

    # -------------------------------------------------------------------
    # Permissions
    # -------------------------------------------------------------------
    @property
    def permission_set(self) -> frozenset[Permission]:
        return load_permissions(self.permissions)

    def replace_permissions(self, permissions, updated_by):
        """Replace the whole permission set with ``permissions``."""
        new_permissions = parse_permissions(permissions)
        if not new_permissions:
            raise ValidationError({"permissions": ["A user must hold at least one permission"]})

        previous = self.permissions
        self.permissions = dump_permissions(new_permissions)

        self.raise_(
            PermissionsUpdated(
                user_id=self.id,
                previous_permissions=previous,
                new_permissions=self.permissions,
                updated_by=updated_by,
            )
        )

    # -------------------------------------------------------------------
    # Password reset
    # -------------------------------------------------------------------
    def issue_reset_token(self, now=None) -> str:
        """Generate a reset token valid for one hour and return it."""
        now = now or datetime.now(UTC)
        token = generate_reset_token()

        self.reset_token = token
        self.reset_token_expiry = now + RESET_TOKEN_TTL

        self.raise_(
            PasswordResetRequested(
                user_id=self.id,
                expires_at=self.reset_token_expiry,
            )
        )
        return token

    def reset_token_is_valid(self, token, now=None) -> bool:
        if not token or not self.reset_token or self.reset_token_expiry is None:
            return False
        now = now or datetime.now(UTC)
        return self.reset_token == token and now < _as_utc(self.reset_token_expiry)

    def change_password(self, password_hash, now=None):
        """Store a new password hash and consume the reset token."""
        now = now or datetime.now(UTC)

        self.password = password_hash
        self.reset_token = None
        self.reset_token_expiry = None

        self.raise_(
            PasswordChanged(
                user_id=self.id,
                changed_at=now,
            )
        )
