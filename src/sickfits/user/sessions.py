"""Signup and signin.

These flows handle plaintext passwords, so they talk to the repository
directly instead of going through commands: processed commands are recorded
in the event store, and a password must never be written there.
"""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from sickfits.auth import get_token_issuer
from sickfits.auth.credentials import MAX_PASSWORD_BYTES, hash_password, verify_password
from sickfits.auth.tokens import TokenIssuer
from sickfits.shared.errors import InvalidCredentials, InvalidToken
from sickfits.user.user import User, normalize_email
from sickfits.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AuthenticatedSession:
    """A user together with the session token just issued for them."""

    user: User
    token: str


def validate_new_password(password: str | None) -> None:
    if not password:
        raise ValidationError({"password": ["Password is required"]})
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError({"password": [f"Password must be at most {MAX_PASSWORD_BYTES} bytes"]})


class SessionService:
    def __init__(self, token_issuer: TokenIssuer | None = None) -> None:
        self.token_issuer = token_issuer or get_token_issuer()

    def sign_up(self, email: str, password: str, name: str | None = None) -> AuthenticatedSession:
        if not email:
            raise ValidationError({"email": ["Email is required"]})
        validate_new_password(password)

        repo = current_domain.repository_for(User)
        if repo.find_by_email(email) is not None:
            raise ValidationError({"email": ["An account with this email already exists"]})

        user = User.sign_up(email=email, password_hash=hash_password(password), name=name)
        repo.add(user)

        logger.info("User signed up", user_id=str(user.id))
        return AuthenticatedSession(user=user, token=self.token_issuer.issue(user.id))

    def sign_in(self, email: str, password: str) -> AuthenticatedSession:
        user = current_domain.repository_for(User).find_by_email(email or "")

        # The two failures are distinguishable by message, matching the
        # behavior shoppers already see.
        if user is None:
            raise InvalidCredentials(f"No such user found for email {normalize_email(email or '')}")
        if not verify_password(password or "", user.password):
            raise InvalidCredentials("Invalid Password!")

        logger.info("User signed in", user_id=str(user.id))
        return AuthenticatedSession(user=user, token=self.token_issuer.issue(user.id))

    def resolve(self, token: str | None) -> User | None:
        """Return the user a session token belongs to, or None when anonymous."""
        if not token:
            return None
        try:
            user_id = self.token_issuer.parse(token)
            return current_domain.repository_for(User).get(user_id)
        except (InvalidToken, ObjectNotFoundError):
            return None
