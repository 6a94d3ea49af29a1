"""Password reset flow — issue a one-hour token by email, then consume it once.

Flow:
    1. request_reset(email) → token + expiry stored on the user → reset link mailed
    2. reset_password(token, password, confirm) → new hash stored, token cleared
       in the same write → fresh session token issued

Like signup and signin, this flow carries plaintext passwords and reset tokens,
so it works against the repository directly rather than through commands.
"""

from collections.abc import Callable
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from sickfits.auth import get_token_issuer
from sickfits.auth.credentials import hash_password
from sickfits.auth.tokens import TokenIssuer
from sickfits.notifications.channel import get_email_channel
from sickfits.notifications.channel.email_port import EmailPort
from sickfits.notifications.templates.password_reset import PasswordResetTemplate
from sickfits.shared.errors import InvalidOrExpiredToken
from sickfits.user.sessions import AuthenticatedSession, validate_new_password
from sickfits.user.user import User, normalize_email
from sickfits.utils.logging import get_logger
from sickfits.utils.settings import get_settings

logger = get_logger(__name__)

ACKNOWLEDGEMENT = {"message": "Thanks!"}


class PasswordResetFlow:
    def __init__(
        self,
        email_channel: EmailPort | None = None,
        token_issuer: TokenIssuer | None = None,
        frontend_url: str | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.email_channel = email_channel or get_email_channel()
        self.token_issuer = token_issuer or get_token_issuer()
        self.frontend_url = frontend_url or get_settings().frontend_url
        self.clock = clock or (lambda: datetime.now(UTC))

    def request_reset(self, email: str) -> dict:
        """Issue a reset token for the account behind ``email`` and mail the link.

        Raises:
            ObjectNotFoundError: no account uses this email. This reveals
                whether an account exists; kept deliberately, see DESIGN.md.
        """
        address = normalize_email(email or "")
        repo = current_domain.repository_for(User)

        user = repo.find_by_email(address)
        if user is None:
            raise ObjectNotFoundError(f"No such user found for email {address}")

        token = user.issue_reset_token(now=self.clock())
        repo.add(user)

        logger.info("Password reset token issued", user_id=str(user.id), expires_at=str(user.reset_token_expiry))

        self._deliver(user, token)
        return dict(ACKNOWLEDGEMENT)

    def reset_password(self, token: str, password: str, confirm_password: str) -> AuthenticatedSession:
        """Consume ``token`` and replace the account password.

        Raises:
            ValidationError: the two passwords differ (checked before any lookup).
            InvalidOrExpiredToken: no user holds a live token with this value.
        """
        if password != confirm_password:
            raise ValidationError({"confirm_password": ["Your passwords don't match!"]})
        validate_new_password(password)

        now = self.clock()
        repo = current_domain.repository_for(User)
        candidates = [u for u in repo.find_by_reset_token(token) if u.reset_token_is_valid(token, now=now)]
        if not candidates:
            raise InvalidOrExpiredToken()

        user = candidates[0]
        user.change_password(hash_password(password), now=now)
        repo.add(user)

        logger.info("Password reset completed", user_id=str(user.id))
        return AuthenticatedSession(user=user, token=self.token_issuer.issue(user.id))

    def _deliver(self, user: User, token: str) -> None:
        """Mail the reset link; delivery problems are logged, never raised."""
        content = PasswordResetTemplate.render(
            {
                "name": user.name,
                "reset_token": token,
                "frontend_url": self.frontend_url,
            }
        )
        try:
            result = self.email_channel.send(
                to=user.email,
                subject=content["subject"],
                body=content["body"],
                html_body=content["html_body"],
            )
        except Exception as exc:
            logger.error("Password reset email could not be sent", user_id=str(user.id), error=str(exc))
            return

        if result.get("status") != "sent":
            logger.error(
                "Password reset email delivery failed",
                user_id=str(user.id),
                error=result.get("error", "Unknown dispatch error"),
            )
