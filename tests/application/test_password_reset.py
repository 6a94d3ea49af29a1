"""Application tests for the password reset flow."""

from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from sickfits.auth.credentials import verify_password
from sickfits.shared.errors import InvalidOrExpiredToken
from sickfits.user.password_reset import PasswordResetFlow
from sickfits.user.user import User


class _Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def _stored(user):
    return current_domain.repository_for(User).get(user.id)


class TestRequestReset:
    def test_sets_token_and_expiry(self, shopper):
        now = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
        result = PasswordResetFlow(clock=_Clock(now)).request_reset("Shopper@Example.com")

        assert result == {"message": "Thanks!"}
        user = _stored(shopper)
        assert len(user.reset_token) == 40
        assert user.reset_token_expiry.replace(tzinfo=UTC) == now + timedelta(hours=1)

    def test_mails_reset_link(self, shopper, mailbox):
        PasswordResetFlow(frontend_url="https://shop.example").request_reset(shopper.email)

        token = _stored(shopper).reset_token
        email = mailbox.last_email_to(shopper.email)
        assert email["subject"] == "Your password reset token"
        assert f"https://shop.example/reset?resetToken={token}" in email["body"]

    def test_unknown_email(self, mailbox):
        with pytest.raises(ObjectNotFoundError):
            PasswordResetFlow().request_reset("ghost@example.com")
        assert mailbox.sent_emails == []

    def test_failed_delivery_still_acknowledged(self, shopper, mailbox):
        mailbox.configure(should_succeed=False, failure_reason="Mailbox full")
        assert PasswordResetFlow().request_reset(shopper.email) == {"message": "Thanks!"}
        assert _stored(shopper).reset_token is not None

    def test_delivery_exception_absorbed(self, shopper, mailbox):
        mailbox.configure(should_raise=True)
        assert PasswordResetFlow().request_reset(shopper.email) == {"message": "Thanks!"}


class TestResetPassword:
    def _request(self, user, now):
        PasswordResetFlow(clock=_Clock(now)).request_reset(user.email)
        return _stored(user).reset_token

    def test_changes_password_and_issues_session(self, shopper, token_issuer):
        now = datetime.now(UTC)
        token = self._request(shopper, now)

        session = PasswordResetFlow(clock=_Clock(now)).reset_password(token, "new-secret", "new-secret")

        user = _stored(shopper)
        assert verify_password("new-secret", user.password)
        assert user.reset_token is None
        assert user.reset_token_expiry is None
        assert token_issuer.parse(session.token) == str(shopper.id)

    def test_token_works_exactly_once(self, shopper):
        now = datetime.now(UTC)
        token = self._request(shopper, now)
        flow = PasswordResetFlow(clock=_Clock(now))

        flow.reset_password(token, "new-secret", "new-secret")
        with pytest.raises(InvalidOrExpiredToken):
            flow.reset_password(token, "another", "another")

    def test_token_older_than_an_hour(self, shopper):
        issued = datetime.now(UTC)
        token = self._request(shopper, issued)

        later = PasswordResetFlow(clock=_Clock(issued + timedelta(hours=1, seconds=1)))
        with pytest.raises(InvalidOrExpiredToken):
            later.reset_password(token, "new-secret", "new-secret")
        assert verify_password("secret123", _stored(shopper).password)

    def test_unknown_token(self, shopper):
        with pytest.raises(InvalidOrExpiredToken):
            PasswordResetFlow().reset_password("not-a-token", "new-secret", "new-secret")

    def test_password_over_bcrypt_limit_rejected(self, shopper):
        now = datetime.now(UTC)
        token = self._request(shopper, now)

        with pytest.raises(ValidationError):
            PasswordResetFlow(clock=_Clock(now)).reset_password(token, "x" * 80, "x" * 80)
        assert _stored(shopper).reset_token == token

    def test_mismatch_checked_before_lookup(self):
        with patch("sickfits.user.password_reset.current_domain") as mock_domain:
            with pytest.raises(ValidationError):
                PasswordResetFlow().reset_password("x", "a", "b")
            mock_domain.repository_for.assert_not_called()
