"""Tests for the session token issuer."""

import pytest
from jose import jwt

from sickfits.auth.tokens import ALGORITHM, TokenIssuer
from sickfits.shared.errors import InvalidToken


@pytest.fixture()
def issuer():
    return TokenIssuer(secret="unit-secret")


class TestIssue:
    def test_round_trip_user_id(self, issuer):
        assert issuer.parse(issuer.issue("user-123")) == "user-123"

    def test_token_carries_only_user_id_claim(self, issuer):
        claims = jwt.decode(issuer.issue("user-123"), "unit-secret", algorithms=[ALGORITHM])
        assert claims == {"userId": "user-123"}

    def test_issue_without_secret_fails(self):
        with pytest.raises(RuntimeError):
            TokenIssuer(secret=None).issue("user-123")


class TestParse:
    def test_token_signed_with_another_secret(self, issuer):
        token = TokenIssuer(secret="other-secret").issue("user-123")
        with pytest.raises(InvalidToken):
            issuer.parse(token)

    def test_garbage_token(self, issuer):
        with pytest.raises(InvalidToken):
            issuer.parse("not.a.jwt")

    def test_empty_token(self, issuer):
        with pytest.raises(InvalidToken):
            issuer.parse("")

    def test_missing_user_id_claim(self, issuer):
        token = jwt.encode({"sub": "user-123"}, "unit-secret", algorithm=ALGORITHM)
        with pytest.raises(InvalidToken):
            issuer.parse(token)

    def test_missing_secret(self, issuer):
        token = issuer.issue("user-123")
        with pytest.raises(InvalidToken):
            TokenIssuer(secret=None).parse(token)
