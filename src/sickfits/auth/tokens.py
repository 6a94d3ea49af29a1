"""Session token issuer.

Tokens are HS256 JWTs carrying a single ``userId`` claim. There is no expiry
claim; the session cookie that carries the token is what bounds its lifetime.
"""

from jose import JWTError, jwt

from sickfits.shared.errors import InvalidToken

ALGORITHM = "HS256"
USER_ID_CLAIM = "userId"

# Session cookie conventions shared by signup, signin and password reset
SESSION_COOKIE_NAME = "token"
SESSION_MAX_AGE_SECONDS = 60 * 60 * 24 * 365


class TokenIssuer:
    """Mints and verifies session tokens with a secret supplied at construction."""

    def __init__(self, secret: str | None) -> None:
        self._secret = secret

    def issue(self, user_id: str) -> str:
        if not self._secret:
            raise RuntimeError("Cannot issue session tokens: APP_SECRET is not configured")
        return jwt.encode({USER_ID_CLAIM: str(user_id)}, self._secret, algorithm=ALGORITHM)

    def parse(self, token: str | None) -> str:
        """Return the user id embedded in ``token``.

        Raises:
            InvalidToken: signature mismatch, malformed payload, missing
                ``userId`` claim, or no secret configured.
        """
        if not self._secret:
            raise InvalidToken("Signing secret is not configured")
        if not token:
            raise InvalidToken("No session token supplied")

        try:
            claims = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except JWTError as exc:
            raise InvalidToken(str(exc)) from exc

        user_id = claims.get(USER_ID_CLAIM) if isinstance(claims, dict) else None
        if not user_id:
            raise InvalidToken("Session token carries no user id")
        return str(user_id)
