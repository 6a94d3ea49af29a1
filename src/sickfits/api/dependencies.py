"""Session resolution for API routes.

The session token travels in an HTTP-only cookie. A missing, tampered or
stale token resolves to an anonymous caller rather than an error; operations
that need an identity raise Unauthenticated themselves.
"""

from fastapi import Cookie, Response

from sickfits.auth.tokens import SESSION_COOKIE_NAME, SESSION_MAX_AGE_SECONDS
from sickfits.user.sessions import SessionService


async def current_user(token: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME)):
    """The signed-in User, or None."""
    return SessionService().resolve(token)


async def current_user_id(token: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME)) -> str | None:
    user = SessionService().resolve(token)
    return str(user.id) if user is not None else None


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        max_age=SESSION_MAX_AGE_SECONDS,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=SESSION_COOKIE_NAME, httponly=True, samesite="lax")
