"""Authorization guard — decides whether a mutation may proceed."""

from collections.abc import Iterable

from sickfits.auth.permissions import Permission
from sickfits.shared.errors import Forbidden, Unauthenticated


def require_authenticated(user_id: str | None) -> str:
    """Return the resolved user id, or raise ``Unauthenticated``."""
    if not user_id:
        raise Unauthenticated()
    return str(user_id)


def has_permission(user, allowed: Iterable[Permission]) -> bool:
    """True when the user holds at least one of ``allowed``."""
    return bool(user.permission_set & frozenset(allowed))


def require_permission(user, allowed: Iterable[Permission]) -> None:
    allowed = frozenset(allowed)
    if not has_permission(user, allowed):
        needed = ", ".join(sorted(p.value for p in allowed))
        held = ", ".join(sorted(p.value for p in user.permission_set))
        raise Forbidden(f"You do not have sufficient permissions: requires one of {needed}, you have {held}")


def require_owner_or_permission(user, owner_id: str | None, allowed: Iterable[Permission]) -> None:
    """Pass when ``user`` owns the resource or holds one of ``allowed``."""
    if owner_id is not None and str(owner_id) == str(user.id):
        return
    if not has_permission(user, allowed):
        raise Forbidden()
