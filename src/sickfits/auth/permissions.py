"""Permission tags granted to users.

Tags form a closed set; anything outside it is rejected at the boundary
rather than stored as a free-form string.
"""

import json
from collections.abc import Iterable
from enum import Enum

from protean.exceptions import ValidationError


class Permission(Enum):
    ADMIN = "ADMIN"
    USER = "USER"
    ITEMCREATE = "ITEMCREATE"
    ITEMUPDATE = "ITEMUPDATE"
    ITEMDELETE = "ITEMDELETE"
    PERMISSIONUPDATE = "PERMISSIONUPDATE"


DEFAULT_PERMISSIONS = frozenset({Permission.USER})


def parse_permissions(values: Iterable[str | Permission]) -> frozenset[Permission]:
    """Convert raw tag names into a set of ``Permission`` members.

    Raises:
        ValidationError: an unknown tag was supplied.
    """
    parsed = set()
    for value in values:
        if isinstance(value, Permission):
            parsed.add(value)
            continue
        try:
            parsed.add(Permission(str(value).upper()))
        except ValueError:
            raise ValidationError({"permissions": [f"Unknown permission: {value}"]}) from None
    return frozenset(parsed)


def dump_permissions(permissions: Iterable[Permission]) -> str:
    """Serialize a permission set as a sorted JSON array of tag names."""
    return json.dumps(sorted(p.value for p in permissions))


def load_permissions(raw: str | None) -> frozenset[Permission]:
    """Deserialize a JSON array written by ``dump_permissions``."""
    if not raw:
        return frozenset()
    return parse_permissions(json.loads(raw))
