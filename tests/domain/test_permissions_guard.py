"""Tests for permission tags and the authorization guard."""

import json

import pytest
from protean.exceptions import ValidationError

from sickfits.auth.guard import (
    has_permission,
    require_authenticated,
    require_owner_or_permission,
    require_permission,
)
from sickfits.auth.permissions import (
    DEFAULT_PERMISSIONS,
    Permission,
    dump_permissions,
    load_permissions,
    parse_permissions,
)
from sickfits.shared.errors import Forbidden, Unauthenticated
from sickfits.user.user import User


def _user(*permissions):
    user = User.sign_up(email="staff@example.com", password_hash="$2b$10$hash", name="Staff")
    user.permissions = dump_permissions(parse_permissions(permissions))
    return user


class TestPermissionTags:
    def test_parse_known_tags(self):
        assert parse_permissions(["ADMIN", "itemcreate"]) == {Permission.ADMIN, Permission.ITEMCREATE}

    def test_parse_unknown_tag(self):
        with pytest.raises(ValidationError) as exc:
            parse_permissions(["SUPERUSER"])
        assert "Unknown permission: SUPERUSER" in exc.value.messages["permissions"]

    def test_dump_is_sorted_json(self):
        dumped = dump_permissions({Permission.USER, Permission.ADMIN})
        assert json.loads(dumped) == ["ADMIN", "USER"]

    def test_load_empty(self):
        assert load_permissions(None) == frozenset()

    def test_default_is_user(self):
        assert DEFAULT_PERMISSIONS == {Permission.USER}


class TestRequireAuthenticated:
    def test_returns_user_id(self):
        assert require_authenticated("user-1") == "user-1"

    @pytest.mark.parametrize("user_id", [None, ""])
    def test_missing_identity(self, user_id):
        with pytest.raises(Unauthenticated):
            require_authenticated(user_id)


class TestRequirePermission:
    def test_intersection_passes(self):
        user = _user("USER", "ITEMUPDATE")
        assert has_permission(user, [Permission.ADMIN, Permission.ITEMUPDATE]) is True
        require_permission(user, [Permission.ADMIN, Permission.ITEMUPDATE])

    def test_no_intersection_is_forbidden(self):
        user = _user("USER")
        with pytest.raises(Forbidden) as exc:
            require_permission(user, [Permission.ADMIN, Permission.PERMISSIONUPDATE])
        assert "ADMIN, PERMISSIONUPDATE" in exc.value.message


class TestRequireOwnerOrPermission:
    def test_owner_passes_without_permission(self):
        user = _user("USER")
        require_owner_or_permission(user, user.id, [Permission.ADMIN])

    def test_staff_passes_for_other_owner(self):
        user = _user("USER", "ADMIN")
        require_owner_or_permission(user, "someone-else", [Permission.ADMIN])

    def test_stranger_is_forbidden(self):
        user = _user("USER")
        with pytest.raises(Forbidden):
            require_owner_or_permission(user, "someone-else", [Permission.ITEMDELETE])
