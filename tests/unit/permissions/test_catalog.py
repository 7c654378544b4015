"""Unit tests for roles and the permission catalog."""

import pytest

from blog_rbac.core.errors import UnknownPermissionError, UnknownRoleError
from blog_rbac.core.permissions.catalog import (
    Permission,
    Role,
    has_role_at_least,
    is_admin,
    is_collaborator_or_above,
    is_user_or_above,
    parse_permission,
    parse_role,
)


pytestmark = pytest.mark.unit


class TestPermission:
    """Tests for the Permission enumeration."""

    def test_identifiers_are_resource_action_pairs(self):
        """Every identifier should have exactly one resource and one action."""
        for permission in Permission:
            resource, action = permission.value.split(":")
            assert permission.resource == resource
            assert permission.action == action

    def test_identifiers_are_unique(self):
        assert len(set(Permission.values())) == len(list(Permission))

    def test_resources_cover_every_domain(self):
        assert Permission.resources() == [
            "article",
            "page",
            "category",
            "tag",
            "user",
            "file",
            "friend_link",
            "comment",
            "settings",
            "analytics",
            "system",
        ]

    def test_for_resource(self):
        assert Permission.for_resource("system") == [
            Permission.SYSTEM_BACKUP,
            Permission.SYSTEM_RESTORE,
            Permission.SYSTEM_HEALTH,
            Permission.SYSTEM_LOGS,
            Permission.SYSTEM_ADMIN,
        ]
        assert Permission.for_resource("unknown") == []

    def test_str_is_identifier(self):
        assert str(Permission.USER_MANAGE_ROLES) == "user:manage_roles"
        assert Permission.ARTICLE_PUBLISH == "article:publish"


class TestParsing:
    """Tests for parse_role and parse_permission."""

    def test_parse_role_accepts_enum_and_string(self):
        assert parse_role(Role.GUEST) is Role.GUEST
        assert parse_role("collaborator") is Role.COLLABORATOR

    @pytest.mark.parametrize("value", ["superuser", "ADMIN", "", None, 3])
    def test_parse_role_rejects_unknown(self, value):
        with pytest.raises(UnknownRoleError) as exc_info:
            parse_role(value)

        assert exc_info.value.error_code == "unknown_role"
        assert exc_info.value.role == value

    def test_parse_permission_accepts_enum_and_string(self):
        assert parse_permission(Permission.FILE_READ) is Permission.FILE_READ
        assert parse_permission("system:backup") is Permission.SYSTEM_BACKUP

    @pytest.mark.parametrize("value", ["article:archive", "article", "", None])
    def test_parse_permission_rejects_unknown(self, value):
        with pytest.raises(UnknownPermissionError):
            parse_permission(value)


class TestRoleLevels:
    """Tests for the privilege ranking helpers."""

    def test_is_admin(self):
        assert is_admin(Role.ADMIN)
        assert not is_admin("collaborator")

    @pytest.mark.parametrize(
        ("role", "expected"),
        [
            (Role.ADMIN, True),
            (Role.COLLABORATOR, True),
            (Role.USER, False),
            (Role.GUEST, False),
        ],
    )
    def test_is_collaborator_or_above(self, role, expected):
        assert is_collaborator_or_above(role) is expected

    def test_is_user_or_above(self):
        assert is_user_or_above("user")
        assert is_user_or_above(Role.ADMIN)
        assert not is_user_or_above(Role.GUEST)

    def test_has_role_at_least(self):
        assert has_role_at_least(Role.ADMIN, Role.COLLABORATOR)
        assert has_role_at_least(Role.USER, Role.USER)
        assert not has_role_at_least(Role.GUEST, Role.USER)

    def test_helpers_fail_fast_on_unknown_role(self):
        with pytest.raises(UnknownRoleError):
            is_collaborator_or_above("editor")
