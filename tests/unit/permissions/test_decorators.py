"""Unit tests for permission guards and handler decorators."""

import pytest

from blog_rbac.core.errors import PermissionDeniedError, UnauthorizedError
from blog_rbac.core.permissions.catalog import Permission, Role
from blog_rbac.core.permissions.checker import PermissionChecker
from blog_rbac.core.permissions.decorators import (
    all_permissions_required,
    any_permission_required,
    permission_guard,
    permission_required,
)
from blog_rbac.core.permissions.enforcement import PermissionEnforcer
from blog_rbac.core.permissions.matrix import RoleMatrix


pytestmark = pytest.mark.unit


@permission_required(Permission.ARTICLE_PUBLISH)
def publish_article(slug: str, *, role: Role) -> str:
    return f"published {slug}"


@any_permission_required([Permission.COMMENT_MODERATE, Permission.SYSTEM_ADMIN])
async def hide_comment(comment_id: int, *, role: Role) -> int:
    return comment_id


@all_permissions_required([Permission.SYSTEM_BACKUP, Permission.SYSTEM_RESTORE])
def rotate_backups(*, role: Role) -> bool:
    return True


class TestPermissionGuard:
    """Tests for permission_guard."""

    def test_guard_passes(self):
        guard = permission_guard(Permission.SYSTEM_HEALTH)

        assert guard(Role.ADMIN) is None

    def test_guard_raises(self):
        guard = permission_guard(Permission.SYSTEM_HEALTH)

        with pytest.raises(PermissionDeniedError) as exc_info:
            guard(Role.COLLABORATOR)

        assert exc_info.value.permission == Permission.SYSTEM_HEALTH
        assert exc_info.value.role == Role.COLLABORATOR

    def test_guard_uses_injected_enforcer(self):
        matrix = RoleMatrix(
            {Role.COLLABORATOR: [], Role.USER: [], Role.GUEST: [Permission.SYSTEM_HEALTH]}
        )
        guard = permission_guard(
            Permission.SYSTEM_HEALTH, PermissionEnforcer(PermissionChecker(matrix))
        )

        guard(Role.GUEST)


class TestPermissionRequired:
    """Tests for the handler decorators."""

    def test_sync_handler_runs_when_granted(self):
        assert publish_article("hello", role=Role.COLLABORATOR) == "published hello"

    def test_sync_handler_blocked_when_denied(self):
        with pytest.raises(PermissionDeniedError):
            publish_article("hello", role=Role.USER)

    def test_missing_role(self):
        with pytest.raises(UnauthorizedError) as exc_info:
            publish_article("hello")  # type: ignore[call-arg]

        assert exc_info.value.error_code == "role_required"

    def test_preserves_metadata(self):
        assert publish_article.__name__ == "publish_article"
        assert hide_comment.__name__ == "hide_comment"

    async def test_async_handler_runs_when_any_granted(self):
        assert await hide_comment(7, role=Role.COLLABORATOR) == 7

    async def test_async_handler_blocked(self):
        with pytest.raises(PermissionDeniedError) as exc_info:
            await hide_comment(7, role=Role.USER)

        assert exc_info.value.permission == Permission.COMMENT_MODERATE

    def test_all_permissions_required(self):
        assert rotate_backups(role=Role.ADMIN) is True

        with pytest.raises(PermissionDeniedError) as exc_info:
            rotate_backups(role=Role.COLLABORATOR)

        assert exc_info.value.permission == Permission.SYSTEM_BACKUP

    def test_custom_role_kwarg(self):
        @permission_required(Permission.USER_DELETE, role_kwarg="actor_role")
        def delete_user(user_id: int, *, actor_role: str) -> int:
            return user_id

        assert delete_user(3, actor_role="admin") == 3
        with pytest.raises(PermissionDeniedError):
            delete_user(3, actor_role="collaborator")


class TestRoleBinding:
    """The role is found however the caller passes it."""

    def test_positional_role_granted(self):
        @permission_required(Permission.ARTICLE_PUBLISH)
        def publish(slug: str, role: Role) -> str:
            return slug

        assert publish("hello", Role.ADMIN) == "hello"

    def test_positional_role_denied(self):
        @permission_required(Permission.ARTICLE_PUBLISH)
        def publish(slug: str, role: Role) -> str:
            return slug

        with pytest.raises(PermissionDeniedError) as exc_info:
            publish("hello", Role.GUEST)

        assert exc_info.value.role == Role.GUEST

    async def test_positional_role_on_async_handler(self):
        @any_permission_required([Permission.COMMENT_MODERATE])
        async def hide(role: str, comment_id: int) -> int:
            return comment_id

        assert await hide("collaborator", 4) == 4
        with pytest.raises(PermissionDeniedError):
            await hide("user", 4)

    def test_handler_without_role_parameter_rejected(self):
        with pytest.raises(TypeError, match="role"):

            @permission_required(Permission.ARTICLE_PUBLISH)
            def publish(slug: str) -> str:
                return slug
