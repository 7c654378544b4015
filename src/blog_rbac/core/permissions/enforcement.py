"""Assertion wrappers around the permission checker.

The ``require_*`` functions turn a decision into either a normal return or a
``PermissionDeniedError``. ``check_permission`` is the non-throwing variant
and fails closed: any error during evaluation yields ``False``.
"""

from collections.abc import Sequence
from functools import lru_cache

from blog_rbac.core.errors import PermissionDeniedError
from blog_rbac.core.permissions.catalog import Permission, Role
from blog_rbac.core.permissions.checker import (
    PermissionChecker,
    get_permission_checker,
)


class PermissionEnforcer:
    """Turns checker decisions into enforceable contracts.

    Args:
        checker: The checker to evaluate with (default: process checker)
    """

    def __init__(self, checker: PermissionChecker | None = None) -> None:
        self.checker = checker if checker is not None else get_permission_checker()

    def require_permission(self, role: Role | str, permission: Permission | str) -> None:
        """Verify a permission and raise if it is missing.

        Raises:
            PermissionDeniedError: If the role lacks the permission
        """
        if not self.checker.has_permission(role, permission):
            raise PermissionDeniedError(permission, role)

    def require_any_permission(
        self,
        role: Role | str,
        permissions: Sequence[Permission | str],
    ) -> None:
        """Verify that at least one of the permissions is held.

        Raises:
            PermissionDeniedError: Referencing the first listed permission
        """
        if not self.checker.has_any_permission(role, permissions):
            raise PermissionDeniedError(
                permissions[0] if permissions else None,
                role,
                message=(
                    "Permission denied: requires one of "
                    f"[{', '.join(str(p) for p in permissions)}]"
                ),
            )

    def require_all_permissions(
        self,
        role: Role | str,
        permissions: Sequence[Permission | str],
    ) -> None:
        """Verify that every permission is held.

        Raises:
            PermissionDeniedError: Referencing the first listed permission
        """
        if not self.checker.has_all_permissions(role, permissions):
            raise PermissionDeniedError(
                permissions[0] if permissions else None,
                role,
                message=(
                    "Permission denied: requires all of "
                    f"[{', '.join(str(p) for p in permissions)}]"
                ),
            )

    def check_permission(self, role: object, permission: object) -> bool:
        """Check a permission without raising.

        Returns:
            The decision, or False if evaluation failed for any reason
        """
        try:
            return self.checker.has_permission(role, permission)  # type: ignore[arg-type]
        except Exception:
            return False


@lru_cache
def get_permission_enforcer() -> PermissionEnforcer:
    """Get the enforcer bound to the process checker."""
    return PermissionEnforcer(get_permission_checker())


def require_permission(role: Role | str, permission: Permission | str) -> None:
    get_permission_enforcer().require_permission(role, permission)


def require_any_permission(
    role: Role | str, permissions: Sequence[Permission | str]
) -> None:
    get_permission_enforcer().require_any_permission(role, permissions)


def require_all_permissions(
    role: Role | str, permissions: Sequence[Permission | str]
) -> None:
    get_permission_enforcer().require_all_permissions(role, permissions)


def check_permission(role: object, permission: object) -> bool:
    return get_permission_enforcer().check_permission(role, permission)
