"""Permission checking logic.

This module provides pure, synchronous functions for checking whether a
role holds specific permissions. Nothing here performs I/O or holds state
between calls; the matrix it reads is immutable.
"""

from collections.abc import Iterable
from functools import lru_cache

from blog_rbac.core.permissions.catalog import Permission, Role, parse_permission
from blog_rbac.core.permissions.matrix import RoleMatrix, get_role_matrix


class PermissionChecker:
    """Service for checking role permissions.

    Evaluates decisions against an injected RoleMatrix so alternate matrices
    can be substituted without patching module state.

    Args:
        matrix: The matrix to evaluate against (default: process matrix)
    """

    def __init__(self, matrix: RoleMatrix | None = None) -> None:
        self.matrix = matrix if matrix is not None else get_role_matrix()

    def has_permission(self, role: Role | str, permission: Permission | str) -> bool:
        """Check if a role has a specific permission.

        Args:
            role: The role to check
            permission: The permission to check (e.g. "article:publish")

        Returns:
            True if the permission is in the role's allow-list

        Raises:
            UnknownRoleError: If the role is not a known role
            UnknownPermissionError: If the permission is not in the catalog
        """
        return parse_permission(permission) in self.matrix.permissions_for(role)

    def has_any_permission(
        self,
        role: Role | str,
        permissions: Iterable[Permission | str],
    ) -> bool:
        """Check if a role has any of the specified permissions.

        An empty requirement list never authorizes.

        Args:
            role: The role to check
            permissions: Permissions to check

        Returns:
            True if the role has at least one permission
        """
        granted = self.matrix.permissions_for(role)
        return any(parse_permission(p) in granted for p in permissions)

    def has_all_permissions(
        self,
        role: Role | str,
        permissions: Iterable[Permission | str],
    ) -> bool:
        """Check if a role has all of the specified permissions.

        An empty requirement list is trivially satisfied.

        Args:
            role: The role to check
            permissions: Permissions to check

        Returns:
            True if the role has every permission
        """
        granted = self.matrix.permissions_for(role)
        return all(parse_permission(p) in granted for p in permissions)

    def get_user_permissions(self, role: Role | str) -> frozenset[Permission]:
        """Get all permissions for a role.

        Args:
            role: The role to look up

        Returns:
            The role's permission set
        """
        return self.matrix.permissions_for(role)


@lru_cache
def get_permission_checker() -> PermissionChecker:
    """Get the checker bound to the process matrix."""
    return PermissionChecker(get_role_matrix())


def has_permission(role: Role | str, permission: Permission | str) -> bool:
    """Convenience function to check a role's permission.

    For use in handlers when you need a simple permission check against
    the process matrix.
    """
    return get_permission_checker().has_permission(role, permission)


def has_any_permission(
    role: Role | str, permissions: Iterable[Permission | str]
) -> bool:
    return get_permission_checker().has_any_permission(role, permissions)


def has_all_permissions(
    role: Role | str, permissions: Iterable[Permission | str]
) -> bool:
    return get_permission_checker().has_all_permissions(role, permissions)


def get_user_permissions(role: Role | str) -> frozenset[Permission]:
    return get_permission_checker().get_user_permissions(role)
