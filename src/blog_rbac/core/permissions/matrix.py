"""Role to permission matrix.

The matrix maps every role to its allowed permission set. The admin set is
never hand-enumerated: it is derived from the whole catalog at construction,
so a permission added to the catalog is granted to admin without another edit.

A matrix is built once (``get_role_matrix``) and is read-only afterwards,
which makes it safe to share across threads and tasks without locks.
Alternate matrices can be constructed directly and injected into a
``PermissionChecker`` in tests.
"""

from collections.abc import Iterable, Mapping
from functools import lru_cache
from types import MappingProxyType

from blog_rbac.core.errors import UnknownRoleError
from blog_rbac.core.permissions.catalog import (
    Permission,
    Role,
    parse_permission,
    parse_role,
)


class RoleMatrix:
    """Immutable mapping from each role to its allowed permissions.

    Args:
        grants: Explicit allow-lists for every non-admin role. Duplicates are
            collapsed (set semantics).
        catalog: The full permission catalog; admin receives all of it.

    Raises:
        ValueError: If grants name the admin role or omit a non-admin role
        UnknownRoleError: If a grants key is not a role
        UnknownPermissionError: If a grant references a permission that is
            not in the catalog
    """

    def __init__(
        self,
        grants: Mapping[Role, Iterable[Permission | str]],
        catalog: Iterable[Permission] = Permission,
    ) -> None:
        all_permissions = frozenset(catalog)

        if Role.ADMIN in grants:
            raise ValueError("admin permissions are derived from the catalog")

        missing = [role for role in Role if role is not Role.ADMIN and role not in grants]
        if missing:
            raise ValueError(
                f"Missing grants for role(s): {', '.join(str(r) for r in missing)}"
            )

        matrix: dict[Role, frozenset[Permission]] = {Role.ADMIN: all_permissions}
        for key, permissions in grants.items():
            role = parse_role(key)
            resolved = frozenset(parse_permission(p) for p in permissions)
            dangling = resolved - all_permissions
            if dangling:
                # Parsed fine but excluded from a narrowed catalog
                raise ValueError(
                    f"Role {role} references permissions outside the catalog: "
                    f"{sorted(str(p) for p in dangling)}"
                )
            matrix[role] = resolved

        self._catalog = all_permissions
        self._matrix = MappingProxyType(matrix)

    @property
    def catalog(self) -> frozenset[Permission]:
        return self._catalog

    @property
    def roles(self) -> list[Role]:
        return list(self._matrix)

    def permissions_for(self, role: Role | str) -> frozenset[Permission]:
        """Get the allowed permission set for a role.

        Args:
            role: The role to look up

        Returns:
            The role's permissions; never None for a valid role

        Raises:
            UnknownRoleError: If the role is not part of the matrix
        """
        try:
            return self._matrix[Role(role)]
        except (KeyError, ValueError) as e:
            raise UnknownRoleError(role) from e

    def as_dict(self) -> dict[str, list[str]]:
        """Serializable view: role value to sorted permission identifiers."""
        return {
            str(role): sorted(str(p) for p in permissions)
            for role, permissions in self._matrix.items()
        }

    def __repr__(self) -> str:
        sizes = ", ".join(f"{role}={len(perms)}" for role, perms in self._matrix.items())
        return f"<RoleMatrix({sizes})>"


DEFAULT_GRANTS: Mapping[Role, tuple[Permission, ...]] = MappingProxyType(
    {
        Role.COLLABORATOR: (
            Permission.ARTICLE_CREATE,
            Permission.ARTICLE_READ,
            Permission.ARTICLE_UPDATE,
            Permission.ARTICLE_DELETE,
            Permission.ARTICLE_PUBLISH,
            Permission.PAGE_CREATE,
            Permission.PAGE_READ,
            Permission.PAGE_UPDATE,
            Permission.PAGE_DELETE,
            Permission.PAGE_PUBLISH,
            Permission.CATEGORY_CREATE,
            Permission.CATEGORY_READ,
            Permission.CATEGORY_UPDATE,
            Permission.CATEGORY_DELETE,
            Permission.TAG_CREATE,
            Permission.TAG_READ,
            Permission.TAG_UPDATE,
            Permission.TAG_DELETE,
            Permission.FILE_UPLOAD,
            Permission.FILE_READ,
            Permission.FILE_UPDATE,
            Permission.FILE_DELETE,
            Permission.FRIEND_LINK_CREATE,
            Permission.FRIEND_LINK_READ,
            Permission.FRIEND_LINK_UPDATE,
            Permission.FRIEND_LINK_DELETE,
            Permission.COMMENT_READ,
            Permission.COMMENT_MODERATE,
            Permission.ANALYTICS_READ,
            Permission.SETTINGS_READ,
        ),
        Role.USER: (
            Permission.ARTICLE_READ,
            Permission.PAGE_READ,
            Permission.CATEGORY_READ,
            Permission.TAG_READ,
            Permission.FILE_READ,
            Permission.FRIEND_LINK_READ,
            Permission.COMMENT_CREATE,
            Permission.COMMENT_READ,
        ),
        Role.GUEST: (
            Permission.ARTICLE_READ,
            Permission.PAGE_READ,
            Permission.CATEGORY_READ,
            Permission.TAG_READ,
            Permission.FRIEND_LINK_READ,
            Permission.COMMENT_READ,
        ),
    }
)


@lru_cache
def get_role_matrix() -> RoleMatrix:
    """Get the process-wide matrix, built on first use."""
    return RoleMatrix(DEFAULT_GRANTS)
