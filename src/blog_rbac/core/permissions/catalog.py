"""Roles and the permission catalog.

Permissions are expressed as ``resource:action`` identifiers
(e.g. ``article:publish``). Both enumerations are closed: a value outside
them is a programmer error and is rejected by ``parse_role`` /
``parse_permission`` instead of resolving to "no permissions".

Usage:
    from blog_rbac.core.permissions import Permission, Role

    Permission.ARTICLE_PUBLISH.resource  # "article"
    Permission.for_resource("system")    # [SYSTEM_BACKUP, ...]
"""

from enum import Enum

from blog_rbac.core.errors import UnknownPermissionError, UnknownRoleError


class Role(str, Enum):
    """Coarse-grained actor classification.

    Ordered informally by privilege. Only ``ADMIN`` is guaranteed to be a
    superset of every other role (its grants are derived from the catalog).
    """

    ADMIN = "admin"
    COLLABORATOR = "collaborator"
    USER = "user"
    GUEST = "guest"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def values(cls) -> list[str]:
        """Get all role values as strings."""
        return [role.value for role in cls]


class Permission(str, Enum):
    """The closed set of permission identifiers, grouped by resource domain."""

    # Articles
    ARTICLE_CREATE = "article:create"
    ARTICLE_READ = "article:read"
    ARTICLE_UPDATE = "article:update"
    ARTICLE_DELETE = "article:delete"
    ARTICLE_PUBLISH = "article:publish"
    ARTICLE_MODERATE = "article:moderate"

    # Pages
    PAGE_CREATE = "page:create"
    PAGE_READ = "page:read"
    PAGE_UPDATE = "page:update"
    PAGE_DELETE = "page:delete"
    PAGE_PUBLISH = "page:publish"

    # Categories and tags
    CATEGORY_CREATE = "category:create"
    CATEGORY_READ = "category:read"
    CATEGORY_UPDATE = "category:update"
    CATEGORY_DELETE = "category:delete"

    TAG_CREATE = "tag:create"
    TAG_READ = "tag:read"
    TAG_UPDATE = "tag:update"
    TAG_DELETE = "tag:delete"

    # User management
    USER_CREATE = "user:create"
    USER_READ = "user:read"
    USER_UPDATE = "user:update"
    USER_DELETE = "user:delete"
    USER_MANAGE_ROLES = "user:manage_roles"

    # Files
    FILE_UPLOAD = "file:upload"
    FILE_READ = "file:read"
    FILE_UPDATE = "file:update"
    FILE_DELETE = "file:delete"
    FILE_MANAGE = "file:manage"

    # Friend links
    FRIEND_LINK_CREATE = "friend_link:create"
    FRIEND_LINK_READ = "friend_link:read"
    FRIEND_LINK_UPDATE = "friend_link:update"
    FRIEND_LINK_DELETE = "friend_link:delete"

    # Comments
    COMMENT_CREATE = "comment:create"
    COMMENT_READ = "comment:read"
    COMMENT_UPDATE = "comment:update"
    COMMENT_DELETE = "comment:delete"
    COMMENT_MODERATE = "comment:moderate"

    # Settings
    SETTINGS_READ = "settings:read"
    SETTINGS_UPDATE = "settings:update"
    SETTINGS_MANAGE = "settings:manage"

    # Analytics
    ANALYTICS_READ = "analytics:read"
    ANALYTICS_MANAGE = "analytics:manage"

    # System administration
    SYSTEM_BACKUP = "system:backup"
    SYSTEM_RESTORE = "system:restore"
    SYSTEM_HEALTH = "system:health"
    SYSTEM_LOGS = "system:logs"
    SYSTEM_ADMIN = "system:admin"

    def __str__(self) -> str:
        return self.value

    @property
    def resource(self) -> str:
        """The resource domain, e.g. ``article`` for ``article:create``."""
        return self.value.split(":", 1)[0]

    @property
    def action(self) -> str:
        """The action, e.g. ``create`` for ``article:create``."""
        return self.value.split(":", 1)[1]

    @classmethod
    def values(cls) -> list[str]:
        """Get all permission identifiers as strings."""
        return [permission.value for permission in cls]

    @classmethod
    def resources(cls) -> list[str]:
        """Get the resource domains in catalog order, without duplicates."""
        return list(dict.fromkeys(permission.resource for permission in cls))

    @classmethod
    def for_resource(cls, resource: str) -> list["Permission"]:
        """Get every permission belonging to one resource domain."""
        return [permission for permission in cls if permission.resource == resource]


# Privilege ranking used by the role-level helpers below. It does not imply
# that the matrix is cumulative.
ROLE_LEVELS: dict[Role, int] = {
    Role.ADMIN: 3,
    Role.COLLABORATOR: 2,
    Role.USER: 1,
    Role.GUEST: 0,
}


def parse_role(value: "Role | str") -> Role:
    """Coerce a value to a Role.

    Raises:
        UnknownRoleError: If the value is not a member of the enumeration
    """
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError as e:
        raise UnknownRoleError(value) from e


def parse_permission(value: "Permission | str") -> Permission:
    """Coerce a value to a Permission.

    Raises:
        UnknownPermissionError: If the value is not part of the catalog
    """
    if isinstance(value, Permission):
        return value
    try:
        return Permission(value)
    except ValueError as e:
        raise UnknownPermissionError(value) from e


def is_admin(role: Role | str) -> bool:
    return parse_role(role) is Role.ADMIN


def is_collaborator_or_above(role: Role | str) -> bool:
    """True only for collaborator and admin."""
    return parse_role(role) in (Role.ADMIN, Role.COLLABORATOR)


def is_user_or_above(role: Role | str) -> bool:
    """True for every registered role (anything but guest)."""
    return parse_role(role) is not Role.GUEST


def has_role_at_least(role: Role | str, required: Role | str) -> bool:
    """Check whether a role ranks at or above another in the privilege order."""
    return ROLE_LEVELS[parse_role(role)] >= ROLE_LEVELS[parse_role(required)]
