"""Permission system for role-based access control (RBAC)."""

from blog_rbac.core.permissions.catalog import (
    ROLE_LEVELS,
    Permission,
    Role,
    has_role_at_least,
    is_admin,
    is_collaborator_or_above,
    is_user_or_above,
    parse_permission,
    parse_role,
)
from blog_rbac.core.permissions.checker import (
    PermissionChecker,
    get_permission_checker,
    get_user_permissions,
    has_all_permissions,
    has_any_permission,
    has_permission,
)
from blog_rbac.core.permissions.decorators import (
    all_permissions_required,
    any_permission_required,
    permission_guard,
    permission_required,
)
from blog_rbac.core.permissions.enforcement import (
    PermissionEnforcer,
    check_permission,
    get_permission_enforcer,
    require_all_permissions,
    require_any_permission,
    require_permission,
)
from blog_rbac.core.permissions.matrix import (
    DEFAULT_GRANTS,
    RoleMatrix,
    get_role_matrix,
)
from blog_rbac.core.permissions.policies import (
    ResourceContext,
    ResourcePolicy,
    get_resource_policy,
)


__all__ = [
    # Catalog
    "DEFAULT_GRANTS",
    "ROLE_LEVELS",
    "Permission",
    # Checker
    "PermissionChecker",
    # Enforcement
    "PermissionEnforcer",
    # Policies
    "ResourceContext",
    "ResourcePolicy",
    "Role",
    # Matrix
    "RoleMatrix",
    # Decorators
    "all_permissions_required",
    "any_permission_required",
    "check_permission",
    "get_permission_checker",
    "get_permission_enforcer",
    "get_resource_policy",
    "get_role_matrix",
    "get_user_permissions",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
    "has_role_at_least",
    "is_admin",
    "is_collaborator_or_above",
    "is_user_or_above",
    "parse_permission",
    "parse_role",
    "permission_guard",
    "permission_required",
    "require_all_permissions",
    "require_any_permission",
    "require_permission",
]
