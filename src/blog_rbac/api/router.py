"""Permission introspection routes."""

from typing import Any

from fastapi import APIRouter, Depends

from blog_rbac.api.dependencies import CurrentRole, Enforcer, require_permission
from blog_rbac.core.constants import API_V1_PREFIX
from blog_rbac.core.permissions import Permission


api_router = APIRouter(prefix=API_V1_PREFIX)


@api_router.get("/permissions/me", tags=["permissions"])
def read_own_permissions(role: CurrentRole, enforcer: Enforcer) -> dict[str, Any]:
    """Return the caller's role and its permissions, for UI gating."""
    permissions = enforcer.checker.get_user_permissions(role)
    return {
        "role": str(role),
        "permissions": sorted(str(p) for p in permissions),
    }


@api_router.get(
    "/permissions/matrix",
    tags=["permissions"],
    dependencies=[Depends(require_permission(Permission.USER_MANAGE_ROLES))],
)
def read_role_matrix(enforcer: Enforcer) -> dict[str, list[str]]:
    """Return the full role matrix. Requires ``user:manage_roles``."""
    return enforcer.checker.matrix.as_dict()
