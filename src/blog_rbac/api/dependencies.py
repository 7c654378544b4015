"""FastAPI dependencies for authorization.

The session layer of the surrounding application resolves the actor's role
and stores it on ``request.state.role``. These dependencies read it and
enforce permissions before a route runs. Denials propagate as
``PermissionDeniedError``; the exception handler renders and logs them.

Usage:
    @router.post("/articles/{slug}/publish")
    async def publish_article(
        slug: str,
        _: None = Depends(require_permission(Permission.ARTICLE_PUBLISH)),
    ):
        ...
"""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request

from blog_rbac.config import settings
from blog_rbac.core.constants import OWNERSHIP_STATE_ATTR, ROLE_STATE_ATTR
from blog_rbac.core.errors import PermissionDeniedError
from blog_rbac.core.permissions import (
    Permission,
    PermissionEnforcer,
    ResourceContext,
    ResourcePolicy,
    Role,
    get_permission_enforcer,
    get_resource_policy,
    parse_role,
)


def get_current_role(request: Request) -> Role:
    """Resolve the role for the current request.

    Falls back to the configured default role when the session layer did not
    set one.

    Raises:
        UnknownRoleError: If the session carries a value outside the enum
    """
    role = getattr(request.state, ROLE_STATE_ATTR, None)
    if role is None:
        role = settings.default_role
        setattr(request.state, ROLE_STATE_ATTR, role)
    return parse_role(role)


def get_ownership(request: Request) -> bool:
    """Read the ownership fact the application stored on the request.

    The application compares the session's identity with the target
    record's owner and sets ``request.state.is_owner`` before the policy
    dependency runs. Nothing the client sends is consulted; anything other
    than ``True`` means not the owner.
    """
    return getattr(request.state, OWNERSHIP_STATE_ATTR, None) is True


def _not_owner() -> bool:
    return False


CurrentRole = Annotated[Role, Depends(get_current_role)]
Enforcer = Annotated[PermissionEnforcer, Depends(get_permission_enforcer)]
Policy = Annotated[ResourcePolicy, Depends(get_resource_policy)]


def require_permission(permission: Permission) -> Callable[..., None]:
    """Create a dependency that requires a specific permission.

    Args:
        permission: The permission to require

    Returns:
        Dependency function

    Raises:
        PermissionDeniedError: If the role lacks the permission (HTTP 403)
    """

    def permission_checker(role: CurrentRole, enforcer: Enforcer) -> None:
        enforcer.require_permission(role, permission)

    return permission_checker


def require_any_permission(*permissions: Permission) -> Callable[..., None]:
    """Create a dependency that requires any of the specified permissions."""

    def permission_checker(role: CurrentRole, enforcer: Enforcer) -> None:
        enforcer.require_any_permission(role, permissions)

    return permission_checker


def require_all_permissions(*permissions: Permission) -> Callable[..., None]:
    """Create a dependency that requires all of the specified permissions."""

    def permission_checker(role: CurrentRole, enforcer: Enforcer) -> None:
        enforcer.require_all_permissions(role, permissions)

    return permission_checker


def require_resource_action(
    resource: str,
    operation: str,
    ownership: Callable[..., bool] = get_ownership,
) -> Callable[..., None]:
    """Create a dependency that evaluates a resource policy predicate.

    ``ownership`` is itself a FastAPI dependency, so it can take path
    parameters and the request and look the record up in the application's
    store. By default the fact is read from ``request.state.is_owner``.
    It is only resolved for predicates that accept an ownership fact.

    Usage:
        def owns_file(key: str, request: Request) -> bool:
            return files.owner_of(key) == request.state.user_id

        @router.put(
            "/files/{key}",
            dependencies=[Depends(require_resource_action("file", "update", owns_file))],
        )

    Args:
        resource: Resource name (article, page, user, file, system)
        operation: Predicate name without the ``can_`` prefix
        ownership: Dependency returning whether the actor owns the target

    Raises:
        ValueError: At creation time, if the resource or operation is unknown
    """
    if not get_resource_policy().takes_ownership(resource, operation):
        ownership = _not_owner

    def policy_checker(
        role: CurrentRole,
        policy: Policy,
        is_owner: Annotated[bool, Depends(ownership)],
    ) -> None:
        context = ResourceContext(role=role, is_owner=is_owner)
        if not policy.allows(resource, operation, context):
            raise PermissionDeniedError(
                None,
                role,
                message=f"Permission denied: {resource}:{operation}",
                details={"resource": resource, "operation": operation},
            )

    return policy_checker
