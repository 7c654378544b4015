"""Permission guards for handler functions.

This module provides higher-order functions that enforce permissions
before a handler runs. The role is read from the handler's ``role``
parameter, whether the caller passes it by position or by keyword.
"""

import inspect
from collections.abc import Callable, Sequence
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from blog_rbac.core.errors import UnauthorizedError
from blog_rbac.core.permissions.catalog import Permission, Role
from blog_rbac.core.permissions.enforcement import (
    PermissionEnforcer,
    get_permission_enforcer,
)


P = ParamSpec("P")
R = TypeVar("R")


def permission_guard(
    permission: Permission | str,
    enforcer: PermissionEnforcer | None = None,
) -> Callable[[Role | str], None]:
    """Create a guard that enforces a single permission for a role.

    Usage:
        guard_backup = permission_guard(Permission.SYSTEM_BACKUP)
        guard_backup(role)  # raises PermissionDeniedError when denied

    Args:
        permission: The permission the guard requires
        enforcer: Enforcer to use (default: process enforcer)

    Returns:
        Guard function
    """

    def guard(role: Role | str) -> None:
        (enforcer or get_permission_enforcer()).require_permission(role, permission)

    return guard


def _guarded(
    check: Callable[[PermissionEnforcer, Role | str], None],
    enforcer: PermissionEnforcer | None,
    role_kwarg: str,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Common wrapping logic for sync and async handlers."""

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        signature = inspect.signature(func)
        if role_kwarg not in signature.parameters:
            raise TypeError(
                f"{func.__qualname__} has no {role_kwarg!r} parameter"
                " to read the role from"
            )

        def _enforce(args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
            # Bind so the role is found whether passed by position or keyword
            role = signature.bind_partial(*args, **kwargs).arguments.get(role_kwarg)
            if role is None:
                raise UnauthorizedError(
                    "Role required for permission check",
                    error_code="role_required",
                )
            check(enforcer or get_permission_enforcer(), role)

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
                _enforce(args, kwargs)
                return await func(*args, **kwargs)

            return async_wrapper  # type: ignore[return-value]

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            _enforce(args, kwargs)
            return func(*args, **kwargs)

        return wrapper

    return decorator


def permission_required(
    permission: Permission | str,
    enforcer: PermissionEnforcer | None = None,
    role_kwarg: str = "role",
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator that requires a specific permission to call a handler.

    Usage:
        @permission_required(Permission.ARTICLE_PUBLISH)
        def publish_article(article_id: int, *, role: Role) -> None:
            ...

    Args:
        permission: The permission to require
        enforcer: Enforcer to use (default: process enforcer)
        role_kwarg: Name of the handler parameter holding the role

    Raises:
        TypeError: At decoration time, if the handler has no role parameter
        UnauthorizedError: If the handler was called without a role
        PermissionDeniedError: If the role lacks the permission
    """
    return _guarded(
        lambda e, role: e.require_permission(role, permission), enforcer, role_kwarg
    )


def any_permission_required(
    permissions: Sequence[Permission | str],
    enforcer: PermissionEnforcer | None = None,
    role_kwarg: str = "role",
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator that requires any one of the specified permissions.

    Usage:
        @any_permission_required([Permission.COMMENT_MODERATE, Permission.SYSTEM_ADMIN])
        async def hide_comment(comment_id: int, *, role: Role) -> None:
            ...
    """
    return _guarded(
        lambda e, role: e.require_any_permission(role, permissions),
        enforcer,
        role_kwarg,
    )


def all_permissions_required(
    permissions: Sequence[Permission | str],
    enforcer: PermissionEnforcer | None = None,
    role_kwarg: str = "role",
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator that requires all of the specified permissions."""
    return _guarded(
        lambda e, role: e.require_all_permissions(role, permissions),
        enforcer,
        role_kwarg,
    )
