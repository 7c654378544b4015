"""Error handling module with RFC 7807 Problem Details."""

from blog_rbac.core.errors.exceptions import (
    AppException,
    ForbiddenError,
    PermissionDeniedError,
    UnauthorizedError,
    UnknownPermissionError,
    UnknownRoleError,
)


__all__ = [
    "AppException",
    "ForbiddenError",
    "PermissionDeniedError",
    "UnauthorizedError",
    "UnknownPermissionError",
    "UnknownRoleError",
]
