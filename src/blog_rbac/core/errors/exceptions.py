"""Domain exceptions for the application.

These exceptions represent authorization outcomes and programmer errors.
They are automatically converted to RFC 7807 Problem Details responses by
the exception handlers when raised inside a request.
"""

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from blog_rbac.core.permissions.catalog import Permission, Role


class AppException(Exception):
    """Base exception for all application errors.

    All domain exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class UnauthorizedError(AppException):
    """Raised when authentication is required but not provided or invalid.

    Example:
        raise UnauthorizedError("Invalid access token")
    """

    message = "Authentication required"
    error_code = "unauthorized"
    status_code = 401


class ForbiddenError(AppException):
    """Raised when an actor lacks permission to access a resource.

    Example:
        raise ForbiddenError(
            "Insufficient permissions",
            details={"required_permission": "article:delete"}
        )
    """

    message = "Access forbidden"
    error_code = "forbidden"
    status_code = 403


class PermissionDeniedError(ForbiddenError):
    """Raised by the ``require_*`` family when a permission check fails.

    Carries the evaluated permission (or the first of several) and the role
    that was evaluated. This is an expected outcome, not a bug; handlers turn
    it into an access-denied response.

    Example:
        raise PermissionDeniedError(Permission.SYSTEM_BACKUP, Role.USER)
    """

    error_code = "permission_denied"

    def __init__(
        self,
        permission: "Permission | None",
        role: "Role | str",
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        self.permission = permission
        self.role = role
        details = kwargs.pop("details", {})
        details["permission"] = str(permission) if permission is not None else None
        details["role"] = str(role)
        if message is None:
            message = f"Permission denied: {permission}"
        super().__init__(message=message, details=details, **kwargs)


class UnknownRoleError(AppException):
    """Raised when a value outside the role enumeration reaches the evaluator.

    Never resolved to an empty permission set, which would be
    indistinguishable from a role that has no permissions.
    """

    message = "Unknown role"
    error_code = "unknown_role"
    status_code = 500

    def __init__(self, role: object, **kwargs: Any) -> None:
        self.role = role
        details = kwargs.pop("details", {})
        details["role"] = repr(role)
        super().__init__(message=f"Unknown role: {role!r}", details=details, **kwargs)


class UnknownPermissionError(AppException):
    """Raised when a permission identifier is not part of the catalog."""

    message = "Unknown permission"
    error_code = "unknown_permission"
    status_code = 500

    def __init__(self, permission: object, **kwargs: Any) -> None:
        self.permission = permission
        details = kwargs.pop("details", {})
        details["permission"] = repr(permission)
        super().__init__(
            message=f"Unknown permission: {permission!r}", details=details, **kwargs
        )
