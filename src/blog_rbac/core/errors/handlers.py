"""RFC 7807 Problem Details exception handlers.

Every error response from the API has the same shape. Access denials carry
the evaluated permission and role as top-level members so clients can tell
which check failed without parsing ``detail``.

See: https://tools.ietf.org/html/rfc7807
"""

from typing import TYPE_CHECKING, Any, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from blog_rbac.config import settings
from blog_rbac.core.constants import ROLE_STATE_ATTR
from blog_rbac.core.errors.exceptions import AppException, PermissionDeniedError


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()


class FieldError(BaseModel):
    """A single rejected request field."""

    field: str
    message: str
    type: str | None = None


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details response schema.

    Attributes:
        type: URI reference identifying the problem type
        title: Short human-readable summary
        status: HTTP status code
        detail: Human-readable explanation specific to this occurrence
        instance: Request path the problem occurred on
        errors: Field-level errors (validation problems only)
    """

    type: str
    title: str
    status: int
    detail: str
    instance: str | None = None
    errors: list[FieldError] | None = None

    model_config = {"extra": "allow"}


class AccessProblem(ProblemDetail):
    """Problem body for a denied authorization check.

    ``permission`` is the permission that was checked, or the first of
    several for composite checks. Resource policy denials name the
    ``resource`` and ``operation`` instead.
    """

    permission: str | None = None
    role: str | None = None
    resource: str | None = None
    operation: str | None = None


def _problem(
    request: Request,
    error_code: str,
    status_code: int,
    detail: str,
    model: type[ProblemDetail] = ProblemDetail,
    **members: Any,
) -> JSONResponse:
    body = model(
        type=f"{settings.api_docs_base_url}/errors/{error_code}",
        title=error_code.replace("_", " ").title(),
        status=status_code,
        detail=detail,
        instance=request.url.path,
        **members,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _extra_members(details: dict[str, Any]) -> dict[str, Any]:
    """Exception details that do not shadow a standard problem member."""
    return {
        key: value
        for key, value in details.items()
        if key not in ProblemDetail.model_fields and key != "model"
    }


async def permission_denied_handler(
    request: Request, exc: PermissionDeniedError
) -> JSONResponse:
    """Render a denial as 403 and record it.

    This is the only place a denial raised inside a request is logged.
    """
    details = dict(exc.details)
    logger.warning(
        "permission_denied",
        role=details.get("role"),
        permission=details.get("permission"),
        resource=details.get("resource"),
        operation=details.get("operation"),
        path=request.url.path,
    )
    return _problem(
        request,
        exc.error_code,
        exc.status_code,
        exc.message,
        model=AccessProblem,
        **_extra_members(details),
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle the remaining application exceptions.

    An unknown role or permission reaching the evaluator is a server-side
    defect and is logged at error level; client-side problems at warning.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "app_exception",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        path=request.url.path,
        role=getattr(request.state, ROLE_STATE_ATTR, None),
        details=exc.details,
    )
    return _problem(
        request,
        exc.error_code,
        exc.status_code,
        exc.message,
        **_extra_members(exc.details),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as a 422 problem with field errors."""
    errors = [
        FieldError(
            field=".".join(str(part) for part in error.get("loc", ()) if part != "body")
            or "unknown",
            message=error.get("msg", "Invalid value"),
            type=error.get("type"),
        )
        for error in exc.errors()
    ]

    logger.warning(
        "validation_error",
        path=request.url.path,
        fields=[error.field for error in errors],
    )

    return _problem(
        request,
        "validation_error",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Request validation failed",
        errors=errors,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a generic 500; the exception itself is only logged."""
    logger.exception(
        "unhandled_exception",
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return _problem(
        request,
        "internal_error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Starlette dispatches on the most specific class, so denials reach
    ``permission_denied_handler`` and never ``app_exception_handler``.
    """
    app.add_exception_handler(
        PermissionDeniedError, cast("ExceptionHandler", permission_denied_handler)
    )
    app.add_exception_handler(
        AppException, cast("ExceptionHandler", app_exception_handler)
    )
    app.add_exception_handler(
        RequestValidationError, cast("ExceptionHandler", validation_exception_handler)
    )
    app.add_exception_handler(Exception, generic_exception_handler)
