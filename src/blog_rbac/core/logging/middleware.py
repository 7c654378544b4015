"""Request logging middleware.

Each request is logged once on completion with the role it was evaluated
under. The method and path are bound to structlog's context variables for
the duration of the request, so authorization events logged further down
(``permission_denied``, ``app_exception``) carry them too.
"""

import time
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from blog_rbac.core.constants import ROLE_STATE_ATTR


logger = structlog.get_logger()

UNLOGGED_PATHS = ("/health", "/docs", "/redoc", "/openapi.json")


def _outcome(status_code: int) -> str:
    if status_code in (401, 403):
        return "denied"
    if status_code >= 500:
        return "error"
    if status_code >= 400:
        return "rejected"
    return "ok"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its resolved role and authorization outcome.

    Args:
        app: The ASGI app to wrap
        exclude_paths: Path prefixes that are not logged
    """

    def __init__(
        self,
        app: Any,
        exclude_paths: tuple[str, ...] = UNLOGGED_PATHS,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = exclude_paths

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.url.path.startswith(self.exclude_paths):
            return await call_next(request)

        started = time.perf_counter()
        with structlog.contextvars.bound_contextvars(
            method=request.method, path=request.url.path
        ):
            try:
                response = await call_next(request)
            except Exception:
                logger.exception(
                    "request_failed",
                    role=self._role(request),
                    duration_ms=self._elapsed(started),
                )
                raise

            outcome = _outcome(response.status_code)
            log = logger.error if outcome == "error" else logger.info
            log(
                "request_completed",
                status_code=response.status_code,
                outcome=outcome,
                role=self._role(request),
                duration_ms=self._elapsed(started),
            )
        return response

    @staticmethod
    def _role(request: Request) -> str | None:
        role = getattr(request.state, ROLE_STATE_ATTR, None)
        return str(role) if role is not None else None

    @staticmethod
    def _elapsed(started: float) -> float:
        return round((time.perf_counter() - started) * 1000, 2)
