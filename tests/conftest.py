"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator, Callable

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from blog_rbac.core.permissions import (
    PermissionChecker,
    PermissionEnforcer,
    ResourcePolicy,
    RoleMatrix,
    get_role_matrix,
)
from blog_rbac.main import create_app


@pytest.fixture
def matrix() -> RoleMatrix:
    """The process role matrix."""
    return get_role_matrix()


@pytest.fixture
def checker(matrix: RoleMatrix) -> PermissionChecker:
    return PermissionChecker(matrix)


@pytest.fixture
def enforcer(checker: PermissionChecker) -> PermissionEnforcer:
    return PermissionEnforcer(checker)


@pytest.fixture
def policy(checker: PermissionChecker) -> ResourcePolicy:
    return ResourcePolicy(checker)


@pytest.fixture
def app() -> FastAPI:
    """Application with a stand-in session layer.

    The ``X-Test-Role`` and ``X-Test-User`` headers play the part of the
    surrounding application's session lookup and are copied to
    ``request.state.role`` and ``request.state.user_id``.
    """
    application = create_app()

    @application.middleware("http")
    async def stand_in_session(request: Request, call_next: Callable):
        role = request.headers.get("X-Test-Role")
        if role is not None:
            request.state.role = role
        user_id = request.headers.get("X-Test-User")
        if user_id is not None:
            request.state.user_id = user_id
        return await call_next(request)

    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client
