"""HTTP surface: dependencies and introspection routes."""

from blog_rbac.api.router import api_router


__all__ = ["api_router"]
