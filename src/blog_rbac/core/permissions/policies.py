"""Resource-scoped permission predicates.

Each predicate lets a blanket permission authorize an action, and for some
mutating actions also lets an ownership fact authorize it. The ownership
rules differ per resource and are reproduced as-is:

    article update   permission OR is_owner
    article delete   permission OR (is_owner AND collaborator-or-admin)
    user update      permission OR is_self
    file update      permission OR is_owner
    file delete      permission OR is_owner

Every other operation requires the blanket permission only. Note that the
file rules let any role, guest included, act on a file it owns.

Usage:
    policy = get_resource_policy()
    if not policy.article.can_delete(role, is_owner=post.author_id == user_id):
        raise ForbiddenError(...)
"""

from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache

from blog_rbac.core.permissions.catalog import (
    Permission,
    Role,
    is_collaborator_or_above,
)
from blog_rbac.core.permissions.checker import (
    PermissionChecker,
    get_permission_checker,
)


@dataclass(frozen=True)
class ResourceContext:
    """Caller-supplied facts for a single evaluation.

    Attributes:
        role: The actor's resolved role
        is_owner: Whether the actor owns the target record (or is the target
            user, for user predicates)
    """

    role: Role | str
    is_owner: bool = False


class _ResourceRules:
    """Base for one resource's predicates."""

    resource: str = ""
    # Predicates that take an ownership fact as their second argument
    ownership_operations: tuple[str, ...] = ()

    def __init__(self, checker: PermissionChecker) -> None:
        self.checker = checker

    def _allowed(self, role: Role | str, permission: Permission) -> bool:
        return self.checker.has_permission(role, permission)


class ArticlePolicy(_ResourceRules):
    resource = "article"
    ownership_operations = ("update", "delete")

    def can_create(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.ARTICLE_CREATE)

    def can_read(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.ARTICLE_READ)

    def can_update(self, role: Role | str, is_owner: bool = False) -> bool:
        return self._allowed(role, Permission.ARTICLE_UPDATE) or is_owner is True

    def can_delete(self, role: Role | str, is_owner: bool = False) -> bool:
        """Owners may delete only when they are collaborator or admin."""
        return self._allowed(role, Permission.ARTICLE_DELETE) or (
            is_owner is True and is_collaborator_or_above(role)
        )

    def can_publish(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.ARTICLE_PUBLISH)

    def can_moderate(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.ARTICLE_MODERATE)


class PagePolicy(_ResourceRules):
    """Pages have no ownership override."""

    resource = "page"

    def can_create(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.PAGE_CREATE)

    def can_read(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.PAGE_READ)

    def can_update(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.PAGE_UPDATE)

    def can_delete(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.PAGE_DELETE)

    def can_publish(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.PAGE_PUBLISH)


class UserPolicy(_ResourceRules):
    resource = "user"
    ownership_operations = ("update",)

    def can_create(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.USER_CREATE)

    def can_read(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.USER_READ)

    def can_update(self, role: Role | str, is_self: bool = False) -> bool:
        return self._allowed(role, Permission.USER_UPDATE) or is_self is True

    def can_delete(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.USER_DELETE)

    def can_manage_roles(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.USER_MANAGE_ROLES)


class FilePolicy(_ResourceRules):
    resource = "file"
    ownership_operations = ("update", "delete")

    def can_upload(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.FILE_UPLOAD)

    def can_read(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.FILE_READ)

    def can_update(self, role: Role | str, is_owner: bool = False) -> bool:
        # TODO: confirm with product whether ownership alone should bypass
        # file:update for guests; kept as-is and pinned by a regression test.
        return self._allowed(role, Permission.FILE_UPDATE) or is_owner is True

    def can_delete(self, role: Role | str, is_owner: bool = False) -> bool:
        return self._allowed(role, Permission.FILE_DELETE) or is_owner is True

    def can_manage(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.FILE_MANAGE)


class SystemPolicy(_ResourceRules):
    resource = "system"

    def can_view_health(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.SYSTEM_HEALTH)

    def can_backup(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.SYSTEM_BACKUP)

    def can_restore(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.SYSTEM_RESTORE)

    def can_view_logs(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.SYSTEM_LOGS)

    def can_admin(self, role: Role | str) -> bool:
        return self._allowed(role, Permission.SYSTEM_ADMIN)


class ResourcePolicy:
    """Groups the per-resource predicates around a single checker.

    Args:
        checker: The checker to evaluate blanket permissions with
    """

    def __init__(self, checker: PermissionChecker | None = None) -> None:
        self.checker = checker if checker is not None else PermissionChecker()
        self.article = ArticlePolicy(self.checker)
        self.page = PagePolicy(self.checker)
        self.user = UserPolicy(self.checker)
        self.file = FilePolicy(self.checker)
        self.system = SystemPolicy(self.checker)

    @property
    def resources(self) -> dict[str, _ResourceRules]:
        return {
            rules.resource: rules
            for rules in (self.article, self.page, self.user, self.file, self.system)
        }

    def operations(self, resource: str) -> list[str]:
        """List the operation names available for a resource."""
        rules = self._rules_for(resource)
        return sorted(
            name.removeprefix("can_")
            for name in dir(rules)
            if name.startswith("can_") and callable(getattr(rules, name))
        )

    def allows(self, resource: str, operation: str, context: ResourceContext) -> bool:
        """Evaluate a predicate by name.

        Args:
            resource: Resource name (article, page, user, file, system)
            operation: Operation name without the ``can_`` prefix
                (e.g. "update", "manage_roles", "view_health")
            context: Role and ownership facts for this evaluation

        Returns:
            The predicate's decision

        Raises:
            ValueError: If the resource or operation is unknown
        """
        rules = self._rules_for(resource)
        predicate = self._predicate(resource, operation)
        if operation in rules.ownership_operations:
            return predicate(context.role, context.is_owner)
        return predicate(context.role)

    def takes_ownership(self, resource: str, operation: str) -> bool:
        """Whether the ownership fact can change this predicate's decision."""
        self._predicate(resource, operation)
        return operation in self._rules_for(resource).ownership_operations

    def _rules_for(self, resource: str) -> _ResourceRules:
        try:
            return self.resources[resource]
        except KeyError as e:
            raise ValueError(f"Unknown resource: {resource!r}") from e

    def _predicate(self, resource: str, operation: str) -> Callable[..., bool]:
        rules = self._rules_for(resource)
        predicate = getattr(rules, f"can_{operation}", None)
        if predicate is None:
            raise ValueError(f"Unknown operation for {resource}: {operation!r}")
        return predicate


@lru_cache
def get_resource_policy() -> ResourcePolicy:
    """Get the policy bound to the process matrix."""
    return ResourcePolicy(get_permission_checker())
