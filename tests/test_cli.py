"""Tests for blog-rbac CLI commands."""

from typer.testing import CliRunner

from blog_rbac import __version__
from blog_rbac.cli import app


runner = CliRunner()


class TestVersion:
    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestRolesCommand:
    """Tests for blog-rbac roles."""

    def test_lists_every_role(self) -> None:
        result = runner.invoke(app, ["roles"])

        assert result.exit_code == 0
        for role in ("admin", "collaborator", "user", "guest"):
            assert role in result.stdout


class TestPermissionsCommand:
    """Tests for blog-rbac permissions."""

    def test_lists_catalog(self) -> None:
        result = runner.invoke(app, ["permissions"])

        assert result.exit_code == 0
        assert "system:admin" in result.stdout
        assert "friend_link:create" in result.stdout

    def test_filters_by_role_and_resource(self) -> None:
        result = runner.invoke(app, ["permissions", "--role", "user", "--resource", "comment"])

        assert result.exit_code == 0
        lines = result.stdout.split()
        assert lines == ["comment:create", "comment:read"]

    def test_no_match(self) -> None:
        result = runner.invoke(app, ["permissions", "--role", "guest", "--resource", "system"])

        assert result.exit_code == 0
        assert "No permissions match" in result.stdout

    def test_unknown_role(self) -> None:
        result = runner.invoke(app, ["permissions", "--role", "superuser"])

        assert result.exit_code == 2
        assert "Unknown role" in result.stdout


class TestCheckCommand:
    """Tests for blog-rbac check."""

    def test_allowed(self) -> None:
        result = runner.invoke(app, ["check", "admin", "system:admin"])

        assert result.exit_code == 0
        assert "allowed" in result.stdout

    def test_denied(self) -> None:
        result = runner.invoke(app, ["check", "guest", "article:create"])

        assert result.exit_code == 1
        assert "denied" in result.stdout

    def test_unknown_permission(self) -> None:
        result = runner.invoke(app, ["check", "admin", "article:archive"])

        assert result.exit_code == 2
        assert "Unknown permission" in result.stdout


class TestCanCommand:
    """Tests for blog-rbac can."""

    def test_guest_owner_updates_file(self) -> None:
        result = runner.invoke(app, ["can", "guest", "file", "update", "--owner"])

        assert result.exit_code == 0
        assert "allowed" in result.stdout

    def test_user_owner_cannot_delete_article(self) -> None:
        result = runner.invoke(app, ["can", "user", "article", "delete", "--owner"])

        assert result.exit_code == 1
        assert "denied" in result.stdout

    def test_unknown_operation(self) -> None:
        result = runner.invoke(app, ["can", "admin", "page", "archive"])

        assert result.exit_code == 2
        assert "Unknown operation" in result.stdout
