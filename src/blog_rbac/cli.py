"""Command-line tool for inspecting the role matrix."""

import typer
from rich.console import Console
from rich.table import Table

from blog_rbac import __version__
from blog_rbac.core.errors import AppException
from blog_rbac.core.permissions import (
    Permission,
    ResourceContext,
    get_resource_policy,
    get_role_matrix,
    has_permission,
    parse_role,
)


console = Console()

app = typer.Typer(
    name="blog-rbac",
    help="Inspect roles, permissions and resource policies.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
) -> None:
    """blog-rbac - Inspect the role matrix."""
    if version:
        console.print(f"[bold cyan]blog-rbac[/bold cyan] version {__version__}")
        raise typer.Exit()


@app.command()
def roles() -> None:
    """List roles and how many permissions each holds."""
    matrix = get_role_matrix()

    table = Table(title="Roles", show_header=True)
    table.add_column("Role", style="cyan", no_wrap=True)
    table.add_column("Permissions", style="green", justify="right")

    for role in matrix.roles:
        table.add_row(str(role), str(len(matrix.permissions_for(role))))

    console.print(table)


@app.command()
def permissions(
    role: str | None = typer.Option(None, "--role", "-r", help="Only this role's grants"),
    resource: str | None = typer.Option(
        None, "--resource", help="Only one resource domain"
    ),
) -> None:
    """List catalog permissions, optionally filtered."""
    try:
        selected = (
            get_role_matrix().permissions_for(parse_role(role))
            if role
            else frozenset(Permission)
        )
    except AppException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(2) from e

    rows = [p for p in Permission if p in selected]
    if resource:
        rows = [p for p in rows if p.resource == resource]

    if not rows:
        console.print("[yellow]No permissions match.[/yellow]")
        return

    for permission in rows:
        console.print(str(permission))


@app.command()
def check(
    role: str = typer.Argument(..., help="Role to evaluate"),
    permission: str = typer.Argument(..., help="Permission, e.g. article:publish"),
) -> None:
    """Check a single permission. Exits 1 when denied."""
    try:
        allowed = has_permission(role, permission)
    except AppException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(2) from e

    if allowed:
        console.print(f"[green]allowed[/green] {role} -> {permission}")
        return
    console.print(f"[red]denied[/red] {role} -> {permission}")
    raise typer.Exit(1)


@app.command()
def can(
    role: str = typer.Argument(..., help="Role to evaluate"),
    resource: str = typer.Argument(..., help="article, page, user, file or system"),
    operation: str = typer.Argument(..., help="e.g. update, delete, manage_roles"),
    owner: bool = typer.Option(
        False, "--owner", help="The actor owns the resource (or is the user)"
    ),
) -> None:
    """Evaluate a resource policy predicate. Exits 1 when denied."""
    try:
        allowed = get_resource_policy().allows(
            resource, operation, ResourceContext(role=parse_role(role), is_owner=owner)
        )
    except (AppException, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2) from e

    label = f"{role} {resource}:{operation}" + (" (owner)" if owner else "")
    if allowed:
        console.print(f"[green]allowed[/green] {label}")
        return
    console.print(f"[red]denied[/red] {label}")
    raise typer.Exit(1)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
