"""Commands: space, spaces, create-space, take-space, delete-space."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from spacectl.commands._base import SpaceCommand

if TYPE_CHECKING:
    from spacectl.commands._context import AppContext

_org_option = click.option(
    "-o",
    "--org",
    "--organization",
    "organization",
    default=None,
    help="Organization name (defaults to the current organization).",
)


@click.command(
    "space",
    cls=SpaceCommand,
    examples="""\
  spacectl space
  spacectl space staging --org acme
  spacectl space staging --full
  spacectl --json space""",
)
@click.argument("space", required=False)
@_org_option
@click.option("--full", is_flag=True, help="Show full information for apps and services.")
@click.pass_obj
def show_space(app: AppContext, space: str | None, organization: str | None, full: bool) -> None:
    """Show space information (defaults to the current space)."""
    svc = app.space_service("show_space")
    app.emit(svc.show(space, organization=organization, full=full))


@click.command(
    "spaces",
    cls=SpaceCommand,
    examples="""\
  spacectl spaces
  spacectl spaces acme
  spacectl spaces --name '^dev' --one-line
  spacectl spaces --full""",
)
@click.argument("org_argument", metavar="[ORGANIZATION]", required=False)
@_org_option
@click.option("--name", default=None, help="Filter by name (regular expression).")
@click.option("-l", "--one-line", is_flag=True, help="Single-line tabular format.")
@click.option("--full", is_flag=True, help="Show full information for apps and services.")
@click.pass_obj
def list_spaces(
    app: AppContext,
    org_argument: str | None,
    organization: str | None,
    name: str | None,
    one_line: bool,
    full: bool,
) -> None:
    """List spaces in an organization."""
    svc = app.space_service("list_spaces")
    app.emit(
        svc.list_spaces(organization or org_argument, name=name, one_line=one_line, full=full)
    )


@click.command(
    "create-space",
    cls=SpaceCommand,
    examples="""\
  spacectl create-space staging
  spacectl create-space staging --org acme --target
  spacectl create-space audit-only --no-manager --no-developer --auditor""",
)
@click.argument("name", required=False)
@_org_option
@click.option("-t", "--target", is_flag=True, help="Switch to the space after creation.")
@click.option("--manager/--no-manager", default=None, help="Add yourself as manager.")
@click.option("--developer/--no-developer", default=None, help="Add yourself as developer.")
@click.option("--auditor/--no-auditor", default=None, help="Add yourself as auditor.")
@click.pass_obj
def create_space(
    app: AppContext,
    name: str | None,
    organization: str | None,
    target: bool,
    manager: bool | None,
    developer: bool | None,
    auditor: bool | None,
) -> None:
    """Create a space in an organization."""
    roles = app.settings.spaces.role_flags(manager=manager, developer=developer, auditor=auditor)
    svc = app.space_service("create_space")
    app.emit(svc.create(name, organization=organization, target=target, roles=roles))


@click.command(
    "take-space",
    cls=SpaceCommand,
    hidden=True,
    examples="""\
  spacectl take-space scratch""",
)
@click.argument("name")
@click.pass_obj
def take_space(app: AppContext, name: str) -> None:
    """Switch to a space, creating it if it doesn't exist."""
    app.emit(app.space_service("take_space").take_or_create(name))


@click.command(
    "delete-space",
    cls=SpaceCommand,
    examples="""\
  spacectl delete-space staging
  spacectl --force delete-space old-1 old-2 --org acme
  spacectl delete-space staging --recursive
  spacectl delete-space staging --no-warn""",
)
@click.argument("spaces", nargs=-1)
@_org_option
@click.option(
    "-r",
    "--recursive/--no-recursive",
    default=None,
    help="Delete the apps and service instances of non-empty spaces.",
)
@click.option(
    "--warn/--no-warn",
    default=None,
    help="Warn if the organization is left without spaces.",
)
@click.pass_obj
def delete_space(
    app: AppContext,
    spaces: tuple[str, ...],
    organization: str | None,
    recursive: bool | None,
    warn: bool | None,
) -> None:
    """Delete spaces and their contents."""
    if warn is None:
        warn = app.settings.spaces.warn_on_empty
    svc = app.space_service("delete_space")
    app.emit(svc.delete(spaces, organization=organization, recursive=recursive, warn=warn))
