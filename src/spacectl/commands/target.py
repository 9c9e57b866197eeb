"""Command: show or switch the current organization and space."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from spacectl.commands._base import SpaceCommand

if TYPE_CHECKING:
    from spacectl.commands._context import AppContext


@click.command(
    cls=SpaceCommand,
    examples="""\
  spacectl target
  spacectl target --org acme
  spacectl target --org acme --space staging
  spacectl target -s production""",
)
@click.option("-o", "--org", "--organization", "organization", default=None, help="Organization.")
@click.option("-s", "--space", default=None, help="Space within the organization.")
@click.pass_obj
def target(app: AppContext, organization: str | None, space: str | None) -> None:
    """Show or set the current organization and space."""
    app.emit(app.target_service("target").switch(organization, space))
