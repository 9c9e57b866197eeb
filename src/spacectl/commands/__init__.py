"""Subcommand modules for spacectl.

Provides register_commands(), which imports command modules only when
the CLI is built so ``spacectl --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from spacectl.commands.space import (
        create_space,
        delete_space,
        list_spaces,
        show_space,
        take_space,
    )
    from spacectl.commands.target import target

    cli.add_command(show_space)
    cli.add_command(list_spaces)
    cli.add_command(create_space)
    cli.add_command(take_space)
    cli.add_command(delete_space)
    cli.add_command(target)
