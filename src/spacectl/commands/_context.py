"""AppContext — shared click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Builds the platform client lazily (so ``--help``
never opens the store), picks the prompt provider, and emits results
with the right stream and exit code.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from spacectl.domain.errors import PreconditionError
from spacectl.output.formatters import OutputSettings, format_result
from spacectl.services.prompts import ClickPrompts, NonInteractivePrompts
from spacectl.services.result import ServiceResult

if TYPE_CHECKING:
    from spacectl.config.settings import SpacectlSettings
    from spacectl.infrastructure.platform import LocalPlatformClient
    from spacectl.services.prompts import PromptProvider
    from spacectl.services.space import SpaceService
    from spacectl.services.target import TargetService


class AppContext:
    """Shared context flowing through click's command hierarchy."""

    def __init__(self, settings: SpacectlSettings) -> None:
        self.settings = settings
        self._client: LocalPlatformClient | None = None

        from spacectl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from spacectl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def client(self) -> LocalPlatformClient:
        """The platform client (opened on first access).

        Raises:
            PreconditionError: No ``[platform] target`` is configured.
        """
        if self._client is None:
            store = self.settings.store_path
            if store is None:
                raise PreconditionError("NOT_TARGETED", "Please select a target first.")
            from spacectl.infrastructure.platform import LocalPlatformClient

            self._client = LocalPlatformClient(
                store,
                user_email=self.settings.platform.user,
                api_version=self.settings.platform.api_version,
            )
        return self._client

    @property
    def interactive(self) -> bool:
        """Prompts need: no ``--no-interact``, no ``--json``, and a TTY on stdin."""
        return (
            not self.settings.no_interact
            and not self.settings.json_output
            and sys.stdin.isatty()
        )

    @property
    def prompts(self) -> PromptProvider:
        return ClickPrompts() if self.interactive else NonInteractivePrompts()

    def space_service(self, op: str) -> SpaceService:
        """SpaceService bound to this invocation; emits and exits if untargeted."""
        from spacectl.services.space import SpaceService

        return SpaceService(
            self._client_or_exit(op),
            prompts=self.prompts,
            force=self.settings.force,
            quiet=self.settings.quiet,
        )

    def target_service(self, op: str) -> TargetService:
        from spacectl.services.target import TargetService

        return TargetService(self._client_or_exit(op), prompts=self.prompts)

    def _client_or_exit(self, op: str) -> LocalPlatformClient:
        try:
            return self.client
        except PreconditionError as exc:
            self.emit(ServiceResult.failure(op, exc))
            raise  # emit() exits on failure; unreachable

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout, return normally. Warnings go to stderr so they
          don't pollute piped output (JSON keeps them in the payload).
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def close(self) -> None:
        """Release the platform client, if one was opened."""
        if self._client is not None:
            self._client.close()
            self._client = None
