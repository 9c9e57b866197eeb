"""BaseService — shared foundation for space services.

Every service receives its collaborators explicitly: the platform client,
a :class:`SessionContext` snapshot of the current target, and a prompt
provider. Nothing is read from ambient state, so services run unchanged
against a fake client with canned answers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from spacectl.domain.errors import PreconditionError
from spacectl.domain.models import SessionContext
from spacectl.services.prompts import NonInteractivePrompts

if TYPE_CHECKING:
    from spacectl.infrastructure.client import PlatformClient
    from spacectl.services.prompts import PromptProvider

log = structlog.get_logger(__name__)

MIN_API_VERSION = 2


class BaseService:
    """Base for service-layer classes.

    Usage::

        class SpaceService(BaseService):
            def show(self, ...) -> ServiceResult:
                self._check_preconditions()
                ...
    """

    def __init__(
        self,
        client: PlatformClient,
        *,
        session: SessionContext | None = None,
        prompts: PromptProvider | None = None,
        force: bool = False,
        quiet: bool = False,
    ) -> None:
        self._client = client
        self._session = session if session is not None else session_from_client(client)
        self._prompts: PromptProvider = prompts or NonInteractivePrompts()
        self._force = force
        self._quiet = quiet

    @property
    def session(self) -> SessionContext:
        return self._session

    def _check_preconditions(self) -> None:
        """Fail fast unless targeted, logged in, and on a current API version."""
        if not self._client.target:
            raise PreconditionError("NOT_TARGETED", "Please select a target first.")
        if self._session.user is None:
            raise PreconditionError("NOT_LOGGED_IN", "Please log in first.")
        if self._client.api_version < MIN_API_VERSION:
            raise PreconditionError(
                "LEGACY_API",
                f"This command requires platform API v{MIN_API_VERSION} or later.",
            )


def session_from_client(client: PlatformClient) -> SessionContext:
    """Snapshot the client's current organization, space, and user."""
    return SessionContext(
        organization=client.current_organization(),
        space=client.current_space(),
        user=client.current_user(),
    )
