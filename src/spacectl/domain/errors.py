"""Exception taxonomy for space workflows.

Every error carries a stable ``code`` that the service layer copies into
``ServiceError.code``. Per-item outcomes that do not abort a batch
(aborted clears, failed role grants) are not exceptions; see
:mod:`spacectl.domain.decisions`.
"""

from __future__ import annotations

from typing import Any


class SpaceCtlError(Exception):
    """Base class for all errors surfaced to the user."""

    code = "ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class NotFoundError(SpaceCtlError):
    """Name resolution failed for an organization, space, or child resource."""

    code = "NOT_FOUND"

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"Unknown {kind.replace('_', ' ')} '{name}'", kind=kind, name=name)
        self.kind = kind
        self.name = name


class ConflictError(SpaceCtlError):
    """Creation collided with an existing resource."""

    code = "CONFLICT"


class PreconditionError(SpaceCtlError):
    """The session cannot run space commands (no target, no user, legacy API)."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class SelectionError(SpaceCtlError):
    """Nothing was named and there is no default to fall back to."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


class InvalidPatternError(SpaceCtlError):
    """A name filter is not a valid regular expression."""

    code = "INVALID_FILTER"


class PlatformError(SpaceCtlError):
    """A platform call failed (delete rejected, role grant refused, ...)."""

    code = "PLATFORM_ERROR"
