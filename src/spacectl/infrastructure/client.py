"""PlatformClient — the seam between space workflows and the control plane.

Services depend on this protocol only. The bundled implementation is
:class:`spacectl.infrastructure.platform.LocalPlatformClient`; a remote
API client plugs in by satisfying the same methods.

Lookups return ``None`` when nothing matches; mutating calls raise
:class:`~spacectl.domain.errors.ConflictError` or
:class:`~spacectl.domain.errors.PlatformError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from spacectl.domain.models import (
        App,
        Domain,
        Organization,
        Role,
        ServiceInstance,
        Space,
        User,
    )


class PlatformClient(Protocol):
    """Operations the space workflows consume."""

    @property
    def target(self) -> str | None:
        """Identifier of the targeted platform, or None when not targeted."""
        ...

    @property
    def api_version(self) -> int:
        """Major version of the platform API."""
        ...

    # --- Current context ---

    def current_organization(self) -> Organization | None: ...

    def current_space(self) -> Space | None: ...

    def current_user(self) -> User | None: ...

    def set_target(self, organization: Organization | None, space: Space | None) -> None: ...

    # --- Lookups ---

    def organization_by_name(self, name: str) -> Organization | None: ...

    def organization_spaces(
        self, organization: Organization, name: str | None = None
    ) -> list[Space]: ...

    def space_by_name(self, name: str, organization: Organization | None = None) -> Space | None: ...

    def space_apps(self, space: Space) -> list[App]: ...

    def space_service_instances(self, space: Space) -> list[ServiceInstance]: ...

    def space_domains(self, space: Space) -> list[Domain]: ...

    # --- Mutations ---

    def create_space(self, organization: Organization, name: str) -> Space: ...

    def delete_space(self, space: Space) -> None: ...

    def add_space_role(self, space: Space, role: Role, user: User) -> None: ...

    def delete_app(self, app: App) -> None: ...

    def delete_service_instance(self, instance: ServiceInstance) -> None: ...

    # --- Cache control ---

    def invalidate_organization(self, organization: Organization) -> None:
        """Drop the cached space list for *organization*."""
        ...

    def invalidate(self) -> None:
        """Drop all cached state, including the cached current target."""
        ...
