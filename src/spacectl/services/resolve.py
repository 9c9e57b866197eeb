"""Name resolution — turn user-supplied names into platform entities.

Two strategies:

- **Global by name**: organizations are looked up through the client's
  direct by-name query, dispatched through :data:`RESOLVERS`.
- **Scoped by parent**: a space is the first exact-name match among its
  organization's spaces.

Defaulting: an omitted name falls back to the matching
:class:`SessionContext` value. When that is unset too the resolver returns
``None`` and the caller decides whether that is an error.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from spacectl.domain.errors import NotFoundError

if TYPE_CHECKING:
    from spacectl.domain.models import Organization, SessionContext, Space
    from spacectl.infrastructure.client import PlatformClient


class ResourceKind(StrEnum):
    """Entity kinds that can be resolved by name.

    Only kinds with a global lookup appear in :data:`RESOLVERS`; spaces are
    always scoped to an organization.
    """

    ORGANIZATION = "organization"
    SPACE = "space"


RESOLVERS: dict[ResourceKind, Callable[[PlatformClient, str], Any]] = {
    ResourceKind.ORGANIZATION: lambda client, name: client.organization_by_name(name),
}


def resolve_by_name(client: PlatformClient, kind: ResourceKind, name: str) -> Any:
    """Global lookup of *name* for *kind*. Raises NotFoundError when absent."""
    found = RESOLVERS[kind](client, name)
    if found is None:
        raise NotFoundError(kind.value, name)
    return found


def resolve_space(client: PlatformClient, name: str, organization: Organization) -> Space:
    """Find the space called *name* inside *organization*.

    Raises NotFoundError when the organization has no such space.
    """
    matches = client.organization_spaces(organization, name=name)
    if not matches:
        raise NotFoundError(ResourceKind.SPACE.value, name)
    return matches[0]


def resolve_organization(
    client: PlatformClient, name: str | None, session: SessionContext
) -> Organization | None:
    """Resolve an organization by name, or default to the current one."""
    if name is not None:
        return resolve_by_name(client, ResourceKind.ORGANIZATION, name)
    return session.organization


def resolve_space_or_current(
    client: PlatformClient,
    name: str | None,
    organization: Organization | None,
    session: SessionContext,
) -> Space | None:
    """Resolve a space within *organization*, or default to the current one.

    A named space needs an organization to scope the lookup; without one it
    cannot be found.
    """
    if name is None:
        return session.space
    if organization is None:
        raise NotFoundError(ResourceKind.SPACE.value, name)
    return resolve_space(client, name, organization)
