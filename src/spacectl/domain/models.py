"""Platform entity models and the current-context snapshot.

Entities are supplied by the platform client and never persisted by the
core. Equality is by value, so two ``Space`` objects fetched separately
compare equal when they describe the same space.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class Organization(BaseModel):
    """Top-level tenant grouping. Name is unique on the platform."""

    model_config = {"frozen": True}

    guid: str
    name: str


class Space(BaseModel):
    """Isolation unit inside an organization. Name is unique per organization."""

    model_config = {"frozen": True}

    guid: str
    name: str
    organization: Organization


class App(BaseModel):
    """Application owned by a space."""

    model_config = {"frozen": True}

    guid: str
    name: str
    state: str = "STOPPED"
    instances: int = 1
    urls: list[str] = Field(default_factory=list)


class ServiceInstance(BaseModel):
    """Provisioned service bound to a space."""

    model_config = {"frozen": True}

    guid: str
    name: str
    service: str = ""
    plan: str = ""


class Domain(BaseModel):
    """Routing domain visible to a space (read-only here)."""

    model_config = {"frozen": True}

    guid: str
    name: str


class User(BaseModel):
    """A platform user; the acting user comes from the session."""

    model_config = {"frozen": True}

    guid: str
    email: str


class Role(StrEnum):
    """Space membership roles."""

    MANAGER = "manager"
    DEVELOPER = "developer"
    AUDITOR = "auditor"


# Grants are attempted in exactly this order.
ROLE_ORDER: tuple[Role, ...] = (Role.MANAGER, Role.DEVELOPER, Role.AUDITOR)


class RoleFlags(BaseModel):
    """Which roles to grant the acting user on a new space."""

    model_config = {"frozen": True}

    manager: bool = True
    developer: bool = True
    auditor: bool = False

    def selected(self) -> list[Role]:
        """Roles whose flag is set, in grant order."""
        return [role for role in ROLE_ORDER if getattr(self, role.value)]


class SessionContext(BaseModel):
    """Read-only snapshot of the current organization, space, and user.

    Taken once at workflow start. Workflows never mutate it; context
    changes go through the client's ``set_target``.
    """

    model_config = {"frozen": True}

    organization: Organization | None = None
    space: Space | None = None
    user: User | None = None
