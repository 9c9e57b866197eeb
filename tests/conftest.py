"""Shared pytest fixtures and test helpers for spacectl tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator, Sequence
from pathlib import Path
from typing import Any, TypeVar

import pytest
from click.testing import CliRunner

from spacectl.domain.errors import ConflictError, NotFoundError, PlatformError, SpaceCtlError
from spacectl.domain.models import (
    App,
    Domain,
    Organization,
    Role,
    ServiceInstance,
    Space,
    User,
)
from spacectl.infrastructure.platform import LocalPlatformClient
from spacectl.services.telemetry import disable_telemetry

_T = TypeVar("_T")

USER_EMAIL = "dev@example.com"


@pytest.fixture(autouse=True)
def _reset_ambient_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep telemetry and logging from leaking between tests.

    The CLI turns telemetry on under ``--verbose`` and points the root
    handler at CliRunner's temporary stderr.
    """
    monkeypatch.delenv("SPACECTL_CONFIG", raising=False)
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    spacectl_logger = logging.getLogger("spacectl")
    spacectl_level = spacectl_logger.level
    yield
    disable_telemetry()
    root.handlers = original_handlers
    root.setLevel(original_level)
    spacectl_logger.setLevel(spacectl_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def platform_root(tmp_path: Path) -> Path:
    """Temporary project directory with a ``spacectl.toml`` targeting a local store."""
    (tmp_path / "spacectl.toml").write_text(
        f'[platform]\ntarget = "platform.db"\nuser = "{USER_EMAIL}"\n'
    )
    return tmp_path


@pytest.fixture
def platform(platform_root: Path) -> Generator[LocalPlatformClient]:
    """LocalPlatformClient on the store the CLI in ``platform_root`` would open."""
    client = LocalPlatformClient(platform_root / "platform.db", user_email=USER_EMAIL)
    try:
        yield client
    finally:
        client.close()


@pytest.fixture
def org(platform: LocalPlatformClient) -> Organization:
    """The ``acme`` organization, targeted with no space selected."""
    organization = platform.create_organization("acme")
    platform.set_target(organization, None)
    return organization


@pytest.fixture
def _isolated_platform(platform_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp platform root so the CLI finds its ``spacectl.toml``.

    Use via ``@pytest.mark.usefixtures("_isolated_platform")`` on command test
    classes.
    """
    monkeypatch.chdir(platform_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def seed_space(
    platform: LocalPlatformClient,
    org: Organization,
    name: str,
    *,
    apps: Sequence[str] = (),
    instances: Sequence[str] = (),
) -> Space:
    """Create a space with the given app and service instance names."""
    space = platform.create_space(org, name)
    for app in apps:
        platform.create_app(space, app)
    for instance in instances:
        platform.create_service_instance(space, instance)
    platform.invalidate_organization(org)
    return space


class CannedPrompts:
    """PromptProvider with fixed answers that records every question asked.

    ``confirm`` is either one answer for every question or a mapping from
    question text to answer (missing questions answer ``None``). ``choice``
    is matched against the displayed label of each candidate.
    """

    def __init__(
        self,
        *,
        confirm: bool | None | dict[str, bool | None] = None,
        text: str | None = None,
        choice: str | None = None,
    ) -> None:
        self._confirm = confirm
        self._text = text
        self._choice = choice
        self.asked: list[str] = []
        self.notices: list[str] = []

    def notify(self, message: str) -> bool:
        self.notices.append(message)
        return False

    def confirm(self, question: str, *, default: bool = False) -> bool | None:
        self.asked.append(question)
        if isinstance(self._confirm, dict):
            return self._confirm.get(question)
        return self._confirm

    def text(self, question: str) -> str | None:
        self.asked.append(question)
        return self._text

    def choose(
        self, question: str, choices: Sequence[_T], *, display: Callable[[_T], str] = str
    ) -> _T | None:
        self.asked.append(question)
        for choice in choices:
            if display(choice) == self._choice:
                return choice
        return None


class RecordingPlatform:
    """In-memory PlatformClient that records every mutation and cache call.

    Failures are injected through ``failures``, keyed by
    ``(operation, name)``, e.g. ``("add_space_role", "manager")`` or
    ``("delete_space", "dev")``.
    """

    def __init__(
        self,
        *,
        user: User | None = User(guid="user-1", email=USER_EMAIL),
        api_version: int = 2,
        target: str | None = "memory://platform",
    ) -> None:
        self.target = target
        self.api_version = api_version
        self.user = user
        self.organizations: dict[str, Organization] = {}
        self.spaces: dict[str, list[Space]] = {}
        self.apps: dict[str, list[App]] = {}
        self.instances: dict[str, list[ServiceInstance]] = {}
        self.domains: dict[str, list[Domain]] = {}
        self.current: tuple[Organization | None, Space | None] = (None, None)
        self.next_current: tuple[Organization | None, Space | None] | None = None
        self.calls: list[tuple[str, ...]] = []
        self.failures: dict[tuple[str, str], SpaceCtlError] = {}

    # -- seeding ---------------------------------------------------------

    def add_organization(self, name: str) -> Organization:
        org = Organization(guid=f"org-{name}", name=name)
        self.organizations[name] = org
        self.spaces.setdefault(org.guid, [])
        return org

    def add_space(
        self,
        org: Organization,
        name: str,
        *,
        apps: Sequence[str] = (),
        instances: Sequence[str] = (),
        domains: Sequence[str] = (),
    ) -> Space:
        space = Space(guid=f"space-{org.name}-{name}", name=name, organization=org)
        self.spaces[org.guid].append(space)
        self.apps[space.guid] = [App(guid=f"app-{a}", name=a) for a in apps]
        self.instances[space.guid] = [
            ServiceInstance(guid=f"si-{i}", name=i) for i in instances
        ]
        self.domains[space.guid] = [Domain(guid=f"domain-{d}", name=d) for d in domains]
        return space

    def fail(self, operation: str, name: str, exc: SpaceCtlError | None = None) -> None:
        self.failures[(operation, name)] = exc or PlatformError(f"{operation} {name} refused")

    def mutations(self, *names: str) -> list[tuple[str, ...]]:
        """Recorded calls, optionally restricted to the given operation names."""
        return [c for c in self.calls if not names or c[0] in names]

    def _check(self, operation: str, name: str) -> None:
        exc = self.failures.get((operation, name))
        if exc is not None:
            raise exc

    # -- current context -------------------------------------------------

    def current_organization(self) -> Organization | None:
        return self.current[0]

    def current_space(self) -> Space | None:
        return self.current[1]

    def current_user(self) -> User | None:
        return self.user

    def set_target(self, organization: Organization | None, space: Space | None) -> None:
        self.calls.append(
            ("set_target", organization.name if organization else "", space.name if space else "")
        )
        self._check("set_target", space.name if space else "")
        self.current = (organization, space)

    # -- lookups ---------------------------------------------------------

    def organization_by_name(self, name: str) -> Organization | None:
        return self.organizations.get(name)

    def organization_spaces(
        self, organization: Organization, name: str | None = None
    ) -> list[Space]:
        found = list(self.spaces.get(organization.guid, []))
        if name is not None:
            found = [s for s in found if s.name == name]
        return found

    def space_by_name(self, name: str, organization: Organization | None = None) -> Space | None:
        orgs = [organization] if organization else list(self.organizations.values())
        for org in orgs:
            for space in self.spaces.get(org.guid, []):
                if space.name == name:
                    return space
        return None

    def space_apps(self, space: Space) -> list[App]:
        return list(self.apps.get(space.guid, []))

    def space_service_instances(self, space: Space) -> list[ServiceInstance]:
        return list(self.instances.get(space.guid, []))

    def space_domains(self, space: Space) -> list[Domain]:
        return list(self.domains.get(space.guid, []))

    # -- mutations -------------------------------------------------------

    def create_space(self, organization: Organization, name: str) -> Space:
        self.calls.append(("create_space", name))
        self._check("create_space", name)
        if any(s.name == name for s in self.spaces[organization.guid]):
            raise ConflictError(f"The space name is taken: {name}")
        return self.add_space(organization, name)

    def delete_space(self, space: Space) -> None:
        self.calls.append(("delete_space", space.name))
        self._check("delete_space", space.name)
        if self.apps.get(space.guid) or self.instances.get(space.guid):
            raise PlatformError(f"Space '{space.name}' is not empty")
        remaining = [s for s in self.spaces[space.organization.guid] if s != space]
        if len(remaining) == len(self.spaces[space.organization.guid]):
            raise NotFoundError("space", space.name)
        self.spaces[space.organization.guid] = remaining
        if self.next_current is not None:
            self.current = self.next_current

    def add_space_role(self, space: Space, role: Role, user: User) -> None:
        self.calls.append(("add_space_role", space.name, role.value))
        self._check("add_space_role", role.value)

    def delete_app(self, app: App) -> None:
        self.calls.append(("delete_app", app.name))
        self._check("delete_app", app.name)
        for guid, apps in self.apps.items():
            self.apps[guid] = [a for a in apps if a != app]

    def delete_service_instance(self, instance: ServiceInstance) -> None:
        self.calls.append(("delete_service_instance", instance.name))
        self._check("delete_service_instance", instance.name)
        for guid, instances in self.instances.items():
            self.instances[guid] = [i for i in instances if i != instance]

    # -- cache control ---------------------------------------------------

    def invalidate_organization(self, organization: Organization) -> None:
        self.calls.append(("invalidate_organization", organization.name))

    def invalidate(self) -> None:
        self.calls.append(("invalidate",))


def recording_platform(**kwargs: Any) -> RecordingPlatform:
    """RecordingPlatform with an ``acme`` organization already targeted."""
    client = RecordingPlatform(**kwargs)
    org = client.add_organization("acme")
    client.current = (org, None)
    return client
