"""LocalPlatformClient — a SQLite-backed control plane implementing PlatformClient.

Used for local development, demos, and the test suite. Behaves like a
remote control plane where it matters to the space workflows:

- Space names are unique per organization; duplicates raise ``ConflictError``.
- A space that still owns apps or service instances cannot be deleted.
- Organization space lists are cached until explicitly invalidated, so
  callers must invalidate after mutating to observe the new state.
- The current target (organization/space) is stored per user.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError

from spacectl.domain.errors import ConflictError, NotFoundError, PlatformError
from spacectl.domain.models import (
    App,
    Domain,
    Organization,
    Role,
    ServiceInstance,
    Space,
    User,
)
from spacectl.infrastructure.database.engine import init_database
from spacectl.infrastructure.database.schema import (
    apps,
    domains,
    organizations,
    service_instances,
    space_domains,
    space_roles,
    spaces,
    targets,
    users,
)

if TYPE_CHECKING:
    from sqlalchemy import Row
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

_UNSET: Any = object()


def _new_guid() -> str:
    return uuid.uuid4().hex


def _now() -> str:
    return datetime.now(UTC).isoformat()


class LocalPlatformClient:
    """PlatformClient backed by a SQLite database file."""

    def __init__(
        self,
        db_path: Path,
        *,
        user_email: str | None = None,
        api_version: int = 2,
    ) -> None:
        self._db_path = db_path
        self._user_email = user_email
        self._api_version = api_version
        self._engine: Engine = init_database(db_path)
        self._space_cache: dict[str, list[Space]] = {}
        self._target_cache: Any = _UNSET

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def target(self) -> str | None:
        return str(self._db_path)

    @property
    def api_version(self) -> int:
        return self._api_version

    def close(self) -> None:
        """Dispose the engine and release the database file."""
        self._engine.dispose()

    # ------------------------------------------------------------------
    # Current context
    # ------------------------------------------------------------------

    def current_user(self) -> User | None:
        if not self._user_email:
            return None
        return self.ensure_user(self._user_email)

    def current_organization(self) -> Organization | None:
        org, _space = self._current_target()
        return org

    def current_space(self) -> Space | None:
        _org, space = self._current_target()
        return space

    def set_target(self, organization: Organization | None, space: Space | None) -> None:
        user = self.current_user()
        if user is None:
            raise PlatformError("Cannot set a target without a logged-in user")
        values = {
            "organization_guid": organization.guid if organization else None,
            "space_guid": space.guid if space else None,
            "modified": _now(),
        }
        with self._engine.begin() as conn:
            conn.execute(delete(targets).where(targets.c.user_guid == user.guid))
            conn.execute(insert(targets).values(user_guid=user.guid, **values))
        self._target_cache = (organization, space)
        logger.debug(
            "Target set: org=%s space=%s",
            organization.name if organization else None,
            space.name if space else None,
        )

    def _current_target(self) -> tuple[Organization | None, Space | None]:
        if self._target_cache is not _UNSET:
            return self._target_cache
        user = self.current_user()
        result: tuple[Organization | None, Space | None] = (None, None)
        if user is not None:
            with self._engine.connect() as conn:
                row = conn.execute(select(targets).where(targets.c.user_guid == user.guid)).first()
            if row is not None:
                org = self._organization_by_guid(row.organization_guid)
                space = self._space_by_guid(row.space_guid)
                result = (org, space)
        self._target_cache = result
        return result

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def organization_by_name(self, name: str) -> Organization | None:
        with self._engine.connect() as conn:
            row = conn.execute(select(organizations).where(organizations.c.name == name)).first()
        return _organization(row) if row is not None else None

    def organization_spaces(
        self, organization: Organization, name: str | None = None
    ) -> list[Space]:
        if name is not None:
            return self._load_spaces(organization, name=name)
        cached = self._space_cache.get(organization.guid)
        if cached is None:
            cached = self._load_spaces(organization)
            self._space_cache[organization.guid] = cached
        return list(cached)

    def space_by_name(self, name: str, organization: Organization | None = None) -> Space | None:
        if organization is not None:
            found = self._load_spaces(organization, name=name)
            return found[0] if found else None
        stmt = (
            select(spaces, organizations.c.name.label("organization_name"))
            .join(organizations, spaces.c.organization_guid == organizations.c.guid)
            .where(spaces.c.name == name)
            .order_by(organizations.c.name)
        )
        with self._engine.connect() as conn:
            row = conn.execute(stmt).first()
        if row is None:
            return None
        org = Organization(guid=row.organization_guid, name=row.organization_name)
        return Space(guid=row.guid, name=row.name, organization=org)

    def space_apps(self, space: Space) -> list[App]:
        stmt = select(apps).where(apps.c.space_guid == space.guid).order_by(apps.c.name)
        with self._engine.connect() as conn:
            return [_app(r) for r in conn.execute(stmt)]

    def space_service_instances(self, space: Space) -> list[ServiceInstance]:
        stmt = (
            select(service_instances)
            .where(service_instances.c.space_guid == space.guid)
            .order_by(service_instances.c.name)
        )
        with self._engine.connect() as conn:
            return [_service_instance(r) for r in conn.execute(stmt)]

    def space_domains(self, space: Space) -> list[Domain]:
        stmt = (
            select(domains)
            .join(space_domains, space_domains.c.domain_guid == domains.c.guid)
            .where(space_domains.c.space_guid == space.guid)
            .order_by(domains.c.name)
        )
        with self._engine.connect() as conn:
            return [Domain(guid=r.guid, name=r.name) for r in conn.execute(stmt)]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_space(self, organization: Organization, name: str) -> Space:
        guid = _new_guid()
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    insert(spaces).values(
                        guid=guid,
                        name=name,
                        organization_guid=organization.guid,
                        created=_now(),
                    )
                )
        except IntegrityError as exc:
            msg = f"The space name is taken: {name}"
            raise ConflictError(msg, organization=organization.name, name=name) from exc
        return Space(guid=guid, name=name, organization=organization)

    def delete_space(self, space: Space) -> None:
        try:
            with self._engine.begin() as conn:
                result = conn.execute(delete(spaces).where(spaces.c.guid == space.guid))
        except IntegrityError as exc:
            msg = f"Space '{space.name}' is not empty"
            raise PlatformError(msg, space=space.name) from exc
        if result.rowcount == 0:
            raise NotFoundError("space", space.name)

    def add_space_role(self, space: Space, role: Role, user: User) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    insert(space_roles).values(
                        space_guid=space.guid,
                        user_guid=user.guid,
                        role=role.value,
                        granted=_now(),
                    )
                )
        except IntegrityError as exc:
            msg = f"Could not add {user.email} as {role.value} of space '{space.name}'"
            raise PlatformError(msg, role=role.value, space=space.name) from exc

    def delete_app(self, app: App) -> None:
        with self._engine.begin() as conn:
            result = conn.execute(delete(apps).where(apps.c.guid == app.guid))
        if result.rowcount == 0:
            raise NotFoundError("app", app.name)

    def delete_service_instance(self, instance: ServiceInstance) -> None:
        with self._engine.begin() as conn:
            result = conn.execute(
                delete(service_instances).where(service_instances.c.guid == instance.guid)
            )
        if result.rowcount == 0:
            raise NotFoundError("service_instance", instance.name)

    # ------------------------------------------------------------------
    # Cache control
    # ------------------------------------------------------------------

    def invalidate_organization(self, organization: Organization) -> None:
        self._space_cache.pop(organization.guid, None)

    def invalidate(self) -> None:
        self._space_cache.clear()
        self._target_cache = _UNSET

    # ------------------------------------------------------------------
    # Seeding (fixtures, demos)
    # ------------------------------------------------------------------

    def ensure_user(self, email: str) -> User:
        with self._engine.begin() as conn:
            row = conn.execute(select(users).where(users.c.email == email)).first()
            if row is None:
                guid = _new_guid()
                conn.execute(insert(users).values(guid=guid, email=email))
                return User(guid=guid, email=email)
        return User(guid=row.guid, email=row.email)

    def create_organization(self, name: str) -> Organization:
        guid = _new_guid()
        try:
            with self._engine.begin() as conn:
                conn.execute(insert(organizations).values(guid=guid, name=name, created=_now()))
        except IntegrityError as exc:
            raise ConflictError(f"The organization name is taken: {name}", name=name) from exc
        return Organization(guid=guid, name=name)

    def create_app(
        self,
        space: Space,
        name: str,
        *,
        state: str = "STOPPED",
        instances: int = 1,
        urls: list[str] | None = None,
    ) -> App:
        guid = _new_guid()
        urls = urls or []
        with self._engine.begin() as conn:
            conn.execute(
                insert(apps).values(
                    guid=guid,
                    name=name,
                    space_guid=space.guid,
                    state=state,
                    instances=instances,
                    urls=json.dumps(urls),
                )
            )
        return App(guid=guid, name=name, state=state, instances=instances, urls=urls)

    def create_service_instance(
        self, space: Space, name: str, *, service: str = "", plan: str = ""
    ) -> ServiceInstance:
        guid = _new_guid()
        with self._engine.begin() as conn:
            conn.execute(
                insert(service_instances).values(
                    guid=guid, name=name, space_guid=space.guid, service=service, plan=plan
                )
            )
        return ServiceInstance(guid=guid, name=name, service=service, plan=plan)

    def add_domain(self, space: Space, name: str) -> Domain:
        with self._engine.begin() as conn:
            row = conn.execute(select(domains).where(domains.c.name == name)).first()
            guid = row.guid if row is not None else _new_guid()
            if row is None:
                conn.execute(insert(domains).values(guid=guid, name=name))
            conn.execute(insert(space_domains).values(space_guid=space.guid, domain_guid=guid))
        return Domain(guid=guid, name=name)

    def space_roles(self, space: Space) -> list[tuple[str, str]]:
        """(email, role) pairs granted on *space*, in grant order."""
        stmt = (
            select(users.c.email, space_roles.c.role)
            .join(users, users.c.guid == space_roles.c.user_guid)
            .where(space_roles.c.space_guid == space.guid)
            .order_by(space_roles.c.id)
        )
        with self._engine.connect() as conn:
            return [(r.email, r.role) for r in conn.execute(stmt)]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _load_spaces(self, organization: Organization, name: str | None = None) -> list[Space]:
        stmt = select(spaces).where(spaces.c.organization_guid == organization.guid)
        if name is not None:
            stmt = stmt.where(spaces.c.name == name)
        with self._engine.connect() as conn:
            rows = conn.execute(stmt.order_by(spaces.c.name)).fetchall()
        return [Space(guid=r.guid, name=r.name, organization=organization) for r in rows]

    def _organization_by_guid(self, guid: str | None) -> Organization | None:
        if guid is None:
            return None
        with self._engine.connect() as conn:
            row = conn.execute(select(organizations).where(organizations.c.guid == guid)).first()
        return _organization(row) if row is not None else None

    def _space_by_guid(self, guid: str | None) -> Space | None:
        if guid is None:
            return None
        with self._engine.connect() as conn:
            row = conn.execute(select(spaces).where(spaces.c.guid == guid)).first()
        if row is None:
            return None
        org = self._organization_by_guid(row.organization_guid)
        if org is None:
            return None
        return Space(guid=row.guid, name=row.name, organization=org)


def _organization(row: Row[Any]) -> Organization:
    return Organization(guid=row.guid, name=row.name)


def _app(row: Row[Any]) -> App:
    return App(
        guid=row.guid,
        name=row.name,
        state=row.state,
        instances=row.instances,
        urls=json.loads(row.urls) if row.urls else [],
    )


def _service_instance(row: Row[Any]) -> ServiceInstance:
    return ServiceInstance(guid=row.guid, name=row.name, service=row.service, plan=row.plan)
