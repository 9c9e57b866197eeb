"""SpaceService — show, list, create, take, and delete spaces.

Deletion pipeline, per space in input order:
CONFIRM → CLEAR → DELETE, then once for the batch: INVALIDATE → REPAIR.

- CONFIRM: ``should_delete(force, answer)``; a declined space is skipped
  with no side effects.
- CLEAR: a non-empty space is emptied only when forced or when the user
  grants ``recursive``; otherwise it is aborted and never deleted.
- DELETE: failures are recorded for that space; the batch continues.
- REPAIR: an organization left with no spaces gets a warning and no
  context switch; otherwise, if the current space was deleted, the
  context is re-targeted within the organization.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

from spacectl.domain.decisions import ClearOutcome, needs_clear, should_delete
from spacectl.domain.errors import PreconditionError, SelectionError, SpaceCtlError
from spacectl.domain.filters import filter_spaces
from spacectl.domain.models import Organization, Role, RoleFlags, Space
from spacectl.services.base import BaseService
from spacectl.services.resolve import (
    resolve_organization,
    resolve_space,
    resolve_space_or_current,
)
from spacectl.services.result import ServiceResult
from spacectl.services.target import TargetService
from spacectl.services.telemetry import trace_span, traced

log = structlog.get_logger(__name__)


def name_list(items: Sequence[Any]) -> str:
    """Comma-separated names, or ``none``."""
    return ", ".join(item.name for item in items) or "none"


class SpaceService(BaseService):
    """Space lifecycle operations against a platform client."""

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @traced
    def show(
        self,
        space: str | None = None,
        *,
        organization: str | None = None,
        full: bool = False,
    ) -> ServiceResult:
        """Describe one space, defaulting to the current one."""
        op = "show_space"
        try:
            self._check_preconditions()
            org = resolve_organization(self._client, organization, self._session)
            found = resolve_space_or_current(self._client, space, org, self._session)
            if found is None:
                if self._quiet:
                    return ServiceResult(ok=True, op=op)
                raise SelectionError("NO_CURRENT_SPACE", "No current space.")
            return ServiceResult(ok=True, op=op, data=self._describe(found, full=full))
        except SpaceCtlError as exc:
            return ServiceResult.failure(op, exc)

    @traced
    def list_spaces(
        self,
        organization: str | None = None,
        *,
        name: str | None = None,
        one_line: bool = False,
        full: bool = False,
    ) -> ServiceResult:
        """List the spaces of an organization, optionally filtered by a name regex."""
        op = "list_spaces"
        try:
            self._check_preconditions()
            org = self._require_organization(organization)
            found = filter_spaces(self._client.organization_spaces(org), name)
        except SpaceCtlError as exc:
            return ServiceResult.failure(op, exc)

        items = [self._describe(s, full=full) for s in found]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "organization": org.name,
                "items": items,
                "count": len(items),
                "one_line": one_line,
                "full": full,
            },
        )

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    @traced
    def create(
        self,
        name: str | None = None,
        *,
        organization: str | None = None,
        target: bool = False,
        roles: RoleFlags | None = None,
    ) -> ServiceResult:
        """Create a space, grant the acting user its roles, optionally target it.

        Role grants run after the space exists; a failed grant is reported
        as a warning and does not undo the creation.
        """
        op = "create_space"
        warnings: list[str] = []
        try:
            self._check_preconditions()
            if name is None:
                name = self._prompts.text("Name")
            if not name:
                raise SelectionError("MISSING_NAME", "A space name is required.")
            org = self._require_organization(organization)
            space = self._client.create_space(org, name)
        except SpaceCtlError as exc:
            return ServiceResult.failure(op, exc)

        log.info("space.created", space=space.name, organization=org.name)
        granted, failed = self._grant_roles(space, roles or RoleFlags(), warnings)

        data: dict[str, Any] = {
            "name": space.name,
            "guid": space.guid,
            "organization": org.name,
            "roles_granted": granted,
            "roles_failed": failed,
            "targeted": False,
        }
        if target:
            try:
                self._targets().target(org, space)
                data["targeted"] = True
            except SpaceCtlError as exc:
                warnings.append(f"Could not switch to space '{space.name}': {exc.message}")
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def _grant_roles(
        self, space: Space, flags: RoleFlags, warnings: list[str]
    ) -> tuple[list[str], list[dict[str, str]]]:
        """Grant each selected role in order manager, developer, auditor.

        Each grant stands alone: a failure is recorded and the next role is
        still attempted. No retries.
        """
        user = self._session.user
        granted: list[str] = []
        failed: list[dict[str, str]] = []
        for role in flags.selected():
            with trace_span(f"grant_{role.value}") as span:
                try:
                    if user is None:
                        raise PreconditionError("NOT_LOGGED_IN", "Please log in first.")
                    self._client.add_space_role(space, role, user)
                except SpaceCtlError as exc:
                    failed.append({"role": role.value, "message": exc.message})
                    warnings.append(f"Could not add you as {_article(role)}: {exc.message}")
                    log.info("role.grant_failed", space=space.name, role=role.value)
                    if span:
                        span.annotate("ok", False)
                    continue
                granted.append(role.value)
        return granted, failed

    @traced
    def take_or_create(self, name: str) -> ServiceResult:
        """Switch to space *name* in the current organization, creating it if missing."""
        op = "take_space"
        try:
            self._check_preconditions()
            existing = self._client.space_by_name(name, self._session.organization)
            if existing is not None:
                data = self._targets().target(existing.organization, existing)
        except SpaceCtlError as exc:
            return ServiceResult.failure(op, exc)

        if existing is None:
            created = self.create(name, target=True)
            data = {**created.data, "created": True} if created.ok else created.data
            return created.model_copy(update={"op": op, "data": data})

        data.update(name=existing.name, created=False)
        return ServiceResult(ok=True, op=op, data=data)

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    @traced
    def delete(
        self,
        names: Sequence[str] = (),
        *,
        organization: str | None = None,
        recursive: bool | None = None,
        warn: bool = True,
    ) -> ServiceResult:
        """Delete spaces by name within an organization.

        Args:
            names: Spaces to delete, processed in order. Empty means ask.
            organization: Organization name; defaults to the current one.
            recursive: Pre-answer for emptying non-empty spaces. ``None``
                asks per space.
            warn: Warn when the organization is left without spaces.
        """
        op = "delete_space"
        warnings: list[str] = []
        try:
            self._check_preconditions()
            org = self._require_organization(organization)
            spaces = self._select_for_deletion(names, org)
        except SpaceCtlError as exc:
            return ServiceResult.failure(op, exc)

        deleted: list[str] = []
        skipped: list[str] = []
        aborted: list[str] = []
        errors: list[dict[str, str]] = []
        deleted_current = False

        for space in spaces:
            with trace_span(f"delete_{space.name}") as span:
                answer = None
                if not self._force:
                    answer = self._prompts.confirm(f"Really delete {space.name}?", default=False)
                if not should_delete(self._force, answer):
                    skipped.append(space.name)
                    continue

                is_current = space == self._session.space
                try:
                    outcome = self._clear_space(space, recursive=recursive, warnings=warnings)
                    if outcome is ClearOutcome.ABORTED:
                        aborted.append(space.name)
                        continue
                    self._client.delete_space(space)
                except SpaceCtlError as exc:
                    errors.append({"space": space.name, "code": exc.code, "message": exc.message})
                    warnings.append(f"Could not delete space '{space.name}': {exc.message}")
                    log.info("space.delete_failed", space=space.name, code=exc.code)
                    continue

                deleted_current = deleted_current or is_current
                deleted.append(space.name)
                log.info("space.deleted", space=space.name, organization=org.name)
                if span:
                    span.annotate("current", is_current)

        self._client.invalidate_organization(org)
        remaining = self._client.organization_spaces(org)

        retarget: dict[str, Any] | None = None
        if not remaining:
            if warn:
                warnings.append(f"There are no longer any spaces in {org.name}.")
                warnings.append("You may want to create one with create-space.")
        elif deleted_current:
            self._client.invalidate()
            current_org = self._client.current_organization() or org
            retarget = self._targets().retarget(current_org)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "organization": org.name,
                "deleted": deleted,
                "skipped": skipped,
                "aborted": aborted,
                "errors": errors,
                "remaining": [s.name for s in remaining],
                "retarget": retarget,
            },
            warnings=warnings,
        )

    def _select_for_deletion(self, names: Sequence[str], org: Organization) -> list[Space]:
        """Resolve every name up front; with no names, ask which space."""
        if names:
            return [resolve_space(self._client, n, org) for n in names]

        candidates = self._client.organization_spaces(org)
        if not candidates:
            raise SelectionError("NO_SPACES", "No spaces.")
        picked = self._prompts.choose(
            f"Which space in {org.name}?", candidates, display=lambda s: s.name
        )
        if picked is None:
            raise SelectionError("NO_SPACE_SELECTED", "No space specified.")
        return [picked]

    def _clear_space(
        self, space: Space, *, recursive: bool | None, warnings: list[str]
    ) -> ClearOutcome:
        """Empty *space* of apps and service instances before it is deleted.

        Without force, the contents of a non-empty space are shown before
        asking, and the space is only cleared when ``recursive`` is granted;
        otherwise the outcome is ABORTED. Contents the prompt provider could
        not show are kept as a warning on the result.
        """
        apps = self._client.space_apps(space)
        instances = self._client.space_service_instances(space)
        if not needs_clear(len(apps), len(instances)):
            return ClearOutcome.CLEARED

        if not self._force:
            report = (
                f"Space '{space.name}' is not empty! "
                f"apps: {name_list(apps)}; service instances: {name_list(instances)}"
            )
            if not self._prompts.notify(report):
                warnings.append(report)
            granted = recursive
            if granted is None:
                granted = self._prompts.confirm(
                    f"Delete EVERYTHING in {space.name}?", default=False
                )
            if granted is not True:
                log.info("space.clear_aborted", space=space.name)
                return ClearOutcome.ABORTED

        for app in apps:
            self._client.delete_app(app)
        for instance in instances:
            self._client.delete_service_instance(instance)
        log.info(
            "space.cleared", space=space.name, apps=len(apps), service_instances=len(instances)
        )
        return ClearOutcome.CLEARED

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_organization(self, name: str | None) -> Organization:
        org = resolve_organization(self._client, name, self._session)
        if org is None:
            raise SelectionError("NO_CURRENT_ORGANIZATION", "No current organization.")
        return org

    def _targets(self) -> TargetService:
        return TargetService(self._client, session=self._session, prompts=self._prompts)

    def _describe(self, space: Space, *, full: bool) -> dict[str, Any]:
        apps = self._client.space_apps(space)
        instances = self._client.space_service_instances(space)
        domains = self._client.space_domains(space)
        data: dict[str, Any] = {
            "name": space.name,
            "guid": space.guid,
            "organization": space.organization.name,
            "domains": [d.name for d in domains],
        }
        if full:
            data["apps"] = [a.model_dump(exclude={"guid"}) for a in apps]
            data["services"] = [i.model_dump(exclude={"guid"}) for i in instances]
        else:
            data["apps"] = [a.name for a in apps]
            data["services"] = [i.name for i in instances]
        return data


def _article(role: Role) -> str:
    return f"an {role.value}" if role is Role.AUDITOR else f"a {role.value}"
