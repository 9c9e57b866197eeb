"""TargetService — read and switch the current organization/space."""

from __future__ import annotations

from typing import Any

import structlog

from spacectl.domain.errors import SelectionError, SpaceCtlError
from spacectl.domain.models import Organization, Space
from spacectl.services.base import BaseService
from spacectl.services.resolve import resolve_organization, resolve_space
from spacectl.services.result import ServiceResult
from spacectl.services.telemetry import traced

log = structlog.get_logger(__name__)


class TargetService(BaseService):
    """Shows the current context and applies context switches."""

    @traced
    def show(self) -> ServiceResult:
        session = self._session
        return ServiceResult(
            ok=True,
            op="target",
            data={
                "organization": session.organization.name if session.organization else None,
                "space": session.space.name if session.space else None,
                "user": session.user.email if session.user else None,
            },
        )

    @traced
    def switch(
        self, organization: str | None = None, space: str | None = None
    ) -> ServiceResult:
        """Target *organization* and *space* by name.

        An omitted organization keeps the current one. An omitted space is
        picked from the organization: its only space, or the user's choice
        when there are several.
        """
        op = "target"
        if organization is None and space is None:
            return self.show()
        try:
            self._check_preconditions()
            org = resolve_organization(self._client, organization, self._session)
            if org is None:
                raise SelectionError("NO_CURRENT_ORGANIZATION", "No current organization.")
            chosen = resolve_space(self._client, space, org) if space else self._pick_space(org)
            self._client.set_target(org, chosen)
        except SpaceCtlError as exc:
            return ServiceResult.failure(op, exc)
        return ServiceResult(ok=True, op=op, data=self._target_data(org, chosen))

    def target(self, organization: Organization, space: Space | None) -> dict[str, Any]:
        """Point the current context at *organization* / *space*."""
        self._client.set_target(organization, space)
        data = self._target_data(organization, space)
        log.debug("target.switched", organization=data["organization"], space=data["space"])
        return data

    def retarget(self, organization: Organization) -> dict[str, Any]:
        """Re-select a space in *organization* after the current one went away.

        Which space becomes current is not inferred: a lone space is taken,
        several are offered to the user, and without an answer the space is
        left unset.
        """
        return self.target(organization, self._pick_space(organization))

    def _pick_space(self, organization: Organization) -> Space | None:
        candidates = self._client.organization_spaces(organization)
        if len(candidates) == 1:
            return candidates[0]
        if not candidates:
            return None
        return self._prompts.choose(
            f"Which space in {organization.name}?", candidates, display=lambda s: s.name
        )

    def _target_data(self, organization: Organization, space: Space | None) -> dict[str, Any]:
        user = self._session.user
        return {
            "organization": organization.name,
            "space": space.name if space else None,
            "user": user.email if user else None,
        }
