"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``spacectl.toml`` only holds
overrides. A working setup needs ``[platform] target`` and ``user``.
"""

from __future__ import annotations

from pydantic import BaseModel

from spacectl.domain.models import RoleFlags


class PlatformConfig(BaseModel):
    """[platform] section."""

    model_config = {"frozen": True}

    # Path to the local platform store; relative paths resolve against the
    # directory holding spacectl.toml. None means no target selected.
    target: str | None = None
    user: str | None = None
    api_version: int = 2


class SpacesConfig(BaseModel):
    """[spaces] section."""

    model_config = {"frozen": True}

    default_manager: bool = True
    default_developer: bool = True
    default_auditor: bool = False
    warn_on_empty: bool = True

    def role_flags(
        self,
        *,
        manager: bool | None = None,
        developer: bool | None = None,
        auditor: bool | None = None,
    ) -> RoleFlags:
        """Role flags with per-command overrides applied over these defaults."""
        return RoleFlags(
            manager=self.default_manager if manager is None else manager,
            developer=self.default_developer if developer is None else developer,
            auditor=self.default_auditor if auditor is None else auditor,
        )
