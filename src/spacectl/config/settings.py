"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by click
  2. Env vars     — ``SPACECTL_*`` prefix, ``__`` for nested sections
                    (``SPACECTL_PLATFORM__USER=me@example.com``)
  3. TOML file    — ``spacectl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from spacectl.config.discovery import find_config
from spacectl.config.models import PlatformConfig, SpacesConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a discovered ``spacectl.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
            except tomllib.TOMLDecodeError as exc:
                raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path is handed to settings_customise_sources through this
# thread-local while from_cli() constructs the object.
_tls = threading.local()


class SpacectlSettings(BaseSettings):
    """All settings for one spacectl invocation, frozen after construction.

    Attributes:
        config_root: Directory relative paths resolve against (parent of
            ``spacectl.toml``, or CWD when none was found).
        config_path: The TOML file in use, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SPACECTL_",
        "env_nested_delimiter": "__",
    }

    config_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False
    force: bool = False

    # --- TOML sections ---
    platform: PlatformConfig = Field(default_factory=PlatformConfig)
    spaces: SpacesConfig = Field(default_factory=SpacesConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        config_root: Path | None = None,
        **cli_flags: Any,
    ) -> SpacectlSettings:
        """Build settings for a CLI invocation.

        Uses *config_path* when given, else discovers ``spacectl.toml`` by
        walking up from *config_root* (or CWD). Flags left unset (False)
        do not shadow env vars or TOML.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                raise click.ClickException(f"Config file not found: {config_path}")
            toml_path = p
        else:
            toml_path = find_config(config_root)

        resolved_root = config_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            overrides = {k: v for k, v in cli_flags.items() if v}
            return cls(config_root=resolved_root, config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None

    @property
    def store_path(self) -> Path | None:
        """Absolute path of the targeted platform store, or None."""
        if not self.platform.target:
            return None
        path = Path(self.platform.target).expanduser()
        return path if path.is_absolute() else self.config_root / path
