"""Config file discovery.

Walk-up finder locates spacectl.toml, similar to how git finds .git/.
Supports the SPACECTL_CONFIG env var and the --config CLI flag.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "spacectl.toml"
CONFIG_ENV_VAR = "SPACECTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for spacectl.toml.

    SPACECTL_CONFIG wins when set; a path there that does not exist
    means no config at all rather than falling back to the walk.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
