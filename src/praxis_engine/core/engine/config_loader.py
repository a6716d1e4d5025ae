"""
YAML → user defaults loader.

Loads CLI defaults (preferences and profile fields) from defaults.yaml
(bundled with the package) and optionally merges user overrides from
~/.praxis/config.yaml.  Set PRAXIS_HOME to use a directory other than
~/.praxis.

Usage:
    from praxis_engine.core.engine.config_loader import load_user_defaults
    cfg = load_user_defaults()
    goal = cfg.get("preferences", {}).get("goal", "hybrid")

The engine itself never reads configuration; only the CLI does, and it
passes explicit values into every engine call.  If the user file has parse
errors, a warning is issued and the file is ignored.
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path
from typing import Any

import yaml

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML mapping; warn and return {} if it cannot be read."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"praxis: ignoring {path} ({exc})", stacklevel=2)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        warnings.warn(f"praxis: ignoring {path} (top level is not a mapping)", stacklevel=2)
        return {}
    return data


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def praxis_home() -> Path:
    """Return the per-user directory ($PRAXIS_HOME or ~/.praxis)."""
    override = os.environ.get("PRAXIS_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".praxis"


def package_root() -> Path:
    """Return src/praxis_engine/ (config_loader.py lives three levels below)."""
    return Path(__file__).parent.parent.parent


def get_bundled_defaults_path() -> Path:
    """Return the path to the bundled defaults.yaml."""
    return package_root() / "defaults.yaml"


def get_user_config_path() -> Path | None:
    """Return the user's config.yaml if it exists, else None."""
    p = praxis_home() / "config.yaml"
    return p if p.exists() else None


def load_user_defaults() -> dict[str, Any]:
    """
    Load and merge CLI defaults from YAML sources.

    Load order (later overrides earlier):
    1. Bundled src/praxis_engine/defaults.yaml
    2. User override at ~/.praxis/config.yaml

    Returns:
        Merged dict with "preferences" and "profile" sections.
    """
    config = load_yaml_file(get_bundled_defaults_path())

    user = get_user_config_path()
    if user is not None:
        user_cfg = load_yaml_file(user)
        if user_cfg:
            config = deep_merge(config, user_cfg)

    return config
