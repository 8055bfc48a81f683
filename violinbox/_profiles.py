"""Save / load reusable option profiles as JSON."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from ._errors import ConfigurationError
from ._options import _Options

PROFILES_ENV = "VIOLINBOX_PROFILES_DIR"


def profiles_dir() -> Path:
    env = os.environ.get(PROFILES_ENV)
    if env:
        return Path(env)
    return Path.home() / ".violinbox" / "profiles"


def _ensure_dir() -> Path:
    path = profiles_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def list_profiles() -> list[str]:
    """Return sorted list of saved profile names (without .json)."""
    path = profiles_dir()
    if not path.is_dir():
        return []
    return sorted(p.stem for p in path.glob("*.json"))


def load_profile(name: str) -> dict[str, Any]:
    path = profiles_dir() / f"{name}.json"
    if not path.exists():
        raise ConfigurationError(f"no profile named {name!r} in {path.parent}")
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"profile {name!r} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"profile {name!r} must hold a JSON object")
    return data


def save_profile(name: str, options: dict[str, Any] | _Options) -> Path:
    """Write *options* (a dict or an options dataclass) as profile *name*."""
    if isinstance(options, _Options):
        options = options.to_dict()
    path = _ensure_dir() / f"{name}.json"
    path.write_text(json.dumps(options, indent=2))
    return path


def delete_profile(name: str) -> None:
    path = profiles_dir() / f"{name}.json"
    if path.exists():
        path.unlink()
