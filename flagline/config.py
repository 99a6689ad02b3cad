"""Presentation settings for usage output, loaded from JSON files."""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

__all__ = [
    "FlaglineConfig",
    "UsageConfig",
    "get_runtime_config",
    "reload_config",
]

logger = logging.getLogger(__name__)

_CONFIG_ENV = "FLAGLINE_CONFIG"
_CONFIG_HOME_ENV = "FLAGLINE_CONFIG_HOME"


def _global_config_roots() -> List[Path]:
    roots: List[Path] = []
    env_root = os.getenv(_CONFIG_HOME_ENV)
    if env_root:
        roots.append(Path(env_root).expanduser())
    home = Path.home()
    if sys.platform == "win32":
        base = Path(os.getenv("APPDATA", home / "AppData" / "Roaming"))
        roots.append(base / "flagline")
    elif sys.platform == "darwin":
        roots.append(home / "Library/Application Support" / "flagline")
    else:
        xdg = Path(os.getenv("XDG_CONFIG_HOME", home / ".config"))
        roots.extend([xdg / "flagline", home / ".config/flagline"])
    deduped: List[Path] = []
    for root in roots:
        expanded = root.expanduser()
        if expanded not in deduped:
            deduped.append(expanded)
    return deduped


def _default_config_locations() -> List[Path]:
    locations = [
        Path("config/flagline.local.json"),
        Path("config/flagline.json"),
        Path("flagline.json"),
    ]
    for root in _global_config_roots():
        locations.append(root / "config.json")
    seen: List[Path] = []
    for candidate in locations:
        if candidate not in seen:
            seen.append(candidate)
    return seen


def _coerce_bool(raw: Any) -> Optional[bool]:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in {"1", "true", "yes", "on", "always"}:
            return True
        if lowered in {"0", "false", "no", "off", "never"}:
            return False
    return None


def _coerce_width(raw: Any) -> int:
    if isinstance(raw, bool):
        return 0
    try:
        width = int(raw)
    except (TypeError, ValueError):
        return 0
    return max(width, 0)


@dataclass(slots=True)
class UsageConfig:
    # None means auto-detect from NO_COLOR/FORCE_COLOR and the stream
    color: Optional[bool] = None
    help_width: int = 0


@dataclass(slots=True)
class FlaglineConfig:
    usage: UsageConfig = field(default_factory=UsageConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FlaglineConfig":
        usage_data = data.get("usage") if isinstance(data, dict) else None
        if not isinstance(usage_data, dict):
            usage_data = {}
        usage = UsageConfig(
            color=_coerce_bool(usage_data.get("color")),
            help_width=_coerce_width(usage_data.get("help_width", 0)),
        )
        return cls(usage=usage)


def _candidate_paths(explicit: Optional[Path]) -> Iterable[Path]:
    if explicit is not None:
        yield explicit
    env_path = os.getenv(_CONFIG_ENV)
    if env_path:
        yield Path(env_path).expanduser()
    yield from _default_config_locations()


def _load_config(path: Optional[Path] = None) -> FlaglineConfig:
    for candidate in _candidate_paths(path):
        try:
            if not candidate.exists():
                continue
            data = json.loads(candidate.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.debug("Skipping unreadable config %s: %s", candidate, exc)
            continue
        if isinstance(data, dict):
            logger.debug("Loaded flagline config from %s", candidate)
            return FlaglineConfig.from_dict(data)
    return FlaglineConfig()


_explicit_path: Optional[Path] = None


@lru_cache(maxsize=1)
def get_runtime_config() -> FlaglineConfig:
    """Return the cached runtime configuration.

    A path passed to ``reload_config`` stays in effect for later calls.
    """

    return _load_config(_explicit_path)


def reload_config(path: Optional[Path] = None) -> FlaglineConfig:
    """Reload configuration from disk and make ``path`` the first candidate.

    Calling it without a path returns to the environment and default
    locations.
    """

    global _explicit_path
    _explicit_path = path
    get_runtime_config.cache_clear()
    return get_runtime_config()
