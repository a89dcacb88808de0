"""Session configuration and its JSON file."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).resolve().parent / "keyflow.config.json"

POLICIES = ["chunk", "scroll"]
SEGMENTATIONS = ["chunk", "wrap"]
DEFAULT_THEME = "slate"


@dataclass(frozen=True)
class SessionConfig:
    policy: str = "chunk"
    segmentation: str = "chunk"
    chunk_size: int = 10
    wrap_width: int = 60
    visible_width: int = 40
    # None means half the visible width
    scroll_threshold: Optional[int] = None
    shuffle: bool = True
    wordlist: Optional[Path] = None
    theme: str = DEFAULT_THEME

    def effective_threshold(self) -> int:
        if self.scroll_threshold is None:
            return max(1, self.visible_width // 2)
        return self.scroll_threshold


_FIELDS = {f.name for f in fields(SessionConfig)}


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Read the raw JSON config. Missing or unreadable files give {}."""
    path = CONFIG_PATH if path is None else Path(path)
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Could not load config from %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", path)
        return {}
    return data


def _choice(raw: Dict[str, Any], key: str, options: list, default: str) -> str:
    value = str(raw.get(key, default))
    if value not in options:
        logger.warning("Unknown %s %r; using %r", key, value, default)
        return default
    return value


def _int(raw: Dict[str, Any], key: str, default: Optional[int]) -> Optional[int]:
    value = raw.get(key, default)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid %s %r; using %r", key, value, default)
        return default


def _bool(raw: Dict[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key, default)
    if not isinstance(value, bool):
        logger.warning("Invalid %s %r; using %r", key, value, default)
        return default
    return value


def config_from_dict(raw: Dict[str, Any], themes: Optional[list] = None) -> SessionConfig:
    """Build a SessionConfig, falling back to defaults for unusable values.

    Out-of-range numbers are kept as given; the controller rejects them.
    """
    unknown = set(raw) - _FIELDS
    if unknown:
        logger.debug("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
    defaults = SessionConfig()
    theme = str(raw.get("theme", defaults.theme))
    if themes is not None and theme not in themes:
        logger.warning("Unknown theme %r; using %r", theme, DEFAULT_THEME)
        theme = DEFAULT_THEME
    wordlist = raw.get("wordlist")
    return SessionConfig(
        policy=_choice(raw, "policy", POLICIES, defaults.policy),
        segmentation=_choice(raw, "segmentation", SEGMENTATIONS, defaults.segmentation),
        chunk_size=_int(raw, "chunk_size", defaults.chunk_size),
        wrap_width=_int(raw, "wrap_width", defaults.wrap_width),
        visible_width=_int(raw, "visible_width", defaults.visible_width),
        scroll_threshold=_int(raw, "scroll_threshold", defaults.scroll_threshold),
        shuffle=_bool(raw, "shuffle", defaults.shuffle),
        wordlist=Path(wordlist) if wordlist else None,
        theme=theme,
    )


def with_overrides(config: SessionConfig, **overrides: Any) -> SessionConfig:
    """Apply command-line overrides, skipping the ones left unset."""
    changes = {k: v for k, v in overrides.items() if v is not None}
    return replace(config, **changes) if changes else config
