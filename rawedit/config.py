"""Optional JSON preferences for the editor.

Only the startup banner is configurable. All access is defensive: a missing,
unreadable, or malformed config file falls back to defaults, and nothing is
ever written back.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from . import __version__

APP_NAME = "rawedit"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_BANNER = f"{APP_NAME} -- version {__version__}"


@dataclass(frozen=True)
class EditorConfig:
    banner: str | None = DEFAULT_BANNER


def load_config() -> dict[str, object]:
    """Load the JSON config object, or ``{}`` when it is missing or invalid."""
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def load_banner() -> str | None:
    """Return the configured banner.

    A string overrides the default, ``null`` or ``false`` disables the banner,
    and anything else (including a blank string) keeps the default.
    """
    data = load_config()
    if "banner" not in data:
        return DEFAULT_BANNER
    value = data["banner"]
    if value is None or value is False:
        return None
    if isinstance(value, str) and value.strip():
        return value
    return DEFAULT_BANNER


def resolve_config(banner: str | None = None, no_banner: bool = False) -> EditorConfig:
    """Merge CLI overrides on top of the config file."""
    if no_banner:
        return EditorConfig(banner=None)
    if banner is not None:
        return EditorConfig(banner=banner or None)
    return EditorConfig(banner=load_banner())
