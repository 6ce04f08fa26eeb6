from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

CONFIG_DIR = Path.home() / ".wireview"
CONFIG_FILE = CONFIG_DIR / "wireview.cfg"
CONFIG_ENV = "WIREVIEW_CONFIG"
DEFAULT_CONFIG: Dict[str, Any] = {
    "_comment": "Surface size in pixels, initial field of view in degrees (15-180), background color.",
    "width": 800,
    "height": 600,
    "fov": 90.0,
    "background": "white",
}


@dataclass(frozen=True)
class ViewerSettings:
    """Resolved settings from wireview.cfg."""

    width: int
    height: int
    fov: float
    background: str


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return CONFIG_FILE


def ensure_user_config(path: Path | None = None) -> None:
    """Ensure the config file exists with sane defaults."""

    path = path or config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    if path.exists():
        return

    try:
        path.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config(path: Path) -> Dict[str, Any]:
    ensure_user_config(path)
    try:
        loaded = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    if not isinstance(loaded, dict):
        return DEFAULT_CONFIG.copy()
    return loaded


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _fov(value: Any, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if 15.0 <= number <= 180.0 else default


def get_viewer_settings(path: Path | None = None) -> ViewerSettings:
    """Return the configured surface size, field of view and background."""

    raw = _load_user_config(path or config_path())
    background = raw.get("background", DEFAULT_CONFIG["background"])
    return ViewerSettings(
        width=_positive_int(raw.get("width"), DEFAULT_CONFIG["width"]),
        height=_positive_int(raw.get("height"), DEFAULT_CONFIG["height"]),
        fov=_fov(raw.get("fov"), DEFAULT_CONFIG["fov"]),
        background=str(background) if isinstance(background, str) and background else DEFAULT_CONFIG["background"],
    )
