"""Settings for devpulse, kept in ~/.devpulse/config.json.

The only setting today is sessions_file, the export the CLI and MCP server read.
"""
from __future__ import annotations

import json
from pathlib import Path

DEFAULT_CONFIG_PATH: Path = Path.home() / ".devpulse" / "config.json"
SESSIONS_FILE_KEY = "sessions_file"


def _config_file(config_path: Path | None) -> Path:
    return config_path if config_path is not None else DEFAULT_CONFIG_PATH


def load_config(config_path: Path | None = None) -> dict:
    """Return the stored settings, or {} when the file is absent, unreadable or not a JSON object."""
    try:
        text = _config_file(config_path).read_text(encoding="utf-8")
        settings = json.loads(text)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return {}
    if not isinstance(settings, dict):
        return {}
    return settings


def save_config(data: dict, config_path: Path | None = None) -> None:
    """Replace the stored settings with data."""
    target = _config_file(config_path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def get_sessions_file(config_path: Path | None = None) -> Path | None:
    """Where the sessions export lives, or None if never configured."""
    stored = load_config(config_path).get(SESSIONS_FILE_KEY)
    return Path(stored) if stored else None


def set_sessions_file(path: Path, config_path: Path | None = None) -> None:
    """Remember the sessions export location, keeping any other settings."""
    settings = load_config(config_path)
    settings[SESSIONS_FILE_KEY] = str(path)
    save_config(settings, config_path)
