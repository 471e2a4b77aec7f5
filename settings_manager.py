"""
settings_manager.py
Manages loading and saving application settings (storage location, group name
policy, window state) in a JSON file.
"""

import json
import os
import sys

# --- Settings file location strategy ---
# Settings live in a per-user configuration directory:
#
# Windows: %LOCALAPPDATA%/PocketNotes/settings.json
# macOS:   ~/Library/Application Support/PocketNotes/settings.json
# Linux/other: ~/.config/PocketNotes/settings.json
#
# POCKET_NOTES_HOME overrides the directory (portable installs, tests).

_APP_DIR_NAME = "PocketNotes"
_SETTINGS_BASENAME = "settings.json"
_STORAGE_BASENAME = "pocket_notes.db"
HOME_ENV_VAR = "POCKET_NOTES_HOME"

DEFAULT_MIN_GROUP_NAME_LENGTH = 2
DEFAULT_BACKUP_KEEP = 10


def _default_settings_dir() -> str:
    """Return the platform-specific settings directory."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return os.path.abspath(os.path.expanduser(override))
    if os.name == "nt":  # Windows
        base = os.environ.get("LOCALAPPDATA") or os.path.expanduser("~")
        return os.path.join(base, _APP_DIR_NAME)
    elif sys.platform == "darwin":  # macOS
        return os.path.join(os.path.expanduser("~"), "Library", "Application Support", _APP_DIR_NAME)
    else:  # Linux / other Unix
        return os.path.join(os.path.expanduser("~"), ".config", _APP_DIR_NAME)


def get_settings_dir() -> str:
    """Return the active settings directory, creating it if needed."""
    d = _default_settings_dir()
    try:
        os.makedirs(d, exist_ok=True)
    except OSError:
        pass
    return d


def get_settings_file_path() -> str:
    """Return absolute path to the current settings.json file."""
    return os.path.join(get_settings_dir(), _SETTINGS_BASENAME)


def load_settings():
    path = get_settings_file_path()
    try:
        if os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
                if isinstance(data, dict):
                    return data
    except (OSError, ValueError):
        pass
    return {}


def save_settings(settings):
    path = get_settings_file_path()
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(settings, f, indent=2)
    except OSError:
        pass


# --- Local storage location ---
def get_storage_path() -> str:
    """Path of the SQLite file holding groups and notes."""
    s = load_settings()
    val = s.get("storage_path")
    if val and isinstance(val, str):
        return os.path.abspath(os.path.expanduser(val))
    return os.path.join(get_settings_dir(), _STORAGE_BASENAME)


def set_storage_path(path: str):
    if not isinstance(path, str) or not path:
        return
    s = load_settings()
    s["storage_path"] = os.path.abspath(path)
    save_settings(s)


# --- Group name policy ---
def get_min_group_name_length() -> int:
    """Minimum characters for a new group name. 0 or 1 only requires a non-empty name."""
    s = load_settings()
    val = s.get("min_group_name_length", DEFAULT_MIN_GROUP_NAME_LENGTH)
    try:
        return max(0, int(val))
    except (TypeError, ValueError):
        return DEFAULT_MIN_GROUP_NAME_LENGTH


def set_min_group_name_length(length: int):
    s = load_settings()
    s["min_group_name_length"] = max(0, int(length))
    save_settings(s)


# --- Last position/state helpers ---
def get_last_group_id():
    s = load_settings()
    val = s.get("last_group_id")
    return str(val) if val is not None else None


def set_last_group_id(group_id):
    """Remember the selected group; None clears it."""
    s = load_settings()
    if group_id is None:
        s.pop("last_group_id", None)
    else:
        s["last_group_id"] = str(group_id)
    save_settings(s)


def get_window_geometry():
    s = load_settings()
    geo = s.get("window_geometry")  # dict with x, y, w, h
    if isinstance(geo, dict) and all(k in geo for k in ("x", "y", "w", "h")):
        return geo
    return None


def set_window_geometry(x, y, w, h):
    s = load_settings()
    s["window_geometry"] = {"x": int(x), "y": int(y), "w": int(w), "h": int(h)}
    save_settings(s)


# --- Backups ---
def get_backup_dir() -> str:
    s = load_settings()
    val = s.get("backup_dir")
    if val and isinstance(val, str):
        return os.path.abspath(os.path.expanduser(val))
    return os.path.join(get_settings_dir(), "backups")


def get_backup_keep() -> int:
    s = load_settings()
    try:
        return max(1, int(s.get("backup_keep", DEFAULT_BACKUP_KEEP)))
    except (TypeError, ValueError):
        return DEFAULT_BACKUP_KEEP


def set_backup_keep(keep: int):
    s = load_settings()
    s["backup_keep"] = max(1, int(keep))
    save_settings(s)
