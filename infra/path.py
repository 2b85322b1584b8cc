# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "CriticalPathScheduler"
COMPANY_NAME = "TECHASH"


def user_data_dir() -> Path:
    """
    Returns a per-user data directory, e.g.:

    Windows:
        C:\\Users\\<User>\\AppData\\Roaming\\TECHASH\\CriticalPathScheduler

    macOS:
        ~/Library/Application Support/TECHASH/CriticalPathScheduler

    Linux:
        ~/.local/share/TECHASH/CriticalPathScheduler

    ``CPM_DATA_DIR`` overrides the location.
    """
    override = (os.getenv("CPM_DATA_DIR") or "").strip()
    try:
        if override:
            path = Path(override)
        else:
            if sys.platform.startswith("win"):
                base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
            elif sys.platform == "darwin":
                base = Path.home() / "Library" / "Application Support"
            else:
                base = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))
            path = base / COMPANY_NAME / APP_NAME
        path.mkdir(parents=True, exist_ok=True)
        return path
    except OSError:
        fallback = Path.home() / f".{APP_NAME}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def default_db_path() -> Path:
    return user_data_dir() / "schedule.db"


def database_url() -> str:
    """``CPM_DB_URL`` if set, else the SQLite file under the user data dir."""
    override = (os.getenv("CPM_DB_URL") or "").strip()
    if override:
        return override
    return f"sqlite:///{default_db_path().as_posix()}"
