from __future__ import annotations

import os
from importlib.metadata import PackageNotFoundError, version as dist_version


_DEFAULT_APP_VERSION = "0.1.0"
_DIST_NAME = "critical-path-scheduler"


def _read_installed_version() -> str | None:
    try:
        return dist_version(_DIST_NAME)
    except PackageNotFoundError:
        return None


def get_app_version() -> str:
    env_override = (os.getenv("CPM_APP_VERSION") or "").strip()
    if env_override:
        return env_override

    installed = _read_installed_version()
    if installed:
        return installed

    return _DEFAULT_APP_VERSION


__all__ = ["get_app_version"]
