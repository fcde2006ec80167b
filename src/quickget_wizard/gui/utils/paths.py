"""
Path utilities for handling dev vs production (frozen) file locations.

Dev mode: Uses local workspace/ directory
Frozen mode: Uses system-standard paths (AppData, Documents)
"""
from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtCore import QStandardPaths


def is_frozen() -> bool:
    """Check if running as a frozen (PyInstaller) application."""
    return getattr(sys, 'frozen', False) or hasattr(sys, '_MEIPASS')


def get_app_data_dir() -> Path:
    """
    Get the application data directory for internal state files.

    Frozen: ~/.local/share/quickget-wizard (Linux) or the platform equivalent
    Dev: workspace/
    """
    if is_frozen():
        app_data = Path(QStandardPaths.writableLocation(
            QStandardPaths.StandardLocation.AppLocalDataLocation
        ))
        app_data.mkdir(parents=True, exist_ok=True)
        return app_data
    # Dev mode: use local workspace
    return Path.cwd() / "workspace"


def get_settings_path() -> Path:
    """Get the path for storing GUI settings."""
    return get_app_data_dir() / "gui_settings.json"


def get_default_catalog_path() -> Path:
    """Local catalog file used when no catalog source is configured."""
    return get_app_data_dir() / "quickget_data.json"


def get_catalog_cache_path() -> Path:
    """Offline copy of the last catalog downloaded from a URL."""
    return get_app_data_dir() / "cache" / "quickget_data.json"


def get_default_output_dir() -> Path:
    """
    Initial VM output directory.

    Frozen builds start in the user's home; dev runs start in the
    process working directory.
    """
    if is_frozen():
        return Path(QStandardPaths.writableLocation(
            QStandardPaths.StandardLocation.HomeLocation
        ))
    return Path.cwd()
