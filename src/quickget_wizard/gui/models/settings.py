"""
Settings persistence model for the GUI.

This module handles all persistent GUI state with robust error handling.
Any malformed data should result in graceful fallback to defaults, never CTD.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from PySide6.QtCore import QObject, Signal

logger = logging.getLogger(__name__)


class SettingsStore(QObject):
    """Lightweight JSON-backed store for persisting GUI preferences."""

    outputDirectoryChanged = Signal(str)
    CURRENT_VERSION = 2  # v2: Add preselect_host_arch

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = path
        self.data: Dict[str, object] = {}
        self._load_error: Optional[str] = None

        if self.path.exists():
            try:
                self.data = json.loads(self.path.read_text(encoding="utf-8"))
                self._migrate()
            except json.JSONDecodeError as e:
                self._load_error = f"Settings file is corrupted:\n{e}"
                self.data = {}
            except OSError as e:
                self._load_error = f"Failed to read settings:\n{e}"
                self.data = {}

        # Ensure version is set for new files
        if "version" not in self._get_dict():
            self.data["version"] = self.CURRENT_VERSION

    @property
    def load_error(self) -> Optional[str]:
        return self._load_error

    def check_load_error(self) -> bool:
        """
        Check if there was an error loading settings and prompt user to reset.

        Returns True if app should continue, False if app should exit.
        Call this after QApplication is created.
        """
        if not self._load_error:
            return True

        from PySide6.QtWidgets import QMessageBox

        msg = QMessageBox()
        msg.setIcon(QMessageBox.Icon.Warning)
        msg.setWindowTitle("Settings Error")
        msg.setText("Your settings file could not be loaded.")
        msg.setInformativeText(
            f"{self._load_error}\n\n"
            "Would you like to reset settings to defaults and continue?"
        )
        msg.setStandardButtons(
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        msg.setDefaultButton(QMessageBox.StandardButton.Yes)

        if msg.exec() == QMessageBox.StandardButton.Yes:
            self.reset()
            return True
        return False

    def reset(self) -> None:
        """Drop all settings and write a fresh file."""
        self.data = {"version": self.CURRENT_VERSION}
        self._load_error = None
        self._save()

    def _migrate(self) -> None:
        """Upgrade older settings files in place."""
        data = self._get_dict()
        version = self._safe_int(data.get("version"), 1)
        if version < 2:
            # v1 stored the arch preference under "ui"
            ui = data.pop("ui", None)
            if isinstance(ui, dict) and "preselect_arch" in ui:
                data["preselect_host_arch"] = bool(ui["preselect_arch"])
        data["version"] = self.CURRENT_VERSION
        data["app_version"] = self._get_app_version()
        self._save()

    def _get_app_version(self) -> str:
        """Get current app version string."""
        from quickget_wizard import __version__
        return __version__

    def get_catalog_source(self) -> Optional[str]:
        """Catalog file path or URL, None when unset."""
        value = self._get_dict().get("catalog_source")
        return value if isinstance(value, str) and value.strip() else None

    def set_catalog_source(self, value: str) -> None:
        self._get_dict()["catalog_source"] = value
        self._save()

    def get_output_directory(self) -> Optional[Path]:
        value = self._get_dict().get("output_directory")
        if isinstance(value, str) and value:
            return Path(value)
        return None

    def set_output_directory(self, value: Path) -> None:
        self._get_dict()["output_directory"] = str(value)
        self._save()
        self.outputDirectoryChanged.emit(str(value))

    def get_preselect_host_arch(self) -> bool:
        """Whether to preselect the host arch on OS selection (default: True)."""
        return bool(self._get_dict().get("preselect_host_arch", True))

    def set_preselect_host_arch(self, enabled: bool) -> None:
        self._get_dict()["preselect_host_arch"] = enabled
        self._save()

    def get_last_os(self) -> Optional[str]:
        value = self._get_dict().get("last_os")
        return value if isinstance(value, str) else None

    def set_last_os(self, name: str) -> None:
        self._get_dict()["last_os"] = name
        self._save()

    def get_window_geometry(self) -> Optional[str]:
        """Get saved window geometry with hex validation.

        Returns None if geometry is missing or invalid hex.
        """
        geo = self._get_dict().get("window_geometry")
        if not isinstance(geo, str):
            return None
        try:
            bytes.fromhex(geo)
            return geo
        except ValueError:
            logger.warning("Invalid geometry string in settings, ignoring")
            return None

    def set_window_geometry(self, geometry: str) -> None:
        self._get_dict()["window_geometry"] = geometry
        self._save()

    def _safe_int(self, value: Any, default: int) -> int:
        """Safely convert a value to int, returning default on failure."""
        if value is None:
            return default
        try:
            return int(value)
        except (ValueError, TypeError):
            return default

    def _get_dict(self) -> Dict[str, object]:
        if not isinstance(self.data, dict):
            self.data = {}
        return self.data

    def _save(self) -> None:
        """Safely write settings with atomic replacement.

        Uses a temp file to prevent corruption if write is interrupted.
        """
        temp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            # Write to temp file first
            temp_path = self.path.with_suffix('.tmp')
            temp_path.write_text(json.dumps(self.data, indent=2), encoding="utf-8")

            # Atomic rename (overwrites existing)
            temp_path.replace(self.path)
        except OSError as e:
            logger.warning(f"Failed to save settings: {e}")
            if temp_path:
                try:
                    if temp_path.exists():
                        temp_path.unlink()
                except OSError:
                    pass
