"""
Non-blocking directory picker.

Wraps a window-modal QFileDialog opened with ``open()`` so the event
loop keeps running while it is up. The result comes back as a single
``finished`` signal carrying a Path, or None when cancelled.
"""
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QFileDialog, QWidget


class DirectoryPicker(QObject):
    finished = Signal(object)  # Optional[Path]

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._parent_widget = parent
        self._dialog: Optional[QFileDialog] = None

    @property
    def is_open(self) -> bool:
        return self._dialog is not None

    def request(self, start_dir: Path, title: str = "Select Output Directory") -> None:
        """Open the picker; ignored while a previous request is still open."""
        if self._dialog is not None:
            return

        dialog = QFileDialog(self._parent_widget, title, str(start_dir))
        dialog.setFileMode(QFileDialog.FileMode.Directory)
        dialog.setOption(QFileDialog.Option.ShowDirsOnly, True)
        dialog.fileSelected.connect(self._on_selected)
        dialog.rejected.connect(self._on_rejected)
        self._dialog = dialog
        dialog.open()

    def cancel(self) -> None:
        """Close an open picker; reported as a cancellation."""
        if self._dialog is not None:
            self._dialog.reject()

    def _on_selected(self, path: str) -> None:
        self._finish(Path(path).resolve() if path else None)

    def _on_rejected(self) -> None:
        self._finish(None)

    def _finish(self, result: Optional[Path]) -> None:
        dialog, self._dialog = self._dialog, None
        if dialog is None:
            return  # Already reported
        dialog.deleteLater()
        self.finished.emit(result)
