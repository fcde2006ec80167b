"""
Background workers for the GUI.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QThread, Signal

from quickget_wizard.catalog import CatalogError, load_os_list

logger = logging.getLogger(__name__)


class CatalogWorker(QThread):
    """Load the OS catalog off the GUI thread.

    Exactly one of ``loaded`` (list of OperatingSystem) or ``failed``
    (user-facing message) is emitted per run.
    """
    loaded = Signal(list)
    failed = Signal(str)

    def __init__(
        self,
        source: Union[str, Path],
        cache_path: Optional[Path] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.source = source
        self.cache_path = cache_path

    def run(self):
        try:
            os_list = load_os_list(self.source, cache_path=self.cache_path)
        except CatalogError as e:
            self.failed.emit(str(e))
            return
        except Exception as e:
            logger.exception("Unexpected error loading catalog")
            self.failed.emit(f"Unexpected error loading catalog: {e}")
            return
        self.loaded.emit(os_list)
