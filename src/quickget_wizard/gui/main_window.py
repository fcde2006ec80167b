"""
Main Window for the quickget wizard GUI.
"""
import logging
import queue
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QByteArray, Qt, QTimer, QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import QLabel, QMainWindow, QStackedWidget

from quickget_wizard import __version__
from quickget_wizard.catalog import is_url
from quickget_wizard.core.models import BuildSelection, OperatingSystem
from quickget_wizard.gui.models.settings import SettingsStore
from quickget_wizard.gui.utils.logging_utils import attach_queue_handler, detach_queue_handler, drain_queue
from quickget_wizard.gui.utils.paths import (
    get_catalog_cache_path,
    get_default_catalog_path,
    get_default_output_dir,
)
from quickget_wizard.gui.widgets.options_page import OptionsPage
from quickget_wizard.gui.widgets.os_list_page import OsListPage
from quickget_wizard.gui.workers import CatalogWorker
from quickget_wizard.selection import (
    HostResourceProbe,
    Page,
    ResourceProbe,
    SelectionController,
    WizardConfig,
)

logger = logging.getLogger(__name__)

STATUS_POLL_MS = 250


class MainWindow(QMainWindow):
    def __init__(
        self,
        settings: SettingsStore,
        probe: Optional[ResourceProbe] = None,
        *,
        autoload: bool = True,
    ):
        super().__init__()
        self.settings = settings

        self.setWindowTitle(f"Quickget Wizard {__version__}")
        self.resize(900, 600)

        config = WizardConfig(preselect_host_arch=settings.get_preselect_host_arch())
        self.controller = SelectionController(
            probe or HostResourceProbe(),
            config,
            output_directory=settings.get_output_directory() or get_default_output_dir(),
        )

        # --- Pages ---
        self.stack = QStackedWidget()
        self.loading_label = QLabel("Loading…")
        self.loading_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.os_list_page = OsListPage()
        self.options_page = OptionsPage(self.controller)
        self.error_label = QLabel()
        self.error_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.error_label.setWordWrap(True)

        self._page_widgets = {
            Page.LOADING: self.loading_label,
            Page.SELECT_OS: self.os_list_page,
            Page.OPTIONS: self.options_page,
            Page.ERROR: self.error_label,
        }
        for widget in self._page_widgets.values():
            self.stack.addWidget(widget)
        self.setCentralWidget(self.stack)

        self.os_list_page.os_selected.connect(self._on_os_selected)
        self.os_list_page.homepage_requested.connect(self._open_homepage)
        self.options_page.back_requested.connect(self._on_back)
        self.options_page.create_requested.connect(self._on_create_requested)
        self.options_page.output_directory_changed.connect(self.settings.set_output_directory)

        # --- Status bar fed from the logging queue ---
        self.log_queue: queue.Queue = queue.Queue()
        self._log_handler = attach_queue_handler(self.log_queue, "quickget_wizard")
        self._status_timer = QTimer(self)
        self._status_timer.timeout.connect(self._poll_log_queue)
        self._status_timer.start(STATUS_POLL_MS)

        geometry = settings.get_window_geometry()
        if geometry:
            self.restoreGeometry(QByteArray.fromHex(geometry.encode("ascii")))

        self._catalog_worker: Optional[CatalogWorker] = None
        self._show_page()
        if autoload:
            self.load_catalog()

    # ─────────────────────────────────────────────────────────────────────────
    # Catalog
    # ─────────────────────────────────────────────────────────────────────────

    def load_catalog(self) -> None:
        """Start loading the catalog in the background."""
        if self._catalog_worker is not None and self._catalog_worker.isRunning():
            return
        source = self.settings.get_catalog_source() or str(get_default_catalog_path())
        cache_path = get_catalog_cache_path() if is_url(source) else None
        logger.info(f"Loading catalog from {source}")

        self._catalog_worker = CatalogWorker(source, cache_path, parent=self)
        self._catalog_worker.loaded.connect(self.on_catalog_loaded)
        self._catalog_worker.failed.connect(self.on_catalog_failed)
        self._catalog_worker.start()

    def on_catalog_loaded(self, os_list: list) -> None:
        self.controller.os_list_loaded(os_list)
        self.os_list_page.set_os_list(self.controller.os_list)
        self.os_list_page.highlight_os(self.settings.get_last_os())
        self._show_page()

    def on_catalog_failed(self, message: str) -> None:
        self.controller.os_list_failed(message)
        self.error_label.setText(f"Failed to load the OS catalog:\n\n{message}")
        self._show_page()

    # ─────────────────────────────────────────────────────────────────────────
    # Page flow
    # ─────────────────────────────────────────────────────────────────────────

    def _on_os_selected(self, os: OperatingSystem) -> None:
        self.controller.select_os(os)
        self.settings.set_last_os(os.name)
        self.options_page.render()
        self._show_page()

    def _on_back(self) -> None:
        self.controller.back_to_os_list()
        self.os_list_page.highlight_os(self.settings.get_last_os())
        self._show_page()

    def _on_create_requested(self, selection: BuildSelection) -> None:
        # The download/build stage is handled outside the wizard
        logger.info(f"Selection ready: {selection.to_dict()}")
        self.statusBar().showMessage(f"Ready to create {selection!r}")

    def _open_homepage(self, url: str) -> None:
        QDesktopServices.openUrl(QUrl(url))

    def _show_page(self) -> None:
        self.stack.setCurrentWidget(self._page_widgets[self.controller.page])

    # ─────────────────────────────────────────────────────────────────────────
    # Status / lifecycle
    # ─────────────────────────────────────────────────────────────────────────

    def _poll_log_queue(self) -> None:
        entries = drain_queue(self.log_queue)
        if entries:
            message, _level = entries[-1]
            self.statusBar().showMessage(message, 5000)

    def closeEvent(self, event):
        self.settings.set_window_geometry(bytes(self.saveGeometry().toHex()).decode("ascii"))
        self._status_timer.stop()
        detach_queue_handler(self._log_handler, "quickget_wizard")
        if self._catalog_worker is not None and self._catalog_worker.isRunning():
            self._catalog_worker.wait(2000)
        super().closeEvent(event)
