"""
Entry point for the PySide6 GUI.
"""
import logging
import os
import sys


def run():
    """
    Main entry point for the GUI application.
    """
    from PySide6.QtWidgets import QApplication
    from quickget_wizard.gui.main_window import MainWindow
    from quickget_wizard.gui.models.settings import SettingsStore
    from quickget_wizard.gui.utils.logging_utils import configure_logging
    from quickget_wizard.gui.utils.paths import get_settings_path

    configure_logging(logging.DEBUG if os.environ.get("QUICKGET_WIZARD_DEBUG") == "1" else logging.INFO)

    app = QApplication(sys.argv)
    app.setApplicationName("Quickget Wizard")
    app.setApplicationDisplayName("Quickget Wizard")
    app.setOrganizationName("Quickget Wizard")

    settings = SettingsStore(get_settings_path())

    # Check for malformed settings and prompt user to reset if needed
    if not settings.check_load_error():
        sys.exit(1)  # User chose not to reset, exit app

    window = MainWindow(settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
