"""PySide6 front end: pages, background workers, settings and paths."""
