"""
Operating system list page.
"""
from typing import Dict, List, Optional, Sequence

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QIcon
from PySide6.QtWidgets import (
    QFrame, QHBoxLayout, QLabel, QPushButton, QScrollArea, QSizePolicy,
    QToolButton, QVBoxLayout, QWidget,
)

from quickget_wizard.core.models import OperatingSystem


class OsListPage(QWidget):
    """Scrollable list of operating systems, one button per entry."""

    os_selected = Signal(object)  # OperatingSystem
    homepage_requested = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.title_label = QLabel("Select an Operating System")
        font = self.title_label.font()
        font.setPointSize(14)
        self.title_label.setFont(font)
        layout.addWidget(self.title_label)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setFrameShape(QFrame.Shape.NoFrame)
        layout.addWidget(self.scroll_area, stretch=1)

        self._list_widget = QWidget()
        self._list_layout = QVBoxLayout(self._list_widget)
        self._list_layout.setContentsMargins(8, 8, 8, 8)
        self._list_layout.setSpacing(4)
        self.scroll_area.setWidget(self._list_widget)

        self.os_buttons: Dict[str, QPushButton] = {}
        self.homepage_buttons: Dict[str, QToolButton] = {}

    def set_os_list(self, os_list: Sequence[OperatingSystem]) -> None:
        """Rebuild the list in catalog order."""
        self._clear()
        for os in os_list:
            self._list_layout.addLayout(self._make_row(os))
        self._list_layout.addStretch()

    def highlight_os(self, name: Optional[str]) -> bool:
        """
        Mark ``name`` as the default button and scroll it into view.

        Returns False when the OS is not in the current list.
        """
        for button in self.os_buttons.values():
            button.setDefault(False)
        button = self.os_buttons.get(name) if name else None
        if button is None:
            return False
        button.setDefault(True)
        button.setFocus()
        self.scroll_area.ensureWidgetVisible(button)
        return True

    def displayed_names(self) -> List[str]:
        return [button.text() for button in self.os_buttons.values()]

    def _make_row(self, os: OperatingSystem) -> QHBoxLayout:
        row = QHBoxLayout()
        row.setAlignment(Qt.AlignmentFlag.AlignBottom)

        if os.homepage:
            home_btn = QToolButton()
            icon = QIcon.fromTheme("go-home")
            if icon.isNull():
                home_btn.setText("Home")
            else:
                home_btn.setIcon(icon)
            home_btn.setToolTip(f"Visit {os.display_name} homepage")
            home_btn.clicked.connect(lambda _=False, url=os.homepage: self.homepage_requested.emit(url))
            row.addWidget(home_btn)
            self.homepage_buttons[os.name] = home_btn

        button = QPushButton(os.display_name)
        button.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        if os.description:
            button.setToolTip(os.description)
        button.clicked.connect(lambda _=False, entry=os: self.os_selected.emit(entry))
        row.addWidget(button)
        self.os_buttons[os.name] = button
        return row

    def _clear(self) -> None:
        self.os_buttons.clear()
        self.homepage_buttons.clear()
        while self._list_layout.count():
            item = self._list_layout.takeAt(0)
            self._delete_item(item)

    def _delete_item(self, item) -> None:
        widget = item.widget()
        if widget is not None:
            widget.deleteLater()
            return
        child_layout = item.layout()
        if child_layout is not None:
            while child_layout.count():
                self._delete_item(child_layout.takeAt(0))
            child_layout.deleteLater()
