"""
Options page: release / edition / arch dropdowns, RAM and CPU sliders,
and the output directory row.

All state lives in the SelectionController. Widgets forward user input
to it and then re-render from the resulting SelectionState; programmatic
updates are guarded so they never feed back into the controller.
"""
import logging
from pathlib import Path
from typing import Optional, Sequence

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QComboBox, QFormLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton,
    QSlider, QVBoxLayout, QWidget,
)

from quickget_wizard.selection import SelectionController

from .directory_picker import DirectoryPicker

logger = logging.getLogger(__name__)


class OptionsPage(QWidget):
    back_requested = Signal()
    create_requested = Signal(object)  # BuildSelection
    output_directory_changed = Signal(Path)

    def __init__(self, controller: SelectionController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self._updating = False
        self._ram_scale = max(1, round(1 / controller.config.ram_step_gib))

        layout = QVBoxLayout(self)

        self.os_label = QLabel()
        font = self.os_label.font()
        font.setPointSize(14)
        self.os_label.setFont(font)
        layout.addWidget(self.os_label)

        # --- Catalog-derived dropdowns ---
        dropdown_row = QHBoxLayout()
        self.release_combo = self._make_combo("Release")
        self.edition_combo = self._make_combo("Edition")
        self.arch_combo = self._make_combo("Architecture")
        for combo in (self.release_combo, self.edition_combo, self.arch_combo):
            dropdown_row.addWidget(combo)
        layout.addLayout(dropdown_row)

        self.release_combo.activated.connect(self._on_release_activated)
        self.edition_combo.activated.connect(self._on_edition_activated)
        self.arch_combo.activated.connect(self._on_arch_activated)

        # --- Independent settings ---
        form = QFormLayout()

        self.cpu_slider = QSlider(Qt.Orientation.Horizontal)
        self.cpu_value_label = QLabel()
        self.cpu_slider.valueChanged.connect(self._on_cpu_changed)
        form.addRow("CPU Cores:", self._slider_row(self.cpu_slider, self.cpu_value_label))

        self.ram_slider = QSlider(Qt.Orientation.Horizontal)
        self.ram_value_label = QLabel()
        self.ram_slider.valueChanged.connect(self._on_ram_changed)
        form.addRow("RAM:", self._slider_row(self.ram_slider, self.ram_value_label))

        dir_row = QHBoxLayout()
        self.dir_entry = QLineEdit()
        self.dir_entry.setReadOnly(True)
        self.browse_btn = QPushButton("Browse…")
        self.browse_btn.setToolTip("Choose where the VM will be created")
        self.browse_btn.clicked.connect(self._browse_output_dir)
        dir_row.addWidget(self.dir_entry, stretch=1)
        dir_row.addWidget(self.browse_btn)
        form.addRow("Directory:", dir_row)

        layout.addLayout(form)
        layout.addStretch()

        # --- Navigation ---
        nav_row = QHBoxLayout()
        self.back_btn = QPushButton("Back")
        self.back_btn.clicked.connect(self.back_requested.emit)
        self.create_btn = QPushButton("Create")
        self.create_btn.clicked.connect(self._on_create_clicked)
        nav_row.addWidget(self.back_btn)
        nav_row.addStretch()
        nav_row.addWidget(self.create_btn)
        layout.addLayout(nav_row)

        self.picker = DirectoryPicker(self)
        self.picker.finished.connect(self._on_directory_picked)

    # ─────────────────────────────────────────────────────────────────────────
    # Rendering
    # ─────────────────────────────────────────────────────────────────────────

    def render(self) -> None:
        """Sync every widget with the controller's current state."""
        state = self.controller.state
        os = self.controller.selected_os
        if state is None or os is None:
            return

        self._updating = True
        try:
            self.os_label.setText(os.display_name)

            self._fill_combo(self.release_combo, state.release_choices, state.release)
            # Absent editions hide the selector instead of showing an empty one
            self.edition_combo.setVisible(state.edition_choices is not None)
            self._fill_combo(self.edition_combo, state.edition_choices or (), state.edition)
            self._fill_combo(self.arch_combo, state.arch_choices, state.arch)

            cpu_min, cpu_max = self.controller.cpu_core_bounds()
            self.cpu_slider.setRange(cpu_min, cpu_max)
            self.cpu_slider.setValue(state.cpu_cores)
            self.cpu_value_label.setText(f"  {state.cpu_cores}")

            ram_min, ram_max = self.controller.ram_bounds()
            self.ram_slider.setRange(self._to_ram_ticks(ram_min), self._to_ram_ticks(ram_max))
            self.ram_slider.setValue(self._to_ram_ticks(state.ram_gib))
            self.ram_value_label.setText(f"  {state.ram_gib:.2f} GiB")

            self.dir_entry.setText(str(state.output_directory))
            self.create_btn.setEnabled(self.controller.is_complete)
        finally:
            self._updating = False

    def _fill_combo(self, combo: QComboBox, choices: Sequence, current) -> None:
        combo.clear()
        for choice in choices:
            combo.addItem(str(choice), choice)
        combo.setCurrentIndex(combo.findData(current) if current is not None else -1)

    # ─────────────────────────────────────────────────────────────────────────
    # User input
    # ─────────────────────────────────────────────────────────────────────────

    def _on_release_activated(self, index: int) -> None:
        if self._updating:
            return
        self.controller.select_release(self.release_combo.itemData(index))
        self.render()

    def _on_edition_activated(self, index: int) -> None:
        if self._updating:
            return
        self.controller.select_edition(self.edition_combo.itemData(index))
        self.render()

    def _on_arch_activated(self, index: int) -> None:
        if self._updating:
            return
        self.controller.select_arch(self.arch_combo.itemData(index))
        self.render()

    def _on_cpu_changed(self, value: int) -> None:
        if self._updating:
            return
        self.controller.set_cpu_cores(value)
        self.cpu_value_label.setText(f"  {value}")

    def _on_ram_changed(self, ticks: int) -> None:
        if self._updating:
            return
        ram_gib = ticks / self._ram_scale
        self.controller.set_ram(ram_gib)
        self.ram_value_label.setText(f"  {ram_gib:.2f} GiB")

    def _browse_output_dir(self) -> None:
        """Open the non-blocking directory picker at the current directory."""
        self.picker.request(self.controller.output_directory)

    def _on_directory_picked(self, directory: Optional[Path]) -> None:
        if directory is None:
            return
        self.controller.set_output_directory(directory)
        self.render()
        self.output_directory_changed.emit(directory)

    def _on_create_clicked(self) -> None:
        selection = self.controller.build_selection()
        if selection is None:
            return
        self.create_requested.emit(selection)

    # ─────────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _make_combo(self, placeholder: str) -> QComboBox:
        combo = QComboBox()
        combo.setPlaceholderText(placeholder)
        combo.setSizeAdjustPolicy(QComboBox.SizeAdjustPolicy.AdjustToContents)
        combo.setMinimumWidth(140)
        return combo

    def _slider_row(self, slider: QSlider, value_label: QLabel) -> QHBoxLayout:
        row = QHBoxLayout()
        row.addWidget(slider, stretch=1)
        row.addWidget(value_label)
        return row

    def _to_ram_ticks(self, ram_gib: float) -> int:
        return int(round(ram_gib * self._ram_scale))
