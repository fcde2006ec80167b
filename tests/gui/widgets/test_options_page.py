"""Tests for the options page widgets driving the selection controller."""

import pytest

from quickget_wizard.core.models import Arch, BuildSelection
from quickget_wizard.gui.widgets.options_page import OptionsPage
from quickget_wizard.selection import SelectionController


@pytest.fixture
def controller(probe, os_list, tmp_path):
    controller = SelectionController(probe, output_directory=tmp_path)
    controller.os_list_loaded(os_list)
    return controller


@pytest.fixture
def page(qtbot, controller):
    page = OptionsPage(controller)
    qtbot.addWidget(page)
    return page


def _items(combo):
    return [combo.itemText(i) for i in range(combo.count())]


def _activate(combo, text):
    combo.activated.emit(combo.findText(text))


class TestRender:
    def test_alpine_lists_and_hidden_editions(self, page, controller, alpine):
        controller.select_os(alpine)
        page.render()

        assert _items(page.release_combo) == ["3.18", "edge"]
        assert _items(page.arch_combo) == ["x86_64", "aarch64"]
        assert page.release_combo.currentIndex() == -1
        assert page.edition_combo.isHidden()
        assert not page.create_btn.isEnabled()

    def test_editions_visible_when_present(self, page, controller, ubuntu):
        controller.select_os(ubuntu)
        page.render()
        assert not page.edition_combo.isHidden()
        assert _items(page.edition_combo) == ["desktop", "server", "live"]

    def test_sliders_follow_probe(self, page, controller, alpine):
        controller.select_os(alpine)
        page.render()
        assert (page.cpu_slider.minimum(), page.cpu_slider.maximum()) == (1, 8)
        assert page.cpu_slider.value() == 4
        assert page.ram_slider.value() == 800
        assert page.ram_value_label.text() == "  8.00 GiB"


class TestInteraction:
    def test_arch_pick_narrows_releases(self, page, controller, alpine):
        controller.select_os(alpine)
        page.render()

        _activate(page.arch_combo, "aarch64")
        assert controller.state.arch == Arch.aarch64
        assert _items(page.release_combo) == ["3.18"]
        assert page.arch_combo.currentText() == "aarch64"

    def test_complete_selection_enables_create(self, qtbot, page, controller, alpine):
        controller.select_os(alpine)
        page.render()
        _activate(page.release_combo, "edge")
        assert not page.create_btn.isEnabled()
        _activate(page.arch_combo, "x86_64")
        assert page.create_btn.isEnabled()

        with qtbot.waitSignal(page.create_requested, timeout=1000) as blocker:
            page.create_btn.click()
        selection = blocker.args[0]
        assert isinstance(selection, BuildSelection)
        assert (selection.release, selection.arch) == ("edge", Arch.x86_64)

    def test_sliders_update_controller(self, page, controller, alpine):
        controller.select_os(alpine)
        page.render()
        page.ram_slider.setValue(350)
        page.cpu_slider.setValue(2)

        assert controller.state.ram_gib == 3.5
        assert controller.state.cpu_cores == 2
        assert page.ram_value_label.text() == "  3.50 GiB"

    def test_render_does_not_feed_back(self, page, controller, alpine):
        controller.select_os(alpine)
        controller.set_cpu_cores(3)
        page.render()
        page.render()
        assert controller.state.cpu_cores == 3

    def test_directory_pick_updates_state(self, qtbot, page, controller, alpine, tmp_path):
        controller.select_os(alpine)
        page.render()
        target = tmp_path / "vms"

        with qtbot.waitSignal(page.output_directory_changed, timeout=1000):
            page.picker.finished.emit(target)
        assert controller.state.output_directory == target
        assert page.dir_entry.text() == str(target)

    def test_directory_cancel_is_noop(self, page, controller, alpine, tmp_path):
        controller.select_os(alpine)
        page.render()
        page.picker.finished.emit(None)
        assert controller.state.output_directory == tmp_path
        assert page.dir_entry.text() == str(tmp_path)
