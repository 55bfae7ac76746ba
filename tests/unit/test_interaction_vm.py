"""
Tests for InteractionVM - the pan / drag / collapse state machine.
"""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from PyQt6.QtCore import QCoreApplication

from treeviewer_core.domain.enums import InteractionState, PointerTarget
from treeviewer_core.domain.models import PointerEvent, ViewerOptions, WheelEvent
from treeviewer_core.services.layout import LayoutEngine
from treeviewer_core.services.tree_model import TreeModel
from treeviewer_app.viewmodels.interaction_vm import InteractionVM
from treeviewer_app.viewmodels.viewport_vm import ViewportVM


app = QCoreApplication.instance() or QCoreApplication([])

RECORDS = [
    {"id": "R", "parent_id": None},
    {"id": "A", "parent_id": "R"},
    {"id": "B", "parent_id": "R"},
]


def make_vm(**option_values):
    options = ViewerOptions(**option_values)
    model = TreeModel(options, RECORDS)
    LayoutEngine(options).layout_tree(model)
    viewport = ViewportVM(options.zoom_step, options.reset_pan)
    return InteractionVM(model, viewport, options), model, viewport


def handle(node_id, client_x, client_y):
    return PointerEvent(client_x, client_y, PointerTarget.DRAG_HANDLE, node_id)


class TestPanning:
    """Pointer down on the canvas or a node body pans."""

    def test_pan_follows_pointer(self):
        vm, _, viewport = make_vm()
        viewport.set_transform(1.0, 10, 20)

        vm.pointer_down(PointerEvent(100, 100))
        assert vm.state == InteractionState.PANNING
        vm.pointer_move(PointerEvent(150, 130))

        assert (viewport.pan_x, viewport.pan_y) == (60, 50)

    def test_pan_independent_of_scale(self):
        vm, _, viewport = make_vm()
        viewport.set_transform(2.5, 0, 0)

        vm.pointer_down(PointerEvent(0, 0))
        vm.pointer_move(PointerEvent(40, -10))

        assert viewport.transform.scale == 2.5
        assert (viewport.pan_x, viewport.pan_y) == (40, -10)

    def test_node_body_pans(self):
        vm, _, _ = make_vm()
        vm.pointer_down(PointerEvent(5, 5, PointerTarget.NODE_BODY, "A"))
        assert vm.state == InteractionState.PANNING

    def test_release_returns_to_idle(self):
        vm, _, viewport = make_vm()
        vm.pointer_down(PointerEvent(0, 0))
        vm.pointer_up()
        vm.pointer_move(PointerEvent(500, 500))

        assert vm.state == InteractionState.IDLE
        assert (viewport.pan_x, viewport.pan_y) == (0, 0)

    def test_leave_ends_pan(self):
        vm, _, _ = make_vm()
        vm.pointer_down(PointerEvent(0, 0))
        vm.pointer_leave()
        assert vm.state == InteractionState.IDLE

    def test_state_signal(self):
        vm, _, _ = make_vm()
        states = []
        vm.state_changed.connect(lambda s: states.append(s))

        vm.pointer_down(PointerEvent(0, 0))
        vm.pointer_up()

        assert states == [InteractionState.PANNING, InteractionState.IDLE]

    def test_down_while_busy_ignored(self):
        vm, _, _ = make_vm()
        vm.pointer_down(PointerEvent(0, 0))
        vm.pointer_down(handle("A", 0, 0))
        assert vm.state == InteractionState.PANNING
        assert vm.dragged_node_id is None


class TestDragging:
    """Pointer down on a drag handle moves the node."""

    def test_drag_divides_by_scale(self):
        vm, model, viewport = make_vm()
        viewport.set_transform(2.0, 0, 0)
        node = model.get_node("A")

        vm.pointer_down(handle("A", 500, 500))
        assert vm.state == InteractionState.DRAGGING_NODE
        assert vm.dragged_node_id == "A"
        assert node.dragging is True

        vm.pointer_move(handle("A", 520, 540))

        assert (node.x, node.y) == (10, 170)
        assert node.manually_positioned is True

    def test_drag_uses_client_coordinates(self):
        vm, model, _ = make_vm()
        node = model.get_node("B")

        vm.pointer_down(PointerEvent(0, 0, PointerTarget.DRAG_HANDLE, "B", client_x=100, client_y=100))
        vm.pointer_move(PointerEvent(999, 999, client_x=110, client_y=95))

        assert (node.x, node.y) == (210, 145)

    def test_drag_signals(self):
        vm, _, _ = make_vm()
        started, moved, ended, finished = [], [], [], []
        vm.drag_started.connect(lambda n: started.append(n))
        vm.node_moved.connect(lambda n: moved.append(n))
        vm.drag_ended.connect(lambda n: ended.append(n))
        vm.node_drag_finished.connect(lambda n: finished.append(n))

        vm.pointer_down(handle("A", 0, 0))
        vm.pointer_move(handle("A", 5, 0))
        vm.pointer_move(handle("A", 5, 0))
        vm.pointer_up()

        assert started == ["A"]
        assert moved == ["A"]
        assert ended == ["A"]
        assert finished == ["A"]

    def test_release_without_move(self):
        """A click on the handle ends the drag without a layout reconcile."""
        vm, model, _ = make_vm()
        ended, finished = [], []
        vm.drag_ended.connect(lambda n: ended.append(n))
        vm.node_drag_finished.connect(lambda n: finished.append(n))

        vm.pointer_down(handle("A", 0, 0))
        vm.pointer_up()

        assert ended == ["A"]
        assert finished == []
        assert model.get_node("A").dragging is False
        assert model.get_node("A").manually_positioned is False

    def test_leave_finishes_drag(self):
        vm, model, _ = make_vm()
        finished = []
        vm.node_drag_finished.connect(lambda n: finished.append(n))

        vm.pointer_down(handle("A", 0, 0))
        vm.pointer_move(handle("A", 3, 3))
        vm.pointer_leave()

        assert vm.state == InteractionState.IDLE
        assert finished == ["A"]
        assert model.get_node("A").dragging is False

    def test_drag_disabled_pans(self):
        vm, model, _ = make_vm(node_draggable=False)
        vm.pointer_down(handle("A", 0, 0))
        vm.pointer_move(handle("A", 30, 30))

        assert vm.state == InteractionState.PANNING
        assert model.get_node("A").x == 0

    def test_unknown_node_ignored(self):
        vm, _, _ = make_vm()
        vm.pointer_down(handle("nope", 0, 0))
        assert vm.state == InteractionState.IDLE

    def test_node_replaced_mid_drag(self):
        """A reload during a drag turns the remaining moves into no-ops."""
        vm, model, _ = make_vm()
        moved, finished = [], []
        vm.node_moved.connect(lambda n: moved.append(n))
        vm.node_drag_finished.connect(lambda n: finished.append(n))

        vm.pointer_down(handle("A", 0, 0))
        model.update_data(RECORDS)
        fresh = model.get_node("A")
        vm.pointer_move(handle("A", 40, 40))
        vm.pointer_up()

        assert moved == []
        assert finished == []
        assert fresh.x is None
        assert fresh.manually_positioned is False
        assert vm.state == InteractionState.IDLE


class TestWheel:
    """Wheel zoom works in any state."""

    def test_scroll_down_zooms_out(self):
        vm, _, viewport = make_vm()
        vm.wheel(WheelEvent(100, 100, 120))
        assert viewport.scale == pytest.approx(1 / 1.1)

    def test_scroll_up_zooms_in(self):
        vm, _, viewport = make_vm()
        vm.wheel(WheelEvent(100, 100, -120))
        assert viewport.scale == pytest.approx(1.1)

    def test_anchor_point_fixed(self):
        vm, _, viewport = make_vm()
        viewport.set_transform(1.7, -40, 80)
        before = viewport.content_point(250, 90)
        vm.wheel(WheelEvent(250, 90, -1))
        after = viewport.content_point(250, 90)
        assert after.x == pytest.approx(before.x)
        assert after.y == pytest.approx(before.y)

    def test_zero_delta_ignored(self):
        vm, _, viewport = make_vm()
        vm.wheel(WheelEvent(10, 10, 0))
        assert viewport.scale == 1.0

    def test_state_unchanged(self):
        vm, _, _ = make_vm()
        vm.pointer_down(PointerEvent(0, 0))
        vm.wheel(WheelEvent(0, 0, 120))
        assert vm.state == InteractionState.PANNING


class TestCollapse:
    """Collapse button and double-click toggles."""

    def test_collapse_button_toggles(self):
        vm, model, _ = make_vm(collapse_child=True)
        toggled = []
        vm.collapse_toggled.connect(lambda n: toggled.append(n))

        assert vm.activate_collapse("R") is True
        assert model.get_node("R").collapsed is True
        assert toggled == ["R"]

    def test_disabled_by_default(self):
        vm, model, _ = make_vm()
        assert vm.activate_collapse("R") is False
        assert vm.double_click("R") is False
        assert model.get_node("R").collapsed is False

    def test_leaf_not_toggled(self):
        vm, model, _ = make_vm(collapse_child=True)
        assert vm.activate_collapse("A") is False
        assert model.get_node("A").collapsed is False

    def test_unknown_node(self):
        vm, _, _ = make_vm(collapse_child=True)
        assert vm.activate_collapse("missing") is False

    def test_double_click(self):
        vm, model, _ = make_vm(collapse_child=True)
        assert vm.double_click("R") is True
        assert vm.double_click("R") is True
        assert model.get_node("R").collapsed is False

    def test_button_press_does_not_pan(self):
        vm, _, _ = make_vm(collapse_child=True)
        vm.pointer_down(PointerEvent(0, 0, PointerTarget.COLLAPSE_BUTTON, "R"))
        assert vm.state == InteractionState.IDLE
