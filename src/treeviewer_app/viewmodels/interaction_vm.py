"""
Interaction ViewModel - the pointer state machine.

Decides, for every pointer/wheel event, whether the gesture is a canvas pan,
a node drag, or a discrete collapse toggle:

    IDLE --down on canvas/node body--> PANNING
    IDLE --down on drag handle-------> DRAGGING_NODE
    PANNING / DRAGGING_NODE --up/leave--> IDLE

Wheel zoom and collapse toggles are accepted in any state and never change it.
"""

import logging
from typing import Optional, Tuple

from PyQt6.QtCore import pyqtSignal

from .base import BaseViewModel
from .viewport_vm import ViewportVM
from treeviewer_core.domain.enums import InteractionState, PointerTarget
from treeviewer_core.domain.models import (
    NodeId, PointerEvent, TreeNode, ViewerOptions, WheelEvent,
)
from treeviewer_core.services.tree_model import TreeModel
from treeviewer_core.services.viewport import wheel_zoom_factor


logger = logging.getLogger(__name__)


class InteractionVM(BaseViewModel):
    """
    ViewModel translating raw input into tree and viewport mutations.

    Signals:
        state_changed: Emitted with the new InteractionState
        drag_started: Node id; the node should be raised and shown as dragging
        node_moved: Node id; redraw that node and its connectors only
        drag_ended: Node id when a drag gesture ends, moved or not
        node_drag_finished: Node id, only when the drag actually moved the node
        collapse_toggled: Node id whose collapsed flag was flipped
    """

    state_changed = pyqtSignal(object)
    drag_started = pyqtSignal(object)
    node_moved = pyqtSignal(object)
    drag_ended = pyqtSignal(object)
    node_drag_finished = pyqtSignal(object)
    collapse_toggled = pyqtSignal(object)

    def __init__(
        self,
        model: TreeModel,
        viewport: ViewportVM,
        options: Optional[ViewerOptions] = None,
    ):
        """
        Initialize the ViewModel.

        Args:
            model: Tree whose nodes are dragged and collapsed
            viewport: Transform panned and zoomed by gestures
            options: Interaction toggles and zoom step
        """
        super().__init__()

        self._model = model
        self._viewport = viewport
        self._options = options or ViewerOptions()

        self._state = InteractionState.IDLE

        # Panning anchor: container position minus pan at press time
        self._pan_anchor: Tuple[float, float] = (0.0, 0.0)

        # Dragging: node, last client position, whether it moved
        self._drag_node: Optional[TreeNode] = None
        self._drag_anchor: Tuple[float, float] = (0.0, 0.0)
        self._drag_moved = False

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def dragged_node_id(self) -> Optional[NodeId]:
        return self._drag_node.id if self._drag_node is not None else None

    # -------------------------------------------------------------------------
    # Pointer events
    # -------------------------------------------------------------------------

    def pointer_down(self, event: PointerEvent) -> None:
        """Start a pan or a node drag depending on what was pressed."""
        if self._state != InteractionState.IDLE:
            return

        if event.target == PointerTarget.COLLAPSE_BUTTON:
            # Handled as a click by activate_collapse()
            return

        if event.target == PointerTarget.DRAG_HANDLE and self._options.node_draggable:
            self._start_drag(event)
            return

        self._pan_anchor = (
            event.x - self._viewport.pan_x,
            event.y - self._viewport.pan_y,
        )
        self._set_state(InteractionState.PANNING)

    def pointer_move(self, event: PointerEvent) -> None:
        if self._state == InteractionState.PANNING:
            anchor_x, anchor_y = self._pan_anchor
            self._viewport.pan_to(event.x - anchor_x, event.y - anchor_y)
        elif self._state == InteractionState.DRAGGING_NODE:
            self._drag_to(event)

    def pointer_up(self, event: Optional[PointerEvent] = None) -> None:
        self._end_gesture()

    def pointer_leave(self) -> None:
        self._end_gesture()

    def wheel(self, event: WheelEvent) -> None:
        """Zoom about the cursor; one zoom step per wheel tick."""
        if event.delta_y == 0:
            return
        factor = wheel_zoom_factor(event.delta_y, self._options.zoom_step)
        self._viewport.zoom_around_point(event.x, event.y, factor)

    # -------------------------------------------------------------------------
    # Discrete activations
    # -------------------------------------------------------------------------

    def activate_collapse(self, node_id: NodeId) -> bool:
        """
        Collapse button click: toggle a node that has children.

        Returns:
            True if the node was toggled
        """
        if not self._options.collapse_child:
            return False
        node = self._model.get_node(node_id)
        if node is None:
            logger.debug("Collapse requested for unknown node %r", node_id)
            return False
        if not self._model.has_children(node_id):
            return False
        node.toggle_collapse()
        self.collapse_toggled.emit(node_id)
        return True

    def double_click(self, node_id: NodeId) -> bool:
        """Double-click on a node behaves like its collapse button."""
        return self.activate_collapse(node_id)

    # -------------------------------------------------------------------------
    # Dragging
    # -------------------------------------------------------------------------

    def _start_drag(self, event: PointerEvent) -> None:
        node = self._model.get_node(event.node_id)
        if node is None or not node.is_positioned:
            logger.debug("Ignoring drag on missing or unplaced node %r", event.node_id)
            return

        self._drag_node = node
        self._drag_anchor = event.client
        self._drag_moved = False
        node.dragging = True
        self._set_state(InteractionState.DRAGGING_NODE)
        self.drag_started.emit(node.id)

    def _live_drag_node(self) -> Optional[TreeNode]:
        """The dragged node, or None if a reload replaced it mid-drag."""
        node = self._drag_node
        if node is None or self._model.get_node(node.id) is not node:
            return None
        return node

    def _drag_to(self, event: PointerEvent) -> None:
        node = self._live_drag_node()
        if node is None or not node.is_positioned:
            logger.debug("Dragged node is gone, ignoring move")
            return

        client_x, client_y = event.client
        last_x, last_y = self._drag_anchor
        scale = self._viewport.scale
        dx = (client_x - last_x) / scale
        dy = (client_y - last_y) / scale
        self._drag_anchor = (client_x, client_y)
        if dx == 0 and dy == 0:
            return

        node.manually_positioned = True
        node.x += dx
        node.y += dy
        self._drag_moved = True
        self.node_moved.emit(node.id)

    def _end_gesture(self) -> None:
        if self._state == InteractionState.IDLE:
            return

        if self._state == InteractionState.DRAGGING_NODE and self._drag_node is not None:
            node = self._drag_node
            moved = self._drag_moved and self._live_drag_node() is not None
            node.dragging = False
            self._drag_node = None
            self._drag_moved = False
            self._set_state(InteractionState.IDLE)
            self.drag_ended.emit(node.id)
            if moved:
                self.node_drag_finished.emit(node.id)
            return

        self._set_state(InteractionState.IDLE)

    def _set_state(self, state: InteractionState) -> None:
        self._set_and_notify("_state", state, self.state_changed)
