"""
Qt input translation.

Converts QMouseEvent / QWheelEvent from whatever widget hosts the tree into
the core's PointerEvent / WheelEvent, and dispatches them to an
InteractionVM. Hit-testing (which node or affordance is under the pointer)
stays with the widget; it passes the result in as `target` and `node_id`.
"""

from typing import Optional

from PyQt6.QtCore import Qt

from treeviewer_core.domain.enums import PointerTarget
from treeviewer_core.domain.models import NodeId, PointerEvent, WheelEvent
from ..viewmodels.interaction_vm import InteractionVM


def pointer_event_from_qt(
    event,
    target: PointerTarget = PointerTarget.CANVAS,
    node_id: Optional[NodeId] = None,
) -> PointerEvent:
    """
    Build a PointerEvent from a QMouseEvent.

    Args:
        event: QMouseEvent (widget-relative position + global position)
        target: What the widget hit-tested under the pointer
        node_id: Node owning the target, if any
    """
    pos = event.position()
    global_pos = event.globalPosition()
    return PointerEvent(
        x=pos.x(),
        y=pos.y(),
        target=target,
        node_id=node_id,
        client_x=global_pos.x(),
        client_y=global_pos.y(),
    )


def wheel_event_from_qt(event) -> WheelEvent:
    """
    Build a WheelEvent from a QWheelEvent.

    Qt reports scroll up as a positive angleDelta; the core uses positive
    delta_y for scroll down, so the sign is flipped.
    """
    pos = event.position()
    return WheelEvent(x=pos.x(), y=pos.y(), delta_y=-event.angleDelta().y())


class QtInputBridge:
    """
    Forwards a widget's mouse handlers to an InteractionVM.

    Only the left button drives pan/drag gestures, as in the canvas views.
    """

    def __init__(self, interaction: InteractionVM):
        self._interaction = interaction

    def mouse_press(self, event, target: PointerTarget = PointerTarget.CANVAS,
                    node_id: Optional[NodeId] = None) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            return
        self._interaction.pointer_down(pointer_event_from_qt(event, target, node_id))

    def mouse_move(self, event) -> None:
        self._interaction.pointer_move(pointer_event_from_qt(event))

    def mouse_release(self, event) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            return
        self._interaction.pointer_up(pointer_event_from_qt(event))

    def mouse_double_click(self, event, node_id: Optional[NodeId] = None) -> None:
        if node_id is not None:
            self._interaction.double_click(node_id)

    def collapse_clicked(self, node_id: NodeId) -> None:
        self._interaction.activate_collapse(node_id)

    def leave(self) -> None:
        self._interaction.pointer_leave()

    def wheel(self, event) -> None:
        self._interaction.wheel(wheel_event_from_qt(event))
