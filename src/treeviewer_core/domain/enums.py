"""
Enumerations for the tree viewer domain.
"""

from enum import Enum


class PointerTarget(str, Enum):
    """What a pointer-down landed on."""
    CANVAS = "canvas"                # Empty background
    NODE_BODY = "node_body"          # Node content, not an affordance
    DRAG_HANDLE = "drag_handle"      # Node drag affordance
    COLLAPSE_BUTTON = "collapse_button"


class InteractionState(str, Enum):
    """Gesture states of the interaction state machine."""
    IDLE = "idle"
    PANNING = "panning"
    DRAGGING_NODE = "dragging_node"
