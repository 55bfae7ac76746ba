"""
Domain models for the tree viewer.

Contains DTOs, enums, and data structures used throughout the library.
"""

from .models import (
    NodeId,
    EdgeKey,
    ViewerOptions,
    TreeNode,
    Point,
    TreeBounds,
    ViewportTransform,
    Connection,
    LayoutResult,
    PointerEvent,
    WheelEvent,
)
from .enums import (
    PointerTarget,
    InteractionState,
)

__all__ = [
    # Models
    "NodeId",
    "EdgeKey",
    "ViewerOptions",
    "TreeNode",
    "Point",
    "TreeBounds",
    "ViewportTransform",
    "Connection",
    "LayoutResult",
    "PointerEvent",
    "WheelEvent",
    # Enums
    "PointerTarget",
    "InteractionState",
]
