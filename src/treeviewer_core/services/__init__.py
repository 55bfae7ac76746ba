"""
Services for the tree viewer.

Business logic for building the hierarchy, laying it out, and computing
connector and viewport geometry.
"""

from .tree_model import TreeModel
from .layout import LayoutEngine, calculate_tree_bounds
from .connectors import s_curve, make_connection, build_connections, update_node_connections
from .viewport import zoom_around_point, wheel_zoom_factor, compute_fit_transform

__all__ = [
    "TreeModel",
    "LayoutEngine",
    "calculate_tree_bounds",
    "s_curve",
    "make_connection",
    "build_connections",
    "update_node_connections",
    "zoom_around_point",
    "wheel_zoom_factor",
    "compute_fit_transform",
]
