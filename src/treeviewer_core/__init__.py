"""
Tree Viewer Core - Headless library for interactive tree diagrams.

This module provides the hierarchy model, the tree layout engine, bounds
and connector geometry, and viewport math. It has no UI dependencies and
hands everything it computes to a RendererPort implementation.
"""

__version__ = "0.1.0"

# Lazy imports to avoid loading everything at once
def __getattr__(name):
    if name == "TreeModel":
        from .services.tree_model import TreeModel
        return TreeModel
    elif name == "LayoutEngine":
        from .services.layout import LayoutEngine
        return LayoutEngine
    elif name == "ViewerOptions":
        from .domain.models import ViewerOptions
        return ViewerOptions
    elif name == "RecordingRenderer":
        from .adapters.recording_renderer import RecordingRenderer
        return RecordingRenderer
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "__version__",
    "TreeModel",
    "LayoutEngine",
    "ViewerOptions",
    "RecordingRenderer",
]
