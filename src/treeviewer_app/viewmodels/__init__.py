"""
ViewModels for the tree viewer.

MVVM architecture separating interaction state from drawing:
- ViewModels handle state and commands, and emit signals on change
- Renderers (RendererPort implementations) handle drawing
- Core services handle layout and geometry
"""

from .base import BaseViewModel
from .viewport_vm import ViewportVM
from .interaction_vm import InteractionVM
from .tree_viewer_vm import TreeViewerVM

__all__ = [
    # Base
    "BaseViewModel",

    # ViewModels
    "ViewportVM",
    "InteractionVM",
    "TreeViewerVM",
]
