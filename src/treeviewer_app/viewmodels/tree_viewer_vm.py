"""
Tree Viewer ViewModel - coordinates the core services and the renderer.

Manages:
- The tree model built from flat records
- The refresh pipeline: layout -> bounds -> connectors -> render
- Centering and fitting the viewport once bounds are known
- Routing interaction signals to incremental or full redraws

The renderer receives state from this ViewModel and focuses purely on
drawing.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from PyQt6.QtCore import pyqtSignal

from .base import BaseViewModel
from .interaction_vm import InteractionVM
from .viewport_vm import ViewportVM
from treeviewer_core.domain.models import (
    Connection, EdgeKey, NodeId, TreeBounds, TreeNode, ViewerOptions, ViewportTransform,
)
from treeviewer_core.ports.renderer_port import RendererPort
from treeviewer_core.services.connectors import build_connections, update_node_connections
from treeviewer_core.services.layout import LayoutEngine, calculate_tree_bounds
from treeviewer_core.services.tree_model import TreeModel


logger = logging.getLogger(__name__)


class TreeViewerVM(BaseViewModel):
    """
    ViewModel for one interactive tree viewer.

    Signals:
        refreshed: Emitted after every completed refresh pipeline

    State:
        flat_nodes: Visible nodes from the last layout pass (pre-order)
        bounds: TreeBounds of the visible nodes
        connections: Edge map keyed by (parent_id, child_id)
        transform: Current viewport transform
    """

    refreshed = pyqtSignal()

    def __init__(
        self,
        renderer: RendererPort,
        data: Optional[Iterable[Mapping[str, Any]]] = None,
        options: Union[ViewerOptions, Dict[str, Any], None] = None,
    ):
        """
        Initialize the viewer, lay the tree out, and center it.

        Args:
            renderer: Surface the tree is drawn on
            data: Flat records with id and parent-id fields
            options: ViewerOptions or a mapping accepted by ViewerOptions.from_dict

        Raises:
            ValueError: If no renderer is given, or the data has a parent cycle
        """
        if renderer is None:
            raise ValueError("A renderer is required to create a tree viewer")

        super().__init__()

        if isinstance(options, Mapping):
            options = ViewerOptions.from_dict(options)
        self._options = options or ViewerOptions()
        self._renderer = renderer

        self._model = TreeModel(self._options, data or [])
        self._layout = LayoutEngine(self._options)
        self._viewport = ViewportVM(self._options.zoom_step, self._options.reset_pan)
        self._interaction = InteractionVM(self._model, self._viewport, self._options)

        # Results of the last refresh
        self._flat_nodes: List[TreeNode] = []
        self._bounds = TreeBounds()
        self._connections: Dict[EdgeKey, Connection] = {}

        # Refresh re-entrancy guard
        self._refreshing = False
        self._refresh_pending = False

        self._connect_signals()

        self.refresh()
        self.center_tree()

    def _connect_signals(self) -> None:
        """Wire viewport and interaction signals to the renderer and pipeline."""
        self._viewport.transform_changed.connect(self._renderer.update_transform)

        self._interaction.drag_started.connect(self._on_drag_started)
        self._interaction.node_moved.connect(self._on_node_moved)
        self._interaction.drag_ended.connect(self._on_drag_ended)
        self._interaction.node_drag_finished.connect(self._on_node_drag_finished)
        self._interaction.collapse_toggled.connect(self._on_collapse_toggled)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def options(self) -> ViewerOptions:
        return self._options

    @property
    def model(self) -> TreeModel:
        return self._model

    @property
    def viewport(self) -> ViewportVM:
        return self._viewport

    @property
    def interaction(self) -> InteractionVM:
        return self._interaction

    @property
    def flat_nodes(self) -> List[TreeNode]:
        return list(self._flat_nodes)

    @property
    def bounds(self) -> TreeBounds:
        return self._bounds

    @property
    def connections(self) -> Dict[EdgeKey, Connection]:
        return dict(self._connections)

    @property
    def transform(self) -> ViewportTransform:
        return self._viewport.transform

    def get_all_nodes(self) -> List[TreeNode]:
        """All nodes of the model, collapsed subtrees included."""
        return self._model.get_all_nodes()

    def get_node(self, node_id: NodeId) -> Optional[TreeNode]:
        return self._model.get_node(node_id)

    # -------------------------------------------------------------------------
    # Refresh Pipeline
    # -------------------------------------------------------------------------

    def refresh(self) -> None:
        """
        Re-run layout, bounds, and connectors, then redraw everything.

        A refresh requested while one is running is queued and run right
        after it, never interleaved.
        """
        if self._refreshing:
            self._refresh_pending = True
            return

        self._refreshing = True
        try:
            while True:
                self._refresh_pending = False
                self._run_pipeline()
                if not self._refresh_pending:
                    break
        finally:
            self._refreshing = False

        self.refreshed.emit()

    def _run_pipeline(self) -> None:
        result = self._layout.layout_tree(self._model)
        self._flat_nodes = result.nodes
        self._bounds = calculate_tree_bounds(
            result.nodes, self._options.node_width, self._options.node_height
        )
        self._connections = build_connections(self._model, result.nodes, self._options)

        self._renderer.render_tree(self._flat_nodes, list(self._connections.values()))
        self._renderer.update_transform(self._viewport.transform)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def update_data(self, data: Iterable[Mapping[str, Any]]) -> None:
        """
        Replace the data, re-layout, and re-center.

        Raises:
            ValueError: If the new data has a parent cycle (old tree is kept)
        """
        self._model.update_data(data)
        self.refresh()
        self.center_tree()

    def toggle_node_collapse(self, node_id: NodeId) -> bool:
        """
        Toggle collapse state of a node by id, then refresh and re-center.

        Returns:
            False if no node has that id
        """
        if not self._model.toggle_collapse(node_id):
            return False
        self.refresh()
        self.center_tree()
        return True

    def reset_node_positions(self) -> None:
        """Drop every manual position and lay the tree out from scratch."""
        self._model.reset_positions()
        self.refresh()
        self.center_tree()

    def reset_view(self) -> None:
        """Reset pan and zoom to the fixed default."""
        self._viewport.reset_transform()

    def center_tree(self) -> None:
        """Fit and center the visible tree in the container."""
        self._fit(self._options.center_padding)

    def zoom_to_fit(self) -> None:
        """Fit the visible tree with the tighter fit padding."""
        if not self._flat_nodes:
            return
        self._fit(self._options.fit_padding)

    def zoom_in(self) -> None:
        self._viewport.zoom_in()

    def zoom_out(self) -> None:
        self._viewport.zoom_out()

    def _fit(self, padding: float) -> None:
        width, height = self._renderer.container_size()
        self._viewport.fit_to_bounds(self._bounds, width, height, padding)

    # -------------------------------------------------------------------------
    # Interaction Handlers
    # -------------------------------------------------------------------------

    def _on_drag_started(self, node_id: NodeId) -> None:
        self._renderer.raise_node(node_id)
        self._renderer.set_node_dragging(node_id, True)

    def _on_node_moved(self, node_id: NodeId) -> None:
        """Incremental redraw: the node and the connectors touching it."""
        node = self._model.get_node(node_id)
        if node is None:
            return
        updated = update_node_connections(self._model, node, self._connections, self._options)
        self._renderer.update_node(node, updated)

    def _on_drag_ended(self, node_id: NodeId) -> None:
        self._renderer.set_node_dragging(node_id, False)

    def _on_node_drag_finished(self, node_id: NodeId) -> None:
        logger.debug("Node %r dropped, reconciling layout", node_id)
        self.refresh()
        if self._options.recenter_after_drag:
            self.center_tree()

    def _on_collapse_toggled(self, node_id: NodeId) -> None:
        self.refresh()
        self.center_tree()
