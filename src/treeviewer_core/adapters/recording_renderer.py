"""
Recording Renderer Adapter.

Headless RendererPort implementation that keeps a snapshot of what a real
surface would show: node positions, connector paths, the transform, the
dragging flags, and the stacking order. Every call is also appended to
`calls` so callers can check what was redrawn and when.
"""

from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from ..domain.models import Connection, EdgeKey, NodeId, TreeNode, ViewportTransform
from ..ports.renderer_port import RendererPort


class RecordingRenderer(RendererPort):
    """In-memory renderer for headless use and testing."""

    def __init__(self, width: float = 800, height: float = 600):
        """
        Initialize the renderer.

        Args:
            width: Container width in pixels
            height: Container height in pixels
        """
        self.width = width
        self.height = height

        self.positions: Dict[NodeId, Tuple[float, float]] = {}
        self.paths: Dict[EdgeKey, str] = {}
        self.transform: Optional[ViewportTransform] = None
        self.dragging: Set[NodeId] = set()
        self.z_order: List[NodeId] = []   # Back to front
        self.calls: List[Tuple[str, Any]] = []

    def container_size(self) -> Tuple[float, float]:
        return self.width, self.height

    def render_tree(self, nodes: Sequence[TreeNode],
                    connections: Sequence[Connection]) -> None:
        self.positions = {n.id: (n.x, n.y) for n in nodes}
        self.paths = {c.key: c.path_data for c in connections}
        self.z_order = [n.id for n in nodes]
        self.dragging = {n.id for n in nodes if n.dragging}
        self.calls.append(("render_tree", len(nodes)))

    def update_transform(self, transform: ViewportTransform) -> None:
        self.transform = transform
        self.calls.append(("update_transform", transform))

    def update_node(self, node: TreeNode, connections: List[Connection]) -> None:
        self.positions[node.id] = (node.x, node.y)
        for connection in connections:
            self.paths[connection.key] = connection.path_data
        self.calls.append(("update_node", (node.id, [c.key for c in connections])))

    def set_node_dragging(self, node_id: NodeId, dragging: bool) -> None:
        if dragging:
            self.dragging.add(node_id)
        else:
            self.dragging.discard(node_id)
        self.calls.append(("set_node_dragging", (node_id, dragging)))

    def raise_node(self, node_id: NodeId) -> None:
        if node_id in self.z_order:
            self.z_order.remove(node_id)
        self.z_order.append(node_id)
        self.calls.append(("raise_node", node_id))

    def call_names(self) -> List[str]:
        """Names of the recorded calls, in order."""
        return [name for name, _ in self.calls]

    def clear_calls(self) -> None:
        self.calls.clear()
