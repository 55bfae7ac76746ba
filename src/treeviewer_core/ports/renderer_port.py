"""
Renderer port interface.

Defines the contract between the core and whatever surface draws the tree.
The core only hands over node positions, connector geometry, and the
viewport transform; all presentation details belong to implementations.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

from ..domain.models import Connection, NodeId, TreeNode, ViewportTransform


class RendererPort(ABC):
    """
    Abstract interface for drawing the tree.

    Implementations must not mutate the nodes they are given.
    """

    @abstractmethod
    def container_size(self) -> Tuple[float, float]:
        """Get the (width, height) of the drawing container in pixels."""
        pass

    @abstractmethod
    def render_tree(self, nodes: Sequence[TreeNode],
                    connections: Sequence[Connection]) -> None:
        """
        Redraw the whole tree.

        Args:
            nodes: Visible nodes in pre-order (parents before children)
            connections: Connectors between visible parent/child pairs
        """
        pass

    @abstractmethod
    def update_transform(self, transform: ViewportTransform) -> None:
        """Apply the pan/zoom transform to the coordinate-space group."""
        pass

    @abstractmethod
    def update_node(self, node: TreeNode, connections: List[Connection]) -> None:
        """
        Incrementally move one node and the connectors touching it.

        Args:
            node: Node whose x/y changed
            connections: Its parent edge and visible child edges
        """
        pass

    @abstractmethod
    def set_node_dragging(self, node_id: NodeId, dragging: bool) -> None:
        """Toggle the visual dragging state of a node."""
        pass

    @abstractmethod
    def raise_node(self, node_id: NodeId) -> None:
        """Bring a node to the front of the render stack."""
        pass
