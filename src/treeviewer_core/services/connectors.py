"""
Connector geometry between parent and child nodes.

Each visible parent/child pair gets an S-shaped cubic Bezier from the
parent's bottom-center to the child's top-center. Connections are kept in
an edge map keyed by (parent_id, child_id) so a single node's edges can be
recomputed while it is dragged.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from ..domain.models import Connection, EdgeKey, Point, TreeNode, ViewerOptions
from .tree_model import TreeModel


def s_curve(x1: float, y1: float, x2: float, y2: float,
            curve_factor: float = 0.5) -> Tuple[Point, Point]:
    """
    Control points for an S-curve between two endpoints.

    Returns:
        (control1, control2) offset vertically by curve_factor of the span
    """
    dy = y2 - y1
    return Point(x1, y1 + dy * curve_factor), Point(x2, y2 - dy * curve_factor)


def make_connection(parent: TreeNode, child: TreeNode,
                    options: ViewerOptions) -> Connection:
    """Build the connector from parent bottom-center to child top-center."""
    half_width = options.node_width / 2
    x1 = (parent.x or 0.0) + half_width
    y1 = (parent.y or 0.0) + options.node_height
    x2 = (child.x or 0.0) + half_width
    y2 = child.y or 0.0
    control1, control2 = s_curve(x1, y1, x2, y2, options.curve_factor)
    return Connection(
        parent_id=parent.id,
        child_id=child.id,
        start=Point(x1, y1),
        end=Point(x2, y2),
        control1=control1,
        control2=control2,
    )


def build_connections(model: TreeModel, visible: Iterable[TreeNode],
                      options: ViewerOptions) -> Dict[EdgeKey, Connection]:
    """
    Build the edge map for the visible nodes of a layout pass.

    Only pairs whose parent is expanded and visible are connected.
    """
    visible = list(visible)
    visible_ids = {n.id for n in visible}
    edges: Dict[EdgeKey, Connection] = {}
    for node in visible:
        parent = model.get_parent(node.id)
        if parent is None or parent.collapsed or parent.id not in visible_ids:
            continue
        connection = make_connection(parent, node, options)
        edges[connection.key] = connection
    return edges


def update_node_connections(model: TreeModel, node: TreeNode,
                            edges: Dict[EdgeKey, Connection],
                            options: ViewerOptions) -> List[Connection]:
    """
    Recompute the connections touching one node, in place.

    Only edges already present in the map are updated, so hidden edges stay
    hidden. Returns the updated connections (parent edge first).
    """
    updated: List[Connection] = []

    parent: Optional[TreeNode] = model.get_parent(node.id)
    if parent is not None and (parent.id, node.id) in edges:
        connection = make_connection(parent, node, options)
        edges[connection.key] = connection
        updated.append(connection)

    if not node.collapsed:
        for child in model.get_children(node.id):
            if (node.id, child.id) in edges:
                connection = make_connection(node, child, options)
                edges[connection.key] = connection
                updated.append(connection)

    return updated
