"""
Tree layout engine.

Converts the hierarchy held by a TreeModel into 2-D coordinates:
- Leaves reserve `horizontal_spacing` each, parents reserve the sum of
  their children's reserved widths
- Parents are centered over the full span of their children
- Root trees are laid out left to right with `node_padding` between them
- Manually positioned nodes keep their coordinates and carry their
  subtree with them
- A final shift removes negative x coordinates
"""

import logging
from typing import Dict, Iterable, List, Tuple

from ..domain.models import LayoutResult, NodeId, TreeBounds, TreeNode, ViewerOptions
from .tree_model import TreeModel


logger = logging.getLogger(__name__)

# (positioned nodes in pre-order, reserved widths by id, reserved width of this subtree)
_Subtree = Tuple[List[TreeNode], Dict[NodeId, float], float]


class LayoutEngine:
    """Computes node positions for a TreeModel."""

    def __init__(self, options: ViewerOptions):
        self._options = options

    @property
    def options(self) -> ViewerOptions:
        return self._options

    def layout_tree(self, model: TreeModel) -> LayoutResult:
        """
        Position every visible node of the model.

        Args:
            model: Tree to lay out. Node x/y/orig_x/orig_y are updated in place.

        Returns:
            LayoutResult with the visible nodes in pre-order and the
            reserved subtree width of every visited node
        """
        flat: List[TreeNode] = []
        widths: Dict[NodeId, float] = {}

        cursor = 0.0
        for root in model.get_root_nodes():
            sub_flat, sub_widths, width = self._layout_node(model, root, 0, cursor)
            flat.extend(sub_flat)
            widths.update(sub_widths)
            cursor += width + self._options.node_padding

        self._shift_to_origin(flat)
        logger.debug("Laid out %d visible nodes", len(flat))
        return LayoutResult(nodes=flat, widths=widths)

    # -------------------------------------------------------------------------
    # Recursion
    # -------------------------------------------------------------------------

    def _layout_node(self, model: TreeModel, node: TreeNode, depth: int,
                     cursor: float) -> _Subtree:
        opts = self._options
        row_y = depth * opts.level_height
        children = [] if node.collapsed else model.get_children(node.id)

        if node.manually_positioned and node.is_positioned:
            child_flat, widths, total = self._layout_children(model, children, depth, cursor)
            if children:
                self._follow_manual_parent(model, node, children, row_y)
            width = max(opts.horizontal_spacing, total)
            widths[node.id] = width
            return [node] + child_flat, widths, width

        if not children:
            node.x = cursor
            node.y = row_y
            node.orig_x = node.x
            node.orig_y = node.y
            return [node], {node.id: opts.horizontal_spacing}, opts.horizontal_spacing

        child_flat, widths, total = self._layout_children(model, children, depth, cursor)
        if total == 0:
            total = opts.horizontal_spacing

        node.x = self._centered_x(children)
        node.y = row_y
        node.orig_x = node.x
        node.orig_y = node.y
        widths[node.id] = total
        return [node] + child_flat, widths, total

    def _layout_children(self, model: TreeModel, children: List[TreeNode],
                         depth: int, cursor: float) -> _Subtree:
        """Lay children out left to right, each starting where the last one ended."""
        flat: List[TreeNode] = []
        widths: Dict[NodeId, float] = {}
        total = 0.0
        for child in children:
            sub_flat, sub_widths, width = self._layout_node(model, child, depth + 1, cursor + total)
            flat.extend(sub_flat)
            widths.update(sub_widths)
            total += width
        return flat, widths, total

    def _centered_x(self, children: List[TreeNode]) -> float:
        """Center over the span from the leftmost child's left edge to the rightmost child's right edge."""
        node_width = self._options.node_width
        left_edge = children[0].x or 0.0
        right_edge = (children[-1].x or 0.0) + node_width
        return left_edge + (right_edge - left_edge) / 2 - node_width / 2

    def _follow_manual_parent(self, model: TreeModel, node: TreeNode,
                              children: List[TreeNode], row_y: float) -> None:
        """
        Translate a manual node's automatic descendants so they stay under it.

        Horizontally the span of the automatic children is centered under the
        node, vertically the subtree moves by the node's offset from its
        automatic row. Manual children are left out of the span so that their
        coordinates never feed back into the offset.
        """
        automatic = [c for c in children if not c.manually_positioned]
        if not automatic:
            return
        dx = node.x - self._centered_x(automatic)
        dy = node.y - row_y
        if dx == 0 and dy == 0:
            return
        for child in automatic:
            self._translate_subtree(model, child, dx, dy)

    def _translate_subtree(self, model: TreeModel, node: TreeNode,
                           dx: float, dy: float) -> None:
        # Manual nodes already placed their own subtree relative to themselves
        if node.manually_positioned:
            return
        node.x += dx
        node.y += dy
        node.orig_x = node.x
        node.orig_y = node.y
        if not node.collapsed:
            for child in model.get_children(node.id):
                self._translate_subtree(model, child, dx, dy)

    @staticmethod
    def _shift_to_origin(flat: List[TreeNode]) -> None:
        """Shift everything right so that no visible node has a negative x."""
        xs = [n.x for n in flat if n.x is not None]
        if not xs:
            return
        min_x = min(xs)
        if min_x >= 0:
            return
        for node in flat:
            if node.x is not None:
                node.x -= min_x
            if node.orig_x is not None:
                node.orig_x -= min_x


def calculate_tree_bounds(nodes: Iterable[TreeNode], node_width: float,
                          node_height: float) -> TreeBounds:
    """
    Calculate the bounding box of positioned nodes.

    Each node spans node_width x node_height from its (x, y) corner.
    Returns an all-zero box when no node is positioned.
    """
    positioned = [n for n in nodes if n.is_positioned]
    if not positioned:
        return TreeBounds()

    return TreeBounds(
        min_x=min(n.x for n in positioned),
        min_y=min(n.y for n in positioned),
        max_x=max(n.x + node_width for n in positioned),
        max_y=max(n.y + node_height for n in positioned),
    )
