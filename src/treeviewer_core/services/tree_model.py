"""
Tree model service.

Builds the node hierarchy from flat records and owns node identity and
parent/child relations. Nodes live in an arena keyed by id; parent and
children are resolved by key lookup, never by object reference.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..domain.models import NodeId, TreeNode, ViewerOptions


logger = logging.getLogger(__name__)


class TreeModel:
    """
    Hierarchy built from flat `{id, parent_id, ...}` records.

    Policies:
    - A node whose parent id is missing from the input becomes a root.
    - Duplicate ids: the last record wins.
    - Cyclic parent references are rejected with ValueError.
    """

    def __init__(self, options: Optional[ViewerOptions] = None,
                 records: Optional[Iterable[Mapping[str, Any]]] = None):
        self._options = options or ViewerOptions()

        self._nodes: Dict[NodeId, TreeNode] = {}
        self._children: Dict[NodeId, List[NodeId]] = {}  # parent_id -> [child_ids]
        self._root_ids: List[NodeId] = []

        if records is not None:
            self.build_tree(records)

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    def build_tree(self, records: Iterable[Mapping[str, Any]]) -> List[TreeNode]:
        """
        Build the tree from flat records, replacing any previous tree.

        Args:
            records: Mappings exposing the configured id and parent-id fields

        Returns:
            Root nodes in input order

        Raises:
            ValueError: If the parent references contain a cycle
        """
        id_key = self._options.id_alias
        parent_key = self._options.parent_id_alias

        nodes: Dict[NodeId, TreeNode] = {}
        for record in records:
            node_id = record.get(id_key)
            if node_id in nodes:
                logger.debug("Duplicate node id %r, keeping the last record", node_id)
            nodes[node_id] = TreeNode(
                id=node_id,
                parent_id=record.get(parent_key),
                data=dict(record),
            )

        children: Dict[NodeId, List[NodeId]] = {node_id: [] for node_id in nodes}
        root_ids: List[NodeId] = []
        for node in nodes.values():
            if node.parent_id is None:
                root_ids.append(node.id)
            elif node.parent_id in nodes:
                children[node.parent_id].append(node.id)
            else:
                logger.debug("Parent %r of node %r not found, treating as root",
                             node.parent_id, node.id)
                root_ids.append(node.id)

        self._check_cycles(nodes, root_ids, children)

        self._nodes = nodes
        self._children = children
        self._root_ids = root_ids
        logger.debug("Built tree: %d nodes, %d roots", len(nodes), len(root_ids))
        return self.get_root_nodes()

    def update_data(self, records: Iterable[Mapping[str, Any]]) -> List[TreeNode]:
        """Replace the data and rebuild the tree."""
        return self.build_tree(records)

    @staticmethod
    def _check_cycles(
        nodes: Dict[NodeId, TreeNode],
        root_ids: List[NodeId],
        children: Dict[NodeId, List[NodeId]],
    ) -> None:
        """Every node must be reachable from a root; the rest sit on cycles."""
        reachable = set()
        stack = list(root_ids)
        while stack:
            node_id = stack.pop()
            reachable.add(node_id)
            stack.extend(children[node_id])

        if len(reachable) == len(nodes):
            return

        # Walk parents from an unreachable node until a repeat to name the cycle
        start = next(node_id for node_id in nodes if node_id not in reachable)
        seen: List[NodeId] = []
        current = start
        while current not in seen:
            seen.append(current)
            current = nodes[current].parent_id
        cycle = seen[seen.index(current):]
        raise ValueError(
            f"Cyclic parent reference: {' -> '.join(repr(c) for c in cycle)}"
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def options(self) -> ViewerOptions:
        return self._options

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def get_root_nodes(self) -> List[TreeNode]:
        """Get the root nodes in input order."""
        return [self._nodes[node_id] for node_id in self._root_ids]

    def get_node(self, node_id: NodeId) -> Optional[TreeNode]:
        """Get a node by id (None if absent)."""
        return self._nodes.get(node_id)

    def get_children(self, node_id: NodeId) -> List[TreeNode]:
        return [self._nodes[cid] for cid in self._children.get(node_id, [])]

    def get_parent(self, node_id: NodeId) -> Optional[TreeNode]:
        """Get the structural parent, None for roots and unknown ids."""
        node = self._nodes.get(node_id)
        if node is None or node.parent_id is None:
            return None
        return self._nodes.get(node.parent_id)

    def has_children(self, node_id: NodeId) -> bool:
        return bool(self._children.get(node_id))

    def get_all_nodes(self) -> List[TreeNode]:
        """Get every node in pre-order, collapsed subtrees included."""
        result: List[TreeNode] = []
        stack = list(reversed(self._root_ids))
        while stack:
            node_id = stack.pop()
            result.append(self._nodes[node_id])
            stack.extend(reversed(self._children[node_id]))
        return result

    def get_descendants(self, node_id: NodeId) -> List[TreeNode]:
        """Get all structural descendants of a node (pre-order)."""
        result: List[TreeNode] = []
        stack = list(reversed(self._children.get(node_id, [])))
        while stack:
            cid = stack.pop()
            result.append(self._nodes[cid])
            stack.extend(reversed(self._children[cid]))
        return result

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def toggle_collapse(self, node_id: NodeId) -> bool:
        """
        Toggle the collapsed state of a node.

        Returns:
            True if the node exists and was toggled
        """
        node = self._nodes.get(node_id)
        if node is None:
            return False
        node.toggle_collapse()
        return True

    def reset_positions(self) -> None:
        """Put every node back under automatic layout."""
        for node in self._nodes.values():
            node.reset_position()
            node.manually_positioned = False
