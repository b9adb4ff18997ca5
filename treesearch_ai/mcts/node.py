"""
Monte Carlo search tree.

This module defines the nodes and edges of the MCTS tree and the arena that
owns them. Nodes are addressed by integer handles; each node stores the
handle of its parent, so backpropagation can walk up the tree without any
object back-references. A tree lives for a single search call and is
discarded afterwards.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Hashable, Iterator, List, Optional, Set

from treesearch_ai.core.constants import ROOT_VISIT_COUNT


NodeHandle = int


@dataclass(frozen=True)
class SearchEdge:
    """An action connecting a parent node to one of its children."""
    action: Hashable
    child: NodeHandle


@dataclass
class SearchNode:
    """
    A node in the Monte Carlo search tree.

    Each node represents the state reached by the sequence of actions on the
    path from the root. Game states are not stored; the search replays
    actions on a fresh copy of the root state every simulation.
    """
    side: Any
    """Player who acted to create this node"""

    total_reward: float = 0.0
    """Q(v): total reward of all playouts that passed through this node"""

    visit_count: int = 0
    """N(v): number of playouts that passed through this node"""

    parent: Optional[NodeHandle] = None
    edges: List[SearchEdge] = field(default_factory=list)

    @property
    def average_reward(self) -> float:
        """Q(v) / N(v), or 0 for an unvisited node."""
        if self.visit_count == 0:
            return 0.0
        return self.total_reward / self.visit_count

    def is_root(self) -> bool:
        return self.parent is None

    def __str__(self) -> str:
        return (f"SearchNode(side={self.side}, "
                f"visits={self.visit_count}, "
                f"reward={self.total_reward:.2f}, "
                f"children={len(self.edges)})")


class SearchTree:
    """
    Arena owning every node of one search.

    Handles are indexes into the arena and stay valid for the lifetime of
    the tree; nodes are never removed.
    """

    def __init__(self, root_side: Any):
        """
        Create a tree containing only a root node.

        Args:
            root_side: Player the search is run for
        """
        self.nodes: List[SearchNode] = [
            SearchNode(side=root_side, total_reward=0.0, visit_count=ROOT_VISIT_COUNT)
        ]
        self.root: NodeHandle = 0
        self._depths: List[int] = [0]

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, handle: NodeHandle) -> SearchNode:
        return self.nodes[handle]

    def add_child(self, parent: NodeHandle, action: Hashable, side: Any) -> NodeHandle:
        """
        Add a new, unvisited child below `parent`.

        Args:
            parent: Handle of the parent node
            action: Action leading from the parent to the child
            side: Player who performed `action`

        Returns:
            Handle of the new child
        """
        if action in self.explored_actions(parent):
            raise ValueError(f"Action {action} already expanded from node {parent}")

        handle = len(self.nodes)
        self.nodes.append(SearchNode(side=side, parent=parent))
        self.nodes[parent].edges.append(SearchEdge(action=action, child=handle))
        self._depths.append(self._depths[parent] + 1)
        return handle

    def edges(self, handle: NodeHandle) -> List[SearchEdge]:
        return self.nodes[handle].edges

    def parent(self, handle: NodeHandle) -> Optional[NodeHandle]:
        return self.nodes[handle].parent

    def explored_actions(self, handle: NodeHandle) -> Set[Hashable]:
        """Actions already represented by an outgoing edge of `handle`."""
        return {edge.action for edge in self.nodes[handle].edges}

    def child_for(self, handle: NodeHandle, action: Hashable) -> Optional[NodeHandle]:
        for edge in self.nodes[handle].edges:
            if edge.action == action:
                return edge.child
        return None

    def ancestors(self, handle: NodeHandle) -> Iterator[NodeHandle]:
        """Iterate from `handle` up to and including the root."""
        current: Optional[NodeHandle] = handle
        while current is not None:
            yield current
            current = self.nodes[current].parent

    def depth(self, handle: NodeHandle) -> int:
        """Number of edges between the root and `handle`."""
        return self._depths[handle]

    def max_depth(self) -> int:
        return max(self._depths)
