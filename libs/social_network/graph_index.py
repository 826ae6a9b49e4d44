"""
Adjacency index construction

Turns a node list and an undirected edge list into constant-time neighbor
lookups. Neighbor lists are kept sorted by node id so that every query that
walks them produces the same output for the same snapshot.
"""

import logging
from typing import Dict, Iterable, List, Tuple, FrozenSet, Set, Any

from .errors import InvalidEdge, DuplicateEdge, DuplicateNode
from .models import NodeId

logger = logging.getLogger("libs.social_network.graph_index")


def node_sort_key(node_id: NodeId) -> Tuple[int, Any]:
    """Ascending id order; integer ids sort before string ids when mixed"""
    if isinstance(node_id, (int, float)) and not isinstance(node_id, bool):
        return (0, node_id)
    return (1, str(node_id))


class AdjacencyIndex:
    """Read-only mapping from node id to its sorted neighbors"""

    def __init__(self, nodes: List[NodeId], neighbors: Dict[NodeId, Tuple[NodeId, ...]]):
        self._nodes = tuple(nodes)
        self._neighbors = neighbors
        self._neighbor_sets = {node: frozenset(adj) for node, adj in neighbors.items()}

    @property
    def nodes(self) -> Tuple[NodeId, ...]:
        """Node ids in snapshot order"""
        return self._nodes

    def __contains__(self, node_id: NodeId) -> bool:
        return node_id in self._neighbors

    def __len__(self) -> int:
        return len(self._nodes)

    def neighbors(self, node_id: NodeId) -> Tuple[NodeId, ...]:
        return self._neighbors[node_id]

    def neighbor_set(self, node_id: NodeId) -> FrozenSet[NodeId]:
        return self._neighbor_sets[node_id]

    def degree(self, node_id: NodeId) -> int:
        return len(self._neighbors[node_id])

    def has_edge(self, a: NodeId, b: NodeId) -> bool:
        return a in self._neighbor_sets and b in self._neighbor_sets[a]

    def edge_count(self) -> int:
        return sum(len(adj) for adj in self._neighbors.values()) // 2

    def to_dict(self) -> Dict[NodeId, List[NodeId]]:
        return {node: list(self._neighbors[node]) for node in self._nodes}


def build_adjacency(nodes: Iterable[NodeId], edges: Iterable[Tuple[NodeId, NodeId]]) -> AdjacencyIndex:
    """Build the adjacency index for a snapshot.

    Every node gets an entry even with no edges. Self-loops and edges that
    reference a missing node raise InvalidEdge; a repeated unordered pair
    raises DuplicateEdge; a repeated node id raises DuplicateNode.
    """
    ordered: List[NodeId] = []
    adjacency: Dict[NodeId, Set[NodeId]] = {}
    for node in nodes:
        if node in adjacency:
            raise DuplicateNode(node)
        adjacency[node] = set()
        ordered.append(node)

    seen: Set[FrozenSet[NodeId]] = set()
    for source, target in edges:
        if source == target:
            raise InvalidEdge(source, target, "self-loop")
        if source not in adjacency:
            raise InvalidEdge(source, target, f"unknown node {source}")
        if target not in adjacency:
            raise InvalidEdge(source, target, f"unknown node {target}")
        pair = frozenset((source, target))
        if pair in seen:
            raise DuplicateEdge(source, target)
        seen.add(pair)
        adjacency[source].add(target)
        adjacency[target].add(source)

    neighbors = {node: tuple(sorted(adj, key=node_sort_key)) for node, adj in adjacency.items()}
    logger.debug("Built adjacency index: %s nodes, %s edges", len(ordered), len(seen))
    return AdjacencyIndex(ordered, neighbors)
