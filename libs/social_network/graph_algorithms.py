"""
Graph Algorithms for Social Network Analysis

This module binds the graph algorithms to one immutable snapshot:
- Path finding (breadth-first shortest path)
- Community detection (depth-first traversal and union-find)
- Friend suggestions (mutual friend ranking)

The engine never mutates its input. After the store changes, build a new
GraphAlgorithms from the fresh snapshot.
"""

import logging
from typing import List, Dict, Iterable, Optional, Tuple, Sequence

from .communities import PALETTE, find_communities, find_communities_union_find
from .errors import UnknownNode
from .graph_index import AdjacencyIndex, build_adjacency
from .models import Community, GraphData, GraphStats, NodeId, PathResult, Suggestion
from .path_finder import shortest_path, distances_from
from .suggestions import mutual_friends

logger = logging.getLogger("libs.social_network.graph_algorithms")


class GraphAlgorithms:
    """Collection of graph algorithms over a single graph snapshot"""

    def __init__(self, nodes: Iterable[NodeId], edges: Iterable[Tuple[NodeId, NodeId]],
                 palette: Sequence[str] = PALETTE):
        self._nodes: Tuple[NodeId, ...] = tuple(nodes)
        self._edges: Tuple[Tuple[NodeId, NodeId], ...] = tuple((a, b) for a, b in edges)
        self._palette = tuple(palette)
        if not self._palette:
            raise ValueError("palette must contain at least one color")
        self.index: AdjacencyIndex = build_adjacency(self._nodes, self._edges)

    @classmethod
    def from_snapshot(cls, data: GraphData, palette: Sequence[str] = PALETTE) -> 'GraphAlgorithms':
        """Build an engine from a store snapshot"""
        return cls(data.node_ids, data.edge_pairs, palette=palette)

    @property
    def nodes(self) -> Tuple[NodeId, ...]:
        return self._nodes

    @property
    def edges(self) -> Tuple[Tuple[NodeId, NodeId], ...]:
        return self._edges

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self.index

    def neighbors(self, node_id: NodeId) -> Tuple[NodeId, ...]:
        if node_id not in self.index:
            raise UnknownNode(node_id)
        return self.index.neighbors(node_id)

    def degree(self, node_id: NodeId) -> int:
        return len(self.neighbors(node_id))

    def shortest_path(self, start: NodeId, end: NodeId) -> Optional[PathResult]:
        """Find shortest path between two users using BFS; None if unreachable"""
        result = shortest_path(self.index, start, end)
        logger.debug("shortest_path %s -> %s: %s", start, end,
                     result.distance if result else "not found")
        return result

    def distances_from(self, start: NodeId) -> Dict[NodeId, int]:
        return distances_from(self.index, start)

    def communities(self) -> List[Community]:
        """Find connected components via depth-first traversal"""
        return find_communities(self.index, self._palette)

    def communities_via_union_find(self) -> List[Community]:
        """Find connected components via a disjoint-set forest"""
        return find_communities_union_find(self.index, self._edges, self._palette)

    def mutual_friends(self, user_id: NodeId, limit: Optional[int] = None) -> List[Suggestion]:
        """Suggest friends for user_id ranked by mutual friend count"""
        return mutual_friends(self.index, user_id, limit=limit)

    def stats(self) -> GraphStats:
        return GraphStats(
            total_users=len(self._nodes),
            total_friendships=len(self._edges),
            total_communities=len(self.communities()),
        )
