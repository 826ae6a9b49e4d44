"""
Breadth-first path finding over an adjacency index
"""

from typing import Dict, List, Optional
from collections import deque

from .errors import UnknownNode
from .graph_index import AdjacencyIndex
from .models import NodeId, PathResult


def shortest_path(index: AdjacencyIndex, start: NodeId, end: NodeId) -> Optional[PathResult]:
    """Find the fewest-edge path from start to end.

    Returns None when end is unreachable from start. Neighbors are expanded
    in ascending id order, so among equal-length paths the one found first
    in that order is returned.
    """
    for node in (start, end):
        if node not in index:
            raise UnknownNode(node)

    if start == end:
        return PathResult(path=[start])

    parent: Dict[NodeId, NodeId] = {}
    visited = {start}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for neighbor in index.neighbors(current):
            if neighbor in visited:
                continue
            visited.add(neighbor)
            parent[neighbor] = current
            if neighbor == end:
                return PathResult(path=_reconstruct(parent, start, end))
            queue.append(neighbor)

    return None


def _reconstruct(parent: Dict[NodeId, NodeId], start: NodeId, end: NodeId) -> List[NodeId]:
    path = [end]
    node = end
    while node != start:
        node = parent[node]
        path.append(node)
    path.reverse()
    return path


def distances_from(index: AdjacencyIndex, start: NodeId) -> Dict[NodeId, int]:
    """Hop count from start to every reachable node (start itself is 0)"""
    if start not in index:
        raise UnknownNode(start)

    distances = {start: 0}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in index.neighbors(current):
            if neighbor not in distances:
                distances[neighbor] = distances[current] + 1
                queue.append(neighbor)
    return distances
