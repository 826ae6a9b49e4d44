"""
Community detection

Partitions the graph into connected components in two independent ways:
- iterative depth-first traversal over the adjacency index
- a disjoint-set forest with union by rank and path compression

Both return communities numbered from 0 in the order their earliest member
appears in the snapshot, with members listed in snapshot order, so the two
methods agree on numbering as well as on the partition itself.
"""

from typing import Dict, List, Iterable, Optional, Sequence, Tuple, Set, FrozenSet

from .graph_index import AdjacencyIndex
from .models import Community, NodeId

PALETTE: Tuple[str, ...] = (
    '#FF6B6B', '#4ECDC4', '#45B7D1', '#96CEB4',
    '#FFEAA7', '#DDA0DD', '#98D8C8', '#F7DC6F',
)


def palette_color(community_index: int, palette: Sequence[str] = PALETTE) -> str:
    return palette[community_index % len(palette)]


class DisjointSet:
    """Union-find forest stored in flat parent/rank arrays"""

    def __init__(self, items: Iterable[NodeId]):
        self._items: List[NodeId] = list(items)
        self._position: Dict[NodeId, int] = {item: i for i, item in enumerate(self._items)}
        self._parent: List[int] = list(range(len(self._items)))
        self._rank: List[int] = [0] * len(self._items)
        self._sets = len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def set_count(self) -> int:
        return self._sets

    def _find_index(self, i: int) -> int:
        root = i
        while self._parent[root] != root:
            root = self._parent[root]
        # second pass: point every node on the walk straight at the root
        while self._parent[i] != root:
            self._parent[i], i = root, self._parent[i]
        return root

    def find(self, item: NodeId) -> NodeId:
        """Representative of the set containing item"""
        return self._items[self._find_index(self._position[item])]

    def union(self, a: NodeId, b: NodeId) -> bool:
        """Merge the sets holding a and b; False if they were already joined"""
        root_a = self._find_index(self._position[a])
        root_b = self._find_index(self._position[b])
        if root_a == root_b:
            return False

        if self._rank[root_a] < self._rank[root_b]:
            self._parent[root_a] = root_b
        elif self._rank[root_a] > self._rank[root_b]:
            self._parent[root_b] = root_a
        else:
            self._parent[root_b] = root_a
            self._rank[root_a] += 1
        self._sets -= 1
        return True

    def connected(self, a: NodeId, b: NodeId) -> bool:
        return self._find_index(self._position[a]) == self._find_index(self._position[b])

    def groups(self) -> List[List[NodeId]]:
        """Sets in order of first-seen representative, members in insertion order"""
        by_root: Dict[int, List[NodeId]] = {}
        for i, item in enumerate(self._items):
            by_root.setdefault(self._find_index(i), []).append(item)
        return list(by_root.values())


def _to_communities(groups: List[List[NodeId]], palette: Sequence[str]) -> List[Community]:
    return [
        Community(id=i, members=members, color=palette_color(i, palette))
        for i, members in enumerate(groups)
    ]


def find_communities(index: AdjacencyIndex, palette: Sequence[str] = PALETTE) -> List[Community]:
    """Connected components via iterative depth-first traversal"""
    position = {node: i for i, node in enumerate(index.nodes)}
    visited: Set[NodeId] = set()
    groups: List[List[NodeId]] = []

    for node in index.nodes:
        if node in visited:
            continue

        component = []
        visited.add(node)
        stack = [node]
        while stack:
            current = stack.pop()
            component.append(current)
            for neighbor in index.neighbors(current):
                if neighbor not in visited:
                    visited.add(neighbor)
                    stack.append(neighbor)

        component.sort(key=position.__getitem__)
        groups.append(component)

    return _to_communities(groups, palette)


def find_communities_union_find(
    index: AdjacencyIndex,
    edges: Optional[Iterable[Tuple[NodeId, NodeId]]] = None,
    palette: Sequence[str] = PALETTE,
) -> List[Community]:
    """Connected components via a disjoint-set forest.

    edges defaults to every edge of the index, each taken once.
    """
    forest = DisjointSet(index.nodes)
    if edges is None:
        edges = _index_edges(index)
    for source, target in edges:
        forest.union(source, target)
    return _to_communities(forest.groups(), palette)


def _index_edges(index: AdjacencyIndex) -> List[Tuple[NodeId, NodeId]]:
    position = {node: i for i, node in enumerate(index.nodes)}
    return [
        (node, neighbor)
        for node in index.nodes
        for neighbor in index.neighbors(node)
        if position[node] < position[neighbor]
    ]


def partition_of(communities: Iterable[Community]) -> Set[FrozenSet[NodeId]]:
    """The equivalence classes a community list induces, ignoring ids and order"""
    return {community.member_set() for community in communities}


def same_partition(a: Iterable[Community], b: Iterable[Community]) -> bool:
    return partition_of(a) == partition_of(b)
