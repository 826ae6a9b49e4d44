"""
Social Network Graph Engine

This module provides the graph algorithms behind the social network service:
- Adjacency index construction from a user/friendship snapshot
- Shortest connection path between two users
- Community detection (traversal and union-find)
- Mutual-friend suggestions
- A persistent, observable graph store
"""

from .models import User, Friendship, GraphData, PathResult, Community, Suggestion, GraphStats
from .errors import (
    GraphError, UnknownNode, InvalidEdge, DuplicateEdge, DuplicateNode,
    InvalidGraphData, GraphLimitExceeded,
)
from .graph_index import AdjacencyIndex, build_adjacency
from .communities import DisjointSet, PALETTE
from .graph_algorithms import GraphAlgorithms
from .store import GraphDataManager

__all__ = [
    'User',
    'Friendship',
    'GraphData',
    'PathResult',
    'Community',
    'Suggestion',
    'GraphStats',
    'GraphError',
    'UnknownNode',
    'InvalidEdge',
    'DuplicateEdge',
    'DuplicateNode',
    'InvalidGraphData',
    'GraphLimitExceeded',
    'AdjacencyIndex',
    'build_adjacency',
    'DisjointSet',
    'PALETTE',
    'GraphAlgorithms',
    'GraphDataManager'
]
