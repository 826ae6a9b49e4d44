"""
Social Network Data Models

This module defines the core data structures for the social graph engine:
- User: a node in the graph (id plus display name)
- Friendship: an undirected edge between two users
- GraphData: a snapshot pairing a user list with a friendship list
- PathResult, Community, Suggestion, GraphStats: query results
"""

from typing import Dict, List, Tuple, Any, Hashable, FrozenSet
from dataclasses import dataclass, field


NodeId = Hashable


@dataclass
class User:
    """Represents a user in the social network"""

    id: NodeId
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert user to dictionary for serialization"""
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'User':
        """Create user from dictionary"""
        name = data.get("name", "")
        if name is None:
            name = ""
        return cls(id=data["id"], name=str(name))


@dataclass
class Friendship:
    """Represents an undirected friendship between two users"""

    source: NodeId
    target: NodeId

    @property
    def key(self) -> FrozenSet[NodeId]:
        """Orientation-free identity of the edge"""
        return frozenset((self.source, self.target))

    def involves(self, user_id: NodeId) -> bool:
        return self.source == user_id or self.target == user_id

    def connects(self, a: NodeId, b: NodeId) -> bool:
        return (self.source == a and self.target == b) or (self.source == b and self.target == a)

    def as_tuple(self) -> Tuple[NodeId, NodeId]:
        return (self.source, self.target)

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source, "target": self.target}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Friendship':
        return cls(source=data["source"], target=data["target"])


@dataclass
class GraphData:
    """Snapshot of the whole graph: users plus friendships"""

    users: List[User] = field(default_factory=list)
    friendships: List[Friendship] = field(default_factory=list)

    @property
    def node_ids(self) -> List[NodeId]:
        return [user.id for user in self.users]

    @property
    def edge_pairs(self) -> List[Tuple[NodeId, NodeId]]:
        return [friendship.as_tuple() for friendship in self.friendships]

    def copy(self) -> 'GraphData':
        """Deep enough copy that mutating the result never touches this snapshot"""
        return GraphData(
            users=[User(id=u.id, name=u.name) for u in self.users],
            friendships=[Friendship(source=f.source, target=f.target) for f in self.friendships],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "users": [user.to_dict() for user in self.users],
            "friendships": [friendship.to_dict() for friendship in self.friendships],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GraphData':
        return cls(
            users=[User.from_dict(u) for u in data.get("users", [])],
            friendships=[Friendship.from_dict(f) for f in data.get("friendships", [])],
        )


@dataclass
class PathResult:
    """Shortest path from start to end inclusive; distance is the edge count"""

    path: Tuple[NodeId, ...]
    distance: int = field(init=False)

    def __post_init__(self):
        self.path = tuple(self.path)
        self.distance = len(self.path) - 1

    @property
    def start(self) -> NodeId:
        return self.path[0]

    @property
    def end(self) -> NodeId:
        return self.path[-1]

    def edges(self) -> List[Tuple[NodeId, NodeId]]:
        """Consecutive pairs along the path"""
        return list(zip(self.path, self.path[1:]))

    def to_dict(self) -> Dict[str, Any]:
        return {"path": list(self.path), "distance": self.distance}


@dataclass
class Community:
    """A connected component with its display color"""

    id: int
    members: Tuple[NodeId, ...]
    color: str

    def __post_init__(self):
        self.members = tuple(self.members)

    @property
    def size(self) -> int:
        return len(self.members)

    def member_set(self) -> FrozenSet[NodeId]:
        return frozenset(self.members)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "users": list(self.members), "color": self.color}


@dataclass
class Suggestion:
    """A friend suggestion ranked by shared neighbors"""

    user_id: NodeId
    mutual_friends: Tuple[NodeId, ...]

    def __post_init__(self):
        self.mutual_friends = tuple(self.mutual_friends)

    @property
    def mutual_count(self) -> int:
        return len(self.mutual_friends)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "mutual_count": self.mutual_count,
            "mutual_friends": list(self.mutual_friends),
        }


@dataclass
class GraphStats:
    """Headline counts for a snapshot"""

    total_users: int = 0
    total_friendships: int = 0
    total_communities: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_users": self.total_users,
            "total_friendships": self.total_friendships,
            "total_communities": self.total_communities,
        }
