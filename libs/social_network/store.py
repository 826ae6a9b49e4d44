"""
Social Graph Store

Owns the mutable graph: user and friendship management, persistence to a
key-value backend, import/export, and change notification. The algorithms
never see this object; they are handed a snapshot through `algorithms()`.
"""

import json
import logging
import threading
import uuid
from typing import Any, Callable, Dict, List, Optional, Union

from libs.common.log import log_event
from .backends import InMemoryBackend
from .errors import (
    GraphError, InvalidEdge, DuplicateEdge, DuplicateNode, InvalidGraphData, GraphLimitExceeded,
)
from .graph_algorithms import GraphAlgorithms
from .graph_index import build_adjacency
from .models import GraphData, GraphStats, User, Friendship, NodeId

logger = logging.getLogger("libs.social_network.store")

DEFAULT_STORAGE_KEY = "social-network-graph"

Listener = Callable[[], None]


def sample_graph() -> GraphData:
    """Six users, connected through Alice"""
    return GraphData(
        users=[
            User(id='1', name='Alice'),
            User(id='2', name='Bob'),
            User(id='3', name='Charlie'),
            User(id='4', name='Diana'),
            User(id='5', name='Eve'),
            User(id='6', name='Frank'),
        ],
        friendships=[
            Friendship(source='1', target='2'),
            Friendship(source='2', target='3'),
            Friendship(source='3', target='4'),
            Friendship(source='1', target='5'),
            Friendship(source='5', target='6'),
        ],
    )


def check_node_id(node_id: Any) -> None:
    """Node ids are strings or integers (bool is not an integer id)"""
    if isinstance(node_id, bool) or not isinstance(node_id, (str, int)):
        raise InvalidGraphData(
            f"Node id must be a string or integer, got {type(node_id).__name__}",
            details={"node_id": repr(node_id)},
        )


def parse_graph_data(data: Any) -> GraphData:
    """Validate the shape of a raw graph document and convert it"""
    if not isinstance(data, dict):
        raise InvalidGraphData("Graph data must be an object with 'users' and 'friendships'")
    users = data.get("users")
    friendships = data.get("friendships")
    if not isinstance(users, list) or not isinstance(friendships, list):
        raise InvalidGraphData("'users' and 'friendships' must both be lists")

    try:
        graph = GraphData.from_dict(data)
    except (KeyError, TypeError, AttributeError) as e:
        raise InvalidGraphData(f"Malformed graph entry: {e}")

    for user in graph.users:
        check_node_id(user.id)
    for friendship in graph.friendships:
        check_node_id(friendship.source)
        check_node_id(friendship.target)

    # Rejects dangling references, self-loops and duplicates
    build_adjacency(graph.node_ids, graph.edge_pairs)
    return graph


class GraphDataManager:
    """Mutable social graph with persistence and subscribers"""

    def __init__(self, backend=None, storage_key: str = DEFAULT_STORAGE_KEY,
                 max_users: Optional[int] = None, max_friendships: Optional[int] = None):
        self.backend = backend if backend is not None else InMemoryBackend()
        self.storage_key = storage_key
        self.max_users = max_users
        self.max_friendships = max_friendships
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()
        self._data = self._load_data()

    # ------------------------------------------------------------------
    # Persistence and notification
    # ------------------------------------------------------------------

    def _load_data(self) -> GraphData:
        raw = self.backend.get(self.storage_key)
        if raw:
            try:
                data = parse_graph_data(json.loads(raw))
                log_event(logger, "graph_loaded", key=self.storage_key,
                          users=len(data.users), friendships=len(data.friendships))
                return data
            except (ValueError, GraphError) as e:
                logger.error("Error loading graph from %s: %s", self.storage_key, e)
        return sample_graph()

    def _save_data(self) -> None:
        self.backend.set(self.storage_key, json.dumps(self._data.to_dict()))
        self._notify_listeners()

    def _notify_listeners(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Graph change listener %r failed", listener)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that unregisters it"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def get_data(self) -> GraphData:
        """Independent copy of the current graph"""
        with self._lock:
            return self._data.copy()

    def algorithms(self) -> GraphAlgorithms:
        """Engine bound to the current snapshot"""
        return GraphAlgorithms.from_snapshot(self.get_data())

    def get_stats(self) -> GraphStats:
        return self.algorithms().stats()

    def get_user(self, user_id: NodeId) -> Optional[User]:
        with self._lock:
            for user in self._data.users:
                if user.id == user_id:
                    return User(id=user.id, name=user.name)
        return None

    def get_users(self) -> List[User]:
        return self.get_data().users

    def get_friendships(self) -> List[Friendship]:
        return self.get_data().friendships

    def _has_user(self, user_id: NodeId) -> bool:
        return any(u.id == user_id for u in self._data.users)

    # ------------------------------------------------------------------
    # User management
    # ------------------------------------------------------------------

    def add_user(self, name: str, user_id: Optional[NodeId] = None) -> User:
        """Add a user; a fresh id is generated unless one is given"""
        with self._lock:
            if self.max_users is not None and len(self._data.users) >= self.max_users:
                raise GraphLimitExceeded("users", self.max_users)
            if user_id is None:
                user_id = uuid.uuid4().hex
            check_node_id(user_id)
            if self._has_user(user_id):
                raise DuplicateNode(user_id)

            user = User(id=user_id, name=name)
            self._data.users.append(user)
            log_event(logger, "user_added", user_id=user.id, name=name)
            self._save_data()
            return User(id=user.id, name=user.name)

    def update_user(self, user_id: NodeId, name: str) -> bool:
        with self._lock:
            for user in self._data.users:
                if user.id == user_id:
                    user.name = name
                    log_event(logger, "user_updated", user_id=user_id, name=name)
                    self._save_data()
                    return True
        return False

    def remove_user(self, user_id: NodeId) -> bool:
        """Remove a user and every friendship involving them"""
        with self._lock:
            if not self._has_user(user_id):
                return False
            self._data.users = [u for u in self._data.users if u.id != user_id]
            before = len(self._data.friendships)
            self._data.friendships = [f for f in self._data.friendships if not f.involves(user_id)]
            log_event(logger, "user_removed", user_id=user_id,
                      friendships_removed=before - len(self._data.friendships))
            self._save_data()
            return True

    # ------------------------------------------------------------------
    # Friendship management
    # ------------------------------------------------------------------

    def add_friendship(self, source_id: NodeId, target_id: NodeId) -> Friendship:
        with self._lock:
            if source_id == target_id:
                raise InvalidEdge(source_id, target_id, "self-loop")
            for node in (source_id, target_id):
                if not self._has_user(node):
                    raise InvalidEdge(source_id, target_id, f"unknown node {node}")
            if any(f.connects(source_id, target_id) for f in self._data.friendships):
                raise DuplicateEdge(source_id, target_id)
            if self.max_friendships is not None and len(self._data.friendships) >= self.max_friendships:
                raise GraphLimitExceeded("friendships", self.max_friendships)

            friendship = Friendship(source=source_id, target=target_id)
            self._data.friendships.append(friendship)
            log_event(logger, "friendship_added", source=source_id, target=target_id)
            self._save_data()
            return Friendship(source=source_id, target=target_id)

    def remove_friendship(self, source_id: NodeId, target_id: NodeId) -> bool:
        """Remove the friendship in either orientation"""
        with self._lock:
            before = len(self._data.friendships)
            self._data.friendships = [
                f for f in self._data.friendships if not f.connects(source_id, target_id)
            ]
            if len(self._data.friendships) == before:
                return False
            log_event(logger, "friendship_removed", source=source_id, target=target_id)
            self._save_data()
            return True

    # ------------------------------------------------------------------
    # Bulk operations
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Replace the graph with the sample data"""
        with self._lock:
            self._data = sample_graph()
            log_event(logger, "graph_reset")
            self._save_data()

    def import_data(self, data: Union[GraphData, Dict[str, Any]]) -> GraphData:
        """Replace the graph with validated data; the current graph is kept on failure"""
        if isinstance(data, GraphData):
            data = data.to_dict()
        try:
            graph = parse_graph_data(data)
        except GraphError as e:
            log_event(logger, "graph_import_failed", level=logging.WARNING, error=e.message)
            raise

        if self.max_users is not None and len(graph.users) > self.max_users:
            raise GraphLimitExceeded("users", self.max_users)
        if self.max_friendships is not None and len(graph.friendships) > self.max_friendships:
            raise GraphLimitExceeded("friendships", self.max_friendships)

        with self._lock:
            self._data = graph
            log_event(logger, "graph_imported", users=len(graph.users), friendships=len(graph.friendships))
            self._save_data()
        return graph.copy()

    def import_json(self, text: str) -> GraphData:
        try:
            data = json.loads(text)
        except ValueError as e:
            raise InvalidGraphData(f"Invalid JSON: {e}")
        return self.import_data(data)

    def export_data(self) -> str:
        """Pretty-printed JSON of the current graph"""
        return json.dumps(self.get_data().to_dict(), indent=2)
