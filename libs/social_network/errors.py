"""
Errors raised by the social graph engine and store
"""
from typing import Optional, Dict, Any


class GraphError(Exception):
    """Base error for graph construction and queries"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class UnknownNode(GraphError):
    """A query referenced a node that is not in the snapshot"""

    def __init__(self, node_id: Any):
        super().__init__(f"Unknown node: {node_id}", details={"node_id": node_id})
        self.node_id = node_id


class InvalidEdge(GraphError):
    """An edge is a self-loop or references a node missing from the snapshot"""

    def __init__(self, source: Any, target: Any, reason: str):
        super().__init__(
            f"Invalid edge ({source}, {target}): {reason}",
            details={"source": source, "target": target, "reason": reason},
        )
        self.source = source
        self.target = target
        self.reason = reason


class DuplicateEdge(GraphError):
    """The same unordered pair appeared twice"""

    def __init__(self, source: Any, target: Any):
        super().__init__(
            f"Duplicate edge ({source}, {target})",
            details={"source": source, "target": target},
        )
        self.source = source
        self.target = target


class DuplicateNode(GraphError):
    """The same node id appeared twice in the node set"""

    def __init__(self, node_id: Any):
        super().__init__(f"Duplicate node: {node_id}", details={"node_id": node_id})
        self.node_id = node_id


class InvalidGraphData(GraphError):
    """Imported or persisted graph data has the wrong shape"""


class GraphLimitExceeded(GraphError):
    """A store mutation would push the graph past its configured ceiling"""

    def __init__(self, kind: str, limit: int):
        super().__init__(f"Too many {kind}: limit is {limit}", details={"kind": kind, "limit": limit})
        self.kind = kind
        self.limit = limit
