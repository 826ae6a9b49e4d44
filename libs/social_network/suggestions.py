"""
Friend suggestions ranked by mutual friends
"""

from typing import List, Optional

from .errors import UnknownNode
from .graph_index import AdjacencyIndex, node_sort_key
from .models import NodeId, Suggestion


def mutual_friends(index: AdjacencyIndex, user_id: NodeId, limit: Optional[int] = None) -> List[Suggestion]:
    """Rank users who are not yet friends with user_id by shared friends.

    The user and their existing friends are never suggested, and candidates
    with no shared friends are left out. Ordering is by mutual count
    descending, then candidate id ascending; shared friends within a
    suggestion are listed in ascending id order.
    """
    if user_id not in index:
        raise UnknownNode(user_id)

    friends = index.neighbor_set(user_id)
    suggestions = []
    for candidate in index.nodes:
        if candidate == user_id or candidate in friends:
            continue
        shared = [friend for friend in index.neighbors(candidate) if friend in friends]
        if shared:
            suggestions.append(Suggestion(user_id=candidate, mutual_friends=shared))

    suggestions.sort(key=lambda s: (-s.mutual_count, node_sort_key(s.user_id)))
    if limit is not None:
        suggestions = suggestions[:max(0, limit)]
    return suggestions
