"""
Custom exceptions for the social graph API
"""
from typing import Optional, Dict, Any

from libs.social_network.errors import (
    GraphError, UnknownNode, DuplicateEdge, DuplicateNode,
)


class APIException(Exception):
    """Base exception for the social graph API"""

    def __init__(self, message: str, status_code: int = 500, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(APIException):
    """Validation error"""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=400, details=details or {})
        if field:
            self.details["field"] = field


class NotFoundError(APIException):
    """Resource not found error"""

    def __init__(self, resource: str, resource_id: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        message = f"{resource} not found"
        if resource_id:
            message += f": {resource_id}"
        super().__init__(message, status_code=404, details=details or {})


class ConflictError(APIException):
    """Resource already exists"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=409, details=details or {})


def from_graph_error(exc: GraphError) -> APIException:
    """Map an engine or store error onto the API hierarchy"""
    if isinstance(exc, UnknownNode):
        return NotFoundError("User", str(exc.node_id), details=exc.details)
    if isinstance(exc, (DuplicateEdge, DuplicateNode)):
        return ConflictError(exc.message, details=exc.details)
    return ValidationError(exc.message, details=exc.details)

