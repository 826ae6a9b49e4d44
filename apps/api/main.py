"""
Social graph API

HTTP surface over the graph store (user and friendship management,
import/export) and the graph algorithms (shortest path, communities,
friend suggestions). Every query builds a fresh engine from the current
snapshot.
"""
import logging
from typing import Dict, Any, Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, Body, Depends, Query, Request
from fastapi.responses import PlainTextResponse, JSONResponse
from prometheus_client import Counter, generate_latest, CONTENT_TYPE_LATEST

from . import config
from .exceptions import APIException, NotFoundError, ValidationError, from_graph_error
from .models import (
    UserCreate, UserUpdate, UserResponse, FriendshipRequest, FriendshipResponse,
    GraphPayload, StatsResponse, PathResponse, CommunitiesResponse, SuggestionsResponse,
    MessageResponse,
)
from libs.common.config import Config
from libs.common.log import configure_logging, log_event
from libs.social_network.backends import create_backend
from libs.social_network.errors import GraphError
from libs.social_network.store import GraphDataManager

# Logger
logger = logging.getLogger("apps.api.main")

# Prometheus metrics
REQS = Counter("api_requests_total", "Total API requests", ["endpoint"])
GRAPH_CHANGES = Counter("graph_changes_total", "Graph store mutations")


def build_store(cfg: Config) -> GraphDataManager:
    """Create the graph store described by the configuration"""
    store = GraphDataManager(
        backend=create_backend(cfg.REDIS_URL),
        storage_key=cfg.GRAPH_STORAGE_KEY,
        max_users=cfg.MAX_GRAPH_USERS,
        max_friendships=cfg.MAX_GRAPH_FRIENDSHIPS,
    )
    store.subscribe(GRAPH_CHANGES.inc)
    return store


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg = config.load_config()
    configure_logging(cfg.LOG_LEVEL)
    if getattr(app.state, "store", None) is None:
        app.state.store = build_store(cfg)
    log_event(logger, "api_started", backend=type(app.state.store.backend).__name__)
    yield


# Initialize FastAPI app
app = FastAPI(
    title=config.APP_TITLE,
    version=config.APP_VERSION,
    description="Social network graph analysis: paths, communities and friend suggestions",
    lifespan=lifespan
)


def get_store(request: Request) -> GraphDataManager:
    """Graph store bound to this application"""
    store = getattr(request.app.state, "store", None)
    if store is None:
        store = build_store(config.load_config())
        request.app.state.store = store
    return store


def _error_response(exc: APIException) -> JSONResponse:
    payload = {"error": exc.__class__.__name__, "message": exc.message, "details": exc.details}
    return JSONResponse(status_code=exc.status_code, content=payload)


@app.exception_handler(APIException)
def _api_exception_handler(request, exc: APIException):
    """Render API exceptions as JSON responses"""
    return _error_response(exc)


@app.exception_handler(GraphError)
def _graph_exception_handler(request, exc: GraphError):
    """Render engine and store errors through the API hierarchy"""
    logger.info("Graph error on %s: %s", request.url.path, exc.message)
    return _error_response(from_graph_error(exc))


def _resolve_id(store: GraphDataManager, raw: str):
    """Match a path parameter to a stored id, which may be an integer"""
    ids = store.get_data().node_ids
    if raw in ids:
        return raw
    try:
        as_int = int(raw)
    except ValueError:
        return raw
    return as_int if as_int in ids else raw


# ============================================================================
# Health and metrics
# ============================================================================

@app.get("/health")
def health():
    REQS.labels("/health").inc()
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    return PlainTextResponse(generate_latest(), media_type=CONTENT_TYPE_LATEST)


# ============================================================================
# Graph store
# ============================================================================

@app.get("/graph", response_model=GraphPayload)
def get_graph(store: GraphDataManager = Depends(get_store)):
    """Current users and friendships"""
    REQS.labels("/graph").inc()
    return store.get_data().to_dict()


@app.get("/stats", response_model=StatsResponse)
def get_stats(store: GraphDataManager = Depends(get_store)):
    REQS.labels("/stats").inc()
    return store.get_stats().to_dict()


@app.post("/users", response_model=UserResponse)
def add_user(request: UserCreate, store: GraphDataManager = Depends(get_store)):
    REQS.labels("/users").inc()
    user = store.add_user(request.name, user_id=request.id)
    return user.to_dict()


@app.patch("/users/{user_id}", response_model=UserResponse)
def update_user(user_id: str, request: UserUpdate, store: GraphDataManager = Depends(get_store)):
    REQS.labels("/users/update").inc()
    resolved = _resolve_id(store, user_id)
    if not store.update_user(resolved, request.name):
        raise NotFoundError("User", user_id)
    return store.get_user(resolved).to_dict()


@app.delete("/users/{user_id}", response_model=MessageResponse)
def remove_user(user_id: str, store: GraphDataManager = Depends(get_store)):
    """Remove a user and their friendships"""
    REQS.labels("/users/delete").inc()
    if not store.remove_user(_resolve_id(store, user_id)):
        raise NotFoundError("User", user_id)
    return {"message": f"User {user_id} removed"}


@app.post("/friendships", response_model=FriendshipResponse)
def add_friendship(request: FriendshipRequest, store: GraphDataManager = Depends(get_store)):
    REQS.labels("/friendships").inc()
    friendship = store.add_friendship(request.source, request.target)
    return friendship.to_dict()


@app.delete("/friendships/{source_id}/{target_id}", response_model=MessageResponse)
def remove_friendship(source_id: str, target_id: str, store: GraphDataManager = Depends(get_store)):
    REQS.labels("/friendships/delete").inc()
    removed = store.remove_friendship(_resolve_id(store, source_id), _resolve_id(store, target_id))
    if not removed:
        raise NotFoundError("Friendship", f"{source_id}-{target_id}")
    return {"message": f"Friendship {source_id}-{target_id} removed"}


@app.post("/import", response_model=StatsResponse)
def import_graph(data: Dict[str, Any] = Body(...), store: GraphDataManager = Depends(get_store)):
    """Replace the graph with an uploaded document"""
    REQS.labels("/import").inc()
    store.import_data(data)
    return store.get_stats().to_dict()


@app.get("/export")
def export_graph(store: GraphDataManager = Depends(get_store)):
    REQS.labels("/export").inc()
    return PlainTextResponse(
        store.export_data(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{config.EXPORT_FILENAME}"'},
    )


@app.post("/reset", response_model=MessageResponse)
def reset_graph(store: GraphDataManager = Depends(get_store)):
    REQS.labels("/reset").inc()
    store.reset()
    return {"message": "Graph reset to sample data"}


# ============================================================================
# Graph algorithms
# ============================================================================

@app.get("/path/{start_id}/{end_id}", response_model=PathResponse)
def find_path(start_id: str, end_id: str, store: GraphDataManager = Depends(get_store)):
    """Find shortest path between two users"""
    REQS.labels("/path").inc()
    start = _resolve_id(store, start_id)
    end = _resolve_id(store, end_id)
    result = store.algorithms().shortest_path(start, end)
    if result is None:
        return {"start": start, "end": end, "found": False}
    return {"start": start, "end": end, "found": True, **result.to_dict()}


@app.get("/communities", response_model=CommunitiesResponse)
def get_communities(method: str = "dfs", store: GraphDataManager = Depends(get_store)):
    """Connected communities, by traversal or by union-find"""
    REQS.labels("/communities").inc()
    if method not in config.COMMUNITY_METHODS:
        raise ValidationError(f"Unknown community method: {method}", field="method")

    algorithms = store.algorithms()
    if method == "union_find":
        communities = algorithms.communities_via_union_find()
    else:
        communities = algorithms.communities()
    return {
        "method": method,
        "count": len(communities),
        "communities": [c.to_dict() for c in communities],
    }


@app.get("/suggestions/{user_id}", response_model=SuggestionsResponse)
def get_suggestions(
    user_id: str,
    limit: Optional[int] = Query(default=config.DEFAULT_SUGGESTION_LIMIT, ge=1, le=config.MAX_SUGGESTION_LIMIT),
    store: GraphDataManager = Depends(get_store),
):
    """Friend suggestions ranked by mutual friends"""
    REQS.labels("/suggestions").inc()
    resolved = _resolve_id(store, user_id)
    suggestions = store.algorithms().mutual_friends(resolved, limit=limit)
    return {"user_id": resolved, "suggestions": [s.to_dict() for s in suggestions]}
