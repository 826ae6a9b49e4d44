"""
Key-value persistence for the graph store

The store keeps the whole graph as one JSON document under a single key.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

import redis

logger = logging.getLogger("libs.social_network.backends")


class InMemoryBackend:
    """Dict-backed key-value store, used when no Redis URL is configured"""

    def __init__(self):
        self._d: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._d.get(key)

    def set(self, key: str, value: str) -> None:
        self._d[key] = value

    def delete(self, key: str) -> None:
        self._d.pop(key, None)


class RedisBackend:
    """Redis-backed key-value store"""

    def __init__(self, url: str, client: Optional[redis.Redis] = None):
        self.url = url
        self.client = client if client is not None else redis.Redis.from_url(url, decode_responses=True)

    def get(self, key: str) -> Optional[str]:
        return self.client.get(key)

    def set(self, key: str, value: str) -> None:
        self.client.set(key, value)

    def delete(self, key: str) -> None:
        self.client.delete(key)


def create_backend(url: Optional[str] = None):
    """Redis when a URL is given, otherwise in-memory"""
    if url:
        logger.info("Using Redis graph backend at %s", url)
        return RedisBackend(url)
    logger.info("Using in-memory graph backend")
    return InMemoryBackend()
