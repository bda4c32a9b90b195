from __future__ import annotations

import copy
from typing import Any, Dict, Optional

from ...domain.interfaces import ResponseCache, Transport
from ..cache.memory import InMemoryResponseCache
from ..config import api_token, wings_url
from ..fingerprint import request_fingerprint
from ..logging import get_logger
from .transport import RequestsTransport

logger = get_logger("wings_client.api")


class WingsApi:
    """Cache-aware entry point for every call to the WINGS service.

    A cache-allowed call returns a stored result without touching the
    transport; on a miss the result is stored only if no entry exists yet.
    ``skip_cache=True`` always hits the transport and overwrites the entry.
    Entries are stored and handed out as deep copies, so callers may mutate
    what they get back.
    """

    def __init__(self, transport: Transport, cache: Optional[ResponseCache] = None) -> None:
        self.transport = transport
        self.cache = cache if cache is not None else InMemoryResponseCache()

    @classmethod
    def from_env(cls, cache: Optional[ResponseCache] = None) -> "WingsApi":
        return cls(RequestsTransport(wings_url(), api_token()), cache=cache)

    def is_cached(self, endpoint: str, arguments: Optional[Dict[str, Any]] = None) -> bool:
        return self.cache.lookup(request_fingerprint(endpoint, dict(arguments or {}))) is not None

    def call(
        self,
        method: str,
        endpoint: str,
        arguments: Optional[Dict[str, Any]] = None,
        skip_cache: bool = False,
    ) -> Any:
        args = dict(arguments or {})
        key = request_fingerprint(endpoint, args)
        if not skip_cache:
            hit = self.cache.lookup(key)
            if hit is not None:
                logger.debug("Cache hit | %s %s | key=%s", method, endpoint, key[:12])
                return copy.deepcopy(hit)
            logger.debug("Cache miss | %s %s | key=%s", method, endpoint, key[:12])

        result = self.transport.call(method, endpoint, args)
        if skip_cache or self.cache.lookup(key) is None:
            self.cache.store(key, copy.deepcopy(result))
        return result

    def get(self, endpoint: str, arguments: Optional[Dict[str, Any]] = None, skip_cache: bool = False) -> Any:
        return self.call("GET", endpoint, arguments, skip_cache=skip_cache)

    def post(self, endpoint: str, arguments: Optional[Dict[str, Any]] = None, skip_cache: bool = False) -> Any:
        return self.call("POST", endpoint, arguments, skip_cache=skip_cache)
