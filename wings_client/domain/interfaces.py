from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class ResponseCache(ABC):
    """Port for the per-process response cache keyed by request fingerprint."""

    @abstractmethod
    def lookup(self, fingerprint: str) -> Optional[Any]:
        """Return the cached result for ``fingerprint`` or None when absent."""
        raise NotImplementedError

    @abstractmethod
    def store(self, fingerprint: str, result: Any) -> None:
        """Record ``result`` under ``fingerprint``, replacing any prior entry."""
        raise NotImplementedError


class Transport(ABC):
    """Port for authenticated calls to the WINGS REST service."""

    @abstractmethod
    def call(self, method: str, endpoint: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """Issue one request and return the ``message`` payload of a 200 response.

        Raises:
            WingsApiError: Non-200 status.
            TransportError: No HTTP response was obtained.
        """
        raise NotImplementedError
