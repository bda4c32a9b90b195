from __future__ import annotations

from typing import Any, Dict, Optional

from ...domain.interfaces import ResponseCache


class InMemoryResponseCache(ResponseCache):
    """Dict-backed cache living for the duration of the process. No eviction."""

    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}

    def lookup(self, fingerprint: str) -> Optional[Any]:
        return self._entries.get(fingerprint)

    def store(self, fingerprint: str, result: Any) -> None:
        self._entries[fingerprint] = result

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, fingerprint: object) -> bool:
        return fingerprint in self._entries

    def __len__(self) -> int:
        return len(self._entries)
