from __future__ import annotations

import hashlib
import json
from typing import Any, Mapping, Optional


def _encode_default(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    return str(value)


def canonical_request(endpoint: str, arguments: Optional[Mapping[str, Any]] = None) -> str:
    """Serialize an (endpoint, arguments) pair with keys sorted at every level."""
    return json.dumps(
        {"endpoint": endpoint, "arguments": dict(arguments or {})},
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_encode_default,
    )


def request_fingerprint(endpoint: str, arguments: Optional[Mapping[str, Any]] = None) -> str:
    """
    Stable cache key for a request.

    Key insertion order does not matter; every argument (including ``page``)
    is part of the digest, so set the page before fingerprinting.
    """
    return hashlib.sha256(canonical_request(endpoint, arguments).encode("utf-8")).hexdigest()
