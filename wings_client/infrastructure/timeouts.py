from __future__ import annotations

from .config import env_float


def http_timeout_seconds() -> float:
    """Per-request timeout for calls to the service (WINGS_HTTP_TIMEOUT, default 30s)."""
    value = env_float("WINGS_HTTP_TIMEOUT", 30.0)
    return value if value > 0 else 30.0
