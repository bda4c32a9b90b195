from __future__ import annotations

import contextlib
import os
from pathlib import Path
from typing import Dict, Optional


def parse_dotenv(dotenv_path: Path) -> Dict[str, str]:
    """Parse a simple .env file (KEY=VALUE per line, '#' comments, quotes stripped)."""
    env: Dict[str, str] = {}
    if dotenv_path.exists():
        with contextlib.suppress(OSError):
            for raw in dotenv_path.read_text(encoding="utf-8", errors="ignore").splitlines():
                s = raw.strip()
                if not s or s.startswith("#") or "=" not in s:
                    continue
                k, v = s.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k:
                    env[k] = v
    return env


def env_get(key: str) -> Optional[str]:
    """Get environment value from process env, falling back to .env in CWD."""
    v = os.getenv(key)
    if v is not None and v.strip():
        return v.strip()
    local = parse_dotenv(Path(".env"))
    v2 = local.get(key)
    return v2.strip() if v2 is not None and v2.strip() else None


def env_str(name: str, default: str) -> str:
    return env_get(name) or default


def env_int(name: str, default: int) -> int:
    try:
        return int(env_str(name, str(default)))
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    try:
        return float(env_str(name, str(default)))
    except ValueError:
        return default


def wings_url() -> str:
    return env_str("WINGS_API_URL", "http://localhost:8000/api").rstrip("/")


def api_token() -> str:
    """Bearer token for the service; required."""
    token = env_get("WINGS_API_TOKEN")
    if not token:
        raise ValueError("WINGS_API_TOKEN not set in environment or .env")
    return token


def poll_attempts() -> int:
    return env_int("WINGS_POLL_ATTEMPTS", 60)


def poll_interval() -> float:
    return env_float("WINGS_POLL_INTERVAL", 5.0)


def max_pages() -> int:
    """
    Upper bound on pages fetched for one job result.
    Guards against a server that never reports ``last_page``.
    """
    return env_int("WINGS_MAX_PAGES", 1000)
