from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional

import requests

from ...domain.errors import ContractError, TransportError, WingsApiError
from ...domain.interfaces import Transport
from ..logging import get_logger
from ..timeouts import http_timeout_seconds

logger = get_logger("wings_client.transport")

_METHODS = {"GET", "POST"}


def _query_params(arguments: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Flatten GET arguments; nested objects travel as sorted-key JSON strings."""
    if not arguments:
        return None
    params: Dict[str, Any] = {}
    for key, value in arguments.items():
        if isinstance(value, Mapping):
            value = json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)
        elif isinstance(value, (list, tuple)) and any(isinstance(v, (Mapping, list, tuple)) for v in value):
            value = json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)
        params[key] = value
    return params


def _error_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {"raw": response.text}


class RequestsTransport(Transport):
    """Transport adapter for the WINGS REST API over ``requests``."""

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def url_for(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def call(self, method: str, endpoint: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        verb = str(method).upper()
        if verb not in _METHODS:
            raise ContractError(f"Unsupported HTTP method {method!r}; expected GET or POST")
        url = self.url_for(endpoint)
        timeout = self._timeout or http_timeout_seconds()
        kwargs: Dict[str, Any] = {"headers": self.headers, "timeout": timeout}
        if verb == "GET":
            kwargs["params"] = _query_params(arguments)
        else:
            kwargs["json"] = arguments or {}

        logger.debug("%s %s", verb, url)
        try:
            r = self._session.request(verb, url, **kwargs)
        except requests.RequestException as ex:
            raise TransportError(f"{verb} {url} failed: {type(ex).__name__}: {ex}") from ex

        if r.status_code != 200:
            body = _error_body(r)
            raise WingsApiError(f"{verb} {endpoint} returned HTTP {r.status_code}", response=r, body=body)

        try:
            data = r.json()
        except ValueError as ex:
            raise WingsApiError(f"{verb} {endpoint} returned a non-JSON body", response=r, body={"raw": r.text}) from ex
        if isinstance(data, dict) and "message" in data:
            return data["message"]
        return data

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
