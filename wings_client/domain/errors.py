from __future__ import annotations

from typing import Any, Optional


class WingsError(RuntimeError):
    """Base class for failures raised by the WINGS client."""


class WingsApiError(WingsError):
    """Raised when the service answers with a non-200 status.

    Fields:
        response: The raw ``requests.Response`` (or a stand-in in tests).
        body: Parsed JSON error body, or ``{"raw": text}`` when not JSON.
    """

    def __init__(self, message: str, response: Any = None, body: Optional[Any] = None) -> None:
        super().__init__(message)
        self.response = response
        self.body = body

    @property
    def status_code(self) -> Optional[int]:
        return getattr(self.response, "status_code", None)

    @property
    def url(self) -> Optional[str]:
        return getattr(self.response, "url", None)


class TransportError(WingsError):
    """Raised when the request never produced an HTTP response (DNS, TLS, timeout)."""


class ProtocolError(WingsError):
    """Raised when a 200 response does not have the shape the protocol describes."""


class JobStatusError(ProtocolError):
    """Raised when a job response carries a status or page flag outside the known vocabulary."""


class PaginationLimitError(WingsError):
    """Raised when the server keeps reporting more pages beyond the configured cap."""


class ContractError(ValueError):
    """Raised when a call violates the documented contract (e.g., unsupported method)."""


class NotFoundError(LookupError):
    """Raised when an operator-supplied name or id does not match any server record."""


class FilterNotFoundError(NotFoundError):
    """Raised when no filter leaf matches the requested name."""


class IndividualNotFoundError(NotFoundError):
    """Raised when no individual matches the requested local id."""
