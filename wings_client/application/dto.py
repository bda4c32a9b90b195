from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..domain.models import PendingJob


@dataclass(frozen=True)
class DiscoveryRequest:
    local_id: str
    filters: List[str] = field(default_factory=list)
    max_attempts: Optional[int] = None
    interval: Optional[float] = None


@dataclass(frozen=True)
class ResultsRequest:
    request_id: str
    local_id: str
    max_attempts: Optional[int] = None
    interval: Optional[float] = None


@dataclass(frozen=True)
class InheritanceRequest:
    trio_id: str
    mode: str
    filters: List[str] = field(default_factory=list)
    max_attempts: Optional[int] = None
    interval: Optional[float] = None


@dataclass(frozen=True)
class FrequencyRequest:
    chrom: str
    pos: int
    ref: str
    alt: str
    max_attempts: Optional[int] = None
    interval: Optional[float] = None

    def arguments(self) -> Dict[str, Any]:
        return {"chrom": self.chrom, "pos": self.pos, "ref": self.ref, "alt": self.alt}


@dataclass(frozen=True)
class JobResponse:
    """Outcome of a job workflow.

    Fields:
        request_id: Server job id (None for jobs without submission).
        variants: Result items when the job finished; None while pending.
        pending: Set when the poll budget ran out; resubmit or resume later.
        raw: Raw terminal response for single-page jobs.
    """
    request_id: Optional[str]
    variants: Optional[List[Any]] = None
    pending: Optional[PendingJob] = None
    raw: Optional[Dict[str, Any]] = None

    @property
    def is_pending(self) -> bool:
        return self.pending is not None
