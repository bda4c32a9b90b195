from __future__ import annotations

from typing import Optional

from ..dto import FrequencyRequest, JobResponse
from ...domain.models import JobStatus, PendingJob
from ...infrastructure.http.client import WingsApi
from .poll_job import JobPoller

FREQUENCY_ENDPOINT = "variant/frequency"


class VariantFrequencyUseCase:
    """Use-case: look up the federated frequency of one variant (single-page job)."""

    def __init__(self, api: WingsApi, poller: Optional[JobPoller] = None) -> None:
        self._poller = poller or JobPoller(api)

    def execute(self, req: FrequencyRequest) -> JobResponse:
        outcome = self._poller.poll_single(
            FREQUENCY_ENDPOINT,
            req.arguments(),
            max_attempts=req.max_attempts,
            interval=req.interval,
        )
        if isinstance(outcome, PendingJob):
            return JobResponse(request_id=None, pending=outcome)
        raw = dict(outcome)
        if JobStatus.of(raw) is JobStatus.NO_VARIANTS:
            return JobResponse(request_id=None, variants=[], raw=raw)
        return JobResponse(request_id=None, variants=list(raw.get("results") or []), raw=raw)
