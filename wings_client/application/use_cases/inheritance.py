from __future__ import annotations

from typing import Optional

from ..dto import InheritanceRequest, JobResponse
from ...domain.models import PendingJob
from ...infrastructure.http.client import WingsApi
from ...infrastructure.logging import get_logger
from .discovery import request_id_of
from .lookups import ResourceLookup
from .poll_job import JobPoller

logger = get_logger("wings_client.inheritance")

INHERITANCE_ENDPOINT = "trios/inheritance"


class TrioInheritanceUseCase:
    """Use-case: filter a trio's variants by inheritance mode.

    Submission is a POST on ``trios/inheritance``; the job is then polled with
    GET on the same path using the returned request id.
    """

    def __init__(self, api: WingsApi, poller: Optional[JobPoller] = None, lookup: Optional[ResourceLookup] = None) -> None:
        self._api = api
        self._poller = poller or JobPoller(api)
        self._lookup = lookup or ResourceLookup(api)

    def execute(self, req: InheritanceRequest) -> JobResponse:
        trio = self._lookup.find_trio(req.trio_id)
        filter_ids = self._lookup.resolve_filters(req.filters)
        submitted = self._api.post(
            INHERITANCE_ENDPOINT,
            {"trio_id": trio.id, "inheritance": req.mode, "filters": filter_ids},
        )
        request_id = request_id_of(submitted, INHERITANCE_ENDPOINT)
        logger.info("Inheritance submitted | trio=%s | mode=%s | request_id=%s", trio.id, req.mode, request_id)

        outcome = self._poller.poll(
            INHERITANCE_ENDPOINT,
            {"request_id": request_id},
            max_attempts=req.max_attempts,
            interval=req.interval,
        )
        if isinstance(outcome, PendingJob):
            return JobResponse(request_id=request_id, pending=outcome)
        return JobResponse(request_id=request_id, variants=outcome)
