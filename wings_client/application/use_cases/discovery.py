from __future__ import annotations

from typing import Any, Optional

from ..dto import DiscoveryRequest, JobResponse, ResultsRequest
from ...domain.errors import ProtocolError
from ...domain.models import PendingJob
from ...infrastructure.http.client import WingsApi
from ...infrastructure.logging import get_logger
from .lookups import ResourceLookup
from .poll_job import JobPoller

logger = get_logger("wings_client.discovery")

SUBMIT_ENDPOINT = "variant/discovery/query"
RESULTS_ENDPOINT = "samples/discovery/results"


def request_id_of(submitted: Any, endpoint: str) -> str:
    """Extract the job id from a submission response."""
    if isinstance(submitted, dict) and submitted.get("request_id"):
        return str(submitted["request_id"])
    if isinstance(submitted, (str, int)) and str(submitted).strip():
        return str(submitted).strip()
    raise ProtocolError(f"{endpoint}: submission response has no request_id: {submitted!r}")


class DiscoverVariantsUseCase:
    """Use-case: submit a variant discovery query for one individual and wait for its variants."""

    def __init__(self, api: WingsApi, poller: Optional[JobPoller] = None, lookup: Optional[ResourceLookup] = None) -> None:
        self._api = api
        self._poller = poller or JobPoller(api)
        self._lookup = lookup or ResourceLookup(api)

    def execute(self, req: DiscoveryRequest) -> JobResponse:
        """
        Validate inputs, submit once, then poll the results endpoint.

        The individual and every filter name are checked before submitting so
        operator typos abort the workflow without creating a server job.

        Raises:
            IndividualNotFoundError: Unknown ``local_id``.
            FilterNotFoundError: Unknown filter name.
        """
        self._lookup.find_individual(req.local_id)
        filter_ids = self._lookup.resolve_filters(req.filters)
        submitted = self._api.post(SUBMIT_ENDPOINT, {"local_id": req.local_id, "filters": filter_ids})
        request_id = request_id_of(submitted, SUBMIT_ENDPOINT)
        logger.info("Discovery submitted | local_id=%s | filters=%d | request_id=%s", req.local_id, len(filter_ids), request_id)
        return self.results(
            ResultsRequest(
                request_id=request_id,
                local_id=req.local_id,
                max_attempts=req.max_attempts,
                interval=req.interval,
            )
        )

    def results(self, req: ResultsRequest) -> JobResponse:
        """Poll (or resume polling) the results of an existing discovery job."""
        outcome = self._poller.poll(
            RESULTS_ENDPOINT,
            {"request_id": req.request_id, "local_id": req.local_id},
            max_attempts=req.max_attempts,
            interval=req.interval,
        )
        if isinstance(outcome, PendingJob):
            return JobResponse(request_id=req.request_id, pending=outcome)
        logger.info("Discovery results | request_id=%s | variants=%d", req.request_id, len(outcome))
        return JobResponse(request_id=req.request_id, variants=outcome)
