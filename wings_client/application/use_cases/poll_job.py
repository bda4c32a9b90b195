from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from ...domain.errors import ContractError
from ...domain.models import JobStatus, PendingJob
from ...infrastructure.config import poll_attempts, poll_interval
from ...infrastructure.http.client import WingsApi
from ...infrastructure.logging import get_logger
from .paginate import Paginator

logger = get_logger("wings_client.poll")


class JobPoller:
    """Use-case: wait for an asynchronous job on its status endpoint.

    The first call may be answered from the cache so a job that already
    finished in this session short-circuits. Every later call bypasses the
    cache because the job state changes on the server. Only status endpoints
    are polled here; submissions are issued once by the caller.
    """

    def __init__(
        self,
        api: WingsApi,
        sleep: Callable[[float], None] = time.sleep,
        max_attempts: Optional[int] = None,
        interval: Optional[float] = None,
        paginator: Optional[Paginator] = None,
    ) -> None:
        self._api = api
        self._sleep = sleep
        self._max_attempts = max_attempts
        self._interval = interval
        self._paginator = paginator or Paginator(api)

    def _budget(self, max_attempts: Optional[int], interval: Optional[float]) -> Tuple[int, float]:
        attempts = max_attempts if max_attempts is not None else self._max_attempts
        if attempts is None:
            attempts = poll_attempts()
        delay = interval if interval is not None else self._interval
        if delay is None:
            delay = poll_interval()
        if attempts < 0:
            raise ContractError(f"max_attempts must be >= 0, got {attempts}")
        if delay < 0:
            raise ContractError(f"interval must be >= 0, got {delay}")
        return int(attempts), float(delay)

    def _wait(
        self,
        method: str,
        endpoint: str,
        arguments: Dict[str, Any],
        max_attempts: Optional[int],
        interval: Optional[float],
    ) -> Union[Tuple[Mapping[str, Any], JobStatus], PendingJob]:
        attempts, delay = self._budget(max_attempts, interval)

        calls = 0 if self._api.is_cached(endpoint, arguments) else 1
        response = self._api.call(method, endpoint, arguments)
        status = JobStatus.of(response)
        retries = 0
        while status.is_pending:
            if retries >= attempts:
                logger.warning(
                    "Job still pending | %s | calls=%d | args=%s", endpoint, calls, arguments
                )
                return PendingJob(
                    endpoint=endpoint,
                    arguments=dict(arguments),
                    attempts=calls,
                    last_status=str(response.get("status")),
                )
            self._sleep(delay)
            response = self._api.call(method, endpoint, arguments, skip_cache=True)
            status = JobStatus.of(response)
            calls += 1
            retries += 1
            logger.debug("Poll | %s | attempt=%d/%d | status=%s", endpoint, retries, attempts, status.value)
        logger.info("Job finished | %s | status=%s | calls=%d", endpoint, status.value, calls)
        return response, status

    def poll(
        self,
        endpoint: str,
        arguments: Optional[Dict[str, Any]] = None,
        max_attempts: Optional[int] = None,
        interval: Optional[float] = None,
        method: str = "GET",
    ) -> Union[List[Any], PendingJob]:
        """
        Poll a paginated job until it is ready and return every result item.

        Args:
            endpoint: Status/result endpoint, e.g. ``samples/discovery/results``.
            arguments: Request arguments, resent verbatim on each poll.
            max_attempts: Cache-bypassing retries after the first call (default 60).
            interval: Seconds slept between calls while in progress (default 5).
            method: HTTP method of the status endpoint.

        Returns:
            The concatenated result items, ``[]`` for ``no-variants``, or a
            ``PendingJob`` when the budget ran out.

        Raises:
            JobStatusError: Unknown status; raised on first sight, no retry.
        """
        args = dict(arguments or {})
        outcome = self._wait(method, endpoint, args, max_attempts, interval)
        if isinstance(outcome, PendingJob):
            return outcome
        response, status = outcome
        if status is JobStatus.NO_VARIANTS:
            return []
        return self._paginator.collect(endpoint, args, response, method=method)

    def poll_single(
        self,
        endpoint: str,
        arguments: Optional[Dict[str, Any]] = None,
        max_attempts: Optional[int] = None,
        interval: Optional[float] = None,
        method: str = "GET",
    ) -> Union[Mapping[str, Any], PendingJob]:
        """Poll a single-page job (``completed`` or ``no-variants``) and return the raw response."""
        args = dict(arguments or {})
        outcome = self._wait(method, endpoint, args, max_attempts, interval)
        if isinstance(outcome, PendingJob):
            return outcome
        return outcome[0]
