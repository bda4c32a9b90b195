from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ...domain.errors import JobStatusError, PaginationLimitError, ProtocolError
from ...domain.models import JobStatus, PageMeta
from ...infrastructure.config import max_pages as configured_max_pages
from ...infrastructure.http.client import WingsApi
from ...infrastructure.logging import get_logger

logger = get_logger("wings_client.paginate")


def _results_of(response: Mapping[str, Any]) -> List[Any]:
    return list(response.get("results") or [])


class Paginator:
    """Use-case: follow ``meta.last_page`` and concatenate result pages in server order."""

    def __init__(self, api: WingsApi, max_pages: Optional[int] = None) -> None:
        self._api = api
        self._max_pages = max_pages

    @property
    def max_pages(self) -> int:
        return self._max_pages if self._max_pages is not None else configured_max_pages()

    def collect(
        self,
        endpoint: str,
        arguments: Optional[Dict[str, Any]],
        first_response: Mapping[str, Any],
        method: str = "GET",
    ) -> List[Any]:
        """
        Accumulate results starting from an already fetched first page.

        Each further page is requested through the cache-aware path with a
        ``page`` argument, so every page has its own fingerprint.

        Raises:
            PaginationLimitError: The server still reports more pages past ``max_pages``.
            JobStatusError: A later page carries a non-terminal or unknown status.
        """
        items = _results_of(first_response)
        meta = PageMeta.of(first_response)
        page = 1
        limit = self.max_pages
        while not meta.last_page:
            page += 1
            if page > limit:
                raise PaginationLimitError(f"{endpoint}: more than {limit} pages reported; giving up")
            page_args = dict(arguments or {})
            page_args["page"] = page
            response = self._api.call(method, endpoint, page_args)
            if not isinstance(response, Mapping):
                raise ProtocolError(f"{endpoint} page {page}: response is not an object")
            if "status" in response and JobStatus.of(response).is_pending:
                raise JobStatusError(f"{endpoint} page {page}: job reported in progress after completion")
            chunk = _results_of(response)
            logger.debug("Page fetched | %s | page=%d | items=%d", endpoint, page, len(chunk))
            items.extend(chunk)
            meta = PageMeta.of(response)
        return items
