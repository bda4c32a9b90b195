from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from typing import Any, Dict, Optional, Sequence

from ..application.dto import DiscoveryRequest, FrequencyRequest, InheritanceRequest, JobResponse, ResultsRequest
from ..application.use_cases.discovery import DiscoverVariantsUseCase
from ..application.use_cases.frequency import VariantFrequencyUseCase
from ..application.use_cases.inheritance import TrioInheritanceUseCase
from ..application.use_cases.lookups import ResourceLookup
from ..domain.errors import NotFoundError, WingsApiError
from ..infrastructure.http.client import WingsApi
from ..infrastructure.logging import get_logger
from .parsers import build_parser

logger = get_logger("wings_client.cli")

EXIT_OK = 0
EXIT_INPUT = 2
EXIT_FAILED = 3
EXIT_PENDING = 4


def _jsonable(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, (list, tuple)):
        return [_jsonable(o) for o in obj]
    return obj


def _emit(data: Dict[str, Any]) -> None:
    print(json.dumps(data, indent=2, default=str))


def _error_payload(ex: BaseException, ns) -> Dict[str, Any]:
    """Describe a failure together with the command that triggered it."""
    data: Dict[str, Any] = {"status": "error", "error": f"{type(ex).__name__}: {ex}", "command": getattr(ns, "cmd", None)}
    if isinstance(ex, WingsApiError):
        data["http_status"] = ex.status_code
        data["url"] = ex.url
        data["body"] = ex.body
    return data


def run(argv: Optional[Sequence[str]] = None) -> int:
    ap = build_parser()
    ns = ap.parse_args(list(argv or []))
    if not ns.cmd:
        ap.print_help()
        return EXIT_INPUT

    try:
        api = WingsApi.from_env()
        return dispatch_commands(ns, api)
    except (NotFoundError, ValueError) as ex:  # operator input: unknown names, bad config
        _emit(_error_payload(ex, ns))
        return EXIT_INPUT
    except Exception as ex:  # keep CLI concise and user-friendly
        logger.debug("Command failed", exc_info=True)
        _emit(_error_payload(ex, ns))
        return EXIT_FAILED


def dispatch_commands(ns, api: WingsApi) -> int:
    """
    Dispatches CLI commands to the matching use case.

    Commands:
    - individuals, families, trios, samples: list resources
    - filters: print the filter tree (or its leaves with --leaves)
    - discover: validate, submit and poll a discovery query
    - results: resume polling a discovery job by request id
    - inheritance: submit and poll a trio inheritance query
    - frequency: poll a single-variant frequency job
    """
    lookup = ResourceLookup(api)
    if ns.cmd in ("individuals", "families", "trios", "samples"):
        records = getattr(lookup, ns.cmd)()
        _emit({"status": "ok", ns.cmd: _jsonable(records), "count": len(records)})
        return EXIT_OK
    if ns.cmd == "filters":
        return show_filters(ns, lookup)

    if ns.cmd == "discover":
        resp = DiscoverVariantsUseCase(api, lookup=lookup).execute(
            DiscoveryRequest(local_id=ns.local_id, filters=list(ns.filter), max_attempts=ns.attempts, interval=ns.interval)
        )
        return report_job(ns, resp)
    if ns.cmd == "results":
        resp = DiscoverVariantsUseCase(api, lookup=lookup).results(
            ResultsRequest(request_id=ns.request_id, local_id=ns.local_id, max_attempts=ns.attempts, interval=ns.interval)
        )
        return report_job(ns, resp)
    if ns.cmd == "inheritance":
        resp = TrioInheritanceUseCase(api, lookup=lookup).execute(
            InheritanceRequest(
                trio_id=ns.trio_id,
                mode=ns.mode,
                filters=list(ns.filter),
                max_attempts=ns.attempts,
                interval=ns.interval,
            )
        )
        return report_job(ns, resp)
    if ns.cmd == "frequency":
        resp = VariantFrequencyUseCase(api).execute(
            FrequencyRequest(
                chrom=ns.chrom, pos=ns.pos, ref=ns.ref, alt=ns.alt, max_attempts=ns.attempts, interval=ns.interval
            )
        )
        return report_job(ns, resp)

    _emit({"status": "error", "error": f"Unknown command: {ns.cmd}"})
    return EXIT_INPUT


def show_filters(ns, lookup: ResourceLookup) -> int:
    roots = lookup.filter_tree()
    if getattr(ns, "leaves", False):
        leaves = [{"id": n.id, "name": n.name} for r in roots for n in r.leaves()]
        _emit({"status": "ok", "filters": leaves, "count": len(leaves)})
    else:
        _emit({"status": "ok", "filters": [r.to_dict() for r in roots]})
    return EXIT_OK


def report_job(ns, resp: JobResponse) -> int:
    """Print a job outcome; a job that is still running exits with EXIT_PENDING."""
    if resp.is_pending:
        logger.info("Job still running; rerun '%s' later to resume", ns.cmd)
        _emit({"status": "pending", "request_id": resp.request_id, "job": resp.pending.to_dict()})
        return EXIT_PENDING
    data: Dict[str, Any] = {
        "status": "ok",
        "request_id": resp.request_id,
        "variants": resp.variants,
        "count": len(resp.variants or []),
    }
    if resp.raw is not None:
        data["raw"] = resp.raw
    _emit(data)
    return EXIT_OK


def main() -> int:
    import sys
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
