from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="WINGS federated genomics client")
    sub = ap.add_subparsers(dest="cmd", required=False)

    # Plain resource listings
    for name in ("individuals", "families", "trios", "samples"):
        sub.add_parser(name)

    fl = sub.add_parser("filters")
    fl.add_argument("--leaves", action="store_true", help="Print only selectable leaves (id + name)")

    # Submit a discovery query and wait for variants
    dq = add_poll_subparser(sub, "discover")
    dq.add_argument("--local-id", required=True, help="Local id of the individual")
    dq.add_argument("--filter", action="append", default=[], help="Filter leaf name; can repeat")

    # Resume polling an already submitted discovery job
    rs = add_poll_subparser(sub, "results")
    rs.add_argument("--request-id", required=True)
    rs.add_argument("--local-id", required=True)

    ih = add_poll_subparser(sub, "inheritance")
    ih.add_argument("--trio-id", required=True)
    ih.add_argument("--mode", required=True, help="Inheritance mode, e.g. de_novo, recessive")
    ih.add_argument("--filter", action="append", default=[], help="Filter leaf name; can repeat")

    fq = add_poll_subparser(sub, "frequency")
    fq.add_argument("--chrom", required=True)
    fq.add_argument("--pos", type=int, required=True)
    fq.add_argument("--ref", required=True)
    fq.add_argument("--alt", required=True)

    return ap


def add_poll_subparser(sub, name):
    """
    Adds a subcommand that waits on an asynchronous job.

    Every such command shares the poll budget flags; when omitted they fall
    back to WINGS_POLL_ATTEMPTS and WINGS_POLL_INTERVAL.

    Args:
        sub: The subparsers object from argparse.
        name: The name of the subcommand to add.

    Returns:
        argparse.ArgumentParser: The configured subparser.
    """
    result = sub.add_parser(name)
    result.add_argument("--attempts", type=int, default=None, help="Max cache-bypassing polls (default $WINGS_POLL_ATTEMPTS or 60)")
    result.add_argument("--interval", type=float, default=None, help="Seconds between polls (default $WINGS_POLL_INTERVAL or 5)")
    return result
