from __future__ import annotations

from typing import Any, List, Mapping, Sequence

from ...domain.errors import FilterNotFoundError, IndividualNotFoundError, ProtocolError
from ...domain.models import Family, FilterNode, Individual, Sample, Trio
from ...infrastructure.http.client import WingsApi


def _as_list(payload: Any, endpoint: str) -> List[Any]:
    if payload is None:
        return []
    if isinstance(payload, dict):
        return [payload]
    if isinstance(payload, list):
        for item in payload:
            if not isinstance(item, Mapping):
                raise ProtocolError(f"{endpoint}: expected objects, got {type(item).__name__} item {item!r}")
        return payload
    raise ProtocolError(f"{endpoint}: expected a list, got {type(payload).__name__}")


class ResourceLookup:
    """Use-case: typed read access to individuals, samples, families, trios and filters.

    Every read goes through the cache-aware path, so repeated lookups in one
    session cost a single request.
    """

    def __init__(self, api: WingsApi) -> None:
        self._api = api

    def individuals(self) -> List[Individual]:
        return [Individual.from_dict(d) for d in _as_list(self._api.get("individuals"), "individuals")]

    def samples(self) -> List[Sample]:
        return [Sample.from_dict(d) for d in _as_list(self._api.get("samples"), "samples")]

    def families(self) -> List[Family]:
        return [Family.from_dict(d) for d in _as_list(self._api.get("families"), "families")]

    def trios(self) -> List[Trio]:
        return [Trio.from_dict(d) for d in _as_list(self._api.get("trios"), "trios")]

    def filter_tree(self) -> List[FilterNode]:
        return [FilterNode.from_dict(d) for d in _as_list(self._api.get("samples/filter"), "samples/filter")]

    def find_individual(self, local_id: str) -> Individual:
        for ind in self.individuals():
            if ind.local_id == local_id:
                return ind
        raise IndividualNotFoundError(f"No individual with local_id {local_id!r}")

    def find_trio(self, trio_id: str) -> Trio:
        for trio in self.trios():
            if trio.id == str(trio_id):
                return trio
        raise IndividualNotFoundError(f"No trio with id {trio_id!r}")

    def find_filter(self, name: str) -> FilterNode:
        """Return the selectable leaf called ``name``."""
        for root in self.filter_tree():
            node = root.find(name)
            if node is None:
                continue
            if not node.is_leaf:
                raise FilterNotFoundError(f"Filter {name!r} is a group, not a selectable leaf")
            return node
        raise FilterNotFoundError(f"No matching filter name {name!r}")

    def resolve_filters(self, names: Sequence[str]) -> List[str]:
        """Map filter names to the leaf ids the server expects; fails on the first unknown name."""
        return [self.find_filter(n).id for n in names]
