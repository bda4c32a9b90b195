from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import JobStatusError, ProtocolError


class JobStatus(Enum):
    """Outcome of an asynchronous query as reported by the service.

    Several wire spellings collapse onto one member; ``parse`` is the only way
    in, so unknown values are rejected before any retry logic sees them.
    """

    READY = "ready"
    IN_PROGRESS = "inprogress"
    NO_VARIANTS = "no-variants"

    @classmethod
    def parse(cls, value: Any) -> "JobStatus":
        if not isinstance(value, str):
            raise JobStatusError(f"Missing or non-string job status: {value!r}")
        key = value.strip().lower()
        try:
            return _WIRE_STATUS[key]
        except KeyError:
            raise JobStatusError(f"Unknown job status: {value!r}") from None

    @classmethod
    def of(cls, response: Any) -> "JobStatus":
        """Parse the ``status`` field of a job-status envelope."""
        if not isinstance(response, Mapping):
            raise JobStatusError(f"Job response is not an object: {type(response).__name__}")
        return cls.parse(response.get("status"))

    @property
    def is_pending(self) -> bool:
        return self is JobStatus.IN_PROGRESS

    @property
    def is_terminal(self) -> bool:
        return self is not JobStatus.IN_PROGRESS


_WIRE_STATUS: Dict[str, JobStatus] = {
    "ready": JobStatus.READY,
    "completed": JobStatus.READY,
    "inprogress": JobStatus.IN_PROGRESS,
    "in-progress": JobStatus.IN_PROGRESS,
    "not-ready": JobStatus.IN_PROGRESS,
    "not ready": JobStatus.IN_PROGRESS,
    "not_ready": JobStatus.IN_PROGRESS,
    "no-variants": JobStatus.NO_VARIANTS,
}

_TRUE_FLAGS = {"true", "1", "yes"}
_FALSE_FLAGS = {"false", "0", "no"}


@dataclass(frozen=True)
class PageMeta:
    """Page metadata attached to a ready job response.

    Fields:
        last_page: True when no further pages remain.
    """
    last_page: bool = True

    @classmethod
    def of(cls, response: Mapping[str, Any]) -> "PageMeta":
        meta = response.get("meta")
        if not isinstance(meta, Mapping) or meta.get("last_page") is None:
            return cls(last_page=True)
        raw = meta["last_page"]
        if isinstance(raw, bool):
            return cls(last_page=raw)
        if isinstance(raw, int):
            return cls(last_page=bool(raw))
        if isinstance(raw, str):
            flag = raw.strip().lower()
            if flag in _TRUE_FLAGS:
                return cls(last_page=True)
            if flag in _FALSE_FLAGS:
                return cls(last_page=False)
        raise JobStatusError(f"Unrecognized last_page flag: {raw!r}")


@dataclass(frozen=True)
class PendingJob:
    """Returned when the retry budget runs out while the job is still running.

    Fields:
        endpoint: Status endpoint that was polled.
        arguments: Arguments to resend when resuming.
        attempts: Status requests that reached the server; a first answer
            served from the cache is not counted.
        last_status: Raw status string of the last response.
    """
    endpoint: str
    arguments: Dict[str, Any]
    attempts: int
    last_status: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "endpoint": self.endpoint,
            "arguments": dict(self.arguments),
            "attempts": self.attempts,
            "last_status": self.last_status,
        }


def _split_meta(data: Mapping[str, Any], known: Tuple[str, ...]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


def _opt_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


@dataclass(frozen=True)
class Individual:
    """A clinical case as listed by ``individuals``."""
    id: str
    local_id: str
    sex: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Individual":
        return cls(
            id=str(data.get("id", "")),
            local_id=str(data.get("local_id", "")),
            sex=_opt_str(data.get("sex")),
            meta=_split_meta(data, ("id", "local_id", "sex")),
        )


@dataclass(frozen=True)
class Sample:
    """A sequencing dataset attached to an individual."""
    id: str
    local_id: str
    individual_id: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Sample":
        return cls(
            id=str(data.get("id", "")),
            local_id=str(data.get("local_id", "")),
            individual_id=_opt_str(data.get("individual_id")),
            meta=_split_meta(data, ("id", "local_id", "individual_id")),
        )


@dataclass(frozen=True)
class Family:
    id: str
    name: str = ""
    members: List[str] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Family":
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name") or ""),
            members=[str(m) for m in (data.get("members") or [])],
            meta=_split_meta(data, ("id", "name", "members")),
        )


@dataclass(frozen=True)
class Trio:
    """A proband plus parents, used for inheritance queries."""
    id: str
    proband: Optional[str] = None
    mother: Optional[str] = None
    father: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Trio":
        return cls(
            id=str(data.get("id", "")),
            proband=_opt_str(data.get("proband")),
            mother=_opt_str(data.get("mother")),
            father=_opt_str(data.get("father")),
            meta=_split_meta(data, ("id", "proband", "mother", "father")),
        )


@dataclass(frozen=True)
class FilterNode:
    """One node of the server-defined filter hierarchy.

    Fields:
        id: Identifier sent back to the server when the filter is selected.
        name: Human-readable name operators refer to.
        children: Sub-filters; a node without children is a selectable leaf.
    """
    id: str
    name: str
    children: Tuple["FilterNode", ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FilterNode":
        if not isinstance(data, Mapping):
            raise ProtocolError(f"Filter node must be an object, got {type(data).__name__}")
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            children=tuple(cls.from_dict(c) for c in (data.get("children") or [])),
        )

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator["FilterNode"]:
        yield self
        for child in self.children:
            yield from child.walk()

    def leaves(self) -> List["FilterNode"]:
        return [n for n in self.walk() if n.is_leaf]

    def find(self, name: str) -> Optional["FilterNode"]:
        for node in self.walk():
            if node.name == name:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "children": [c.to_dict() for c in self.children],
        }
