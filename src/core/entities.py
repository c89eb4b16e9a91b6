from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List


@dataclass(frozen=True)
class Record:
    """
    Canonical representation of an ingested comic record.
    """
    num: int
    day: str
    month: str
    year: str
    title: str
    transcript: str


@dataclass(frozen=True)
class Centre:
    """
    Fixed signature of a cluster, taken from its founding record.
    """
    title_set: FrozenSet[str]
    transcript_set: FrozenSet[str]
    num: int


@dataclass
class Cluster:
    """
    Group of records that matched the same centre, in arrival order.
    """
    centre: Centre
    members: List[Record] = field(default_factory=list)

    @property
    def key(self) -> int:
        return self.centre.num

    def copy(self) -> Cluster:
        return Cluster(centre=self.centre, members=list(self.members))


@dataclass(frozen=True)
class Assignment:
    """
    Outcome of a single ingest.
    """
    cluster_key: int
    created: bool
    failed_saves: List[int] = field(default_factory=list)
