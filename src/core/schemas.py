"""
Pydantic schemas for the on-disk cluster snapshots
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from core.entities import Cluster, Record


class CentreSnapshot(BaseModel):
    """
    Token sets are stored sorted so identical registries give identical files.
    """
    model_config = ConfigDict(populate_by_name=True)

    title_set: List[str] = Field(..., alias="title-set")
    transcript_set: List[str] = Field(..., alias="transcript-set")
    num: int


class MemberSnapshot(BaseModel):
    num: int
    day: str
    month: str
    year: str
    title: str
    transcript: str

    @classmethod
    def from_record(cls, record: Record) -> "MemberSnapshot":
        return cls(
            num=record.num,
            day=record.day,
            month=record.month,
            year=record.year,
            title=record.title,
            transcript=record.transcript,
        )


class ClusterSnapshot(BaseModel):
    """
    Pydantic schema for one persisted cluster
    """
    centre: CentreSnapshot
    members: List[MemberSnapshot]

    @classmethod
    def from_cluster(cls, cluster: Cluster) -> "ClusterSnapshot":
        return cls(
            centre=CentreSnapshot(
                title_set=sorted(cluster.centre.title_set),
                transcript_set=sorted(cluster.centre.transcript_set),
                num=cluster.centre.num,
            ),
            members=[MemberSnapshot.from_record(m) for m in cluster.members],
        )

    def member_nums(self) -> List[int]:
        return [m.num for m in self.members]

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)
