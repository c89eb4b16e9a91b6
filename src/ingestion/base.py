"""
Base classes for Ingestion
"""
from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict

from core.entities import Record


class IngestedRecord(BaseModel):
    """
    Wire model for a fetched comic. Unknown fields are ignored.
    """
    model_config = ConfigDict(extra="ignore")

    num: int
    day: str = ""
    month: str = ""
    year: str = ""
    title: str
    transcript: str = ""

    def to_record(self) -> Record:
        return Record(
            num=self.num,
            day=self.day,
            month=self.month,
            year=self.year,
            title=self.title,
            transcript=self.transcript,
        )


class SourceAdapter(ABC):
    """
    Base interface for all record sources.
    """

    @abstractmethod
    def url_for(self, num: int) -> str:
        raise NotImplementedError

    @abstractmethod
    async def fetch_record(self, num: int) -> Record:
        """
        Fetch and decode a single record.
        Must raise a FetchError subclass on any failure.
        """
        raise NotImplementedError
