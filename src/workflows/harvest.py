"""
Harvest pipeline: fetch records concurrently and feed them to the registry.
"""
import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, List

from core.errors import DuplicateRecordError, FetchError
from ingestion.base import SourceAdapter
from processing.registry import ClusterRegistry

logger = logging.getLogger(__name__)


@dataclass
class HarvestReport:
    """
    Aggregate counts for one run, built after every producer finished.
    """
    requested: int = 0
    ingested: int = 0
    fetch_failures: int = 0
    rejected: int = 0
    clusters: int = 0
    failed_saves: List[int] = field(default_factory=list)
    elapsed_seconds: float = 0.0


class HarvestPipeline:
    """
    One producer task per record number. A semaphore bounds the number of
    fetches in flight; clustering itself is serialized by the registry.
    """

    name = "harvest"

    def __init__(
        self,
        adapter: SourceAdapter,
        registry: ClusterRegistry,
        max_concurrency: int = 64,
    ):
        self.adapter = adapter
        self.registry = registry
        self.max_concurrency = max_concurrency

    async def run(self, nums: Iterable[int]) -> HarvestReport:
        start_time = time.perf_counter()
        nums = list(nums)
        report = HarvestReport(requested=len(nums))
        semaphore = asyncio.Semaphore(self.max_concurrency)

        results = await asyncio.gather(
            *[self._produce(num, semaphore, report) for num in nums],
            return_exceptions=True,
        )

        for num, result in zip(nums, results):
            if isinstance(result, BaseException):
                logger.error(f"Producer for record {num} crashed: {result!r}")

        report.ingested = await self.registry.ingested_count()
        report.clusters = await self.registry.cluster_count()
        report.elapsed_seconds = time.perf_counter() - start_time
        return report

    async def _produce(
        self,
        num: int,
        semaphore: asyncio.Semaphore,
        report: HarvestReport,
    ) -> None:
        url = self.adapter.url_for(num)

        async with semaphore:
            start = time.perf_counter()
            try:
                record = await self.adapter.fetch_record(num)
            except FetchError as e:
                logger.warning(f"[-] {e}")
                report.fetch_failures += 1
                return

        logger.info(f"[+] {url} took {time.perf_counter() - start:.2f} seconds to download")

        try:
            assignment = await self.registry.ingest(record)
        except DuplicateRecordError as e:
            logger.warning(f"[-] {url} rejected: {e}")
            report.rejected += 1
            return

        report.failed_saves.extend(assignment.failed_saves)
