"""
Tests for HarvestPipeline: fan-out, failure isolation and the final report.
"""
import asyncio

import httpx

from core.entities import Record
from core.errors import TransientNetworkError
from ingestion.base import SourceAdapter
from ingestion.xkcd import XkcdAdapter
from workflows.harvest import HarvestPipeline


def _comic(num, title, transcript=""):
    return {
        "num": num,
        "day": "1",
        "month": "1",
        "year": "2006",
        "title": title,
        "transcript": transcript,
    }


def _run(pipeline, nums):
    return asyncio.run(pipeline.run(nums))


def _pipeline(transport, registry, max_concurrency=4):
    async def run(nums):
        async with httpx.AsyncClient(transport=transport) as client:
            pipeline = HarvestPipeline(
                adapter=XkcdAdapter(client, "https://xkcd.test"),
                registry=registry,
                max_concurrency=max_concurrency,
            )
            return await pipeline.run(nums)
    return run


def test_harvest_clusters_and_counts(registry, store, comic_transport):
    comics = {
        1: _comic(1, "a b c", "x y"),
        2: _comic(2, "a b d", "x y"),
        3: _comic(3, "z q", "m n"),
        5: "garbage",
    }
    run = _pipeline(comic_transport(comics, delay=0.001), registry)

    report = asyncio.run(run(range(1, 6)))

    assert report.requested == 5
    assert report.ingested == 3
    assert report.fetch_failures == 2
    assert report.rejected == 0
    assert report.clusters == 2
    assert report.failed_saves == []

    members = sorted(m.num for c in asyncio.run(registry.snapshot()) for m in c.members)
    assert members == [1, 2, 3]
    for key in store.list_keys():
        assert store.load(key).member_nums() in ([1, 2], [2, 1], [3])


def test_duplicate_numbers_are_rejected(registry, comic_transport):
    run = _pipeline(comic_transport({7: _comic(7, "a")}), registry)

    report = asyncio.run(run([7, 7]))

    assert report.ingested == 1
    assert report.rejected == 1


class _FlakyAdapter(SourceAdapter):
    """Fails for odd numbers, crashes outright for 13."""

    def __init__(self):
        self.in_flight = 0
        self.max_in_flight = 0

    def url_for(self, num):
        return f"memory://{num}"

    async def fetch_record(self, num):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0.001)
            if num == 13:
                raise RuntimeError("boom")
            if num % 2:
                raise TransientNetworkError(self.url_for(num), "timed out")
            return Record(num=num, day="", month="", year="", title=f"t{num}", transcript="")
        finally:
            self.in_flight -= 1


def test_failures_are_isolated_and_concurrency_bounded(registry):
    adapter = _FlakyAdapter()
    pipeline = HarvestPipeline(adapter=adapter, registry=registry, max_concurrency=3)

    report = _run(pipeline, range(1, 21))

    assert adapter.max_in_flight <= 3
    assert report.ingested == 10
    # 13 crashed instead of failing cleanly, so it is not a fetch failure
    assert report.fetch_failures == 9
    assert asyncio.run(registry.ingested_count()) == 10
    assert report.clusters == 10
