import asyncio
import json
from typing import Dict

import httpx
import pytest

from core.entities import Record
from processing.registry import ClusterRegistry
from services.cluster_store import ClusterStore


@pytest.fixture
def make_record():
    def _make(num: int, title: str = "", transcript: str = "") -> Record:
        return Record(
            num=num,
            day="1",
            month="1",
            year="2006",
            title=title,
            transcript=transcript,
        )
    return _make


@pytest.fixture
def store(tmp_path):
    store = ClusterStore(str(tmp_path / "clusters"))
    store.bootstrap()
    return store


@pytest.fixture
def registry(store):
    return ClusterRegistry(store)


@pytest.fixture
def comic_transport():
    """
    MockTransport serving xkcd-style JSON for the numbers in `comics`.
    Unknown numbers get a 404; the value "garbage" is served as invalid JSON.
    """
    def _build(comics: Dict[int, object], delay: float = 0.0) -> httpx.MockTransport:
        async def handler(request: httpx.Request) -> httpx.Response:
            if delay:
                await asyncio.sleep(delay)
            num = int(request.url.path.strip("/").split("/")[0])
            if num not in comics:
                return httpx.Response(404)
            body = comics[num]
            if body == "garbage":
                return httpx.Response(200, content=b"{not json")
            return httpx.Response(200, content=json.dumps(body).encode())
        return httpx.MockTransport(handler)
    return _build
