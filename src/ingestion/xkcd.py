"""
Ingest comic metadata from xkcd
"""
import httpx
from pydantic import ValidationError

from core.entities import Record
from core.errors import NonSuccessStatusError, RecordDecodeError, TransientNetworkError
from ingestion.base import IngestedRecord, SourceAdapter


class XkcdAdapter(SourceAdapter):
    BASE_URL = "https://xkcd.com"

    def __init__(self, client: httpx.AsyncClient, base_url: str = BASE_URL):
        self.client = client
        self.base_url = base_url.rstrip("/")

    def url_for(self, num: int) -> str:
        return f"{self.base_url}/{num}/info.0.json"

    async def fetch_record(self, num: int) -> Record:
        url = self.url_for(num)

        try:
            resp = await self.client.get(url)
        except httpx.HTTPError as e:
            raise TransientNetworkError(url, f"failed: {e!r}") from e

        if resp.status_code != 200:
            raise NonSuccessStatusError(url, resp.status_code)

        try:
            return IngestedRecord.model_validate_json(resp.content).to_record()
        except ValidationError as e:
            raise RecordDecodeError(url, f"failed to decode: {e}") from e
