"""
Source Factory - Creates ingestion adapters from configuration.
"""
import logging

import httpx

from ingestion.base import SourceAdapter
from ingestion.xkcd import XkcdAdapter
from services.config import SourceConfig

logger = logging.getLogger(__name__)


def create_source_adapter(
    source_config: SourceConfig,
    client: httpx.AsyncClient,
) -> SourceAdapter:
    """
    Create a source adapter from configuration.

    Args:
        source_config: Configuration for the source
        client: Shared HTTP client used by the adapter

    Returns:
        Configured SourceAdapter instance

    Raises:
        ValueError: If source type is unknown
    """
    source_type = source_config.type.lower()

    if source_type == "xkcd":
        adapter = XkcdAdapter(
            client=client,
            base_url=source_config.base_url or XkcdAdapter.BASE_URL,
        )
        logger.info(f"Created {source_type} adapter: {adapter.base_url}")
        return adapter

    raise ValueError(f"Unknown source type: {source_type}")
