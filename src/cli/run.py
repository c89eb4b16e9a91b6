import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import httpx

from core.errors import BootstrapError
from ingestion.source_factory import create_source_adapter
from processing.registry import ClusterRegistry
from services.cluster_store import ClusterStore
from services.config import Config, load_config
from services.logging import setup_logging
from workflows.harvest import HarvestPipeline


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Fetch comics and cluster them by text similarity')
    parser.add_argument('--config', default=None,
                        help='Path to config.yml (default: resources/config.yml)')
    parser.add_argument('--output-dir', default=None,
                        help='Directory for cluster snapshots')
    parser.add_argument('--first', type=_positive_int, default=None,
                        help='First record number to fetch')
    parser.add_argument('--last', type=_positive_int, default=None,
                        help='Last record number to fetch (inclusive)')
    parser.add_argument('--concurrency', type=_positive_int, default=None,
                        help='Maximum fetches in flight')
    return parser.parse_args(argv)


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    overrides = {}
    if args.output_dir is not None:
        overrides["OUTPUT_DIR"] = args.output_dir
    if args.first is not None:
        overrides["FIRST_NUM"] = args.first
    if args.last is not None:
        overrides["MAX_NUM"] = args.last
    if args.concurrency is not None:
        overrides["MAX_CONCURRENCY"] = args.concurrency
    # Re-validate so CLI values obey the same bounds as config.yml
    return Config.model_validate({**config.model_dump(), **overrides})


async def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging()
    logger = logging.getLogger(__name__)

    config = apply_overrides(load_config(args.config), args)
    setup_logging(config.LOG_LEVEL)

    # ----------------------------
    # Bootstrap output root
    # ----------------------------
    store = ClusterStore(config.OUTPUT_DIR)
    try:
        store.bootstrap()
    except BootstrapError as e:
        logger.critical(f"[-] {e}")
        return 1

    registry = ClusterRegistry(store)

    # ----------------------------
    # Fetch and cluster
    # ----------------------------
    logger.info(f"Harvesting records {config.FIRST_NUM}..{config.MAX_NUM}")

    async with httpx.AsyncClient(timeout=config.REQUEST_TIMEOUT) as client:
        adapter = create_source_adapter(config.SOURCE, client)
        pipeline = HarvestPipeline(
            adapter=adapter,
            registry=registry,
            max_concurrency=config.MAX_CONCURRENCY,
        )
        report = await pipeline.run(range(config.FIRST_NUM, config.MAX_NUM + 1))

    logger.info(f"Total successful downloads: {report.ingested}")
    logger.info(
        f"Clusters: {report.clusters}, fetch failures: {report.fetch_failures}, "
        f"rejected: {report.rejected}, failed saves: {len(report.failed_saves)}"
    )
    logger.info(f"Total time: {report.elapsed_seconds:.2f}")
    return 0


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
