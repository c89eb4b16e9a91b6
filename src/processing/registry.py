"""
ClusterRegistry - shared, lock-guarded cluster state.

Every ingest runs assignment, mutation and a full snapshot pass of all
clusters inside one critical section, so concurrent producers never see a
half-updated registry and never write the same snapshot file at once.
"""
import asyncio
import logging
from typing import List, Set

from core.entities import Assignment, Cluster, Record
from core.errors import DuplicateRecordError, PersistenceError
from processing.clustering import assign
from services.cluster_store import ClusterStore

logger = logging.getLogger(__name__)


class ClusterRegistry:
    """
    Ordered clusters plus the count of successful ingests.
    The registry only grows.
    """

    def __init__(self, store: ClusterStore):
        self.store = store
        self._clusters: List[Cluster] = []
        self._seen: Set[int] = set()
        self._ingested = 0
        self._lock = asyncio.Lock()

    async def ingest(self, record: Record) -> Assignment:
        """
        Assign `record` to a cluster and resave every cluster.

        Raises DuplicateRecordError without touching any state if the
        record's number was ingested before. Snapshot failures are logged
        and returned in `failed_saves`; they never undo the assignment.
        """
        async with self._lock:
            if record.num in self._seen:
                raise DuplicateRecordError(record.num)

            cluster_key, created = assign(self._clusters, record)
            self._seen.add(record.num)
            self._ingested += 1

            if created:
                logger.debug(f"Record {record.num} founded cluster {cluster_key}")
            else:
                logger.debug(f"Record {record.num} joined cluster {cluster_key}")

            failed_saves = await self._save_all()

        return Assignment(
            cluster_key=cluster_key,
            created=created,
            failed_saves=failed_saves,
        )

    async def _save_all(self) -> List[int]:
        failed = []
        for cluster in self._clusters:
            try:
                await self.store.save(cluster)
            except PersistenceError as e:
                logger.error(f"Failed to save cluster: {e}")
                failed.append(e.cluster_key)
        return failed

    async def snapshot(self) -> List[Cluster]:
        """Detached copies of all clusters, oldest first."""
        async with self._lock:
            return [cluster.copy() for cluster in self._clusters]

    async def ingested_count(self) -> int:
        async with self._lock:
            return self._ingested

    async def cluster_count(self) -> int:
        async with self._lock:
            return len(self._clusters)
