"""
File-backed cluster snapshots.
One JSON file per cluster, named after the cluster key and fully
overwritten on every save. Uses async file I/O for non-blocking writes.
"""
import logging
import os
from pathlib import Path
from typing import List

import aiofiles
import aiofiles.os

from core.entities import Cluster
from core.errors import BootstrapError, PersistenceError
from core.schemas import ClusterSnapshot

logger = logging.getLogger(__name__)


class ClusterStore:
    def __init__(self, output_dir: str = "clusters"):
        self.output_dir = Path(output_dir)

    def path_for(self, key: int) -> Path:
        return self.output_dir / f"cluster{key}.json"

    def bootstrap(self) -> None:
        """Create the output root. Raises BootstrapError if it is unusable."""
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BootstrapError(f"Failed to create directory {self.output_dir}: {e}") from e

        if not os.access(self.output_dir, os.W_OK):
            raise BootstrapError(f"Directory {self.output_dir} is not writable")

        logger.info(f"Cluster snapshots will be written to {self.output_dir}")

    async def save(self, cluster: Cluster) -> None:
        """
        Overwrite the snapshot for `cluster`.
        The file is written beside the target and then swapped in, so a
        reader sees either the old or the new snapshot.
        """
        path = self.path_for(cluster.key)
        tmp_path = path.with_suffix(".json.tmp")

        # Unencodable text surfaces as ValueError (serialization or UTF-8)
        try:
            payload = ClusterSnapshot.from_cluster(cluster).to_json()
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
            await aiofiles.os.replace(tmp_path, path)
        except (OSError, ValueError) as e:
            raise PersistenceError(cluster.key, e) from e

    def load(self, key: int) -> ClusterSnapshot:
        text = self.path_for(key).read_text(encoding="utf-8")
        return ClusterSnapshot.model_validate_json(text)

    def list_keys(self) -> List[int]:
        keys = []
        for path in self.output_dir.glob("cluster*.json"):
            suffix = path.stem[len("cluster"):]
            if suffix.isdigit():
                keys.append(int(suffix))
        return sorted(keys)
