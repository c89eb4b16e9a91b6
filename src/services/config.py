"""
Loads and handles config from config.yml
Deployment overrides (CLUSTERS_OUTPUT_DIR, CLUSTERS_LOG_LEVEL,
CLUSTERS_MAX_CONCURRENCY) are loaded from the environment / .env
"""
import logging
import os
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class SourceConfig(BaseModel):
    """Configuration for the record source."""
    type: str = "xkcd"
    base_url: Optional[str] = None


class Config(BaseModel):
    # Persistence
    OUTPUT_DIR: str = "./clusters"

    # Ingestion
    SOURCE: SourceConfig = SourceConfig()
    FIRST_NUM: int = Field(1, ge=1)
    MAX_NUM: int = Field(2024, ge=1)
    MAX_CONCURRENCY: int = Field(64, ge=1)
    REQUEST_TIMEOUT: float = Field(30.0, gt=0)

    # Logging
    LOG_LEVEL: str = "INFO"


def _get_config_path() -> Optional[str]:
    """Get the path to config.yml, handling different working directories."""
    # Try relative path first
    if os.path.exists('resources/config.yml'):
        return 'resources/config.yml'

    # Try from project root
    project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    config_path = os.path.join(project_root, 'resources', 'config.yml')
    if os.path.exists(config_path):
        return config_path

    return None


def _read_yaml(path: Optional[str]) -> Dict[str, Any]:
    if path is None:
        logger.warning("No resources/config.yml found, using defaults")
        return {}

    with open(path, 'r') as file:
        return yaml.safe_load(file) or {}


def load_config(path: Optional[str] = None) -> Config:
    """Load configuration from config.yml and overrides from the environment."""
    load_dotenv()

    config = _read_yaml(path or _get_config_path())

    source = config.get("SOURCE", {}) or {}

    return Config(
        OUTPUT_DIR=os.getenv("CLUSTERS_OUTPUT_DIR", config.get("OUTPUT_DIR", "./clusters")),

        SOURCE=SourceConfig(
            type=source.get("type", "xkcd"),
            base_url=source.get("base_url"),
        ),
        FIRST_NUM=int(config.get("FIRST_NUM", 1)),
        MAX_NUM=int(config.get("MAX_NUM", 2024)),
        MAX_CONCURRENCY=int(os.getenv("CLUSTERS_MAX_CONCURRENCY", config.get("MAX_CONCURRENCY", 64))),
        REQUEST_TIMEOUT=float(config.get("REQUEST_TIMEOUT", 30.0)),

        LOG_LEVEL=os.getenv("CLUSTERS_LOG_LEVEL", config.get("LOG_LEVEL", "INFO")).upper(),
    )
