"""
Workflows module - Pipeline orchestration for record harvesting.
"""
from workflows.harvest import HarvestPipeline, HarvestReport

__all__ = [
    "HarvestPipeline",
    "HarvestReport",
]
