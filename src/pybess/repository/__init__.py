"""Asset repositories.

The core only depends on the :class:`AssetRepository` protocol; concrete
stores are injected by the caller.
"""

from pybess.repository.base import AssetRepository, MergeFn
from pybess.repository.json_file import JsonFileAssetRepository
from pybess.repository.memory import InMemoryAssetRepository

__all__ = [
    "AssetRepository",
    "InMemoryAssetRepository",
    "JsonFileAssetRepository",
    "MergeFn",
]
