"""Repository interface consumed by the ingestion and analytics core."""

from __future__ import annotations

from collections.abc import Callable, Collection
from typing import Protocol

from pybess.models.asset import Asset
from pybess.state.merge import MergeResult

MergeFn = Callable[[Asset | None], MergeResult]
"""Computes the merged asset from whatever is currently stored (or ``None``)."""


class AssetRepository(Protocol):
    """Asset persistence as seen by the core.

    Failures surface as :class:`~pybess.exceptions.RepositoryError` and are
    fatal for the current record or request.
    """

    async def find_asset_by_id(self, asset_id: str) -> Asset | None: ...

    async def upsert_asset(self, asset: Asset) -> None: ...

    async def list_assets(self, asset_ids: Collection[str] | None = None) -> list[Asset]: ...

    async def count_assets(self) -> int: ...

    async def upsert_with_merge(self, asset_id: str, merge_fn: MergeFn) -> MergeResult:
        """Atomically read the stored asset, merge, and write the result.

        No other writer may interleave between the read and the write for
        the same ``asset_id``.
        """
        ...
