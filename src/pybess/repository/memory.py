"""Dict-backed asset repository."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Collection, Iterable

from pybess.models.asset import Asset
from pybess.repository.base import MergeFn
from pybess.state.merge import MergeResult

_logger = logging.getLogger(__name__)


class InMemoryAssetRepository:
    """In-memory store of assets keyed by ``asset_id``.

    Assets are frozen models, so handing out the stored instances is safe.
    Listing preserves first-insertion order.  ``upsert_with_merge`` holds a
    per-asset ``asyncio.Lock`` across read, merge and write.
    """

    def __init__(self, assets: Iterable[Asset] = ()) -> None:
        self._assets: dict[str, Asset] = {asset.asset_id: asset for asset in assets}
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock(self, asset_id: str) -> asyncio.Lock:
        lock = self._locks.get(asset_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[asset_id] = lock
        return lock

    async def _store(self, asset: Asset) -> None:
        """Commit *asset*.  Subclasses that mirror the store somewhere durable
        override this and commit only once the durable write succeeded.
        """
        self._assets[asset.asset_id] = asset

    async def find_asset_by_id(self, asset_id: str) -> Asset | None:
        return self._assets.get(asset_id)

    async def upsert_asset(self, asset: Asset) -> None:
        await self._store(asset)

    async def list_assets(self, asset_ids: Collection[str] | None = None) -> list[Asset]:
        if not asset_ids:
            return list(self._assets.values())
        wanted = set(asset_ids)
        return [asset for asset in self._assets.values() if asset.asset_id in wanted]

    async def count_assets(self) -> int:
        return len(self._assets)

    async def upsert_with_merge(self, asset_id: str, merge_fn: MergeFn) -> MergeResult:
        async with self._lock(asset_id):
            current = await self.find_asset_by_id(asset_id)
            result = merge_fn(current)
            if result.asset.asset_id != asset_id:
                raise ValueError(f"merge for {asset_id} produced asset {result.asset.asset_id}")
            await self.upsert_asset(result.asset)
            _logger.debug(
                "Stored asset %s (new=%s, metrics_inserted=%d)",
                asset_id,
                result.was_new_asset,
                result.metrics_inserted,
            )
            return result
