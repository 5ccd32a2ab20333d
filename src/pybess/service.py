"""Fleet operations over an asset repository.

These are the request-level operations a dashboard backend exposes
(list, dashboard, create, append one sample, seed, summaries) without any
transport concerns.  Every mutation goes through the same merge step as
batch ingestion.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Collection, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from pybess.analytics.aggregation import aggregate
from pybess.analytics.summary import summarize
from pybess.exceptions import AssetExistsError, AssetNotFoundError, InvalidMetricValueError, InvalidRecordError
from pybess.ingestion.normalize import normalize_asset, normalize_metric
from pybess.models.asset import Asset, Metric
from pybess.models.reports import AssetSummary, DashboardPayload, SeedResult
from pybess.repository.base import AssetRepository
from pybess.state.merge import MergeResult, merge_asset
from pybess.state.policy import OVERWRITE, ScalarMergeStrategy

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _require_number(raw: Mapping[str, Any], wire_name: str, field_name: str, asset_id: str) -> None:
    value = raw[wire_name] if wire_name in raw else raw.get(field_name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidMetricValueError(wire_name, asset_id)


class FleetService:
    """Request-level fleet operations bound to one repository."""

    def __init__(
        self,
        repository: AssetRepository,
        *,
        clock: Callable[[], datetime] = _utcnow,
        strategy: ScalarMergeStrategy = OVERWRITE,
    ) -> None:
        self._repository = repository
        self._clock = clock
        self._strategy = strategy
        self._seed_lock = asyncio.Lock()

    async def list_assets(self) -> list[Asset]:
        """All stored assets ordered by ``asset_id``."""
        assets = await self._repository.list_assets()
        return sorted(assets, key=lambda asset: asset.asset_id)

    async def dashboard(self) -> DashboardPayload:
        assets = await self.list_assets()
        return DashboardPayload(assets=tuple(assets), metrics=aggregate(assets))

    async def create_asset(self, raw: Any) -> Asset:
        """Normalize and store a brand-new asset.

        Raises
        ------
        AssetExistsError
            An asset with the same id is already stored.
        """
        incoming = normalize_asset(raw)

        def _create(existing: Asset | None) -> MergeResult:
            if existing is not None:
                raise AssetExistsError(incoming.asset_id)
            return merge_asset(None, incoming, self._clock())

        result = await self._repository.upsert_with_merge(incoming.asset_id, _create)
        _logger.info("Created asset %s", incoming.asset_id)
        return result.asset

    async def append_metric(self, asset_id: str, raw_metric: Any) -> tuple[Asset, bool]:
        """Append a single telemetry sample to an existing asset.

        Readings must be real numbers (numeric strings are rejected).  The
        sample is deduplicated like batch ingestion; the returned flag tells
        whether it was inserted.

        Raises
        ------
        AssetNotFoundError
            No asset with *asset_id* is stored.
        """
        if not isinstance(raw_metric, Mapping):
            raise InvalidRecordError(f"Invalid metric payload for asset {asset_id}", asset_id=asset_id)
        _require_number(raw_metric, "stateOfCharge", "state_of_charge", asset_id)
        _require_number(raw_metric, "temperatureC", "temperature_c", asset_id)
        metric: Metric = normalize_metric(raw_metric, asset_id)

        def _append(existing: Asset | None) -> MergeResult:
            if existing is None:
                raise AssetNotFoundError(asset_id)
            incoming = existing.model_copy(update={"metrics": (metric,)})
            return merge_asset(existing, incoming, self._clock(), strategy=self._strategy)

        result = await self._repository.upsert_with_merge(asset_id, _append)
        return result.asset, result.metrics_inserted > 0

    async def seed(self, records: Sequence[Any]) -> SeedResult:
        """Populate an empty store with *records*; a populated store is left alone."""
        async with self._seed_lock:
            existing_count = await self._repository.count_assets()
            if existing_count > 0:
                return SeedResult(seeded=False, count=existing_count)
            if not records:
                return SeedResult(seeded=False, count=0)

            assets = [normalize_asset(record) for record in records]
            now = self._clock()
            for asset in assets:
                await self._repository.upsert_with_merge(
                    asset.asset_id,
                    lambda existing, incoming=asset: merge_asset(existing, incoming, now, strategy=self._strategy),
                )
            count = len({asset.asset_id for asset in assets})
            _logger.info("Seeded %d BESS assets", count)
            return SeedResult(seeded=True, count=count)

    async def telemetry_summary(self, asset_ids: Collection[str] | None = None) -> list[AssetSummary]:
        assets = await self._repository.list_assets(asset_ids)
        return summarize(assets, asset_ids)
