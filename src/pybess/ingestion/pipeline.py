"""Telemetry ingestion pipeline.

Each record goes through normalize -> repository merge -> write, strictly in
input order.  The first record that fails normalization aborts the batch;
records already written stay written (there is no batch transaction).
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pybess.exceptions import BessValidationError, InvalidRecordError
from pybess.ingestion.normalize import normalize_asset
from pybess.models.asset import Asset
from pybess.models.reports import IngestionResult
from pybess.repository.base import AssetRepository
from pybess.state.merge import MergeResult, merge_asset
from pybess.state.policy import OVERWRITE, ScalarMergeStrategy

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def load_telemetry_file(path: str | os.PathLike[str]) -> list[Asset]:
    """Read a JSON telemetry file and normalize every record in it.

    The top level must be a JSON array of asset objects.
    """
    resolved = Path(path).resolve()
    try:
        data = json.loads(resolved.read_text(encoding="utf-8"))
    except OSError as exc:
        raise BessValidationError(f"Cannot read telemetry file {resolved}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise BessValidationError(f"Telemetry file {resolved} is not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise InvalidRecordError("Telemetry file must contain an array of assets")

    return [normalize_asset(record) for record in data]


class IngestionPipeline:
    """Merge batches of raw asset records into a repository.

    Parameters
    ----------
    repository : AssetRepository
        Destination store.  Its ``upsert_with_merge`` makes each
        read-merge-write atomic per asset.
    clock : callable
        Source of the ``last_updated`` instant.  Defaults to UTC now.
    strategy : ScalarMergeStrategy
        Scalar-field policy for existing assets.  Defaults to overwrite.
    """

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

    @property
    def strategy(self) -> ScalarMergeStrategy:
        return self._strategy

    async def ingest_asset(self, asset: Asset) -> MergeResult:
        """Merge one already-normalized asset into the repository."""

        def _merge(existing: Asset | None) -> MergeResult:
            return merge_asset(existing, asset, self._clock(), strategy=self._strategy)

        result = await self._repository.upsert_with_merge(asset.asset_id, _merge)
        if result.was_new_asset:
            _logger.debug("Inserted telemetry for %s", asset.asset_id)
        else:
            _logger.debug("Updated telemetry for %s", asset.asset_id)
        return result

    async def ingest(self, records: Sequence[Any]) -> IngestionResult:
        """Ingest a batch of raw (or already normalized) asset records."""
        if not isinstance(records, (list, tuple)):
            raise InvalidRecordError("records must be a list")

        assets_processed = 0
        new_assets = 0
        metrics_inserted = 0

        for record in records:
            asset = record if isinstance(record, Asset) else normalize_asset(record)
            result = await self.ingest_asset(asset)
            assets_processed += 1
            new_assets += 1 if result.was_new_asset else 0
            metrics_inserted += result.metrics_inserted

        _logger.info(
            "Ingested %d assets (%d new, %d telemetry samples inserted)",
            assets_processed,
            new_assets,
            metrics_inserted,
        )
        return IngestionResult(
            assets_processed=assets_processed,
            new_assets=new_assets,
            metrics_inserted=metrics_inserted,
        )

    async def ingest_file(self, path: str | os.PathLike[str]) -> IngestionResult:
        """Load, normalize and ingest a JSON telemetry file."""
        assets = load_telemetry_file(path)
        return await self.ingest(assets)
