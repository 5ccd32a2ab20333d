"""Merge an incoming asset record into stored state.

This is the only component allowed to combine a normalized record with a
stored asset.  Telemetry is append-only: existing samples are never removed
or reordered, and an incoming sample is skipped when a stored (or already
appended) sample has the same canonical timestamp key.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from pybess.models._base import ensure_utc
from pybess.models.asset import Asset, Metric
from pybess.state.policy import OVERWRITE, ScalarMergeStrategy


@dataclass(frozen=True, slots=True)
class MergeResult:
    asset: Asset
    metrics_inserted: int
    was_new_asset: bool


def _append_unique(
    metrics: Iterable[Metric],
    incoming: Iterable[Metric],
    seen: set[str],
) -> tuple[tuple[Metric, ...], int]:
    merged = list(metrics)
    inserted = 0
    for metric in incoming:
        key = metric.key
        if key in seen:
            continue
        seen.add(key)
        merged.append(metric)
        inserted += 1
    return tuple(merged), inserted


def merge_asset(
    existing: Asset | None,
    incoming: Asset,
    now: datetime,
    *,
    strategy: ScalarMergeStrategy = OVERWRITE,
) -> MergeResult:
    """Reconcile *incoming* against *existing* (``None`` for an unseen id).

    ``last_updated`` is always set to *now*, independent of the sample
    timestamps.
    """
    if existing is None:
        # Collapse duplicate instants within the record itself so the
        # stored sequence starts out unique.
        metrics, inserted = _append_unique((), incoming.metrics, set())
        asset = incoming.model_copy(update={"metrics": metrics, "last_updated": ensure_utc(now)})
        return MergeResult(asset=asset, metrics_inserted=inserted, was_new_asset=True)

    metrics, inserted = _append_unique(existing.metrics, incoming.metrics, existing.metric_keys())
    update = strategy.resolve(existing, incoming)
    update["metrics"] = metrics
    update["last_updated"] = ensure_utc(now)
    asset = existing.model_copy(update=update)
    return MergeResult(asset=asset, metrics_inserted=inserted, was_new_asset=False)
