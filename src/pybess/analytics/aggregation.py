"""Fleet-wide dashboard aggregation.

Pure and read-only: the same asset list always yields the same
:class:`~pybess.models.DashboardMetrics`.  Missing or non-finite numbers
count as zero; stored data already passed validation at ingestion.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from pybess.models._base import canonical_timestamp
from pybess.models.asset import Asset
from pybess.models.reports import DashboardMetrics, RegionCapacity, StatusCount, TrendPoint

_CENTS = Decimal("0.01")


def round2(value: float) -> float:
    """Round to 2 decimals, ties away from zero on the exact binary value."""
    if not math.isfinite(value):
        return 0.0
    return float(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value) if math.isfinite(value) else 0.0


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def aggregate(assets: Sequence[Asset]) -> DashboardMetrics:
    """Compute dashboard metrics for *assets*.

    Region and status breakdowns keep first-seen order.  The state-of-charge
    trend groups samples by exact instant (not by day) and is sorted
    ascending.
    """
    if not assets:
        return DashboardMetrics()

    capacities = [_number(asset.capacity_mwh) for asset in assets]
    availability = [_number(asset.availability) for asset in assets]
    efficiency = [_number(asset.round_trip_efficiency) for asset in assets]

    capacity_by_region: dict[str | None, float] = {}
    status_counts: dict[str, int] = {}
    trend_buckets: dict[str, tuple[datetime, list[float]]] = {}

    for asset, capacity in zip(assets, capacities, strict=True):
        capacity_by_region[asset.region] = capacity_by_region.get(asset.region, 0.0) + capacity
        status_counts[asset.status] = status_counts.get(asset.status, 0) + 1

        for metric in asset.metrics:
            key = canonical_timestamp(metric.timestamp)
            bucket = trend_buckets.get(key)
            if bucket is None:
                bucket = (metric.timestamp, [])
                trend_buckets[key] = bucket
            bucket[1].append(_number(metric.state_of_charge))

    trend = sorted(
        (
            TrendPoint(timestamp=instant, average_state_of_charge=round2(_mean(values)))
            for instant, values in trend_buckets.values()
        ),
        key=lambda point: point.timestamp,
    )

    return DashboardMetrics(
        total_assets=len(assets),
        total_capacity_mwh=round2(sum(capacities)),
        average_availability=round2(_mean(availability) * 100),
        average_round_trip_efficiency=round2(_mean(efficiency) * 100),
        capacity_by_region=tuple(
            RegionCapacity(region=region, capacity_mwh=capacity) for region, capacity in capacity_by_region.items()
        ),
        status_breakdown=tuple(StatusCount(status=status, count=count) for status, count in status_counts.items()),
        state_of_charge_trend=tuple(trend),
    )
