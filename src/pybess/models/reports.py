"""Derived report models: ingestion results, dashboard metrics, summaries."""

from __future__ import annotations

from pydantic import Field

from pybess.models._base import BessBaseModel, UtcDatetime
from pybess.models.asset import Asset


class IngestionResult(BessBaseModel):
    """Counters accumulated over one ingestion run."""

    assets_processed: int = 0
    new_assets: int = 0
    metrics_inserted: int = 0


class SeedResult(BessBaseModel):
    """Outcome of seeding a store."""

    seeded: bool
    count: int


class RegionCapacity(BessBaseModel):
    region: str | None
    capacity_mwh: float = Field(alias="capacityMWh")


class StatusCount(BessBaseModel):
    status: str
    count: int


class TrendPoint(BessBaseModel):
    """Fleet-average state of charge at one exact sample instant."""

    timestamp: UtcDatetime
    average_state_of_charge: float


class DashboardMetrics(BessBaseModel):
    """Fleet-wide statistics derived from the stored assets.

    Availability and efficiency averages are percentages (fraction x 100).
    """

    total_assets: int = 0
    total_capacity_mwh: float = Field(default=0.0, alias="totalCapacityMWh")
    average_availability: float = 0.0
    average_round_trip_efficiency: float = 0.0
    capacity_by_region: tuple[RegionCapacity, ...] = ()
    status_breakdown: tuple[StatusCount, ...] = ()
    state_of_charge_trend: tuple[TrendPoint, ...] = ()


class DashboardPayload(BessBaseModel):
    """What the presentation layer consumes for the fleet dashboard."""

    assets: tuple[Asset, ...] = ()
    metrics: DashboardMetrics = Field(default_factory=DashboardMetrics)


class AssetSummary(BessBaseModel):
    """Per-asset telemetry digest used by verification tooling."""

    asset_id: str
    site: str | None = None
    region: str | None = None
    metrics_count: int = 0
    latest_timestamp: UtcDatetime | None = None
    average_state_of_charge: float | None = None
