"""Data models for BESS assets, telemetry and derived reports."""

from pybess.models._base import BessBaseModel, UtcDatetime, canonical_timestamp, ensure_utc
from pybess.models.asset import Asset, AssetStatus, Metric
from pybess.models.reports import (
    AssetSummary,
    DashboardMetrics,
    DashboardPayload,
    IngestionResult,
    RegionCapacity,
    SeedResult,
    StatusCount,
    TrendPoint,
)

__all__ = [
    "Asset",
    "AssetStatus",
    "AssetSummary",
    "BessBaseModel",
    "DashboardMetrics",
    "DashboardPayload",
    "IngestionResult",
    "Metric",
    "RegionCapacity",
    "SeedResult",
    "StatusCount",
    "TrendPoint",
    "UtcDatetime",
    "canonical_timestamp",
    "ensure_utc",
]
