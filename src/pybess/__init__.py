"""pybess - BESS fleet telemetry ingestion and dashboard analytics."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pybess")
except PackageNotFoundError:
    __version__ = "0+local"
from pybess.analytics import aggregate, format_summary, summarize
from pybess.config import BessConfig
from pybess.exceptions import (
    AssetExistsError,
    AssetNotFoundError,
    BessConfigError,
    BessError,
    BessValidationError,
    InvalidMetricValueError,
    InvalidNumericFieldError,
    InvalidRecordError,
    InvalidTimestampError,
    MissingIdentifierError,
    RepositoryError,
)
from pybess.ingestion import IngestionPipeline, load_telemetry_file, normalize_asset, normalize_metric
from pybess.models import (
    Asset,
    AssetStatus,
    AssetSummary,
    DashboardMetrics,
    DashboardPayload,
    IngestionResult,
    Metric,
    RegionCapacity,
    SeedResult,
    StatusCount,
    TrendPoint,
)
from pybess.repository import AssetRepository, InMemoryAssetRepository, JsonFileAssetRepository
from pybess.service import FleetService
from pybess.state.merge import MergeResult, merge_asset
from pybess.state.policy import LatestSampleWins, OverwriteScalars, ScalarMergeStrategy, get_strategy

__all__ = [
    "__version__",
    "Asset",
    "AssetExistsError",
    "AssetNotFoundError",
    "AssetRepository",
    "AssetStatus",
    "AssetSummary",
    "BessConfig",
    "BessConfigError",
    "BessError",
    "BessValidationError",
    "DashboardMetrics",
    "DashboardPayload",
    "FleetService",
    "InMemoryAssetRepository",
    "IngestionPipeline",
    "IngestionResult",
    "InvalidMetricValueError",
    "InvalidNumericFieldError",
    "InvalidRecordError",
    "InvalidTimestampError",
    "JsonFileAssetRepository",
    "LatestSampleWins",
    "MergeResult",
    "Metric",
    "MissingIdentifierError",
    "OverwriteScalars",
    "RegionCapacity",
    "RepositoryError",
    "ScalarMergeStrategy",
    "SeedResult",
    "StatusCount",
    "TrendPoint",
    "aggregate",
    "format_summary",
    "get_strategy",
    "load_telemetry_file",
    "merge_asset",
    "normalize_asset",
    "normalize_metric",
    "summarize",
]
