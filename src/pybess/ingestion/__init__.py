"""Ingestion layer.

Normalizes raw asset/telemetry records and merges them into a repository.
"""

from pybess.ingestion.normalize import normalize_asset, normalize_metric, parse_timestamp
from pybess.ingestion.pipeline import IngestionPipeline, load_telemetry_file

__all__ = [
    "IngestionPipeline",
    "load_telemetry_file",
    "normalize_asset",
    "normalize_metric",
    "parse_timestamp",
]
