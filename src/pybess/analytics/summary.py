"""Per-asset telemetry summaries for verification tooling."""

from __future__ import annotations

import math
from collections.abc import Collection, Sequence
from datetime import datetime

from pybess.models._base import canonical_timestamp
from pybess.models.asset import Asset
from pybess.models.reports import AssetSummary


def summarize(assets: Sequence[Asset], asset_ids: Collection[str] | None = None) -> list[AssetSummary]:
    """Summarize telemetry per asset.

    When *asset_ids* is non-empty only those assets are reported; ids with
    no matching asset are silently skipped.
    """
    wanted = set(asset_ids) if asset_ids else None
    summaries: list[AssetSummary] = []

    for asset in assets:
        if wanted is not None and asset.asset_id not in wanted:
            continue

        latest: datetime | None = None
        total_soc = 0.0
        for metric in asset.metrics:
            if latest is None or metric.timestamp > latest:
                latest = metric.timestamp
            soc = metric.state_of_charge
            total_soc += soc if math.isfinite(soc) else 0.0

        count = len(asset.metrics)
        summaries.append(
            AssetSummary(
                asset_id=asset.asset_id,
                site=asset.site,
                region=asset.region,
                metrics_count=count,
                latest_timestamp=latest,
                average_state_of_charge=total_soc / count if count else None,
            )
        )

    return summaries


def format_summary(summary: AssetSummary) -> str:
    """Render a summary as the multi-line block printed by ``verify_telemetry``."""
    latest = canonical_timestamp(summary.latest_timestamp) if summary.latest_timestamp is not None else "n/a"
    soc = f"{summary.average_state_of_charge:.3f}" if summary.average_state_of_charge is not None else "n/a"
    return "\n".join(
        [
            f"Asset {summary.asset_id} ({summary.site or 'n/a'}, {summary.region or 'n/a'})",
            f"  Telemetry samples: {summary.metrics_count}",
            f"  Latest sample: {latest}",
            f"  Avg state-of-charge: {soc}",
        ]
    )
